"""SQLAlchemy ORM models for users, financial profiles, trust scores and cooperatives"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, ForeignKey, Table, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


cooperative_member = Table(
    "cooperative_member",
    Base.metadata,
    Column("cooperative_id", Text, ForeignKey("cooperative.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Text, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """User record owned by the identity provider; read-only here"""

    __tablename__ = "users"

    id = Column(Text, primary_key=True, default=new_id)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    financial_profile = relationship("FinancialProfileRecord", back_populates="user", uselist=False)
    trust_score = relationship("TrustScoreRecord", back_populates="user", uselist=False)
    cooperatives = relationship("Cooperative", secondary=cooperative_member, back_populates="members")


class FinancialProfileRecord(Base):
    """Self-reported financial profile, one per user"""

    __tablename__ = "financial_profile"

    id = Column(Text, primary_key=True, default=new_id)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    monthly_income = Column(Float, nullable=True)
    seasonal_income = Column(Boolean, nullable=False, default=False)

    housing_expense = Column(Float, nullable=True)
    food_expense = Column(Float, nullable=True)
    transportation_expense = Column(Float, nullable=True)
    utilities_expense = Column(Float, nullable=True)
    healthcare_expense = Column(Float, nullable=True)
    education_expense = Column(Float, nullable=True)
    other_expenses = Column(Float, nullable=True)

    property_value = Column(Float, nullable=True)
    vehicles_value = Column(Float, nullable=True)
    livestock_value = Column(Float, nullable=True)
    equipment_value = Column(Float, nullable=True)
    savings_value = Column(Float, nullable=True)
    other_assets_value = Column(Float, nullable=True)

    business_type = Column(Text, nullable=True)
    business_registration = Column(Boolean, nullable=False, default=False)
    farm_ownership = Column(Boolean, nullable=False, default=False)
    community_role = Column(Text, nullable=True)
    social_connections = Column(Text, nullable=True)
    bank_account = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="financial_profile")


class TrustScoreRecord(Base):
    """
    Persisted trust score. payment_history and identity_verification are
    owned by other collaborators; the scoring engine only seeds them.
    """

    __tablename__ = "trust_score"

    id = Column(Text, primary_key=True, default=new_id)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    score = Column(Integer, nullable=False, default=0)
    financial_stability = Column(Float, nullable=False, default=0)
    economic_activity = Column(Float, nullable=False, default=0)
    community_participation = Column(Float, nullable=False, default=0)
    payment_history = Column(Float, nullable=False, default=0)
    community_trust = Column(Float, nullable=False, default=0)
    identity_verification = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="trust_score")


class Cooperative(Base):
    """Savings/lending cooperative grouping several users"""

    __tablename__ = "cooperative"

    id = Column(Text, primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    balance_pool = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    members = relationship("User", secondary=cooperative_member, back_populates="cooperatives")

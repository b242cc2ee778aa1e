"""Pytest fixtures for testing"""

import pytest
from typing import Any, Callable, Dict, Generator, Optional
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_engine.api.main import create_app
from credit_engine.infrastructure.database.models import Base, FinancialProfileRecord, User
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.infrastructure.database.session import get_db
from credit_engine.domain.models import FinancialProfile


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session) -> FastAPI:
    """FastAPI app wired to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def store(db: Session) -> ProfileStore:
    return ProfileStore(db)


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """
    Factory for users. Pass profile=None for a user who never submitted
    a financial profile.
    """

    def _make_user(user_id: str, name: Optional[str] = None, profile: Optional[Dict[str, Any]] = None) -> User:
        user = User(id=user_id, name=name or user_id.title())
        db.add(user)
        if profile is not None:
            db.add(FinancialProfileRecord(user_id=user_id, **profile))
        db.commit()
        return user

    return _make_user


@pytest.fixture
def strong_profile() -> Dict[str, Any]:
    """Registered farm business with healthy income, savings and assets"""
    return {
        "monthly_income": 6000,
        "seasonal_income": False,
        "housing_expense": 800,
        "food_expense": 400,
        "property_value": 120000,
        "savings_value": 30000,
        "business_type": "Agriculture",
        "business_registration": True,
        "farm_ownership": True,
        "community_role": "Treasurer",
        "social_connections": "strong",
        "bank_account": "Yes",
    }


@pytest.fixture
def empty_profile() -> FinancialProfile:
    return FinancialProfile()

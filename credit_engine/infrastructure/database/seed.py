"""Demo users, profiles and a cooperative for local development and persona tests

Run against the configured database with:
    python -m credit_engine.infrastructure.database.seed
"""

import logging
from sqlalchemy.orm import Session
from credit_engine.infrastructure.database.models import (
    Base,
    Cooperative,
    FinancialProfileRecord,
    TrustScoreRecord,
    User,
)

DEMO_COOPERATIVE_ID = "coop-1"


def seed_demo_data(db: Session) -> None:
    """
    Insert demo personas. No-op when they already exist.

    - user_test: established retailer with a persisted trust score
    - user_farmer: seasonal smallholder without a bank account
    - user_thin: profile submitted with no details
    - user_new: registered but never submitted a financial profile
    """
    if db.get(User, "user_test") is not None:
        return

    user_test = User(id="user_test", name="Test User", email="test@example.com")
    user_farmer = User(id="user_farmer", name="Amina Farmer", email="amina@example.com")
    user_thin = User(id="user_thin", name="Thin File", email="thin@example.com")
    user_new = User(id="user_new", name="New Member", email="new@example.com")
    db.add_all([user_test, user_farmer, user_thin, user_new])

    db.add_all(
        [
            FinancialProfileRecord(
                user_id=user_test.id,
                monthly_income=50000,
                bank_account="Yes",
                housing_expense=15000,
                food_expense=8000,
                transportation_expense=5000,
                utilities_expense=3000,
                healthcare_expense=2000,
                education_expense=1000,
                other_expenses=3000,
                business_type="Retail",
                business_registration=True,
                farm_ownership=False,
                property_value=200000,
                vehicles_value=30000,
                livestock_value=0,
                equipment_value=15000,
                savings_value=25000,
                other_assets_value=5000,
                seasonal_income=False,
                community_role="Business Owner",
                social_connections="Strong",
            ),
            FinancialProfileRecord(
                user_id=user_farmer.id,
                monthly_income=1500,
                seasonal_income=True,
                housing_expense=400,
                food_expense=500,
                transportation_expense=100,
                utilities_expense=100,
                healthcare_expense=50,
                education_expense=50,
                livestock_value=30000,
                equipment_value=5000,
                business_type="Farming",
                business_registration=False,
                farm_ownership=True,
                community_role="Elder",
                social_connections="strong",
            ),
            FinancialProfileRecord(user_id=user_thin.id),
        ]
    )

    db.add(
        TrustScoreRecord(
            user_id=user_test.id,
            score=72,
            financial_stability=80,
            economic_activity=85,
            community_participation=85,
            payment_history=90,
            community_trust=75,
            identity_verification=95,
        )
    )

    cooperative = Cooperative(
        id=DEMO_COOPERATIVE_ID,
        name="Local Business Cooperative",
        balance_pool=150000,
    )
    cooperative.members.extend([user_test, user_farmer, user_new])
    db.add(cooperative)

    db.commit()
    logging.info("Demo data seeded", extra={"cooperative_id": DEMO_COOPERATIVE_ID})


if __name__ == "__main__":
    from credit_engine.infrastructure.database.session import SessionLocal, engine

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_demo_data(session)

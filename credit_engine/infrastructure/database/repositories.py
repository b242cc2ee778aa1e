"""Data access layer - the only component of the engine that performs I/O"""

from contextlib import contextmanager
from typing import Iterator, List, Optional
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from credit_engine.infrastructure.database.models import (
    Cooperative,
    FinancialProfileRecord,
    TrustScoreRecord,
    User,
    new_id,
)
from credit_engine.domain.models import (
    CreditScoreResult,
    FinancialProfile,
    GroupFinancialSummary,
    MemberProfile,
    TrustScore,
    UserFinancialSummary,
    utc_now,
)
from credit_engine.domain.exceptions import (
    FinancialProfileMissing,
    GroupNotFound,
    ProfileNotFound,
    StoreUnavailable,
)

# Dialects with a single-statement INSERT .. ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Fields the scoring engine overwrites when a trust score already exists
TRUST_SCORE_UPDATE_FIELDS = ("score", "financial_stability", "economic_activity", "updated_at")


def to_financial_profile(record: FinancialProfileRecord) -> FinancialProfile:
    """Coerce a stored profile row into a typed, defaulted FinancialProfile"""
    values = {column.key: getattr(record, column.key) for column in FinancialProfileRecord.__table__.columns}
    return FinancialProfile.from_mapping(values)


def to_trust_score(record: TrustScoreRecord) -> TrustScore:
    return TrustScore(
        user_id=record.user_id,
        score=record.score,
        financial_stability=record.financial_stability,
        economic_activity=record.economic_activity,
        community_participation=record.community_participation,
        payment_history=record.payment_history,
        community_trust=record.community_trust,
        identity_verification=record.identity_verification,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver/ORM failures into StoreUnavailable"""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreUnavailable(f"Profile store failed during {operation}: {e}") from e


class ProfileStore:
    """Result store adapter over the profile database"""

    def __init__(self, db: Session):
        self.db = db

    def find_profile(self, user_id: str) -> MemberProfile:
        """
        Load one user's financial profile.

        Raises:
            ProfileNotFound: user record does not exist
            FinancialProfileMissing: user exists but never submitted a profile
        """
        with store_errors("profile lookup"):
            user = self.db.get(User, user_id)
            if user is None:
                raise ProfileNotFound(f"User {user_id} not found")

            record = self.db.execute(
                select(FinancialProfileRecord).where(FinancialProfileRecord.user_id == user_id)
            ).scalar_one_or_none()

        if record is None:
            raise FinancialProfileMissing(
                "Financial profile not found. Please complete your financial profile first."
            )

        return MemberProfile(user_id=user.id, user_name=user.name, profile=to_financial_profile(record))

    def find_profiles_bulk(self, user_ids: List[str]) -> List[MemberProfile]:
        """
        Load profiles for many users in one query.

        Result order follows user_ids (first occurrence of duplicates);
        ids without a user or profile are silently omitted.
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return []

        with store_errors("bulk profile lookup"):
            rows = self.db.execute(
                select(FinancialProfileRecord, User.name)
                .join(User, User.id == FinancialProfileRecord.user_id)
                .where(FinancialProfileRecord.user_id.in_(unique_ids))
            ).all()

        by_user = {
            record.user_id: MemberProfile(
                user_id=record.user_id,
                user_name=name,
                profile=to_financial_profile(record),
            )
            for record, name in rows
        }
        return [by_user[user_id] for user_id in unique_ids if user_id in by_user]

    def upsert_trust_score(self, user_id: str, result: CreditScoreResult) -> None:
        """
        Create or update the user's trust score in a single statement.

        Create seeds every column (payment_history and identity_verification
        start at 0). Update only touches score, financial_stability,
        economic_activity and updated_at, leaving fields written by other
        collaborators alone.
        """
        dialect = self.db.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreUnavailable(f"Atomic upsert is not supported on dialect '{dialect}'")

        now = utc_now()
        factors = result.factors
        stmt = insert(TrustScoreRecord).values(
            id=new_id(),
            user_id=user_id,
            score=result.score,
            financial_stability=factors.income_stability,
            economic_activity=factors.business_activity,
            community_participation=factors.community_engagement,
            community_trust=factors.community_engagement,
            payment_history=0,
            identity_verification=0,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={name: stmt.excluded[name] for name in TRUST_SCORE_UPDATE_FIELDS},
        )

        with store_errors("trust score upsert"):
            self.db.execute(stmt)

    def get_trust_score(self, user_id: str) -> Optional[TrustScore]:
        with store_errors("trust score lookup"):
            record = self.db.execute(
                select(TrustScoreRecord)
                .where(TrustScoreRecord.user_id == user_id)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
        return to_trust_score(record) if record is not None else None

    def get_user_summary(self, user_id: str) -> UserFinancialSummary:
        """Last persisted profile and trust score for a user"""
        with store_errors("user summary lookup"):
            user = self.db.get(User, user_id)
            if user is None:
                raise ProfileNotFound(f"User {user_id} not found")

            profile_record = self.db.execute(
                select(FinancialProfileRecord).where(FinancialProfileRecord.user_id == user_id)
            ).scalar_one_or_none()

        return UserFinancialSummary(
            user_id=user.id,
            financial_profile=to_financial_profile(profile_record) if profile_record else None,
            trust_score=self.get_trust_score(user.id),
            last_updated=profile_record.updated_at if profile_record else None,
        )

    def get_group_summary(self, group_id: str) -> GroupFinancialSummary:
        """Aggregate persisted scores and assets over a cooperative's members"""
        with store_errors("group summary lookup"):
            cooperative = self.db.get(Cooperative, group_id)
            if cooperative is None:
                raise GroupNotFound(f"Group {group_id} not found")

            members = list(cooperative.members)
            scores = [m.trust_score.score if m.trust_score else 0 for m in members]
            total_assets = sum(
                to_financial_profile(m.financial_profile).total_assets
                for m in members
                if m.financial_profile is not None
            )

        return GroupFinancialSummary(
            group_id=cooperative.id,
            group_name=cooperative.name,
            member_count=len(members),
            average_score=sum(scores) / len(scores) if scores else 0.0,
            total_assets=total_assets,
            balance_pool=cooperative.balance_pool,
        )

    def commit(self) -> None:
        with store_errors("commit"):
            self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

"""Integration tests for the individual and group scoring orchestrators"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from credit_engine.config import settings
from credit_engine.infrastructure.database.models import FinancialProfileRecord, TrustScoreRecord
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.domain.exceptions import (
    FinancialProfileMissing,
    InvalidInput,
    ProfileNotFound,
    StoreUnavailable,
    Unauthenticated,
)
from credit_engine.domain.models import FinancialProfile, MemberProfile, RiskLevel
from credit_engine.services.scoring import score_group, score_individual
from credit_engine.services.summary import get_financial_summary


def test_score_individual_persists_and_returns_result(store: ProfileStore, make_user, strong_profile):
    make_user("u1", name="Amina", profile=strong_profile)

    member = score_individual(store, caller_id="u1")

    assert member.user_id == "u1"
    assert member.user_name == "Amina"
    assert member.result.score == 99
    assert member.result.risk_level == RiskLevel.LOW
    assert member.calculated_at is not None

    trust = store.get_trust_score("u1")
    assert trust.score == 99
    assert trust.financial_stability == 100
    assert trust.economic_activity == 100
    assert trust.community_participation == 90


def test_score_individual_targets_other_user(store: ProfileStore, make_user, strong_profile):
    make_user("admin", profile=None)
    make_user("member", profile=strong_profile)

    member = score_individual(store, caller_id="admin", target_user_id="member")

    assert member.user_id == "member"
    assert store.get_trust_score("admin") is None


def test_score_individual_requires_caller(store: ProfileStore, make_user, strong_profile):
    make_user("u1", profile=strong_profile)

    with pytest.raises(Unauthenticated):
        score_individual(store, caller_id=None, target_user_id="u1")
    assert store.get_trust_score("u1") is None


def test_score_individual_missing_user_and_missing_profile(store: ProfileStore, make_user):
    make_user("no_profile", profile=None)

    with pytest.raises(ProfileNotFound):
        score_individual(store, caller_id="ghost")
    with pytest.raises(FinancialProfileMissing):
        score_individual(store, caller_id="no_profile")


def test_rescoring_unchanged_profile_is_idempotent(store: ProfileStore, make_user, strong_profile, db: Session):
    """Test scoring twice yields identical results and takes the update path"""
    make_user("u1", profile=strong_profile)

    first = score_individual(store, caller_id="u1")
    second = score_individual(store, caller_id="u1")

    assert first.result.score == second.result.score
    assert first.result.factors == second.result.factors
    assert db.execute(select(func.count()).select_from(TrustScoreRecord)).scalar_one() == 1


def test_rescoring_changed_profile_updates_engine_fields_only(store: ProfileStore, make_user, db: Session):
    """Test create seeds every field but update leaves community and collaborator fields"""
    make_user(
        "u1",
        profile={
            "monthly_income": 3000,
            "business_type": "Retail",
            "community_role": "Secretary",
            "social_connections": "strong",
        },
    )
    first = score_individual(store, caller_id="u1")

    created = store.get_trust_score("u1")
    assert created.payment_history == 0
    assert created.identity_verification == 0
    assert created.community_participation == first.result.factors.community_engagement == 90
    assert created.community_trust == 90

    record = db.execute(select(FinancialProfileRecord).where(FinancialProfileRecord.user_id == "u1")).scalar_one()
    record.monthly_income = 6000
    record.business_registration = True
    record.community_role = None
    db.commit()

    second = score_individual(store, caller_id="u1")
    updated = store.get_trust_score("u1")

    assert second.result.factors.community_engagement == 0
    assert updated.score == second.result.score != first.result.score
    assert updated.financial_stability == 100
    assert updated.economic_activity == 80
    assert updated.community_participation == 90
    assert updated.community_trust == 90
    assert updated.payment_history == 0
    assert updated.identity_verification == 0


def test_score_individual_fails_when_persistence_fails():
    """Test a failed upsert rolls back and fails the whole call"""
    store = MagicMock(spec=ProfileStore)
    store.find_profile.return_value = MemberProfile(user_id="u1", user_name="U1", profile=FinancialProfile())
    store.upsert_trust_score.side_effect = StoreUnavailable("write failed")

    with pytest.raises(StoreUnavailable):
        score_individual(store, caller_id="u1")

    store.rollback.assert_called_once()
    store.commit.assert_not_called()


def test_score_group_preserves_input_order(store: ProfileStore, make_user):
    """Test individual results follow the requested order"""
    make_user("u1", profile={"monthly_income": 6000})
    make_user("u2", profile={"monthly_income": 1500})
    make_user("u3", profile={})

    group = score_group(store, "caller", ["u3", "u1", "u2"])

    assert [m.user_id for m in group.individual_results] == ["u3", "u1", "u2"]
    assert group.scored_member_count == 3


def test_score_group_drops_unresolvable_members(store: ProfileStore, make_user, strong_profile):
    """Test unknown members are skipped without failing the request"""
    make_user("valid", profile=strong_profile)

    group = score_group(store, "caller", ["valid", "nonexistent"])

    assert [m.user_id for m in group.individual_results] == ["valid"]
    assert group.unresolved_user_ids == ["nonexistent"]
    assert group.group_score == 99


def test_score_group_does_not_persist(store: ProfileStore, make_user, strong_profile, db: Session):
    make_user("u1", profile=strong_profile)
    make_user("u2", profile={})

    score_group(store, "caller", ["u1", "u2"])

    assert db.execute(select(func.count()).select_from(TrustScoreRecord)).scalar_one() == 0


def test_score_group_with_no_resolvable_members(store: ProfileStore):
    group = score_group(store, "caller", ["ghost-1", "ghost-2"])

    assert group.group_score == 0
    assert group.individual_results == []
    assert group.unresolved_user_ids == ["ghost-1", "ghost-2"]


@pytest.mark.parametrize("user_ids", [[], None, "u1", ["u1", ""], ["u1", 7]])
def test_score_group_rejects_malformed_member_lists(store: ProfileStore, user_ids):
    with pytest.raises(InvalidInput):
        score_group(store, "caller", user_ids)


def test_score_group_rejects_oversized_groups(store: ProfileStore, monkeypatch):
    monkeypatch.setattr(settings, "max_group_size", 2)

    with pytest.raises(InvalidInput):
        score_group(store, "caller", ["a", "b", "c"])


def test_score_group_requires_caller(store: ProfileStore):
    with pytest.raises(Unauthenticated):
        score_group(store, None, ["u1"])


def test_financial_summary_defaults_to_caller(store: ProfileStore, make_user):
    make_user("u1", profile={"monthly_income": 800})

    summary = get_financial_summary(store, "u1")

    assert summary.user_id == "u1"
    assert summary.financial_profile.monthly_income == 800

    with pytest.raises(Unauthenticated):
        get_financial_summary(store, None, user_id="u1")


def test_score_individual_blank_target_defaults_to_caller(store: ProfileStore, make_user, strong_profile):
    make_user("u1", profile=strong_profile)

    member = score_individual(store, caller_id="u1", target_user_id="  ")

    assert member.user_id == "u1"

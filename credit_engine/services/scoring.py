"""Individual and group scoring orchestrators"""

from typing import Any, Optional
from credit_engine.config import settings
from credit_engine.domain.exceptions import InvalidInput, StoreUnavailable, Unauthenticated
from credit_engine.domain.group import summarize_group
from credit_engine.domain.models import GroupScoreResult, ScoredMember
from credit_engine.domain.scoring import calculate_credit_score
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.utils.coercion import to_text


def require_caller(caller_id: Optional[str]) -> str:
    if not caller_id:
        raise Unauthenticated("Caller identity required")
    return caller_id


def score_individual(
    store: ProfileStore,
    caller_id: Optional[str],
    target_user_id: Optional[str] = None,
) -> ScoredMember:
    """
    Score one user and persist the result as their trust score.

    Flow:
    1. Resolve the target (defaults to the caller)
    2. Load the financial profile
    3. Run factor calculators and the aggregator
    4. Upsert the trust score and commit

    Raises:
        Unauthenticated: no caller identity
        ProfileNotFound: target user does not exist
        FinancialProfileMissing: target never submitted a financial profile
        StoreUnavailable: profile read or trust score write failed
    """
    caller_id = require_caller(caller_id)
    user_id = to_text(target_user_id) or caller_id

    member = store.find_profile(user_id)
    result = calculate_credit_score(member.profile)

    try:
        store.upsert_trust_score(member.user_id, result)
        store.commit()
    except StoreUnavailable:
        store.rollback()
        raise

    return ScoredMember(user_id=member.user_id, user_name=member.user_name, result=result)


def validate_member_ids(user_ids: Any) -> list:
    if not isinstance(user_ids, list) or not user_ids:
        raise InvalidInput("User IDs array required for group calculation")
    if any(not isinstance(user_id, str) or not user_id for user_id in user_ids):
        raise InvalidInput("User IDs must be non-empty strings")
    if len(user_ids) > settings.max_group_size:
        raise InvalidInput(f"Group calculation is limited to {settings.max_group_size} members")
    return user_ids


def score_group(store: ProfileStore, caller_id: Optional[str], user_ids: Any) -> GroupScoreResult:
    """
    Score a cohort without persisting anything.

    Members are fetched with one bulk lookup; ids without a resolvable
    profile are dropped and reported in unresolved_user_ids. Results keep
    the order of user_ids.
    """
    require_caller(caller_id)
    user_ids = validate_member_ids(user_ids)

    members = store.find_profiles_bulk(user_ids)
    scored = [
        ScoredMember(
            user_id=member.user_id,
            user_name=member.user_name,
            result=calculate_credit_score(member.profile),
        )
        for member in members
    ]

    resolved = {member.user_id for member in members}
    unresolved = [user_id for user_id in dict.fromkeys(user_ids) if user_id not in resolved]

    return summarize_group(scored, unresolved_user_ids=unresolved)

"""POST /v1/credit-score and /v1/credit-score/group - credit scoring endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_engine.api.v1.schemas import (
    CreditFactorsSchema,
    CreditScoreResponse,
    GroupScoreRequest,
    GroupScoreResponse,
    MemberScoreSchema,
    ScoreRequest,
)
from credit_engine.api.dependencies import get_caller_id, get_profile_store, get_request_id
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.domain.models import ScoredMember
from credit_engine.domain.exceptions import (
    FinancialProfileMissing,
    InvalidInput,
    ProfileNotFound,
    StoreUnavailable,
    Unauthenticated,
)
from credit_engine.services.scoring import score_group, score_individual
from credit_engine.infrastructure.observability.metrics import (
    record_group_score,
    record_score,
    store_failures_counter,
)
from credit_engine.infrastructure.observability.logging import log_group_score, log_score

router = APIRouter()


def to_member_schema(member: ScoredMember) -> MemberScoreSchema:
    result = member.result
    return MemberScoreSchema(
        user_id=member.user_id,
        user_name=member.user_name,
        score=result.score,
        factors=CreditFactorsSchema.model_validate(result.factors),
        recommendations=result.recommendations,
        risk_level=result.risk_level,
    )


@router.post("/credit-score", response_model=CreditScoreResponse)
def create_credit_score(
    request_body: ScoreRequest,
    request: Request,
    store: ProfileStore = Depends(get_profile_store),
):
    """
    Score one user's financial profile and persist it as their trust score.

    Flow:
    1. Resolve target user (defaults to the caller)
    2. Load financial profile
    3. Run factor calculators and aggregate
    4. Upsert trust score
    5. Return score, factors, recommendations and risk level
    """
    start_time = time.time()
    request_id = get_request_id(request)
    caller_id = get_caller_id(request)

    try:
        member = score_individual(store, caller_id, request_body.user_id)

    except Unauthenticated:
        raise HTTPException(status_code=401, detail="Unauthorized")

    except ProfileNotFound as e:
        logging.warning(f"Profile not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail={"code": "PROFILE_NOT_FOUND", "error": "User not found"})

    except FinancialProfileMissing as e:
        logging.info(f"Financial profile missing: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail={"code": "FINANCIAL_PROFILE_MISSING", "error": str(e)})

    except StoreUnavailable as e:
        store_failures_counter.inc()
        logging.error(f"Profile store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Profile store unavailable")

    except Exception as e:
        store.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_score(member.result.risk_level.value, member.result.score)
    log_score(request_id, member.user_id, member.result.score, member.result.risk_level.value, duration_ms)

    return CreditScoreResponse(
        **to_member_schema(member).model_dump(),
        calculated_at=member.calculated_at,
    )


@router.post("/credit-score/group", response_model=GroupScoreResponse)
def create_group_credit_score(
    request_body: GroupScoreRequest,
    request: Request,
    store: ProfileStore = Depends(get_profile_store),
):
    """
    Score a cohort of users together. Nothing is persisted.

    Members without a financial profile are skipped and listed in
    unresolvedUserIds; individualResults keep the order of userIds.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    caller_id = get_caller_id(request)

    try:
        group = score_group(store, caller_id, request_body.user_ids)

    except Unauthenticated:
        raise HTTPException(status_code=401, detail="Unauthorized")

    except InvalidInput as e:
        logging.warning(f"Invalid group request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except StoreUnavailable as e:
        store_failures_counter.inc()
        logging.error(f"Profile store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Profile store unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_group_score(len(group.unresolved_user_ids))
    log_group_score(
        request_id,
        len(request_body.user_ids),
        group.scored_member_count,
        group.group_score,
        duration_ms,
    )

    return GroupScoreResponse(
        group_score=group.group_score,
        group_risk_distribution={
            level.value: count for level, count in group.group_risk_distribution.items()
        },
        group_recommendations=group.group_recommendations,
        individual_results=[to_member_schema(m) for m in group.individual_results],
        scored_member_count=group.scored_member_count,
        unresolved_user_ids=group.unresolved_user_ids,
        calculated_at=group.calculated_at,
    )

"""GET /v1/financial-summary - persisted profile and trust score projection"""

import logging
from typing import Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from credit_engine.api.v1.schemas import (
    FinancialProfileSchema,
    GroupSummaryResponse,
    TrustScoreSchema,
    UserSummaryResponse,
)
from credit_engine.api.dependencies import get_caller_id, get_profile_store, get_request_id
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.infrastructure.observability.metrics import store_failures_counter
from credit_engine.domain.models import GroupFinancialSummary
from credit_engine.domain.exceptions import GroupNotFound, ProfileNotFound, StoreUnavailable, Unauthenticated
from credit_engine.services.summary import get_financial_summary

router = APIRouter()


@router.get("/financial-summary", response_model=Union[GroupSummaryResponse, UserSummaryResponse])
def read_financial_summary(
    request: Request,
    user_id: Optional[str] = Query(None, alias="userId", description="User identifier; defaults to the caller"),
    group_id: Optional[str] = Query(None, alias="groupId", description="Cooperative identifier"),
    store: ProfileStore = Depends(get_profile_store),
):
    """
    Retrieve the last persisted financial data.

    Returns:
        Group aggregates when groupId is given, otherwise the user's
        financial profile and trust score
    """
    request_id = get_request_id(request)

    try:
        summary = get_financial_summary(store, get_caller_id(request), user_id=user_id, group_id=group_id)

    except Unauthenticated:
        raise HTTPException(status_code=401, detail="Unauthorized")

    except ProfileNotFound:
        raise HTTPException(status_code=404, detail="User not found")

    except GroupNotFound:
        raise HTTPException(status_code=404, detail="Group not found")

    except StoreUnavailable as e:
        store_failures_counter.inc()
        logging.error(f"Profile store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Profile store unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if isinstance(summary, GroupFinancialSummary):
        return GroupSummaryResponse.model_validate(summary)

    return UserSummaryResponse(
        user_id=summary.user_id,
        financial_profile=(
            FinancialProfileSchema.model_validate(summary.financial_profile)
            if summary.financial_profile
            else None
        ),
        trust_score=TrustScoreSchema.model_validate(summary.trust_score) if summary.trust_score else None,
        last_updated=summary.last_updated,
    )

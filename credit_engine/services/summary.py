"""Read path over persisted profiles and trust scores"""

from typing import Optional, Union
from credit_engine.domain.models import GroupFinancialSummary, UserFinancialSummary
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.services.scoring import require_caller


def get_financial_summary(
    store: ProfileStore,
    caller_id: Optional[str],
    user_id: Optional[str] = None,
    group_id: Optional[str] = None,
) -> Union[UserFinancialSummary, GroupFinancialSummary]:
    """
    Return a cooperative's aggregate summary when group_id is given,
    otherwise the user summary for user_id (defaulting to the caller).
    """
    caller_id = require_caller(caller_id)

    if group_id:
        return store.get_group_summary(group_id)
    return store.get_user_summary(user_id or caller_id)

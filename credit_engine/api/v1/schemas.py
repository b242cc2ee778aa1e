"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, List, Optional
from credit_engine.domain.models import RiskLevel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ScoreRequest(ApiModel):
    """Request body for POST /v1/credit-score"""

    user_id: Optional[str] = Field(None, description="User to score; empty or absent means the caller")


class GroupScoreRequest(ApiModel):
    """Request body for POST /v1/credit-score/group"""

    user_ids: Any = Field(None, description="Members to score together, in output order")


class CreditFactorsSchema(ApiModel):
    """The seven 0-100 sub-scores"""

    income_stability: float
    debt_to_income_ratio: float
    asset_value: float
    expense_management: float
    business_activity: float
    community_engagement: float
    financial_discipline: float


class MemberScoreSchema(ApiModel):
    """Single member's result inside a group response"""

    user_id: str
    user_name: Optional[str] = None
    score: int
    factors: CreditFactorsSchema
    recommendations: List[str]
    risk_level: RiskLevel


class CreditScoreResponse(MemberScoreSchema):
    """Response for POST /v1/credit-score"""

    calculated_at: datetime


class GroupScoreResponse(ApiModel):
    """Response for POST /v1/credit-score/group"""

    group_score: int
    group_risk_distribution: Dict[str, int]
    group_recommendations: List[str]
    individual_results: List[MemberScoreSchema]
    scored_member_count: int
    unresolved_user_ids: List[str]
    calculated_at: datetime


class FinancialProfileSchema(ApiModel):
    """Stored financial profile after boundary coercion"""

    monthly_income: float
    seasonal_income: bool
    housing_expense: float
    food_expense: float
    transportation_expense: float
    utilities_expense: float
    healthcare_expense: float
    education_expense: float
    other_expenses: float
    property_value: float
    vehicles_value: float
    livestock_value: float
    equipment_value: float
    savings_value: float
    other_assets_value: float
    business_type: str
    business_registration: bool
    farm_ownership: bool
    community_role: str
    social_connections: str
    bank_account: str


class TrustScoreSchema(ApiModel):
    """Persisted trust score"""

    user_id: str
    score: int
    financial_stability: float
    economic_activity: float
    community_participation: float
    payment_history: float
    community_trust: float
    identity_verification: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummaryResponse(ApiModel):
    """Response for GET /v1/financial-summary?userId="""

    user_id: str
    financial_profile: Optional[FinancialProfileSchema] = None
    trust_score: Optional[TrustScoreSchema] = None
    last_updated: Optional[datetime] = None


class GroupSummaryResponse(ApiModel):
    """Response for GET /v1/financial-summary?groupId="""

    group_id: str
    group_name: str
    member_count: int
    average_score: float
    total_assets: float
    balance_pool: float

"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from credit_engine.utils.coercion import to_amount, to_flag, to_text

EXPENSE_FIELDS = (
    "housing_expense",
    "food_expense",
    "transportation_expense",
    "utilities_expense",
    "healthcare_expense",
    "education_expense",
    "other_expenses",
)

ASSET_FIELDS = (
    "property_value",
    "vehicles_value",
    "livestock_value",
    "equipment_value",
    "savings_value",
    "other_assets_value",
)

TEXT_FIELDS = ("business_type", "community_role", "social_connections", "bank_account")

FLAG_FIELDS = ("seasonal_income", "business_registration", "farm_ownership")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RiskLevel(str, Enum):
    """Risk tier derived from the unrounded composite score"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class FinancialProfile:
    """Self-reported financial, business and social data for one user"""

    monthly_income: float = 0.0
    seasonal_income: bool = False

    housing_expense: float = 0.0
    food_expense: float = 0.0
    transportation_expense: float = 0.0
    utilities_expense: float = 0.0
    healthcare_expense: float = 0.0
    education_expense: float = 0.0
    other_expenses: float = 0.0

    property_value: float = 0.0
    vehicles_value: float = 0.0
    livestock_value: float = 0.0
    equipment_value: float = 0.0
    savings_value: float = 0.0
    other_assets_value: float = 0.0

    business_type: str = ""
    business_registration: bool = False
    farm_ownership: bool = False
    community_role: str = ""
    social_connections: str = ""
    bank_account: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FinancialProfile":
        """
        Build a fully-defaulted profile from loosely-typed stored values.

        Amounts go through to_amount, text through to_text and flags through
        to_flag; unknown keys are ignored.
        """
        values: Dict[str, Any] = {"monthly_income": to_amount(data.get("monthly_income"))}
        for name in EXPENSE_FIELDS + ASSET_FIELDS:
            values[name] = to_amount(data.get(name))
        for name in TEXT_FIELDS:
            values[name] = to_text(data.get(name))
        for name in FLAG_FIELDS:
            values[name] = to_flag(data.get(name))
        return cls(**values)

    @property
    def total_expenses(self) -> float:
        return sum(getattr(self, name) for name in EXPENSE_FIELDS)

    @property
    def total_assets(self) -> float:
        return sum(getattr(self, name) for name in ASSET_FIELDS)


@dataclass
class CreditFactors:
    """The seven 0-100 sub-scores feeding the composite score"""

    income_stability: float = 0.0
    debt_to_income_ratio: float = 0.0
    asset_value: float = 0.0
    expense_management: float = 0.0
    business_activity: float = 0.0
    community_engagement: float = 0.0
    financial_discipline: float = 0.0


@dataclass
class CreditScoreResult:
    """Output of the score aggregator"""

    score: int
    factors: CreditFactors
    recommendations: List[str]
    risk_level: RiskLevel
    weighted_score: float


@dataclass
class MemberProfile:
    """A user's identity paired with their stored financial profile"""

    user_id: str
    user_name: Optional[str]
    profile: FinancialProfile


@dataclass
class ScoredMember:
    """Credit score result tagged with the user it belongs to"""

    user_id: str
    user_name: Optional[str]
    result: CreditScoreResult
    calculated_at: datetime = field(default_factory=utc_now)


@dataclass
class GroupScoreResult:
    """Cohort-level statistics over individually scored members"""

    group_score: int
    group_risk_distribution: Dict[RiskLevel, int]
    group_recommendations: List[str]
    individual_results: List[ScoredMember]
    unresolved_user_ids: List[str] = field(default_factory=list)
    calculated_at: datetime = field(default_factory=utc_now)

    @property
    def scored_member_count(self) -> int:
        return len(self.individual_results)


@dataclass
class TrustScore:
    """Persisted trust score snapshot"""

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


@dataclass
class UserFinancialSummary:
    """Last persisted profile and trust score for one user"""

    user_id: str
    financial_profile: Optional[FinancialProfile]
    trust_score: Optional[TrustScore]
    last_updated: Optional[datetime]


@dataclass
class GroupFinancialSummary:
    """Aggregate persisted figures for a cooperative"""

    group_id: str
    group_name: str
    member_count: int
    average_score: float
    total_assets: float
    balance_pool: float

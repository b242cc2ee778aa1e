"""Score aggregator - core business logic for credit scoring"""

import math
from typing import Dict, List
from credit_engine.domain.models import CreditFactors, CreditScoreResult, FinancialProfile, RiskLevel
from credit_engine.domain.factors import FACTOR_CALCULATORS

# Weights in calculator order; they sum to exactly 1.0
WEIGHTS: Dict[str, float] = {
    "income_stability": 0.25,
    "debt_to_income_ratio": 0.20,
    "asset_value": 0.15,
    "expense_management": 0.10,
    "business_activity": 0.15,
    "community_engagement": 0.10,
    "financial_discipline": 0.05,
}

LOW_RISK_THRESHOLD = 80
MEDIUM_RISK_THRESHOLD = 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 → 3, not 2)"""
    return int(math.floor(value + 0.5))


def calculate_factors(profile: FinancialProfile) -> tuple[CreditFactors, List[str]]:
    """
    Run all seven factor calculators in declaration order.

    Every calculator always runs; recommendations are concatenated in the
    same order without deduplication.
    """
    factors = CreditFactors()
    recommendations: List[str] = []

    for name, calculator in FACTOR_CALCULATORS:
        sub_score, factor_recommendations = calculator(profile)
        setattr(factors, name, sub_score)
        recommendations.extend(factor_recommendations)

    return factors, recommendations


def weighted_score(factors: CreditFactors) -> float:
    # Summed in calculator order so float results are reproducible
    total = 0.0
    for name, weight in WEIGHTS.items():
        total += getattr(factors, name) * weight
    return total


def determine_risk_level(score: float) -> RiskLevel:
    """
    Map the unrounded weighted score to a risk tier.

    - >= 80: LOW
    - >= 60: MEDIUM
    - otherwise: HIGH
    """
    if score >= LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    elif score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.HIGH


def aggregate(factors: CreditFactors, recommendations: List[str]) -> CreditScoreResult:
    """Combine factor sub-scores into the composite score and risk tier"""
    raw_score = weighted_score(factors)
    score = min(max(round_half_up(raw_score), 0), 100)

    return CreditScoreResult(
        score=score,
        factors=factors,
        recommendations=list(recommendations),
        risk_level=determine_risk_level(raw_score),
        weighted_score=raw_score,
    )


def calculate_credit_score(profile: FinancialProfile) -> CreditScoreResult:
    """
    Main entry point: score a financial profile.

    Pure and deterministic; safe to call concurrently.
    """
    factors, recommendations = calculate_factors(profile)
    return aggregate(factors, recommendations)

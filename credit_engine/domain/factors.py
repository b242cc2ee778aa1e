"""
Factor calculators - each turns one slice of a financial profile into a
0-100 sub-score plus any recommendations it wants to surface.

Missing data never raises: the sub-score falls to its floor and a
recommendation explains what to provide.
"""

from typing import Callable, List, Tuple
from credit_engine.domain.models import FinancialProfile

FactorOutcome = Tuple[float, List[str]]

SEASONAL_DAMPENING = 0.8
FARM_OWNERSHIP_BONUS = 20


def income_stability(profile: FinancialProfile) -> FactorOutcome:
    """
    Income tiers: >5000 → 100, >2000 → 80, >1000 → 60, otherwise 40.
    Seasonal income is dampened by 20% after the tier lookup.
    """
    income = profile.monthly_income
    if not income:
        return 0.0, ["Please provide monthly income information for better credit assessment"]

    if income > 5000:
        score = 100.0
    elif income > 2000:
        score = 80.0
    elif income > 1000:
        score = 60.0
    else:
        score = 40.0

    recommendations = []
    if profile.seasonal_income:
        score *= SEASONAL_DAMPENING
        recommendations.append("Consider diversifying income sources to reduce seasonal dependency")

    return score, recommendations


def debt_to_income_ratio(profile: FinancialProfile) -> FactorOutcome:
    """Expense-to-income ratio: <0.3 → 100, <0.5 → 80, <0.7 → 60, otherwise 30"""
    income = profile.monthly_income
    total_expenses = profile.total_expenses
    if not income or total_expenses <= 0:
        return 0.0, []

    ratio = total_expenses / income
    if ratio < 0.3:
        score = 100.0
    elif ratio < 0.5:
        score = 80.0
    elif ratio < 0.7:
        score = 60.0
    else:
        score = 30.0

    recommendations = []
    if ratio > 0.6:
        recommendations.append("Consider reducing monthly expenses to improve financial stability")

    return score, recommendations


def asset_value(profile: FinancialProfile) -> FactorOutcome:
    """Total assets: >100k → 100, >50k → 80, >20k → 60, >5k → 40, otherwise 20"""
    total_assets = profile.total_assets

    if total_assets > 100_000:
        score = 100.0
    elif total_assets > 50_000:
        score = 80.0
    elif total_assets > 20_000:
        score = 60.0
    elif total_assets > 5_000:
        score = 40.0
    else:
        score = 20.0

    recommendations = []
    if total_assets < 10_000:
        recommendations.append("Building assets can significantly improve your credit profile")

    return score, recommendations


def expense_management(profile: FinancialProfile) -> FactorOutcome:
    """Savings rate: >0.3 → 100, >0.2 → 80, >0.1 → 60, >0 → 40, otherwise 20"""
    income = profile.monthly_income
    total_expenses = profile.total_expenses
    if not income or total_expenses <= 0:
        return 0.0, []

    savings_rate = (income - total_expenses) / income
    if savings_rate > 0.3:
        score = 100.0
    elif savings_rate > 0.2:
        score = 80.0
    elif savings_rate > 0.1:
        score = 60.0
    elif savings_rate > 0:
        score = 40.0
    else:
        score = 20.0

    recommendations = []
    if savings_rate < 0.1:
        recommendations.append("Try to save at least 10% of your monthly income")

    return score, recommendations


def business_activity(profile: FinancialProfile) -> FactorOutcome:
    """
    Any business → 60, registered → 80. Farm ownership then adds 20 on top
    of whichever base applies; the sum is not clamped here.
    """
    if not profile.business_type:
        return 0.0, ["Consider starting a small business to improve your economic profile"]

    score = 60.0
    if profile.business_registration:
        score = 80.0
    if profile.farm_ownership:
        score += FARM_OWNERSHIP_BONUS

    return score, []


def community_engagement(profile: FinancialProfile) -> FactorOutcome:
    if not profile.community_role:
        return 0.0, ["Active community participation can enhance your credit profile"]

    score = 70.0
    if profile.social_connections == "strong":
        score = 90.0

    return score, []


def financial_discipline(profile: FinancialProfile) -> FactorOutcome:
    if not profile.bank_account:
        return 0.0, ["Having a bank account demonstrates financial responsibility"]

    score = 70.0
    if profile.savings_value > 0:
        score = 90.0

    return score, []


# Declaration order drives both the weight mapping and recommendation order
FACTOR_CALCULATORS: Tuple[Tuple[str, Callable[[FinancialProfile], FactorOutcome]], ...] = (
    ("income_stability", income_stability),
    ("debt_to_income_ratio", debt_to_income_ratio),
    ("asset_value", asset_value),
    ("expense_management", expense_management),
    ("business_activity", business_activity),
    ("community_engagement", community_engagement),
    ("financial_discipline", financial_discipline),
)

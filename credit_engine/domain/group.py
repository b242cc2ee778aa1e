"""Cohort statistics over individually scored members"""

from typing import Dict, List, Optional
from credit_engine.domain.models import GroupScoreResult, RiskLevel, ScoredMember
from credit_engine.domain.scoring import round_half_up

STRONG_GROUP_THRESHOLD = 75
MODERATE_GROUP_THRESHOLD = 60


def risk_distribution(members: List[ScoredMember]) -> Dict[RiskLevel, int]:
    distribution = {level: 0 for level in RiskLevel}
    for member in members:
        distribution[member.result.risk_level] += 1
    return distribution


def group_health_message(group_score: int) -> str:
    """
    Narrative tier on the rounded group score:
    - > 75: strong collective health
    - > 60: moderate stability
    - otherwise: literacy/support programs
    """
    if group_score > STRONG_GROUP_THRESHOLD:
        return "This group shows strong collective financial health"
    elif group_score > MODERATE_GROUP_THRESHOLD:
        return "This group has moderate financial stability with room for improvement"
    else:
        return "This group may benefit from financial literacy programs and support"


def summarize_group(
    members: List[ScoredMember],
    unresolved_user_ids: Optional[List[str]] = None,
) -> GroupScoreResult:
    """
    Fold individual results into a GroupScoreResult.

    The group score is the rounded mean of member integer scores. A group
    with no scored members gets a score of 0 rather than a division by zero.
    """
    if members:
        group_score = round_half_up(sum(m.result.score for m in members) / len(members))
    else:
        group_score = 0

    distribution = risk_distribution(members)
    recommendations = [
        f"Group average credit score: {group_score}",
        f"Risk distribution: {distribution[RiskLevel.LOW]} low risk, "
        f"{distribution[RiskLevel.MEDIUM]} medium risk, "
        f"{distribution[RiskLevel.HIGH]} high risk members",
        group_health_message(group_score),
    ]

    return GroupScoreResult(
        group_score=group_score,
        group_risk_distribution=distribution,
        group_recommendations=recommendations,
        individual_results=list(members),
        unresolved_user_ids=list(unresolved_user_ids or []),
    )

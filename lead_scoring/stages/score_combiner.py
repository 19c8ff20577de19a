"""
Score Combination
=================
Merges the rule score with the points for the classified intent.
"""

from ..models.schemas import Lead, Intent, IntentResult, ScoredLead
from ..config.settings import AI_POINTS


def ai_points_for_intent(intent) -> int:
    """High -> 50, Medium -> 30, anything else -> 10"""
    value = intent.value if isinstance(intent, Intent) else intent
    if value == "High":
        return AI_POINTS["High"]
    if value == "Medium":
        return AI_POINTS["Medium"]
    return AI_POINTS["Low"]


def combine_scores(lead: Lead, rule_score: int, intent_result: IntentResult) -> ScoredLead:
    """Build the final result record for one lead"""
    ai_points = ai_points_for_intent(intent_result.intent)
    return ScoredLead(
        name=lead.name,
        role=lead.role,
        company=lead.company,
        intent=intent_result.intent,
        score=rule_score + ai_points,
        reason=intent_result.reason,
        raw_rule_score=rule_score,
        raw_ai_points=ai_points,
    )

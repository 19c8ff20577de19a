"""
Rule Scoring
============
Deterministic scoring from lead attributes and the offer profile.
No I/O; the same lead and offer always produce the same score.

Sub-scores:
- Role (max 20): decision-maker vs influencer keywords
- Industry (max 20): fit against the offer's ideal use cases
- Completeness (max 10): all profile fields present
"""

import re
from typing import Dict, List, Optional

from ..models.schemas import Lead, Offer, RuleScoreBreakdown
from ..config.settings import ROLE_KEYWORDS, RULE_POINTS, LEAD_FIELDS

_TOKEN_SPLIT = re.compile(r"\W+")


class RuleScoringStage:
    """
    Compute the rule score (0-50) for a lead against an offer.
    """

    def __init__(self, role_keywords: Optional[Dict[str, List[str]]] = None):
        """
        Initialize with role keyword lists or use defaults.
        """
        keywords = role_keywords or ROLE_KEYWORDS
        self.decision_keywords = list(keywords.get("decision_maker", []))
        self.influencer_keywords = list(keywords.get("influencer", []))

    def process(self, lead: Lead, offer: Offer) -> RuleScoreBreakdown:
        """
        Score a lead.

        Args:
            lead: Lead to score
            offer: Offer whose ideal use cases define industry fit

        Returns:
            RuleScoreBreakdown with the three sub-scores
        """
        return RuleScoreBreakdown(
            role=self.role_score(lead.role),
            industry=self.industry_score(lead.industry, offer),
            completeness=self.completeness_score(lead),
        )

    def role_score(self, role: str) -> int:
        """Score seniority from role keywords (substring match, first hit wins)"""
        role = (role or "").lower()
        for keyword in self.decision_keywords:
            if keyword in role:
                return RULE_POINTS["decision_maker"]
        for keyword in self.influencer_keywords:
            if keyword in role:
                return RULE_POINTS["influencer"]
        return 0

    def industry_score(self, industry: str, offer: Optional[Offer]) -> int:
        """Score industry fit against the offer's ideal use cases"""
        if not offer or not offer.ideal_use_cases or not industry:
            return 0

        lead_industry = industry.lower()
        for use_case in offer.ideal_use_cases:
            icp = use_case.lower()

            if lead_industry == icp:
                return RULE_POINTS["industry_exact"]

            # Adjacent: one contains the other
            if icp in lead_industry or lead_industry in icp:
                return RULE_POINTS["industry_adjacent"]

            tokens = [tok for tok in _TOKEN_SPLIT.split(icp) if tok]
            if any(tok in lead_industry for tok in tokens):
                return RULE_POINTS["industry_adjacent"]

        return 0

    def completeness_score(self, lead: Lead) -> int:
        """All-or-nothing credit for a fully populated profile"""
        for field in LEAD_FIELDS:
            value = getattr(lead, field, "")
            if not value or not str(value).strip():
                return 0
        return RULE_POINTS["complete_profile"]


_default_stage = RuleScoringStage()


def compute_rule_score(lead: Lead, offer: Offer) -> int:
    """Rule score (0-50) using the default keyword lists"""
    return _default_stage.process(lead, offer).total

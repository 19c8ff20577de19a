"""
Lead Scoring Engine - Main Orchestrator
=======================================
Owns the scoring session (offer, leads, results) and runs the pipeline:
  Rule Scoring → Intent Classification → Score Combination

Leads are processed one at a time, in upload order. Results are committed
only after the whole batch succeeds, so a failed run leaves the previous
results in place.
"""

import logging
import time
from typing import Optional, List, Dict, Any, Iterable

from .models.schemas import Lead, Offer, ScoredLead, Intent
from .errors import ScoringPreconditionError
from .stages.rule_scoring import RuleScoringStage
from .stages.intent_classifier import IntentClassifierStage
from .stages.score_combiner import combine_scores
from .tabular import results_to_csv

logger = logging.getLogger(__name__)


class LeadScoringEngine:
    """
    Scoring session: stores the current offer, uploaded leads and the last
    committed results.
    """

    def __init__(
        self,
        classifier: Optional[IntentClassifierStage] = None,
        llm_api_key: Optional[str] = None,
        llm_provider: Optional[str] = None,
    ):
        """
        Initialize the scoring engine.

        Args:
            classifier: Intent classifier (built from settings if not provided)
            llm_api_key: API key for LLM provider
            llm_provider: LLM provider ("openai", "openrouter" or "anthropic")
        """
        self.rule_stage = RuleScoringStage()
        self.intent_stage = classifier or IntentClassifierStage(
            api_key=llm_api_key, provider=llm_provider
        )

        self.offer: Optional[Offer] = None
        self.leads: List[Lead] = []
        self.results: List[ScoredLead] = []

        self.stats = self._empty_stats()

    # =========================================================================
    # Session state
    # =========================================================================

    def set_offer(self, offer: Offer) -> Offer:
        """Replace the current offer"""
        self.offer = offer
        logger.info("Offer set: %s (%d ideal use cases)", offer.name, len(offer.ideal_use_cases))
        return offer

    def add_leads(self, leads: Iterable[Lead], replace: bool = False) -> int:
        """Append leads (or replace the collection); returns how many were added"""
        new_leads = list(leads)
        if replace:
            self.leads = new_leads
        else:
            self.leads = self.leads + new_leads
        logger.info("Added %d leads (total %d)", len(new_leads), len(self.leads))
        return len(new_leads)

    def get_results(self, sort_by: str = "input") -> List[ScoredLead]:
        """
        Committed results.

        Args:
            sort_by: "input" keeps upload order, "score" sorts best first
        """
        if sort_by == "score":
            return sorted(self.results, key=lambda r: r.score, reverse=True)
        if sort_by != "input":
            raise ValueError(f"Unknown sort order: {sort_by}")
        return list(self.results)

    def export_results_csv(self) -> str:
        """Committed results as CSV; raises NoResultsError when empty"""
        return results_to_csv(self.results)

    def reset(self):
        """Forget the offer, leads and results"""
        self.offer = None
        self.leads = []
        self.results = []

    # =========================================================================
    # Scoring
    # =========================================================================

    def run_scoring(self) -> List[ScoredLead]:
        """
        Score the session's leads against its offer and commit the results.
        """
        results = self.score_batch(self.leads, self.offer)
        self.results = results
        return results

    def score_batch(
        self, leads: List[Lead], offer: Optional[Offer]
    ) -> List[ScoredLead]:
        """
        Score leads sequentially, preserving their order.

        Raises:
            ScoringPreconditionError: no offer, or no leads
        """
        if offer is None:
            raise ScoringPreconditionError("offer", "No offer set. POST /offer first.")
        if not leads:
            raise ScoringPreconditionError("leads", "No leads uploaded. POST /leads/upload first.")

        start_time = time.time()
        logger.info("Scoring %d leads against offer %r", len(leads), offer.name)

        results = []
        fallbacks = 0
        for lead in leads:
            scored, used_fallback = self._score_one(lead, offer)
            results.append(scored)
            fallbacks += used_fallback

        # Statistics only count completed runs
        total_time = (time.time() - start_time) * 1000
        self.stats["runs"] += 1
        self.stats["total_processed"] += len(results)
        self.stats["llm_fallbacks"] += fallbacks
        self.stats["high_intent"] += sum(1 for r in results if r.intent == Intent.HIGH)
        self.stats["total_processing_time_ms"] += total_time
        logger.info("Scored %d leads in %.1f ms", len(results), total_time)
        return results

    def score_lead(self, lead: Lead, offer: Offer) -> ScoredLead:
        """Score a single lead"""
        scored, _ = self._score_one(lead, offer)
        return scored

    def _score_one(self, lead: Lead, offer: Offer):
        breakdown = self.rule_stage.process(lead, offer)
        intent_result = self.intent_stage.process(lead, offer)
        scored = combine_scores(lead, breakdown.total, intent_result)

        logger.debug(
            "%s: role=%d industry=%d completeness=%d intent=%s score=%d",
            lead.name,
            breakdown.role,
            breakdown.industry,
            breakdown.completeness,
            scored.intent.value,
            scored.score,
        )
        return scored, intent_result.fallback

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics"""
        stats = self.stats.copy()
        if stats["total_processed"] > 0:
            stats["llm_fallback_rate"] = round(
                stats["llm_fallbacks"] / stats["total_processed"] * 100, 1
            )
            stats["avg_processing_time_ms"] = round(
                stats["total_processing_time_ms"] / stats["total_processed"], 2
            )
        stats["offer_set"] = self.offer is not None
        stats["leads_loaded"] = len(self.leads)
        stats["results_stored"] = len(self.results)
        return stats

    def reset_stats(self):
        """Reset engine statistics"""
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "runs": 0,
            "total_processed": 0,
            "llm_fallbacks": 0,
            "high_intent": 0,
            "total_processing_time_ms": 0,
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def run_scoring(leads: List[Lead], offer: Optional[Offer]) -> List[ScoredLead]:
    """
    Score leads against an offer with an engine configured from the environment.
    """
    return LeadScoringEngine().score_batch(leads, offer)

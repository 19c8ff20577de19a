# Scoring stages module
from .rule_scoring import RuleScoringStage, compute_rule_score
from .intent_classifier import IntentClassifierStage, classify_intent, parse_intent_reply
from .score_combiner import ai_points_for_intent, combine_scores

"""
Engine Module — Validation, Rule Evaluation, Aggregation & Classification

Public API:
- ClassificationEngine: Scores measurements against one rule set
- PredictionResult: Score, verdict, tier/confidence, risk factors
- QualityTier: excellent/good/fair/poor
- validate_measurements: Presence + numeric checks before scoring
- summarize / describe_confidence: Display helpers
"""

from .validation import validate_measurements, find_missing
from .breakdown import RuleOutcome, ScoreBreakdown, evaluate_rule, evaluate_rules
from .policies import aggregate, complexity_adjustment, round_score, SCORE_MIN, SCORE_MAX
from .classifier import (
    ClassificationEngine,
    PredictionResult,
    QualityTier,
    classify_tier,
    compute_confidence,
    is_potable,
    TIER_EXCELLENT,
    TIER_GOOD,
    TIER_FAIR,
    CONFIDENCE_MIN,
    CONFIDENCE_MAX,
)
from .presenter import describe_confidence, summarize

__all__ = [
    "validate_measurements",
    "find_missing",
    "RuleOutcome",
    "ScoreBreakdown",
    "evaluate_rule",
    "evaluate_rules",
    "aggregate",
    "complexity_adjustment",
    "round_score",
    "SCORE_MIN",
    "SCORE_MAX",
    "ClassificationEngine",
    "PredictionResult",
    "QualityTier",
    "classify_tier",
    "compute_confidence",
    "is_potable",
    "TIER_EXCELLENT",
    "TIER_GOOD",
    "TIER_FAIR",
    "CONFIDENCE_MIN",
    "CONFIDENCE_MAX",
    "describe_confidence",
    "summarize",
]

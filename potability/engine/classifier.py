"""
Classification Engine — Convert Measurements to Potability Decisions

validate → evaluate rules → aggregate → classify → assemble result

Constraints:
- Deterministic: same input = same score, verdict, tier and risk factors
- Named threshold constants (no magic numbers)
- potable is a pure function of the rounded score
- Confidence is ADVISORY only; it never feeds back into the verdict
- Synchronous, no I/O, no shared mutable state
"""

import logging
import random
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field

from potability.rules.models import RuleSet, ScoringPolicy

from .breakdown import RuleOutcome, evaluate_rules
from .policies import aggregate, round_score
from .validation import validate_measurements


logger = logging.getLogger(__name__)


# ============================================================================
# THRESHOLD CONSTANTS — Explicit, Named, No Magic Numbers
# ============================================================================

# Quality tier bands (subtractive policy), evaluated highest first
TIER_EXCELLENT = 90   # At or above = EXCELLENT
TIER_GOOD = 75        # At or above = GOOD
TIER_FAIR = 60        # At or above = FAIR
# Below TIER_FAIR = POOR

# Advisory confidence bounds (additive policy)
CONFIDENCE_MIN = 55.0
CONFIDENCE_MAX = 95.0
CONFIDENCE_JITTER = 10.0   # Upper bound of the optional random jitter


# ============================================================================
# Enums and Schemas
# ============================================================================

class QualityTier(str, Enum):
    """Categorical water quality labels."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class PredictionResult(BaseModel):
    """
    Potability result for one measurement set.

    Output guarantees:
    - score is an integer in [0, 100]
    - potable == (score >= threshold)
    - risk_factors are distinct and in rule-table order
    """
    variant: str
    rules_version: str
    score: int = Field(..., ge=0, le=100)
    potable: bool
    threshold: float
    tier: Optional[QualityTier] = None
    confidence: Optional[float] = Field(default=None, ge=0, le=100)
    algorithm_label: Optional[str] = None
    risk_factors: List[str] = Field(default_factory=list)
    breakdown: List[RuleOutcome] = Field(default_factory=list)


# ============================================================================
# Pure classification helpers
# ============================================================================

def classify_tier(score: int) -> QualityTier:
    """
    Classify quality tier from score.

    Bands are contiguous and cover [0, 100].
    """
    if score >= TIER_EXCELLENT:
        return QualityTier.EXCELLENT
    elif score >= TIER_GOOD:
        return QualityTier.GOOD
    elif score >= TIER_FAIR:
        return QualityTier.FAIR
    else:
        return QualityTier.POOR


def is_potable(score: int, threshold: float) -> bool:
    return score >= threshold


def compute_confidence(raw_score: float, rng: Optional[random.Random] = None) -> float:
    """
    Advisory confidence figure in [CONFIDENCE_MIN, CONFIDENCE_MAX].

    Without an rng this is a deterministic clamp of the raw score.
    With an rng, a uniform jitter in [0, CONFIDENCE_JITTER] is added first,
    so a seeded generator still gives reproducible output.

    Args:
        raw_score: Unrounded aggregate score
        rng: Optional caller-supplied random source

    Returns:
        Confidence percentage, one decimal place
    """
    jitter = rng.uniform(0.0, CONFIDENCE_JITTER) if rng is not None else 0.0
    confidence = min(CONFIDENCE_MAX, max(CONFIDENCE_MIN, raw_score + jitter))
    return round(confidence, 1)


# ============================================================================
# Classification Engine
# ============================================================================

class ClassificationEngine:
    """
    Applies a rule set's policy to measurements.

    Pure deterministic logic. Same input = Same output.
    One engine per rule set; instances hold only immutable configuration.
    """

    def __init__(self, rule_set: RuleSet, strict: bool = True):
        """
        Initialize engine for one variant.

        Args:
            rule_set: Immutable variant configuration
            strict: Reject non-finite values at validation time
        """
        self.rule_set = rule_set
        self.strict = strict

    @property
    def variant(self) -> str:
        return self.rule_set.variant

    def predict(
        self,
        raw: Mapping[str, Any],
        rng: Optional[random.Random] = None
    ) -> PredictionResult:
        """
        Validate raw input and score it.

        Args:
            raw: Parameter name -> raw value (string or number)
            rng: Optional random source for the advisory confidence jitter

        Returns:
            Complete PredictionResult

        Raises:
            MissingFieldsError: If any parameter is missing or blank
            InvalidNumberError: If strict and any value is not a finite number
        """
        measurements = validate_measurements(raw, self.rule_set, strict=self.strict)
        return self.score(measurements, rng=rng)

    def score(
        self,
        measurements: Mapping[str, float],
        rng: Optional[random.Random] = None
    ) -> PredictionResult:
        """
        Score an already-validated MeasurementSet.

        Args:
            measurements: Parameter name -> float, every configured key present
            rng: Optional random source for the advisory confidence jitter

        Returns:
            Complete PredictionResult
        """
        rule_set = self.rule_set

        # Per-rule outcomes (table order)
        breakdown = evaluate_rules(rule_set, measurements)

        # Aggregate (policy-specific) and round
        raw_score = aggregate(rule_set, breakdown, measurements)
        score = round_score(raw_score)

        # Verdict depends on the rounded score only
        potable = is_potable(score, rule_set.threshold)

        tier = None
        confidence = None
        algorithm_label = None
        if rule_set.policy == ScoringPolicy.SUBTRACTIVE:
            tier = classify_tier(score)
        else:
            confidence = compute_confidence(raw_score, rng)
            algorithm_label = rule_set.algorithm_label

        risk_factors = breakdown.risk_factors

        logger.debug(
            f"[{rule_set.variant}] score={score} potable={potable} "
            f"tier={tier.value if tier else None} risks={len(risk_factors)}"
        )

        return PredictionResult(
            variant=rule_set.variant,
            rules_version=rule_set.version,
            score=score,
            potable=potable,
            threshold=rule_set.threshold,
            tier=tier,
            confidence=confidence,
            algorithm_label=algorithm_label,
            risk_factors=risk_factors,
            breakdown=breakdown.outcomes,
        )

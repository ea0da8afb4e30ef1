"""
Aggregation Policies — ScoreBreakdown → Raw Score

ADDITIVE:    raw = sum(credits) - complexity adjustment, floored at 0
SUBTRACTIVE: raw = 100 - sum(penalties), floored at 0

Both are pure functions of the breakdown and the measurements.
"""

import math
from typing import Callable, Dict, Mapping

from potability.rules.models import RuleSet, ScoringPolicy

from .breakdown import ScoreBreakdown


# Score scale
SCORE_MIN = 0.0
SCORE_MAX = 100.0


def complexity_adjustment(rule_set: RuleSet, measurements: Mapping[str, float]) -> float:
    """
    Smooth residual-uncertainty term for the additive policy.

    Weighted sum of selected parameters' deviations. Deterministic.
    """
    return sum(
        term.evaluate(measurements[term.parameter]) for term in rule_set.complexity
    )


def additive_score(
    rule_set: RuleSet,
    breakdown: ScoreBreakdown,
    measurements: Mapping[str, float]
) -> float:
    raw = breakdown.total_contribution - complexity_adjustment(rule_set, measurements)
    return max(SCORE_MIN, raw)


def subtractive_score(
    rule_set: RuleSet,
    breakdown: ScoreBreakdown,
    measurements: Mapping[str, float]
) -> float:
    raw = SCORE_MAX - breakdown.total_contribution
    return max(SCORE_MIN, raw)


AGGREGATORS: Dict[ScoringPolicy, Callable[[RuleSet, ScoreBreakdown, Mapping[str, float]], float]] = {
    ScoringPolicy.ADDITIVE: additive_score,
    ScoringPolicy.SUBTRACTIVE: subtractive_score,
}


def aggregate(
    rule_set: RuleSet,
    breakdown: ScoreBreakdown,
    measurements: Mapping[str, float]
) -> float:
    """
    Raw (unrounded) score for a rule set's policy.

    Args:
        rule_set: Variant being scored
        breakdown: Per-rule outcomes
        measurements: Validated MeasurementSet

    Returns:
        Raw score, clamped to [0, 100]
    """
    raw = AGGREGATORS[rule_set.policy](rule_set, breakdown, measurements)
    return clamp_score(raw)


def clamp_score(raw: float) -> float:
    """Clamp to [0, 100]; a non-finite score (lenient NaN input) becomes 0."""
    if math.isnan(raw):
        return SCORE_MIN
    return max(SCORE_MIN, min(SCORE_MAX, raw))


def round_score(raw: float) -> int:
    """Round half up, so 64.5 scores 65 rather than banker's 64."""
    return int(math.floor(clamp_score(raw) + 0.5))

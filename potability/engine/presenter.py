"""
Presentation Helpers — Fixed Strings for Result Rendering

Used by the API and CLI collaborators. Nothing here affects scoring.
"""

from typing import Optional

from .classifier import PredictionResult, QualityTier


# Confidence colour bands
CONFIDENCE_EXCELLENT = 80
CONFIDENCE_GOOD = 70
CONFIDENCE_FAIR = 60

POTABLE_SUMMARY = "Water is predicted to be safe for consumption"
NOT_POTABLE_SUMMARY = "Water requires treatment before consumption"


def describe_confidence(confidence: Optional[float]) -> Optional[QualityTier]:
    """Band an advisory confidence figure for display."""
    if confidence is None:
        return None
    if confidence >= CONFIDENCE_EXCELLENT:
        return QualityTier.EXCELLENT
    elif confidence >= CONFIDENCE_GOOD:
        return QualityTier.GOOD
    elif confidence >= CONFIDENCE_FAIR:
        return QualityTier.FAIR
    return QualityTier.POOR


def summarize(result: PredictionResult) -> str:
    """
    One-line verdict, e.g.
    "Water is predicted to be safe for consumption (score 82/100, 87.0% confidence)"
    """
    verdict = POTABLE_SUMMARY if result.potable else NOT_POTABLE_SUMMARY
    details = [f"score {result.score}/100"]
    if result.tier is not None:
        details.append(f"{result.tier.value} quality")
    if result.confidence is not None:
        details.append(f"{result.confidence:.1f}% confidence")
    return f"{verdict} ({', '.join(details)})"

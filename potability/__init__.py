"""
Water Potability Engine

Deterministic, table-driven potability scoring:
measurements -> per-parameter rules -> score -> verdict + risk factors.
"""

from potability.errors import (
    PotabilityError,
    ValidationError,
    MissingFieldsError,
    InvalidNumberError,
    RuleConfigError,
    UnknownVariantError,
)
from potability.engine import ClassificationEngine, PredictionResult, QualityTier
from potability.rules import RuleSet, ParameterRule, get_registry

__version__ = "1.0.0"

__all__ = [
    "PotabilityError",
    "ValidationError",
    "MissingFieldsError",
    "InvalidNumberError",
    "RuleConfigError",
    "UnknownVariantError",
    "ClassificationEngine",
    "PredictionResult",
    "QualityTier",
    "RuleSet",
    "ParameterRule",
    "get_registry",
]

"""
Pydantic Schemas — API Request/Response Models

Constraints:
- measurements: values may be numbers or numeric strings (form input);
  values are passed through untouched so booleans are rejected, not coerced
- presence and numeric checks happen in the engine, so every missing
  field is reported at once rather than one pydantic error per field
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from potability.engine import PredictionResult, QualityTier
from potability.rules import PenaltyCurve, ScoringPolicy


# ============================================================================
# Request Models
# ============================================================================

class PredictionRequest(BaseModel):
    """Measurements for a single potability prediction."""
    measurements: Dict[str, Any] = Field(
        ...,
        description="Parameter name -> value (e.g. {'ph': 7.2, 'hardness': '95'})"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for a reproducible confidence jitter (additive variants only)"
    )


# ============================================================================
# Response Models
# ============================================================================

class PredictionResponse(PredictionResult):
    """Prediction plus display-ready text."""
    summary: str
    confidence_band: Optional[QualityTier] = None


class ParameterInfo(BaseModel):
    """One parameter of a variant, for input forms and info panels."""
    name: str
    label: str
    unit: str
    optimal_low: Optional[float] = None
    optimal_high: Optional[float] = None
    weight: float
    curve: PenaltyCurve


class VariantInfo(BaseModel):
    """Public description of a scoring variant."""
    variant: str
    version: str
    description: str
    policy: ScoringPolicy
    threshold: float
    algorithm_label: Optional[str] = None
    parameters: List[ParameterInfo] = Field(default_factory=list)


class ValidationErrorResponse(BaseModel):
    """Engine validation failure."""
    detail: str
    fields: List[str] = Field(default_factory=list)

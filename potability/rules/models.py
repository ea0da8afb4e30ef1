"""
Rule Models — Declarative Parameter Rules & Rule Sets

This is where the TUNABLE part of the engine lives. Every measured quantity
is one ParameterRule; a variant is one RuleSet. Changing a range, weight or
message is a table edit, never a control-flow change.

Constraints:
- Rules are immutable (frozen models), built once at load time
- Optimal bounds are inclusive; None means the side is unbounded
- Deficits are always clamped to [0, weight]
- Additive rule sets must have weights summing to 100
"""

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# CONSTANTS
# ============================================================================

# Additive weights must sum to this (tolerance for YAML float noise)
ADDITIVE_WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 1e-6


# ============================================================================
# Enums
# ============================================================================

class ScoringPolicy(str, Enum):
    """Aggregation strategy for a rule set."""
    ADDITIVE = "ADDITIVE"         # Sum credits, subtract complexity, floor at 0
    SUBTRACTIVE = "SUBTRACTIVE"   # 100 - sum of penalties, floor at 0


class PenaltyCurve(str, Enum):
    """Shape of the deficit outside the optimal band."""
    STEP = "STEP"       # soft_deficit, or hard_deficit past the hard bound
    LINEAR = "LINEAR"   # scale * |value - anchor|, capped at weight


class Side(str, Enum):
    """Which side of the optimal band a value falls on."""
    BELOW = "BELOW"
    ABOVE = "ABOVE"


# ============================================================================
# Parameter Rule
# ============================================================================

class ParameterRule(BaseModel):
    """
    Acceptable range, penalty curve and risk messages for one quantity.

    For STEP curves, values between the optimal and hard bound cost
    `soft_deficit`; values past the hard bound cost `hard_deficit`
    (defaults to the full weight).

    For LINEAR curves the deficit is `scale * |value - anchor|` where the
    anchor defaults to the optimal bound that was crossed.

    A side's risk message fires once the value is past that side's alert
    bound, which defaults to the optimal bound.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Measurement key")
    label: str = Field(default="", description="Human-readable name")
    unit: str = Field(default="")

    optimal_low: Optional[float] = None
    optimal_high: Optional[float] = None
    hard_low: Optional[float] = None
    hard_high: Optional[float] = None

    weight: float = Field(..., gt=0, description="Max credit / max deduction")
    curve: PenaltyCurve = PenaltyCurve.STEP
    soft_deficit: Optional[float] = Field(default=None, ge=0)
    hard_deficit: Optional[float] = Field(default=None, ge=0)
    scale: float = Field(default=1.0, ge=0)
    anchor: Optional[float] = None

    risk_message_below: Optional[str] = None
    risk_message_above: Optional[str] = None
    alert_low: Optional[float] = None
    alert_high: Optional[float] = None

    @model_validator(mode='after')
    def check_bounds(self):
        """Reject inverted ranges and hard bounds inside the optimal band."""
        if (
            self.optimal_low is not None
            and self.optimal_high is not None
            and self.optimal_low > self.optimal_high
        ):
            raise ValueError(
                f"{self.name}: optimal_low ({self.optimal_low}) > optimal_high ({self.optimal_high})"
            )
        if self.hard_high is not None and self.optimal_high is not None:
            if self.hard_high < self.optimal_high:
                raise ValueError(f"{self.name}: hard_high must be >= optimal_high")
        if self.hard_low is not None and self.optimal_low is not None:
            if self.hard_low > self.optimal_low:
                raise ValueError(f"{self.name}: hard_low must be <= optimal_low")
        if self.curve == PenaltyCurve.STEP and self.soft_deficit is None:
            raise ValueError(f"{self.name}: STEP curve requires soft_deficit")
        return self

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def in_range(self, value: float) -> bool:
        """Inclusive optimal band check. NaN is never in range."""
        if math.isnan(value):
            return False
        if self.optimal_low is not None and value < self.optimal_low:
            return False
        if self.optimal_high is not None and value > self.optimal_high:
            return False
        return True

    def side_of(self, value: float) -> Optional[Side]:
        """Side of the optimal band, or None when in range or NaN."""
        if math.isnan(value):
            return None
        if self.optimal_low is not None and value < self.optimal_low:
            return Side.BELOW
        if self.optimal_high is not None and value > self.optimal_high:
            return Side.ABOVE
        return None

    def deficit(self, value: float) -> float:
        """
        Credit lost (ADDITIVE) or penalty taken (SUBTRACTIVE) for a value.

        Monotonically non-decreasing with distance from the optimal band
        and clamped to [0, weight]. NaN costs the full weight.
        """
        if math.isnan(value):
            return self.weight

        side = self.side_of(value)
        if side is None:
            return 0.0

        if self.curve == PenaltyCurve.LINEAR:
            anchor = self.anchor
            if anchor is None:
                anchor = self.optimal_low if side == Side.BELOW else self.optimal_high
            raw = self.scale * abs(value - anchor)
        else:
            hard_bound = self.hard_low if side == Side.BELOW else self.hard_high
            past_hard = hard_bound is not None and (
                value < hard_bound if side == Side.BELOW else value > hard_bound
            )
            if past_hard:
                raw = self.hard_deficit if self.hard_deficit is not None else self.weight
            else:
                raw = self.soft_deficit

        return max(0.0, min(self.weight, raw))

    def risk_message(self, value: float) -> Optional[str]:
        """Side-appropriate risk message, if the value is past the alert bound."""
        side = self.side_of(value)
        if side == Side.BELOW:
            bound = self.alert_low if self.alert_low is not None else self.optimal_low
            if value < bound:
                return self.risk_message_below
        elif side == Side.ABOVE:
            bound = self.alert_high if self.alert_high is not None else self.optimal_high
            if value > bound:
                return self.risk_message_above
        return None


# ============================================================================
# Complexity Term (additive policy only)
# ============================================================================

class ComplexityTerm(BaseModel):
    """One smooth term of the additive complexity adjustment."""
    model_config = ConfigDict(frozen=True)

    parameter: str
    coefficient: float
    center: float = 0.0
    divisor: float = Field(default=1.0, gt=0)
    absolute: bool = False   # Distance |value - center| instead of signed value - center

    def evaluate(self, value: float) -> float:
        """coefficient * (value - center) / divisor. NaN contributes nothing."""
        if math.isnan(value):
            return 0.0
        deviation = value - self.center
        if self.absolute:
            deviation = abs(deviation)
        return self.coefficient * deviation / self.divisor


# ============================================================================
# Rule Set
# ============================================================================

class RuleSet(BaseModel):
    """A complete, versioned scoring variant."""
    model_config = ConfigDict(frozen=True)

    variant: str = Field(..., min_length=1)
    version: str = Field(default="1.0.0")
    description: str = ""
    policy: ScoringPolicy
    threshold: float = Field(..., ge=0, le=100, description="Potability cutoff")
    algorithm_label: Optional[str] = None
    rules: List[ParameterRule] = Field(..., min_length=1)
    complexity: List[ComplexityTerm] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_consistency(self):
        """Unique rule names, known complexity parameters, additive weight total."""
        names = [rule.name for rule in self.rules]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate rule names: {duplicates}")

        unknown = [t.parameter for t in self.complexity if t.parameter not in names]
        if unknown:
            raise ValueError(f"complexity terms reference unknown parameters: {unknown}")

        if self.policy == ScoringPolicy.ADDITIVE:
            total = sum(rule.weight for rule in self.rules)
            if abs(total - ADDITIVE_WEIGHT_TOTAL) > WEIGHT_TOLERANCE:
                raise ValueError(
                    f"additive weights must sum to {ADDITIVE_WEIGHT_TOTAL:g}, got {total:g}"
                )
        elif self.complexity:
            raise ValueError("complexity terms are only valid for the ADDITIVE policy")
        return self

    @property
    def parameter_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

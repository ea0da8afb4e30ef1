"""
Rule Evaluation — MeasurementSet → ScoreBreakdown

One RuleOutcome per rule, always in rule-table order (never input order).
Rules are independent: each outcome depends only on its own value.
"""

import math
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from potability.rules.models import ParameterRule, RuleSet, ScoringPolicy


class RuleOutcome(BaseModel):
    """Evaluation of a single parameter rule."""
    parameter: str
    value: Optional[float] = Field(..., description="None when the value was not a finite number")
    in_range: bool
    deficit: float = Field(..., ge=0, description="Credit lost or penalty taken")
    contribution: float = Field(..., description="Credit (ADDITIVE) or penalty (SUBTRACTIVE)")
    risk_message: Optional[str] = None


class ScoreBreakdown(BaseModel):
    """Ordered per-rule outcomes for one scoring call."""
    policy: ScoringPolicy
    outcomes: List[RuleOutcome] = Field(default_factory=list)

    @property
    def total_contribution(self) -> float:
        return sum(o.contribution for o in self.outcomes)

    @property
    def risk_factors(self) -> List[str]:
        """Distinct triggered messages, first occurrence wins, table order."""
        seen = set()
        factors = []
        for outcome in self.outcomes:
            msg = outcome.risk_message
            if msg and msg not in seen:
                seen.add(msg)
                factors.append(msg)
        return factors


def evaluate_rule(rule: ParameterRule, value: float, policy: ScoringPolicy) -> RuleOutcome:
    """Evaluate one rule against one value."""
    deficit = rule.deficit(value)
    if policy == ScoringPolicy.ADDITIVE:
        contribution = rule.weight - deficit
    else:
        contribution = deficit

    return RuleOutcome(
        parameter=rule.name,
        value=value if math.isfinite(value) else None,
        in_range=rule.in_range(value),
        deficit=deficit,
        contribution=contribution,
        risk_message=rule.risk_message(value),
    )


def evaluate_rules(rule_set: RuleSet, measurements: Mapping[str, float]) -> ScoreBreakdown:
    """
    Evaluate every rule of a rule set.

    Args:
        rule_set: Variant to evaluate
        measurements: Validated MeasurementSet

    Returns:
        ScoreBreakdown in rule-table order
    """
    return ScoreBreakdown(
        policy=rule_set.policy,
        outcomes=[
            evaluate_rule(rule, measurements[rule.name], rule_set.policy)
            for rule in rule_set.rules
        ],
    )

"""
Rules Module — Parameter Rule Tables

Public API:
- ParameterRule: One quantity's range, penalty curve and risk messages
- RuleSet: A versioned scoring variant (policy + threshold + rules)
- RuleRegistry / get_registry: Variant lookup over YAML rule tables
- load_rule_set: Load a single YAML table
"""

from .models import (
    ParameterRule,
    ComplexityTerm,
    RuleSet,
    ScoringPolicy,
    PenaltyCurve,
    Side,
    ADDITIVE_WEIGHT_TOTAL,
)
from .loader import (
    RuleRegistry,
    get_registry,
    load_rule_set,
    DEFAULT_TABLES_DIR,
)

__all__ = [
    "ParameterRule",
    "ComplexityTerm",
    "RuleSet",
    "ScoringPolicy",
    "PenaltyCurve",
    "Side",
    "ADDITIVE_WEIGHT_TOTAL",
    "RuleRegistry",
    "get_registry",
    "load_rule_set",
    "DEFAULT_TABLES_DIR",
]

"""
Input Validation — Raw Form Values → MeasurementSet

Validation runs BEFORE any scoring:
1. Every configured parameter present and non-blank (all failures reported at once)
2. Values parsed as floats
3. Strict mode: non-finite values rejected; lenient mode: NaN flows into scoring
"""

import math
from typing import Any, Dict, List, Mapping

from potability.errors import InvalidNumberError, MissingFieldsError
from potability.rules.models import RuleSet


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _parse_number(value: Any) -> float:
    """Parse like a browser number field: unparsable text becomes NaN."""
    if isinstance(value, bool):
        return float('nan')
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    # Python-only digit separators, e.g. "1_0"
    if "_" in text:
        return float('nan')
    try:
        return float(text)
    except ValueError:
        return float('nan')


def find_missing(raw: Mapping[str, Any], rule_set: RuleSet) -> List[str]:
    """Configured parameters that are absent or blank, in rule-table order."""
    return [name for name in rule_set.parameter_names if _is_blank(raw.get(name))]


def validate_measurements(
    raw: Mapping[str, Any],
    rule_set: RuleSet,
    strict: bool = True
) -> Dict[str, float]:
    """
    Validate and parse raw measurements for a rule set.

    Args:
        raw: Parameter name -> raw value (string or number)
        rule_set: Variant whose parameters are required
        strict: Reject non-finite values instead of passing NaN through

    Returns:
        MeasurementSet: parameter name -> float, rule-table order

    Raises:
        MissingFieldsError: If any parameter is missing or blank
        InvalidNumberError: If strict and any value is not a finite number
    """
    missing = find_missing(raw, rule_set)
    if missing:
        raise MissingFieldsError(missing)

    measurements = {
        name: _parse_number(raw[name]) for name in rule_set.parameter_names
    }

    if strict:
        invalid = [name for name, v in measurements.items() if not math.isfinite(v)]
        if invalid:
            raise InvalidNumberError(invalid)

    return measurements

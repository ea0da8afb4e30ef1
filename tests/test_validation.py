"""
Input Validation Tests

Tests verify:
- Every missing/blank field reported at once, in rule-table order
- Validation short-circuits before parsing or scoring
- Numeric strings accepted
- Strict mode rejects non-numeric and non-finite values
- Lenient mode lets NaN flow into scoring
"""

import math

import pytest

from potability.engine import ClassificationEngine, validate_measurements
from potability.errors import InvalidNumberError, MissingFieldsError, ValidationError
from potability.rules import get_registry


def field_form() -> dict:
    """Field variant form, as strings straight from input widgets."""
    return {
        "ph": "7.0",
        "turbidity": "0.5",
        "chlorine": "1.0",
        "temperature": "20",
        "conductivity": "500",
        "hardness": "90",
    }


class TestMissingFields:
    """Test presence checks."""

    def test_all_missing_fields_reported(self):
        """Every absent parameter is listed, not just the first."""
        rule_set = get_registry().get("field")
        form = field_form()
        del form["chlorine"]
        del form["ph"]

        with pytest.raises(MissingFieldsError) as exc_info:
            validate_measurements(form, rule_set)

        assert exc_info.value.fields == ["ph", "chlorine"]

    def test_blank_and_none_count_as_missing(self):
        rule_set = get_registry().get("field")
        form = field_form()
        form["turbidity"] = "   "
        form["hardness"] = None
        form["temperature"] = ""

        with pytest.raises(MissingFieldsError) as exc_info:
            validate_measurements(form, rule_set)

        assert exc_info.value.fields == ["turbidity", "temperature", "hardness"]

    def test_missing_reported_before_non_numeric(self):
        """Presence check short-circuits before any parsing."""
        rule_set = get_registry().get("field")
        form = field_form()
        form["ph"] = "abc"
        form["hardness"] = ""

        with pytest.raises(MissingFieldsError) as exc_info:
            validate_measurements(form, rule_set)

        assert exc_info.value.fields == ["hardness"]

    def test_empty_form(self):
        rule_set = get_registry().get("uci")

        with pytest.raises(MissingFieldsError) as exc_info:
            validate_measurements({}, rule_set)

        assert exc_info.value.fields == rule_set.parameter_names

    def test_is_validation_error(self):
        """Callers can catch the common base."""
        assert issubclass(MissingFieldsError, ValidationError)
        assert issubclass(InvalidNumberError, ValidationError)


class TestParsing:
    """Test numeric parsing."""

    def test_numeric_strings(self):
        rule_set = get_registry().get("field")

        measurements = validate_measurements(field_form(), rule_set)

        assert measurements["ph"] == 7.0
        assert measurements["hardness"] == 90.0
        assert list(measurements) == rule_set.parameter_names

    def test_whitespace_trimmed(self):
        rule_set = get_registry().get("field")
        form = field_form()
        form["ph"] = "  6.8 "

        assert validate_measurements(form, rule_set)["ph"] == 6.8

    def test_numbers_pass_through(self):
        rule_set = get_registry().get("field")
        form = {k: float(v) for k, v in field_form().items()}

        assert validate_measurements(form, rule_set) == form

    def test_extra_keys_ignored(self):
        rule_set = get_registry().get("field")
        form = field_form()
        form["color"] = "blue"

        assert "color" not in validate_measurements(form, rule_set)


class TestStrictMode:
    """Test rejection of non-numeric values (default)."""

    @pytest.mark.parametrize("value", ["1_0", "7_000", True, False])
    def test_non_form_numbers_rejected(self, value):
        """Digit separators and booleans are not measurements."""
        rule_set = get_registry().get("field")
        form = field_form()
        form["ph"] = value

        with pytest.raises(InvalidNumberError) as exc_info:
            validate_measurements(form, rule_set)

        assert exc_info.value.fields == ["ph"]

    def test_exponent_notation_accepted(self):
        """Number inputs allow exponents, so these still parse."""
        rule_set = get_registry().get("field")
        form = field_form()
        form["conductivity"] = "5e2"

        assert validate_measurements(form, rule_set)["conductivity"] == 500.0

    def test_non_numeric_rejected(self):
        rule_set = get_registry().get("field")
        form = field_form()
        form["ph"] = "seven"
        form["conductivity"] = "5OO"

        with pytest.raises(InvalidNumberError) as exc_info:
            validate_measurements(form, rule_set)

        assert exc_info.value.fields == ["ph", "conductivity"]

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", float('inf')])
    def test_non_finite_rejected(self, value):
        rule_set = get_registry().get("field")
        form = field_form()
        form["turbidity"] = value

        with pytest.raises(InvalidNumberError):
            validate_measurements(form, rule_set)

    def test_engine_predict_validates(self):
        engine = ClassificationEngine(get_registry().get("field"))
        form = field_form()
        del form["temperature"]

        with pytest.raises(MissingFieldsError):
            engine.predict(form)


class TestLenientMode:
    """Test NaN pass-through when strict validation is off."""

    def test_nan_flows_through(self):
        rule_set = get_registry().get("field")
        form = field_form()
        form["ph"] = "abc"

        measurements = validate_measurements(form, rule_set, strict=False)

        assert math.isnan(measurements["ph"])

    def test_nan_depresses_score(self):
        """Unparsable pH costs its full weight and raises no pH message."""
        engine = ClassificationEngine(get_registry().get("field"), strict=False)
        form = field_form()
        form["ph"] = "abc"

        result = engine.predict(form)

        assert result.score == 80
        assert result.risk_factors == []
        assert result.breakdown[0].value is None
        assert result.breakdown[0].in_range is False

    def test_nan_in_additive_variant(self):
        """Complexity terms skip NaN so the score stays a number."""
        engine = ClassificationEngine(get_registry().get("uci"), strict=False)
        form = {
            "ph": "not a number",
            "hardness": "90",
            "solids": "300",
            "chloramines": "2",
            "sulfate": "200",
            "conductivity": "300",
            "organicCarbon": "1.5",
            "trihalomethanes": "50",
            "turbidity": "0.5",
        }

        result = engine.predict(form)

        # 85 credit - (0.6 + 0.45 + 1.0)
        assert result.score == 83
        assert result.potable is True

    def test_missing_still_rejected(self):
        """Lenient mode relaxes parsing only, not presence."""
        engine = ClassificationEngine(get_registry().get("field"), strict=False)
        form = field_form()
        form["ph"] = ""

        with pytest.raises(MissingFieldsError):
            engine.predict(form)

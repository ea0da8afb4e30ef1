"""
Engine Exceptions

Validation errors are always recoverable: the caller re-prompts for input.
"""

from typing import List, Sequence


class PotabilityError(Exception):
    """Base exception for the potability engine."""
    pass


class ValidationError(PotabilityError):
    """Measurement input failed validation. Carries every offending field."""

    reason = "invalid measurements"

    def __init__(self, fields: Sequence[str]):
        self.fields: List[str] = list(fields)
        super().__init__(f"{self.reason}: {', '.join(self.fields)}")


class MissingFieldsError(ValidationError):
    """One or more required parameters are absent or blank."""
    reason = "missing or empty parameters"


class InvalidNumberError(ValidationError):
    """One or more parameters are not finite numbers."""
    reason = "non-numeric parameters"


class RuleConfigError(PotabilityError):
    """A rule table could not be loaded or failed validation."""
    pass


class UnknownVariantError(PotabilityError):
    """Requested scoring variant is not configured."""

    def __init__(self, variant: str, available: Sequence[str] = ()):
        self.variant = variant
        self.available = list(available)
        super().__init__(
            f"Unknown variant '{variant}'. Available: {', '.join(self.available) or 'none'}"
        )

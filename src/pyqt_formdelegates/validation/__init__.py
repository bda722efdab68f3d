"""Validators installed into the form model by field delegates."""

from .validators import (
    ValidationState,
    ValidationResult,
    Validator,
    MandatoryValidator,
    IntValidator,
    DoubleValidator,
    DateValidator,
    TimeValidator,
    LengthValidator,
    RegExpValidator,
    is_empty_value,
)

__all__ = [
    "ValidationState",
    "ValidationResult",
    "Validator",
    "MandatoryValidator",
    "IntValidator",
    "DoubleValidator",
    "DateValidator",
    "TimeValidator",
    "LengthValidator",
    "RegExpValidator",
    "is_empty_value",
]

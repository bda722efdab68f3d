"""
Validators for form model values.

A validator is a shared rule object: the delegate creates it once per field,
the form model stores it against the field name and runs it on demand.

Validators check model values (the Python objects stored in the form model),
not widget text. Text values are accepted where a sensible conversion exists
so that factory-only delegates using the default typed sync still validate.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Any, Optional


class ValidationState(Enum):
    """Outcome of validating one value."""
    VALID = "valid"
    INVALID = "invalid"
    INVALID_EMPTY = "invalid_empty"


@dataclass(frozen=True)
class ValidationResult:
    """Validation state plus a user-facing message (empty when valid)."""
    state: ValidationState
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.state is ValidationState.VALID

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(ValidationState.VALID)

    @classmethod
    def invalid(cls, message: str) -> 'ValidationResult':
        return cls(ValidationState.INVALID, message)


def is_empty_value(value: Any) -> bool:
    """None and empty strings count as 'no value'."""
    return value is None or (isinstance(value, str) and value == "")


class Validator(ABC):
    """
    Base validator.

    Handles the empty-value rule; subclasses only check non-empty values.
    A plain Validator instance is not constructible - use MandatoryValidator
    when only required-ness matters.
    """

    empty_message = "This field cannot be empty"

    def __init__(self, mandatory: bool = False):
        self.mandatory = mandatory

    def validate(self, value: Any) -> ValidationResult:
        """Validate a model value."""
        if is_empty_value(value):
            if self.mandatory:
                return ValidationResult(ValidationState.INVALID_EMPTY, self.empty_message)
            return ValidationResult.valid()
        return self._validate_value(value)

    @abstractmethod
    def _validate_value(self, value: Any) -> ValidationResult:
        """Validate a non-empty value."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mandatory={self.mandatory})"


class MandatoryValidator(Validator):
    """Only checks that a value is present."""

    def __init__(self, mandatory: bool = True):
        super().__init__(mandatory)

    def _validate_value(self, value: Any) -> ValidationResult:
        return ValidationResult.valid()


class _RangeValidator(Validator):
    """Shared bottom/top range check for orderable values."""

    type_message = "Invalid value"

    def __init__(self, bottom: Any = None, top: Any = None, mandatory: bool = False):
        super().__init__(mandatory)
        self.bottom = bottom
        self.top = top

    @abstractmethod
    def _coerce(self, value: Any) -> Any:
        """Convert to the comparable type; raise ValueError/TypeError if impossible."""
        pass

    def _range_message(self) -> str:
        if self.bottom is not None and self.top is not None:
            return f"The value must be between {self.bottom} and {self.top}"
        if self.bottom is not None:
            return f"The value must be at least {self.bottom}"
        return f"The value must be at most {self.top}"

    def _validate_value(self, value: Any) -> ValidationResult:
        try:
            coerced = self._coerce(value)
        except (TypeError, ValueError):
            return ValidationResult.invalid(self.type_message)
        if self.bottom is not None and coerced < self.bottom:
            return ValidationResult.invalid(self._range_message())
        if self.top is not None and coerced > self.top:
            return ValidationResult.invalid(self._range_message())
        return ValidationResult.valid()


class IntValidator(_RangeValidator):
    """Integer with optional bounds."""

    type_message = "Must be an integer number"

    def _coerce(self, value: Any) -> int:
        if isinstance(value, bool):
            raise TypeError("bool is not an integer value")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"{value} is not integral")
        return int(value)


class DoubleValidator(_RangeValidator):
    """Floating point number with optional bounds."""

    type_message = "Must be a number"

    def _coerce(self, value: Any) -> float:
        if isinstance(value, bool):
            raise TypeError("bool is not a number")
        return float(value)


class DateValidator(_RangeValidator):
    """Date (or ISO date text) with optional bounds."""

    type_message = "Must be a date in the format yyyy-MM-dd"

    def _coerce(self, value: Any) -> date:
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return date.fromisoformat(value)
        raise TypeError(f"{type(value).__name__} is not a date")


class TimeValidator(_RangeValidator):
    """Time of day (or ISO time text) with optional bounds."""

    type_message = "Must be a time in the format HH:mm:ss"

    def _coerce(self, value: Any) -> time:
        if isinstance(value, time):
            return value
        if isinstance(value, str):
            return time.fromisoformat(value)
        raise TypeError(f"{type(value).__name__} is not a time")


class LengthValidator(Validator):
    """Text length between min_length and max_length (inclusive)."""

    def __init__(self, min_length: int = 0, max_length: Optional[int] = None,
                 mandatory: bool = False):
        super().__init__(mandatory)
        self.min_length = min_length
        self.max_length = max_length

    def _validate_value(self, value: Any) -> ValidationResult:
        length = len(str(value))
        if length < self.min_length:
            return ValidationResult.invalid(
                f"The input must be at least {self.min_length} characters"
            )
        if self.max_length is not None and length > self.max_length:
            return ValidationResult.invalid(
                f"The input must be no more than {self.max_length} characters"
            )
        return ValidationResult.valid()


class RegExpValidator(Validator):
    """Whole-value regular expression match on the text form of the value."""

    def __init__(self, pattern: str, mandatory: bool = False,
                 message: str = "Invalid input"):
        super().__init__(mandatory)
        self.pattern = re.compile(pattern)
        self.message = message

    def _validate_value(self, value: Any) -> ValidationResult:
        if self.pattern.fullmatch(str(value)) is None:
            return ValidationResult.invalid(self.message)
        return ValidationResult.valid()

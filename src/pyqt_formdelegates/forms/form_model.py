"""
Form model - the per-form store of field values and validation outcomes.

Keyed by field name. Field delegates read and write values here during
synchronization; the form view installs each field's validator here once at
construction time.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pyqt_formdelegates.validation import ValidationResult, Validator

logger = logging.getLogger(__name__)


class FormModel:
    """
    Values, validators and validation results for one form instance.

    Example:
        model = FormModel(["title", "is_active"])
        model.set_value("title", "Hello")
        model.set_validator("title", LengthValidator(max_length=80))
        model.validate()
    """

    def __init__(self, fields: Iterable[str] = (), defaults: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._validation: Dict[str, ValidationResult] = {}
        defaults = defaults or {}
        for name in fields:
            self.add_field(name, defaults.get(name))

    # ========== FIELDS ==========

    def add_field(self, name: str, default: Any = None) -> None:
        """Add a field, initialised to its default value."""
        if name in self._values:
            logger.warning(f"Field '{name}' already in form model - resetting to default")
        self._defaults[name] = default
        self._values[name] = default

    def remove_field(self, name: str) -> None:
        self._require(name)
        for store in (self._values, self._defaults, self._validators, self._validation):
            store.pop(name, None)

    def fields(self) -> List[str]:
        return list(self._values.keys())

    def has_field(self, name: str) -> bool:
        return name in self._values

    def _require(self, name: str) -> None:
        if name not in self._values:
            raise KeyError(
                f"Unknown field '{name}'. Known fields: {self.fields()}"
            )

    # ========== VALUES ==========

    def value(self, name: str) -> Any:
        self._require(name)
        return self._values[name]

    def set_value(self, name: str, value: Any) -> None:
        """Set a value; any previous validation result for the field is discarded."""
        self._require(name)
        self._values[name] = value
        self._validation.pop(name, None)

    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def reset(self) -> None:
        """Restore defaults and clear validation results."""
        self._values = dict(self._defaults)
        self._validation.clear()

    # ========== VALIDATION ==========

    def set_validator(self, name: str, validator: Optional[Validator]) -> None:
        self._require(name)
        if validator is None:
            self._validators.pop(name, None)
        else:
            self._validators[name] = validator

    def validator(self, name: str) -> Optional[Validator]:
        self._require(name)
        return self._validators.get(name)

    def validate_field(self, name: str) -> bool:
        """Run the field's validator. Fields without a validator are valid."""
        validator = self.validator(name)
        if validator is None:
            result = ValidationResult.valid()
        else:
            result = validator.validate(self._values[name])
        self.set_validation(name, result)
        if not result.is_valid:
            logger.debug(f"Field '{name}' invalid: {result.message}")
        return result.is_valid

    def validate(self) -> bool:
        """Validate every field; True only when all are valid."""
        results = [self.validate_field(name) for name in self._values]
        return all(results)

    def validation(self, name: str) -> Optional[ValidationResult]:
        """Last validation result, or None if not validated since the last change."""
        self._require(name)
        return self._validation.get(name)

    def set_validation(self, name: str, result: ValidationResult) -> None:
        """Record a result, e.g. from a check done outside the field's validator."""
        self._require(name)
        self._validation[name] = result

    def is_validated(self, name: str) -> bool:
        return self.validation(name) is not None

    def is_valid(self, name: str) -> bool:
        result = self.validation(name)
        return result is not None and result.is_valid

"""Field delegate exceptions."""

from typing import Any


class FormDelegateError(Exception):
    """Base class for field delegate errors."""


class ConfigurationError(FormDelegateError):
    """Raised when a form cannot be built from its field configuration."""


class NoDelegateError(ConfigurationError, LookupError):
    """Raised when no delegate can be resolved for a field's declared type."""

    def __init__(self, field_name: str, declared_type: Any, available: list = None):
        self.field_name = field_name
        self.declared_type = declared_type
        self.available = list(available or [])
        type_name = getattr(declared_type, '__name__', repr(declared_type))
        super().__init__(
            f"No delegate available for field '{field_name}' of type {type_name}. "
            f"Supported types: {[getattr(t, '__name__', repr(t)) for t in self.available]}. "
            f"Register a field or type override on the DelegateRegistry."
        )

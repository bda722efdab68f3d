"""
pyqt-formdelegates: per-field delegates for generated PyQt6 forms.

Bridges each field of a schema to an input widget and keeps the field value
and the displayed value synchronized in both directions.

Architecture:
- Protocols: widget capability ABCs (typed-value vs generic) and Qt adapters
- Validation: validators installed into the form model
- Forms: FieldDelegate contract, built-in per-type delegates,
  DelegateRegistry, FormModel and FormView

Key Features:
- Type-based delegate selection from declared field types
- Explicit typed/generic synchronization paths (no duck typing)
- Per-field, per-type and per-form-instance overrides
"""

__version__ = "0.1.0"

from .errors import FormDelegateError, ConfigurationError, NoDelegateError

__all__ = [
    "__version__",
    "FormDelegateError",
    "ConfigurationError",
    "NoDelegateError",
]

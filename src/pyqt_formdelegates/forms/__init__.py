"""
Field delegates and form generation.

FieldDelegate contract, built-in per-type delegates, the DelegateRegistry
that selects them, and the FormView/FormModel pair that drives them.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_model import FormModel
    from .field_descriptor import FieldDescriptor, describe_fields, resolve_optional
    from .field_delegate import FieldDelegate, SyncResult, SyncDirection
    from .delegate_registry import DelegateRegistry, BUILTIN_DELEGATES
    from .form_view import FormView

_EXPORTS = {
    "FormModel": ("pyqt_formdelegates.forms.form_model", "FormModel"),
    "FieldDescriptor": ("pyqt_formdelegates.forms.field_descriptor", "FieldDescriptor"),
    "describe_fields": ("pyqt_formdelegates.forms.field_descriptor", "describe_fields"),
    "resolve_optional": ("pyqt_formdelegates.forms.field_descriptor", "resolve_optional"),
    "FieldDelegate": ("pyqt_formdelegates.forms.field_delegate", "FieldDelegate"),
    "SyncResult": ("pyqt_formdelegates.forms.field_delegate", "SyncResult"),
    "SyncDirection": ("pyqt_formdelegates.forms.field_delegate", "SyncDirection"),
    "TextDelegate": ("pyqt_formdelegates.forms.delegates", "TextDelegate"),
    "MultilineTextDelegate": ("pyqt_formdelegates.forms.delegates", "MultilineTextDelegate"),
    "ConvertingDelegate": ("pyqt_formdelegates.forms.delegates", "ConvertingDelegate"),
    "IntegerDelegate": ("pyqt_formdelegates.forms.delegates", "IntegerDelegate"),
    "FloatDelegate": ("pyqt_formdelegates.forms.delegates", "FloatDelegate"),
    "DecimalDelegate": ("pyqt_formdelegates.forms.delegates", "DecimalDelegate"),
    "DateDelegate": ("pyqt_formdelegates.forms.delegates", "DateDelegate"),
    "TimeDelegate": ("pyqt_formdelegates.forms.delegates", "TimeDelegate"),
    "DateTimeDelegate": ("pyqt_formdelegates.forms.delegates", "DateTimeDelegate"),
    "PathDelegate": ("pyqt_formdelegates.forms.delegates", "PathDelegate"),
    "BooleanDelegate": ("pyqt_formdelegates.forms.delegates", "BooleanDelegate"),
    "EnumDelegate": ("pyqt_formdelegates.forms.delegates", "EnumDelegate"),
    "DelegateRegistry": ("pyqt_formdelegates.forms.delegate_registry", "DelegateRegistry"),
    "BUILTIN_DELEGATES": ("pyqt_formdelegates.forms.delegate_registry", "BUILTIN_DELEGATES"),
    "FormView": ("pyqt_formdelegates.forms.form_view", "FormView"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())

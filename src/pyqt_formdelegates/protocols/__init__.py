"""
Widget protocol definitions, adapters and configuration hooks.

ABC-based widget contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture.
"""

from .widget_protocols import (
    TypedValueWidget,
    PlaceholderCapable,
    RangeConfigurable,
    ChangeSignalEmitter,
    is_typed_value_widget,
)
from .widget_adapters import (
    LineEditAdapter,
    TextEditAdapter,
    SpinBoxAdapter,
    DoubleSpinBoxAdapter,
    DateEditAdapter,
    TimeEditAdapter,
    DateTimeEditAdapter,
    PyQtWidgetMeta,
    ISO_DATE_FORMAT,
    ISO_TIME_FORMAT,
    ISO_DATETIME_FORMAT,
)
from .form_config import FormDelegateConfig, set_form_config, get_form_config

__all__ = [
    "TypedValueWidget",
    "PlaceholderCapable",
    "RangeConfigurable",
    "ChangeSignalEmitter",
    "is_typed_value_widget",
    "LineEditAdapter",
    "TextEditAdapter",
    "SpinBoxAdapter",
    "DoubleSpinBoxAdapter",
    "DateEditAdapter",
    "TimeEditAdapter",
    "DateTimeEditAdapter",
    "PyQtWidgetMeta",
    "ISO_DATE_FORMAT",
    "ISO_TIME_FORMAT",
    "ISO_DATETIME_FORMAT",
    "FormDelegateConfig",
    "set_form_config",
    "get_form_config",
]

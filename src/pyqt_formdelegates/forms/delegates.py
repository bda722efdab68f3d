"""
Built-in field delegates, one per supported value type.

    str        TextDelegate        LineEditAdapter       typed path, default sync
    int        IntegerDelegate     SpinBoxAdapter        typed path, text <-> int
    float      FloatDelegate       DoubleSpinBoxAdapter  typed path, text <-> float
    Decimal    DecimalDelegate     LineEditAdapter       typed path, text <-> Decimal
    date       DateDelegate        DateEditAdapter       typed path, ISO text <-> date
    time       TimeDelegate        TimeEditAdapter       typed path, ISO text <-> time
    datetime   DateTimeDelegate    DateTimeEditAdapter   typed path, ISO text <-> datetime
    Path       PathDelegate        LineEditAdapter       typed path, text <-> Path
    bool       BooleanDelegate     QCheckBox             generic path, checked state

EnumDelegate and MultilineTextDelegate have no built-in type entry. Register
them per type or per field:

    registry.register_type(Color, EnumDelegate)
    registry.register_field("notes", MultilineTextDelegate)
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Optional
import logging
import operator

from PyQt6.QtWidgets import QCheckBox, QComboBox

from pyqt_formdelegates.protocols import (
    LineEditAdapter, TextEditAdapter, SpinBoxAdapter, DoubleSpinBoxAdapter,
    DateEditAdapter, TimeEditAdapter, DateTimeEditAdapter,
    FormDelegateConfig, is_typed_value_widget,
)
from pyqt_formdelegates.validation import (
    Validator, MandatoryValidator, IntValidator, DoubleValidator,
    DateValidator, TimeValidator, RegExpValidator,
)
from .field_delegate import FieldDelegate, SyncResult
from .field_descriptor import FieldDescriptor
from .form_model import FormModel

logger = logging.getLogger(__name__)


def _mandatory_or_none(descriptor: FieldDescriptor) -> Optional[Validator]:
    return MandatoryValidator() if descriptor.is_required else None


class TextDelegate(FieldDelegate):
    """Short text in a line edit. Value is stored exactly as typed."""

    def create_form_widget(self):
        widget = LineEditAdapter()
        if self.config.text_placeholder:
            widget.set_placeholder(self.config.text_placeholder)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return _mandatory_or_none(self.descriptor)


class MultilineTextDelegate(TextDelegate):
    """Long text. Only the widget differs from TextDelegate."""

    def create_form_widget(self):
        widget = TextEditAdapter()
        if self.config.text_placeholder:
            widget.set_placeholder(self.config.text_placeholder)
        return widget


class ConvertingDelegate(FieldDelegate):
    """
    Typed-path delegate whose stored value is not the widget text.

    Subclasses provide to_text/from_text. Empty widgets store None. Text
    that cannot be converted is stored as-is so the validator can report it;
    values to_text cannot format are shown as plain text for the same reason.
    """

    def to_text(self, value: Any) -> str:
        return str(value)

    def from_text(self, text: str) -> Any:
        return text

    def update_model_value(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not is_typed_value_widget(widget):
            return SyncResult.NOT_HANDLED
        text = widget.value_text()
        if text == "":
            model.set_value(field, None)
            return SyncResult.HANDLED
        try:
            value = self.from_text(text)
        except (ValueError, TypeError, InvalidOperation):
            logger.debug(f"Cannot convert {text!r} for field '{field}' - storing text")
            value = text
        model.set_value(field, value)
        return SyncResult.HANDLED

    def update_view_value(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not is_typed_value_widget(widget):
            return SyncResult.NOT_HANDLED
        value = model.value(field)
        if value is None:
            text = ""
        elif isinstance(value, str):
            text = value
        else:
            try:
                text = self.to_text(value)
            except (ValueError, TypeError, AttributeError):
                logger.debug(f"Cannot format {value!r} for field '{field}' - showing it as text")
                text = str(value)
        widget.set_value_text(text)
        return SyncResult.HANDLED


class IntegerDelegate(ConvertingDelegate):
    """Integer in a spin box, bounded by the configured integer range."""

    def create_form_widget(self):
        widget = SpinBoxAdapter()
        widget.configure_range(self.config.int_range_min, self.config.int_range_max)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return IntValidator(self.config.int_range_min, self.config.int_range_max,
                            mandatory=self.descriptor.is_required)

    def to_text(self, value: Any) -> str:
        return str(operator.index(value))

    def from_text(self, text: str) -> int:
        return int(text)


class FloatDelegate(ConvertingDelegate):
    """Floating point number in a double spin box."""

    def create_form_widget(self):
        widget = DoubleSpinBoxAdapter()
        widget.setDecimals(self.config.float_precision)
        widget.configure_range(self.config.float_range_min, self.config.float_range_max)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return DoubleValidator(self.config.float_range_min, self.config.float_range_max,
                               mandatory=self.descriptor.is_required)

    def to_text(self, value: Any) -> str:
        return str(float(value))

    def from_text(self, text: str) -> float:
        return float(text)


class DecimalDelegate(ConvertingDelegate):
    """Exact decimal number typed into a line edit."""

    DECIMAL_PATTERN = r"[-+]?(\d+(\.\d*)?|\.\d+)"

    def create_form_widget(self):
        return LineEditAdapter()

    def create_validator(self) -> Optional[Validator]:
        return RegExpValidator(self.DECIMAL_PATTERN, mandatory=self.descriptor.is_required,
                               message="Must be a decimal number")

    def from_text(self, text: str) -> Decimal:
        return Decimal(text.strip())


class DateDelegate(ConvertingDelegate):
    """Date in a calendar-popup date editor."""

    def create_form_widget(self):
        widget = DateEditAdapter()
        widget.set_display_format(self.config.date_display_format)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return DateValidator(mandatory=self.descriptor.is_required)

    def to_text(self, value: date) -> str:
        if isinstance(value, datetime):
            value = value.date()
        return value.isoformat()

    def from_text(self, text: str) -> date:
        return date.fromisoformat(text)


class TimeDelegate(ConvertingDelegate):
    """Time of day, second precision."""

    def create_form_widget(self):
        widget = TimeEditAdapter()
        widget.set_display_format(self.config.time_display_format)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return TimeValidator(mandatory=self.descriptor.is_required)

    def to_text(self, value: time) -> str:
        if isinstance(value, datetime):
            value = value.time()
        return value.replace(microsecond=0, tzinfo=None).isoformat()

    def from_text(self, text: str) -> time:
        return time.fromisoformat(text)


class DateTimeDelegate(ConvertingDelegate):
    """Naive date-time, second precision."""

    def create_form_widget(self):
        widget = DateTimeEditAdapter()
        widget.set_display_format(self.config.datetime_display_format)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return _mandatory_or_none(self.descriptor)

    def to_text(self, value: datetime) -> str:
        if not isinstance(value, datetime) and isinstance(value, date):
            value = datetime.combine(value, time())
        return value.replace(microsecond=0, tzinfo=None).isoformat()

    def from_text(self, text: str) -> datetime:
        return datetime.fromisoformat(text)


class PathDelegate(ConvertingDelegate):
    """Filesystem path typed into a line edit."""

    def create_form_widget(self):
        widget = LineEditAdapter()
        widget.set_placeholder(self.config.text_placeholder or "Path")
        return widget

    def create_validator(self) -> Optional[Validator]:
        return _mandatory_or_none(self.descriptor)

    def from_text(self, text: str) -> Path:
        return Path(text)


class BooleanDelegate(FieldDelegate):
    """
    Boolean in a check box.

    QCheckBox has no canonical text accessor, so this delegate synchronizes
    through the generic path only.
    """

    def create_form_widget(self):
        return QCheckBox()

    def update_model_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not isinstance(widget, QCheckBox):
            return SyncResult.NOT_HANDLED
        model.set_value(field, widget.isChecked())
        return SyncResult.HANDLED

    def update_view_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not isinstance(widget, QCheckBox):
            return SyncResult.NOT_HANDLED
        widget.setChecked(bool(model.value(field)))
        return SyncResult.HANDLED


def get_enum_display_text(enum_value: Enum) -> str:
    """
    Get display text for enum value, handling nested enums.

    String-valued members show their value, nested enum members show the
    nested value, anything else shows the member name.
    """
    if isinstance(enum_value.value, Enum):
        return str(enum_value.value.value)
    if isinstance(enum_value.value, str):
        return enum_value.value
    return enum_value.name


class EnumDelegate(FieldDelegate):
    """
    Enum member selected from a combo box; the model stores the member.

    The enum type defaults to the field's declared type, so the class can be
    registered directly: registry.register_type(Color, EnumDelegate).
    """

    def __init__(self, descriptor: FieldDescriptor, config: Optional[FormDelegateConfig] = None,
                 enum_type: Optional[type] = None):
        super().__init__(descriptor, config)
        enum_type = enum_type if enum_type is not None else descriptor.value_type
        if not isinstance(enum_type, type) or not issubclass(enum_type, Enum):
            raise TypeError(
                f"EnumDelegate for field '{descriptor.name}' needs an Enum type, got {enum_type!r}"
            )
        self.enum_type = enum_type

    def create_form_widget(self):
        widget = QComboBox()
        for member in self.enum_type:
            widget.addItem(get_enum_display_text(member), member)
        widget.setCurrentIndex(-1)
        return widget

    def create_validator(self) -> Optional[Validator]:
        return _mandatory_or_none(self.descriptor)

    def update_model_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not isinstance(widget, QComboBox):
            return SyncResult.NOT_HANDLED
        index = widget.currentIndex()
        model.set_value(field, None if index < 0 else widget.itemData(index))
        return SyncResult.HANDLED

    def update_view_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        if not isinstance(widget, QComboBox):
            return SyncResult.NOT_HANDLED
        value = model.value(field)
        for i in range(widget.count()):
            if widget.itemData(i) == value:
                widget.setCurrentIndex(i)
                return SyncResult.HANDLED
        # Value not found - clear selection
        widget.setCurrentIndex(-1)
        return SyncResult.HANDLED

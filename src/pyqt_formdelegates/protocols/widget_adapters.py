"""
Widget adapters that wrap Qt widgets to implement the delegate ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value() vs QDateTimeEdit.date()
- QLineEdit.setText() vs QSpinBox.setValue() vs QDateTimeEdit.setDate()

All adapters implement a consistent interface via ABCs:
- value_text() / set_value_text() for the canonical text form
- set_placeholder() where Qt supports one
- connect_change_signal() for all adapters

QCheckBox and QComboBox are intentionally not adapted: they are the
generic widgets whose delegates synchronize them through bespoke logic.

set_value_text() never raises: text a spin box or date/time editor cannot
hold is kept and read back verbatim.
"""

import math
from abc import ABCMeta
from typing import Any, Callable, Dict

from PyQt6.QtWidgets import (
    QLineEdit, QPlainTextEdit, QSpinBox, QDoubleSpinBox, QDateTimeEdit
)
from PyQt6.QtCore import QObject, QDate, QTime, QDateTime

from .widget_protocols import (
    TypedValueWidget, PlaceholderCapable, RangeConfigurable, ChangeSignalEmitter
)


# PyQt-specific metaclass that combines Qt's metaclass with ABCMeta
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


# Canonical (ISO 8601) text formats used by the temporal adapters
ISO_DATE_FORMAT = "yyyy-MM-dd"
ISO_TIME_FORMAT = "HH:mm:ss"
ISO_DATETIME_FORMAT = "yyyy-MM-dd'T'HH:mm:ss"


class _ChangeSlots:
    """Keeps the wrapper slot of each connected callback so it can be disconnected."""

    def __init__(self):
        self._slots: Dict[Callable, Callable] = {}

    def connect(self, signal, callback: Callable[[Any], None], read: Callable[[], str]) -> None:
        slot = lambda *_: callback(read())
        self._slots[callback] = slot
        signal.connect(slot)

    def disconnect(self, signal, callback: Callable[[Any], None]) -> None:
        slot = self._slots.pop(callback, None)
        if slot is None:
            return
        try:
            signal.disconnect(slot)
        except TypeError:
            # Signal not connected - ignore
            pass


class LineEditAdapter(QLineEdit, TypedValueWidget, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit.

    - .text() → .value_text()
    - .setText() → .set_value_text()
    - .setPlaceholderText() → .set_placeholder()
    - .textChanged → .connect_change_signal()

    Text is passed through untouched (no stripping) so that values
    round-trip exactly.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._change_slots = _ChangeSlots()

    def value_text(self) -> str:
        """Implement TypedValueWidget ABC."""
        return self.text()

    def set_value_text(self, text: str) -> None:
        """Implement TypedValueWidget ABC."""
        self.setText(text)

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.connect(self.textChanged, callback, self.value_text)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.disconnect(self.textChanged, callback)


class TextEditAdapter(QPlainTextEdit, TypedValueWidget, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Adapter for QPlainTextEdit (multi-line text)."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._change_slots = _ChangeSlots()

    def value_text(self) -> str:
        """Implement TypedValueWidget ABC."""
        return self.toPlainText()

    def set_value_text(self, text: str) -> None:
        """Implement TypedValueWidget ABC."""
        self.setPlainText(text)

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.connect(self.textChanged, callback, self.value_text)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.disconnect(self.textChanged, callback)


class SpinBoxAdapter(QSpinBox, TypedValueWidget, PlaceholderCapable,
                     RangeConfigurable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QSpinBox.

    Handles empty values using the special value text mechanism:
    the minimum value shows the special text and reads back as "".

    Text the spin box cannot hold (not an integer, outside the range) is
    shown the same way and read back verbatim until the user changes the
    value, so it reaches the validator instead of failing here.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._change_slots = _ChangeSlots()
        self._placeholder = " "
        self._held_text = None
        # Configure for empty-aware behavior
        self.setSpecialValueText(self._placeholder)
        self.setRange(-2147483648, 2147483647)
        self.setValue(self.minimum())
        self.valueChanged.connect(self._release_held_text)

    def _hold_text(self, text: str) -> None:
        self.blockSignals(True)
        self.setValue(self.minimum())
        self.blockSignals(False)
        self._held_text = text
        self.setSpecialValueText(text)

    def _release_held_text(self, *_):
        if self._held_text is not None:
            self._held_text = None
            self.setSpecialValueText(self._placeholder)

    def value_text(self) -> str:
        """Implement TypedValueWidget ABC."""
        if self._held_text is not None:
            return self._held_text
        if self.value() == self.minimum() and self.specialValueText():
            return ""
        return str(self.value())

    def set_value_text(self, text: str) -> None:
        """Implement TypedValueWidget ABC."""
        self._release_held_text()
        if text == "":
            self.setValue(self.minimum())
            return
        try:
            value = int(text)
        except ValueError:
            self._hold_text(text)
            return
        if not self.minimum() < value <= self.maximum():
            self._hold_text(text)
            return
        self.setValue(value)

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        # Placeholder is shown at minimum with special value text
        self._placeholder = text or " "
        if self._held_text is None:
            self.setSpecialValueText(self._placeholder)

    def configure_range(self, minimum: float, maximum: float) -> None:
        """Implement RangeConfigurable ABC."""
        # One step below the range is reserved for the empty value
        self.setRange(int(minimum) - 1, int(maximum))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.connect(self.valueChanged, callback, self.value_text)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.disconnect(self.valueChanged, callback)


class DoubleSpinBoxAdapter(QDoubleSpinBox, TypedValueWidget, PlaceholderCapable,
                           RangeConfigurable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QDoubleSpinBox.

    Handles empty values and unrepresentable text the same way as
    SpinBoxAdapter.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._change_slots = _ChangeSlots()
        self._placeholder = " "
        self._held_text = None
        self.setSpecialValueText(self._placeholder)
        self.setDecimals(6)
        self.configure_range(-1e308, 1e308)
        self.setValue(self.minimum())
        self.valueChanged.connect(self._release_held_text)

    def _hold_text(self, text: str) -> None:
        self.blockSignals(True)
        self.setValue(self.minimum())
        self.blockSignals(False)
        self._held_text = text
        self.setSpecialValueText(text)

    def _release_held_text(self, *_):
        if self._held_text is not None:
            self._held_text = None
            self.setSpecialValueText(self._placeholder)

    def value_text(self) -> str:
        """Implement TypedValueWidget ABC."""
        if self._held_text is not None:
            return self._held_text
        if self.value() == self.minimum() and self.specialValueText():
            return ""
        return str(self.value())

    def set_value_text(self, text: str) -> None:
        """Implement TypedValueWidget ABC."""
        self._release_held_text()
        if text == "":
            self.setValue(self.minimum())
            return
        try:
            value = float(text)
        except ValueError:
            self._hold_text(text)
            return
        # NaN fails both comparisons
        if not self.minimum() < value <= self.maximum():
            self._hold_text(text)
            return
        self.setValue(value)

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        self._placeholder = text or " "
        if self._held_text is None:
            self.setSpecialValueText(self._placeholder)

    def configure_range(self, minimum: float, maximum: float) -> None:
        """Implement RangeConfigurable ABC."""
        # One step below the range is reserved for the empty value
        empty = minimum - self.singleStep()
        if empty == minimum:
            # The step is below float resolution at this magnitude
            empty = math.nextafter(minimum, -math.inf)
        self.setRange(empty, maximum)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.connect(self.valueChanged, callback, self.value_text)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.disconnect(self.valueChanged, callback)


class _TemporalEditAdapter(QDateTimeEdit, TypedValueWidget, ChangeSignalEmitter,
                           metaclass=PyQtWidgetMeta):
    """
    Shared base for date, time and date-time editors.

    QDateTimeEdit has no empty state, so the adapter tracks one explicitly:
    a fresh editor is empty until a value is set or the user edits it.
    Text that does not parse is shown as special value text and read back
    verbatim until the user edits the value.
    """

    _text_format: str = ISO_DATETIME_FORMAT
    _display_format: str = "yyyy-MM-dd HH:mm:ss"
    _calendar_popup: bool = False

    def __init__(self, parent=None):
        super().__init__(parent)
        self._change_slots = _ChangeSlots()
        self._is_empty = True
        self._held_text = None
        self.setDisplayFormat(self._display_format)
        self.setCalendarPopup(self._calendar_popup)
        self.dateTimeChanged.connect(self._mark_not_empty)
        self._clear_display()

    def _mark_not_empty(self, *_):
        self._is_empty = False
        self._release_held_text()

    def _clear_display(self):
        self.blockSignals(True)
        self.clear()
        self.blockSignals(False)

    def _hold_text(self, text: str) -> None:
        self.blockSignals(True)
        self.setDateTime(self.minimumDateTime())
        self.blockSignals(False)
        self._held_text = text
        self._is_empty = False
        self.setSpecialValueText(text)

    def _release_held_text(self):
        if self._held_text is not None:
            self._held_text = None
            self.setSpecialValueText("")

    def is_empty(self) -> bool:
        return self._is_empty

    def set_display_format(self, display_format: str) -> None:
        """Change the display format without touching the empty state."""
        self.blockSignals(True)
        self.setDisplayFormat(display_format)
        self.blockSignals(False)
        if self._is_empty:
            self._clear_display()

    def value_text(self) -> str:
        """Implement TypedValueWidget ABC."""
        if self._held_text is not None:
            return self._held_text
        if self._is_empty:
            return ""
        return self._format_value()

    def set_value_text(self, text: str) -> None:
        """Implement TypedValueWidget ABC."""
        self._release_held_text()
        if text == "":
            self._is_empty = True
            self._clear_display()
            return
        try:
            self._apply_text(text)
        except ValueError:
            self._hold_text(text)
            return
        self._is_empty = False

    def _format_value(self) -> str:
        return self.dateTime().toString(self._text_format)

    def _apply_text(self, text: str) -> None:
        parsed = QDateTime.fromString(text, self._text_format)
        if not parsed.isValid():
            raise ValueError(f"'{text}' does not match format '{self._text_format}'")
        self.setDateTime(parsed)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.connect(self.dateTimeChanged, callback, self.value_text)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._change_slots.disconnect(self.dateTimeChanged, callback)


class DateEditAdapter(_TemporalEditAdapter):
    """Date editor; canonical text is ISO 8601 (yyyy-MM-dd)."""

    _text_format = ISO_DATE_FORMAT
    _display_format = ISO_DATE_FORMAT
    _calendar_popup = True

    def _format_value(self) -> str:
        return self.date().toString(ISO_DATE_FORMAT)

    def _apply_text(self, text: str) -> None:
        parsed = QDate.fromString(text, ISO_DATE_FORMAT)
        if not parsed.isValid():
            raise ValueError(f"'{text}' is not an ISO date")
        self.setDate(parsed)


class TimeEditAdapter(_TemporalEditAdapter):
    """Time editor; canonical text is ISO 8601 (HH:mm:ss)."""

    _text_format = ISO_TIME_FORMAT
    _display_format = ISO_TIME_FORMAT

    def _format_value(self) -> str:
        return self.time().toString(ISO_TIME_FORMAT)

    def _apply_text(self, text: str) -> None:
        parsed = QTime.fromString(text, ISO_TIME_FORMAT)
        if not parsed.isValid():
            raise ValueError(f"'{text}' is not an ISO time")
        self.setTime(parsed)


class DateTimeEditAdapter(_TemporalEditAdapter):
    """Date-time editor; canonical text is ISO 8601 (yyyy-MM-ddTHH:mm:ss)."""

    _calendar_popup = True

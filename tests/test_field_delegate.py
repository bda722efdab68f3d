"""Tests for the field delegate contract and the built-in delegates."""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

import pytest

from pyqt_formdelegates.forms.delegates import (
    TextDelegate, MultilineTextDelegate, IntegerDelegate, FloatDelegate, DecimalDelegate,
    DateDelegate, TimeDelegate, DateTimeDelegate, PathDelegate, BooleanDelegate, EnumDelegate,
)
from pyqt_formdelegates.forms.field_delegate import FieldDelegate, SyncDirection, SyncResult
from pyqt_formdelegates.forms.field_descriptor import FieldDescriptor
from pyqt_formdelegates.forms.form_model import FormModel


class Color(Enum):
    RED = "red"
    GREEN = "green"


def _model(name, value=None):
    model = FormModel([name])
    model.set_value(name, value)
    return model


def test_create_form_widget_is_mandatory():
    """A delegate without create_form_widget cannot be instantiated."""
    class Incomplete(FieldDelegate):
        pass

    with pytest.raises(TypeError):
        Incomplete(FieldDescriptor("x", str))


def test_overriding_both_paths_is_rejected():
    """Overriding typed and generic sync together fails at class definition."""
    with pytest.raises(TypeError, match="overrides both"):
        class Confused(FieldDelegate):
            def create_form_widget(self):
                return None

            def update_model_value(self, model, field, widget):
                return SyncResult.HANDLED

            def update_view_value_generic(self, model, field, widget):
                return SyncResult.HANDLED


def test_default_validator_is_none():
    """createValidator defaults to no validator."""
    class Plain(FieldDelegate):
        def create_form_widget(self):
            return None

    assert Plain(FieldDescriptor("x", str)).create_validator() is None


def test_default_generic_path_is_not_handled(qapp):
    """The generic path defaults to a no-op reporting NOT_HANDLED."""
    from PyQt6.QtWidgets import QCheckBox

    delegate = TextDelegate(FieldDescriptor("title", str))
    model = _model("title", "Hello")
    widget = QCheckBox()

    assert delegate.update_model_value_generic(model, "title", widget) is SyncResult.NOT_HANDLED
    assert delegate.update_view_value_generic(model, "title", widget) is SyncResult.NOT_HANDLED
    assert model.value("title") == "Hello"


def test_title_scenario(qapp):
    """Short text: view shows the model value, edits flow back verbatim."""
    from pyqt_formdelegates.protocols import LineEditAdapter

    delegate = TextDelegate(FieldDescriptor("title", str))
    widget = delegate.create_form_widget()
    assert isinstance(widget, LineEditAdapter)

    model = _model("title", "Hello")
    assert delegate.update_view_value(model, "title", widget) is SyncResult.HANDLED
    assert widget.text() == "Hello"

    widget.setText("Hello!")
    assert delegate.update_model_value(model, "title", widget) is SyncResult.HANDLED
    assert model.value("title") == "Hello!"


def test_factory_only_override_round_trips(qapp):
    """A delegate overriding only the widget keeps exact text round-trips."""
    delegate = MultilineTextDelegate(FieldDescriptor("notes", str))
    original = "line one\n  line two\t"
    model = _model("notes", original)
    widget = delegate.create_form_widget()

    delegate.sync_typed_path(SyncDirection.MODEL_TO_VIEW, model, "notes", widget)
    model.set_value("notes", None)
    delegate.sync_typed_path(SyncDirection.VIEW_TO_MODEL, model, "notes", widget)

    assert model.value("notes") == original


def test_is_active_scenario(qapp):
    """Boolean delegate: typed path no-op, generic path reads/writes checked state."""
    from PyQt6.QtWidgets import QCheckBox

    delegate = BooleanDelegate(FieldDescriptor("is_active", bool))
    widget = delegate.create_form_widget()
    assert isinstance(widget, QCheckBox)
    model = _model("is_active", True)

    assert delegate.update_view_value(model, "is_active", widget) is SyncResult.NOT_HANDLED
    assert delegate.update_model_value(model, "is_active", widget) is SyncResult.NOT_HANDLED
    assert model.value("is_active") is True
    assert not widget.isChecked()

    assert delegate.update_view_value_generic(model, "is_active", widget) is SyncResult.HANDLED
    assert widget.isChecked()

    widget.setChecked(False)
    assert delegate.sync_generic_path(
        SyncDirection.VIEW_TO_MODEL, model, "is_active", widget
    ) is SyncResult.HANDLED
    assert model.value("is_active") is False


def test_integer_delegate_converts(qapp):
    """Integer fields store ints, empty spin boxes store None."""
    from pyqt_formdelegates.validation import IntValidator

    delegate = IntegerDelegate(FieldDescriptor("count", int))
    widget = delegate.create_form_widget()
    model = _model("count", 12)

    delegate.update_view_value(model, "count", widget)
    assert widget.value() == 12
    widget.setValue(13)
    delegate.update_model_value(model, "count", widget)
    assert model.value("count") == 13

    widget.set_value_text("")
    delegate.update_model_value(model, "count", widget)
    assert model.value("count") is None

    validator = delegate.create_validator()
    assert isinstance(validator, IntValidator)
    assert validator.mandatory


def test_float_delegate_uses_config_precision(qapp):
    """Float widgets follow the configured precision."""
    from pyqt_formdelegates.protocols import FormDelegateConfig

    config = FormDelegateConfig(float_precision=2)
    delegate = FloatDelegate(FieldDescriptor("ratio", float), config)
    widget = delegate.create_form_widget()
    assert widget.decimals() == 2

    model = _model("ratio", 0.25)
    delegate.update_view_value(model, "ratio", widget)
    model.set_value("ratio", None)
    delegate.update_model_value(model, "ratio", widget)
    assert model.value("ratio") == 0.25


def test_decimal_delegate_keeps_unparseable_text(qapp):
    """Text that is not a number is stored as-is and rejected by the validator."""
    delegate = DecimalDelegate(FieldDescriptor("price", Decimal))
    widget = delegate.create_form_widget()
    model = _model("price")

    widget.setText("12.50")
    delegate.update_model_value(model, "price", widget)
    assert model.value("price") == Decimal("12.50")

    widget.setText("twelve")
    delegate.update_model_value(model, "price", widget)
    assert model.value("price") == "twelve"
    assert not delegate.create_validator().validate("twelve").is_valid


def test_temporal_delegates(qapp):
    """Date, time and datetime delegates store Python values."""
    cases = [
        (DateDelegate, date, date(2024, 2, 29)),
        (TimeDelegate, time, time(13, 45, 10)),
        (DateTimeDelegate, datetime, datetime(2024, 1, 31, 8, 0, 0)),
    ]
    for delegate_class, declared_type, value in cases:
        delegate = delegate_class(FieldDescriptor("when", declared_type))
        widget = delegate.create_form_widget()
        model = _model("when", value)

        delegate.update_view_value(model, "when", widget)
        model.set_value("when", None)
        delegate.update_model_value(model, "when", widget)
        assert model.value("when") == value


def test_empty_date_stores_none(qapp):
    """A fresh date editor represents no value."""
    delegate = DateDelegate(FieldDescriptor("due", Optional[date]))
    widget = delegate.create_form_widget()
    model = _model("due", date(2024, 1, 1))

    delegate.update_model_value(model, "due", widget)
    assert model.value("due") is None
    assert delegate.create_validator().validate(None).is_valid


def test_path_delegate(qapp):
    """Path fields store pathlib.Path objects."""
    delegate = PathDelegate(FieldDescriptor("output", Path))
    widget = delegate.create_form_widget()
    model = _model("output", Path("/tmp/out"))

    delegate.update_view_value(model, "output", widget)
    assert widget.text() == str(Path("/tmp/out"))
    widget.setText("/var/data")
    delegate.update_model_value(model, "output", widget)
    assert model.value("output") == Path("/var/data")


def test_enum_delegate(qapp):
    """Enum combo box stores members through the generic path."""
    from PyQt6.QtWidgets import QComboBox

    delegate = EnumDelegate(FieldDescriptor("color", Optional[Color]))
    widget = delegate.create_form_widget()
    assert isinstance(widget, QComboBox)
    assert [widget.itemText(i) for i in range(widget.count())] == ["red", "green"]

    model = _model("color", Color.GREEN)
    assert delegate.update_view_value(model, "color", widget) is SyncResult.NOT_HANDLED
    delegate.update_view_value_generic(model, "color", widget)
    assert widget.currentIndex() == 1

    widget.setCurrentIndex(0)
    delegate.update_model_value_generic(model, "color", widget)
    assert model.value("color") is Color.RED

    model.set_value("color", None)
    delegate.update_view_value_generic(model, "color", widget)
    assert widget.currentIndex() == -1


def test_enum_delegate_requires_enum_type():
    """EnumDelegate fails loud for non-enum fields."""
    with pytest.raises(TypeError):
        EnumDelegate(FieldDescriptor("name", str))


def test_required_text_gets_mandatory_validator():
    """Required-ness follows the declared type and default."""
    assert TextDelegate(FieldDescriptor("title", str)).create_validator().mandatory
    assert TextDelegate(FieldDescriptor("title", Optional[str])).create_validator() is None
    assert TextDelegate(FieldDescriptor("title", str, default="")).create_validator() is None


def test_sync_override_keeps_default_widget(qapp):
    """Overriding only the typed sync pair changes the stored representation."""
    from pyqt_formdelegates.protocols import LineEditAdapter

    class UpperCaseDelegate(TextDelegate):
        def update_model_value(self, model, field, widget):
            model.set_value(field, widget.value_text().upper())
            return SyncResult.HANDLED

        def update_view_value(self, model, field, widget):
            widget.set_value_text((model.value(field) or "").lower())
            return SyncResult.HANDLED

    delegate = UpperCaseDelegate(FieldDescriptor("code", str))
    widget = delegate.create_form_widget()
    assert isinstance(widget, LineEditAdapter)

    model = _model("code", "ABC")
    delegate.update_view_value(model, "code", widget)
    assert widget.text() == "abc"
    widget.setText("xyz")
    delegate.update_model_value(model, "code", widget)
    assert model.value("code") == "XYZ"


def test_integer_outside_widget_range_reaches_validator(qapp):
    """A Python int too large for the spin box is shown, kept and rejected."""
    delegate = IntegerDelegate(FieldDescriptor("count", int))
    widget = delegate.create_form_widget()
    model = _model("count", 5_000_000_000)

    assert delegate.update_view_value(model, "count", widget) is SyncResult.HANDLED
    assert widget.value_text() == "5000000000"

    delegate.update_model_value(model, "count", widget)
    assert model.value("count") == 5_000_000_000
    assert not delegate.create_validator().validate(model.value("count")).is_valid


def test_integer_delegate_does_not_truncate_floats(qapp):
    """A float in an int field is shown as typed, not rounded down."""
    delegate = IntegerDelegate(FieldDescriptor("count", int))
    widget = delegate.create_form_widget()
    model = _model("count", 2.5)

    delegate.update_view_value(model, "count", widget)
    assert widget.value_text() == "2.5"
    delegate.update_model_value(model, "count", widget)
    assert model.value("count") == "2.5"


def test_date_delegate_keeps_unparseable_text(qapp):
    """A stored string that is not a date survives view sync for the validator."""
    delegate = DateDelegate(FieldDescriptor("due", date))
    widget = delegate.create_form_widget()
    model = _model("due", "tomorrow")

    assert delegate.update_view_value(model, "due", widget) is SyncResult.HANDLED
    delegate.update_model_value(model, "due", widget)
    assert model.value("due") == "tomorrow"
    assert not delegate.create_validator().validate("tomorrow").is_valid


def test_temporal_delegates_narrow_mismatched_values(qapp):
    """datetime values in date or time fields show their date or time part."""
    stamp = datetime(2024, 1, 2, 3, 4, 5)

    date_delegate = DateDelegate(FieldDescriptor("due", date))
    widget = date_delegate.create_form_widget()
    model = _model("due", stamp)
    date_delegate.update_view_value(model, "due", widget)
    assert widget.value_text() == "2024-01-02"

    time_delegate = TimeDelegate(FieldDescriptor("at", time))
    widget = time_delegate.create_form_widget()
    model = _model("at", stamp)
    time_delegate.update_view_value(model, "at", widget)
    assert widget.value_text() == "03:04:05"

    datetime_delegate = DateTimeDelegate(FieldDescriptor("when", datetime))
    widget = datetime_delegate.create_form_widget()
    model = _model("when", date(2024, 1, 2))
    datetime_delegate.update_view_value(model, "when", widget)
    assert widget.value_text() == "2024-01-02T00:00:00"

"""PyQt form view - builds one widget per field through field delegates.

The view is the only caller of the delegate operations:
- build() resolves one delegate per field and calls create_form_widget()
  and create_validator() exactly once each
- update_view()/update_model() move values between the FormModel and the
  widgets, choosing the typed or generic path from the widget's capability
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from PyQt6.QtWidgets import QWidget, QFormLayout, QLabel
from PyQt6.QtCore import pyqtSignal

from pyqt_formdelegates.core import timer
from pyqt_formdelegates.errors import ConfigurationError
from pyqt_formdelegates.protocols import (
    FormDelegateConfig, get_form_config, is_typed_value_widget
)
from pyqt_formdelegates.validation import Validator
from .delegate_registry import DelegateRegistry
from .field_delegate import FieldDelegate, SyncDirection, SyncResult
from .field_descriptor import FieldDescriptor
from .form_model import FormModel

logger = logging.getLogger(__name__)


class FormView(QWidget):
    """
    Generated form for a FormModel.

    Delegates are chosen in this order: a delegate set on this view with
    set_form_delegate(), then the registry (field override, type override,
    built-in). Subclasses can adjust what delegates produce by overriding
    customize_form_widget() and customize_validator().

    Example:
        model = FormModel()
        view = FormView(model, [FieldDescriptor("title", str),
                                FieldDescriptor("is_active", bool)])
        view.build()
        ...
        if view.validate():
            save(model.values())
    """

    model_updated = pyqtSignal()
    view_updated = pyqtSignal()
    validated = pyqtSignal(bool)

    def __init__(self, model: FormModel, fields: Iterable[FieldDescriptor],
                 registry: Optional[DelegateRegistry] = None,
                 config: Optional[FormDelegateConfig] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.model = model
        self.registry = registry if registry is not None else DelegateRegistry()
        self.config = config if config is not None else get_form_config()

        self._descriptors: Dict[str, FieldDescriptor] = {}
        for descriptor in fields:
            if descriptor.name in self._descriptors:
                raise ConfigurationError(f"Duplicate field '{descriptor.name}' in form")
            self._descriptors[descriptor.name] = descriptor

        self._instance_delegates: Dict[str, FieldDelegate] = {}
        self._delegates: Dict[str, FieldDelegate] = {}
        self._widgets: Dict[str, QWidget] = {}
        self._message_labels: Dict[str, QLabel] = {}
        self._built = False

        self._layout = QFormLayout(self)

    # ==================== CONFIGURATION ====================

    def set_form_delegate(self, field_name: str, delegate: FieldDelegate) -> None:
        """
        Use this delegate for one field of this form instance only.

        Must be called before build().
        """
        if self._built:
            raise RuntimeError(
                f"Cannot set delegate for '{field_name}': form already built"
            )
        if field_name not in self._descriptors:
            raise KeyError(
                f"Unknown field '{field_name}'. Known fields: {self.field_names()}"
            )
        if not isinstance(delegate, FieldDelegate):
            raise TypeError(
                f"Delegate for '{field_name}' is {type(delegate).__name__}, "
                f"expected a FieldDelegate"
            )
        self._instance_delegates[field_name] = delegate

    def customize_form_widget(self, field_name: str, widget: QWidget) -> QWidget:
        """
        Hook to adjust or replace a delegate's widget before it is laid out.

        A replacement must keep the capability (typed-value or generic) the
        delegate synchronizes through.
        """
        return widget

    def customize_validator(self, field_name: str,
                            validator: Optional[Validator]) -> Optional[Validator]:
        """Hook to adjust or replace a delegate's validator before installation."""
        return validator

    # ==================== CONSTRUCTION ====================

    def _resolve_delegates(self) -> Dict[str, FieldDelegate]:
        delegates = {}
        for name, descriptor in self._descriptors.items():
            delegate = self._instance_delegates.get(name)
            if delegate is None:
                try:
                    delegate = self.registry.resolve(descriptor, self.config)
                except ConfigurationError as e:
                    logger.error(f"Aborting form construction: {e}")
                    raise
            delegates[name] = delegate
        return delegates

    def build(self) -> None:
        """
        Create all widgets and validators, then render the model values.

        Every delegate is resolved before any widget is created, so a
        configuration error leaves the view empty. Any later failure removes
        the rows already laid out, the fields added to the model and the
        installed validators before the error propagates.

        Raises:
            NoDelegateError: If a field's declared type has no delegate
            RuntimeError: If the view was already built
        """
        if self._built:
            raise RuntimeError("Form already built")

        with timer("Building form", log_args=True, field_count=len(self._descriptors)):
            delegates = self._resolve_delegates()

            # Nothing touches the layout or the model until every widget exists
            staged = {}
            for name, delegate in delegates.items():
                widget = self.customize_form_widget(name, delegate.create_form_widget())
                validator = self.customize_validator(name, delegate.create_validator())
                staged[name] = (widget, validator)

            added_fields = [name for name in staged if not self.model.has_field(name)]
            previous_validators = {
                name: self.model.validator(name)
                for name in staged if name not in added_fields
            }
            try:
                for name, (widget, validator) in staged.items():
                    self._install_row(name, delegates[name], widget, validator)
                self.update_view()
            except Exception as e:
                logger.error(f"Aborting form construction, removing {len(staged)} rows: {e}")
                self._discard_rows(added_fields, previous_validators)
                raise

            self._built = True

    def _install_row(self, name: str, delegate: FieldDelegate, widget: QWidget,
                     validator: Optional[Validator]) -> None:
        descriptor = self._descriptors[name]
        if not self.model.has_field(name):
            self.model.add_field(name, descriptor.default)
        self.model.set_validator(name, validator)

        widget.setObjectName(name)
        if descriptor.description:
            widget.setToolTip(descriptor.description)
        label = QLabel(descriptor.label)
        label.setBuddy(widget)
        message = QLabel()
        message.setObjectName(f"{name}_message")
        message.setVisible(False)

        self._layout.addRow(label, widget)
        self._layout.addRow("", message)

        self._delegates[name] = delegate
        self._widgets[name] = widget
        self._message_labels[name] = message

    def _discard_rows(self, added_fields: List[str],
                      previous_validators: Dict[str, Optional[Validator]]) -> None:
        while self._layout.rowCount():
            self._layout.removeRow(0)
        self._delegates.clear()
        self._widgets.clear()
        self._message_labels.clear()
        for name in added_fields:
            if self.model.has_field(name):
                self.model.remove_field(name)
        for name, validator in previous_validators.items():
            self.model.set_validator(name, validator)

    def is_built(self) -> bool:
        return self._built

    # ==================== SYNCHRONIZATION ====================

    def _sync(self, field_name: str, direction: SyncDirection) -> SyncResult:
        delegate = self.delegate(field_name)
        widget = self._widgets[field_name]
        # Generic path only when the widget has no canonical accessor
        if is_typed_value_widget(widget):
            result = delegate.sync_typed_path(direction, self.model, field_name, widget)
        else:
            result = delegate.sync_generic_path(direction, self.model, field_name, widget)
        if result is SyncResult.NOT_HANDLED:
            logger.debug(
                f"{type(delegate).__name__} did not handle {direction.value} "
                f"for field '{field_name}' ({type(widget).__name__})"
            )
        return result

    def update_view_field(self, field_name: str) -> SyncResult:
        """Render one model value into its widget."""
        result = self._sync(field_name, SyncDirection.MODEL_TO_VIEW)
        self._render_validation(field_name)
        return result

    def update_model_field(self, field_name: str) -> SyncResult:
        """Read one widget into the model."""
        return self._sync(field_name, SyncDirection.VIEW_TO_MODEL)

    def update_view(self) -> None:
        for name in self._widgets:
            self.update_view_field(name)
        self.view_updated.emit()

    def update_model(self) -> None:
        for name in self._widgets:
            self.update_model_field(name)
        self.model_updated.emit()

    def validate(self) -> bool:
        """Read the view into the model, validate it and show messages."""
        self.update_model()
        valid = self.model.validate()
        for name in self._widgets:
            self._render_validation(name)
        self.validated.emit(valid)
        return valid

    def _render_validation(self, field_name: str) -> None:
        result = self.model.validation(field_name)
        widget = self._widgets[field_name]
        label = self._message_labels[field_name]
        widget.setProperty("valid", None if result is None else result.is_valid)
        show = (self.config.show_validation_messages and result is not None
                and not result.is_valid)
        label.setText(result.message if show else "")
        label.setVisible(show)

    # ==================== ACCESSORS ====================

    def field_names(self) -> List[str]:
        return list(self._descriptors.keys())

    def delegate(self, field_name: str) -> FieldDelegate:
        if field_name not in self._delegates:
            raise KeyError(
                f"No delegate for field '{field_name}'. Built fields: {list(self._delegates)}"
            )
        return self._delegates[field_name]

    def widget(self, field_name: str) -> QWidget:
        if field_name not in self._widgets:
            raise KeyError(
                f"No widget for field '{field_name}'. Built fields: {list(self._widgets)}"
            )
        return self._widgets[field_name]

    def validation_message(self, field_name: str) -> str:
        return self._message_labels[field_name].text()

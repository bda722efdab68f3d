"""
Field delegate contract.

A field delegate bridges one field of a form model to one widget of a
generated form. It is responsible for:
- creating the widget used in the view (mandatory)
- creating an optional validator used by the model
- moving the value between model and widget in both directions

Two synchronization paths exist, one per widget capability tier:

    Typed path (A)     update_model_value / update_view_value
                       Widget implements TypedValueWidget. The default moves
                       the canonical text verbatim.

    Generic path (B)   update_model_value_generic / update_view_value_generic
                       Widget has no canonical accessor (QCheckBox, QComboBox,
                       custom widgets). The default does nothing and reports
                       SyncResult.NOT_HANDLED.

A concrete delegate overrides the typed pair OR the generic pair, never
both. The form view picks the path from the widget's capability, so a
delegate producing a generic widget must override the generic pair or its
field is never synchronized. This is checked when the subclass is defined.

Three override points compose:
1. override create_form_widget/create_validator only, keeping default sync
2. override the sync pair only, keeping the default widget
3. replace the whole delegate for one field or one declared type
   (see DelegateRegistry and FormView.set_form_delegate)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional
import logging

from PyQt6.QtWidgets import QWidget

from pyqt_formdelegates.protocols import FormDelegateConfig, get_form_config, is_typed_value_widget
from pyqt_formdelegates.validation import Validator
from .field_descriptor import FieldDescriptor
from .form_model import FormModel

logger = logging.getLogger(__name__)


class SyncResult(Enum):
    """Outcome of one synchronization call."""
    HANDLED = "handled"
    NOT_HANDLED = "not_handled"

    @property
    def handled(self) -> bool:
        return self is SyncResult.HANDLED


class SyncDirection(Enum):
    """Which way a synchronization call moves the value."""
    MODEL_TO_VIEW = "model_to_view"
    VIEW_TO_MODEL = "view_to_model"


TYPED_PATH_METHODS = ("update_model_value", "update_view_value")
GENERIC_PATH_METHODS = ("update_model_value_generic", "update_view_value_generic")


class FieldDelegate(ABC):
    """
    Per-field strategy object. One instance is bound to exactly one field
    for the lifetime of a form; the form view owns it.

    The delegate keeps no reference to the model or the widget beyond the
    call it receives them in.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        typed = [name for name in TYPED_PATH_METHODS
                 if getattr(cls, name) is not getattr(FieldDelegate, name)]
        generic = [name for name in GENERIC_PATH_METHODS
                   if getattr(cls, name) is not getattr(FieldDelegate, name)]
        if typed and generic:
            raise TypeError(
                f"{cls.__name__} overrides both typed-path methods {typed} and "
                f"generic-path methods {generic}. Override only the pair matching "
                f"the widget returned by create_form_widget()."
            )

    def __init__(self, descriptor: FieldDescriptor, config: Optional[FormDelegateConfig] = None):
        self.descriptor = descriptor
        self.config = config if config is not None else get_form_config()

    @property
    def field_name(self) -> str:
        return self.descriptor.name

    # ==================== FACTORIES ====================

    @abstractmethod
    def create_form_widget(self) -> QWidget:
        """
        Create the widget used in the view.

        Must return a new widget on every call and must not read the form
        model; the value is filled in afterwards through update_view_value.
        """
        pass

    def create_validator(self) -> Optional[Validator]:
        """
        Create the validator used by the model.

        By default this returns None (no validation beyond what the widget
        enforces). Override to add validation to this field.
        """
        return None

    # ==================== TYPED PATH (A) ====================

    def update_model_value(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        """
        Update the model from a typed-value widget.

        By default this sets the model value to widget.value_text().
        Leaves the model untouched and returns NOT_HANDLED if the widget has
        no canonical text accessor.
        """
        if not is_typed_value_widget(widget):
            return SyncResult.NOT_HANDLED
        model.set_value(field, widget.value_text())
        return SyncResult.HANDLED

    def update_view_value(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        """
        Update a typed-value widget from the model.

        By default this writes the model value, as text, through
        widget.set_value_text(). None is shown as an empty widget.
        """
        if not is_typed_value_widget(widget):
            return SyncResult.NOT_HANDLED
        value = model.value(field)
        widget.set_value_text("" if value is None else str(value))
        return SyncResult.HANDLED

    # ==================== GENERIC PATH (B) ====================

    def update_model_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        """
        Update the model from a widget without a canonical accessor.

        By default this does nothing and returns NOT_HANDLED.
        """
        return SyncResult.NOT_HANDLED

    def update_view_value_generic(self, model: FormModel, field: str, widget: Any) -> SyncResult:
        """
        Update a widget without a canonical accessor from the model.

        By default this does nothing and returns NOT_HANDLED.
        """
        return SyncResult.NOT_HANDLED

    # ==================== DIRECTION DISPATCH ====================

    def sync_typed_path(self, direction: SyncDirection, model: FormModel,
                        field: str, widget: Any) -> SyncResult:
        if direction is SyncDirection.MODEL_TO_VIEW:
            return self.update_view_value(model, field, widget)
        return self.update_model_value(model, field, widget)

    def sync_generic_path(self, direction: SyncDirection, model: FormModel,
                          field: str, widget: Any) -> SyncResult:
        if direction is SyncDirection.MODEL_TO_VIEW:
            return self.update_view_value_generic(model, field, widget)
        return self.update_model_value_generic(model, field, widget)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.descriptor.name!r})"

"""
Widget ABC contracts for field delegates.

Defines the capability tiers a form widget can have, eliminating duck typing
in favor of fail-loud inheritance-based architecture.

Capability tiers:
- Typed-value widget: implements TypedValueWidget and exposes a canonical
  text accessor, so any delegate can synchronize it generically.
- Generic widget: anything else (QCheckBox, QComboBox, custom widgets).
  Synchronization needs bespoke logic in the field's delegate.

Multiple inheritance composes the optional capabilities
(placeholders, numeric ranges, change signals).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class TypedValueWidget(ABC):
    """
    ABC for widgets with a canonical text/value accessor.

    The text form is what a field delegate reads and writes on the typed
    synchronization path.
    """

    @abstractmethod
    def value_text(self) -> str:
        """
        Get the widget's content in its canonical text form.

        Returns:
            The displayed value as text. Empty string when the widget is empty.
        """
        pass

    @abstractmethod
    def set_value_text(self, text: str) -> None:
        """
        Set the widget's content from its canonical text form.

        Args:
            text: Canonical text. Empty string clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for widgets that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        """
        Set placeholder text for the widget.

        Args:
            text: Placeholder text to display (e.g., "yyyy-MM-dd")
        """
        pass


class RangeConfigurable(ABC):
    """
    ABC for widgets that support numeric range configuration.

    Typically implemented by numeric input widgets (spinboxes, sliders).
    """

    @abstractmethod
    def configure_range(self, minimum: float, maximum: float) -> None:
        """
        Configure the valid range for numeric input.

        Args:
            minimum: Minimum allowed value
            maximum: Maximum allowed value
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that emit change signals.

    Eliminates duck typing of signal names
    (textChanged vs valueChanged vs dateChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to widget's change signal.

        Args:
            callback: Function to call when widget value changes.
                     Signature: callback(new_text: str) -> None
        """
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Disconnect callback from widget's change signal."""
        pass


def is_typed_value_widget(widget: Any) -> bool:
    """Return True when the widget exposes the canonical text accessor."""
    return isinstance(widget, TypedValueWidget)

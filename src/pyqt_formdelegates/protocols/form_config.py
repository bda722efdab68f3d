"""Base configuration class for field delegates and generated forms.

Provides hooks for applications to customize default widget behavior.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class FormDelegateConfig:
    """Configuration for built-in delegates and the form view.

    Applications can subclass this to provide custom configuration.

    Attributes:
        int_range_min: Lower bound of integer spin boxes
        int_range_max: Upper bound of integer spin boxes
        float_range_min: Lower bound of float spin boxes
        float_range_max: Upper bound of float spin boxes
        float_precision: Decimals shown by float spin boxes
        date_display_format: Qt display format of date editors
        time_display_format: Qt display format of time editors
        datetime_display_format: Qt display format of date-time editors
        text_placeholder: Placeholder shown in empty text inputs
        show_validation_messages: Whether the form view renders validation messages
        performance_logger_name: Logger receiving build timings
        performance_threshold_ms: Only log timings at or above this
    """

    int_range_min: int = -2147483647
    int_range_max: int = 2147483647
    float_range_min: float = -1e308
    float_range_max: float = 1e308
    float_precision: int = 6
    date_display_format: str = "yyyy-MM-dd"
    time_display_format: str = "HH:mm:ss"
    datetime_display_format: str = "yyyy-MM-dd HH:mm:ss"
    text_placeholder: str = ""
    show_validation_messages: bool = True
    performance_logger_name: str = "pyqt_formdelegates.performance"
    performance_threshold_ms: float = 0.0

    def with_overrides(self, **kwargs) -> 'FormDelegateConfig':
        """Return a copy with the given attributes replaced."""
        return replace(self, **kwargs)


# Global config instance (set by application)
_form_config: Optional[FormDelegateConfig] = None


def set_form_config(config: Optional[FormDelegateConfig]) -> None:
    """Set the global delegate configuration.

    Args:
        config: FormDelegateConfig instance, or None to restore defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormDelegateConfig:
    """Get the current delegate configuration.

    Returns:
        Current FormDelegateConfig or default if not set
    """
    if _form_config is None:
        return FormDelegateConfig()
    return _form_config

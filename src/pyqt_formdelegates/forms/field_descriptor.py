"""
Field descriptors - the name and declared type of one form field.

Descriptors are read-only inputs to delegate resolution. They can be built by
hand or reflected from a dataclass/object with python-introspect.
"""

import dataclasses
import inspect
from dataclasses import dataclass
from typing import Any, List, Optional, Type, Union, get_args, get_origin
import logging

logger = logging.getLogger(__name__)


def resolve_optional(param_type: Type) -> Type:
    """Resolve Optional[T] to T."""
    if get_origin(param_type) is Union:
        args = get_args(param_type)
        if len(args) == 2 and type(None) in args:
            return next(arg for arg in args if arg is not type(None))
    return param_type


def is_optional(param_type: Type) -> bool:
    """Check if type is Optional[T] (Union with None)."""
    return get_origin(param_type) is Union and type(None) in get_args(param_type)


@dataclass(frozen=True)
class FieldDescriptor:
    """Identity (name) and declared type of a form field."""
    name: str
    declared_type: Any
    default: Any = None
    description: Optional[str] = None

    @property
    def value_type(self) -> Any:
        """Declared type with Optional[...] unwrapped - the registry lookup key."""
        return resolve_optional(self.declared_type)

    @property
    def is_optional(self) -> bool:
        return is_optional(self.declared_type)

    @property
    def is_required(self) -> bool:
        """Non-optional fields without a default need a value."""
        return not self.is_optional and self.default is None

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').capitalize()


def _normalize_default(value: Any) -> Any:
    """Map "no default" markers to None."""
    if value is inspect.Parameter.empty or value is dataclasses.MISSING:
        return None
    return value


def describe_fields(obj: Any, exclude: Optional[List[str]] = None) -> List[FieldDescriptor]:
    """
    Reflect field descriptors from a dataclass instance or other object.

    Uses python-introspect's UnifiedParameterAnalyzer, the same single code
    path used for dataclasses, constructors and plain objects.

    Args:
        obj: Object whose parameters become form fields
        exclude: Parameter names to leave out

    Returns:
        Descriptors in declaration order
    """
    from python_introspect import UnifiedParameterAnalyzer

    param_info_dict = UnifiedParameterAnalyzer.analyze(obj, exclude_params=exclude or [])
    descriptors = [
        FieldDescriptor(
            name=name,
            declared_type=info.param_type,
            default=_normalize_default(info.default_value),
            description=getattr(info, 'description', None),
        )
        for name, info in param_info_dict.items()
    ]
    logger.debug(f"Described {len(descriptors)} fields of {type(obj).__name__}")
    return descriptors

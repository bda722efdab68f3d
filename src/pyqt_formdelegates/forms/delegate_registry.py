"""
Delegate registry with explicit type-based dispatch.

Selects one field delegate per field:

    1. per-field override (registered by field name)   - highest priority
    2. per-type override (registered by declared type)
    3. built-in delegate for the declared type
    4. NoDelegateError                                 - configuration error

Lookup is by exact type after Optional[T] is unwrapped to T. There is no
subclass or partial matching: an Enum subclass, for instance, needs its own
type-level registration.

Each registry owns its own mapping, copied from BUILTIN_DELEGATES when
constructed. Nothing is looked up in module-level mutable state.
"""

from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from pyqt_formdelegates.errors import NoDelegateError
from pyqt_formdelegates.protocols import FormDelegateConfig
from .delegates import (
    TextDelegate, IntegerDelegate, FloatDelegate, DecimalDelegate,
    DateDelegate, TimeDelegate, DateTimeDelegate, PathDelegate, BooleanDelegate,
)
from .field_delegate import FieldDelegate
from .field_descriptor import FieldDescriptor, resolve_optional

logger = logging.getLogger(__name__)

# factory(descriptor, config) -> FieldDelegate. Delegate classes qualify.
DelegateFactory = Callable[[FieldDescriptor, Optional[FormDelegateConfig]], FieldDelegate]

BUILTIN_DELEGATES: Mapping[Any, DelegateFactory] = MappingProxyType({
    str: TextDelegate,
    int: IntegerDelegate,
    float: FloatDelegate,
    Decimal: DecimalDelegate,
    date: DateDelegate,
    time: TimeDelegate,
    datetime: DateTimeDelegate,
    Path: PathDelegate,
    bool: BooleanDelegate,
})


def _type_name(declared_type: Any) -> str:
    return getattr(declared_type, '__name__', repr(declared_type))


class DelegateRegistry:
    """
    Delegate selector using explicit dispatch - NO DUCK TYPING.

    Example:
        registry = DelegateRegistry()
        registry.register_type(Color, EnumDelegate)
        registry.register_field("notes", MultilineTextDelegate)

        delegate = registry.resolve(FieldDescriptor("title", str))
        # TextDelegate bound to "title"
    """

    def __init__(self, builtins: Optional[Mapping[Any, DelegateFactory]] = None):
        source = BUILTIN_DELEGATES if builtins is None else builtins
        self._builtins: Dict[Any, DelegateFactory] = dict(source)
        self._type_overrides: Dict[Any, DelegateFactory] = {}
        self._field_overrides: Dict[str, DelegateFactory] = {}

    # ========== REGISTRATION ==========

    def register_field(self, field_name: str, factory: DelegateFactory) -> None:
        """
        Override the delegate of one field, whatever its declared type.

        Args:
            field_name: Field identity within the form
            factory: Callable (descriptor, config) -> FieldDelegate
        """
        if field_name in self._field_overrides:
            logger.warning(f"Overwriting delegate override for field '{field_name}'")
        self._field_overrides[field_name] = factory
        logger.debug(f"Registered field delegate override for '{field_name}'")

    def register_type(self, declared_type: Any, factory: DelegateFactory) -> None:
        """
        Override the delegate of every field with this declared type.

        Optional[T] registrations apply to T.
        """
        declared_type = resolve_optional(declared_type)
        if declared_type in self._type_overrides:
            logger.warning(
                f"Overwriting delegate override for type {_type_name(declared_type)}"
            )
        self._type_overrides[declared_type] = factory
        logger.debug(f"Registered type delegate override for {_type_name(declared_type)}")

    def unregister_field(self, field_name: str) -> None:
        self._field_overrides.pop(field_name, None)

    def unregister_type(self, declared_type: Any) -> None:
        self._type_overrides.pop(resolve_optional(declared_type), None)

    # ========== RESOLUTION ==========

    def _lookup(self, descriptor: FieldDescriptor) -> Optional[DelegateFactory]:
        factory = self._field_overrides.get(descriptor.name)
        if factory is not None:
            return factory
        value_type = descriptor.value_type
        factory = self._type_overrides.get(value_type)
        if factory is not None:
            return factory
        return self._builtins.get(value_type)

    def has_delegate(self, descriptor: FieldDescriptor) -> bool:
        return self._lookup(descriptor) is not None

    def resolve(self, descriptor: FieldDescriptor,
                config: Optional[FormDelegateConfig] = None) -> FieldDelegate:
        """
        Create the delegate for one field.

        Args:
            descriptor: The field's name and declared type
            config: Configuration passed to the delegate factory

        Returns:
            A new delegate bound to the field

        Raises:
            NoDelegateError: If neither an override nor a built-in matches
        """
        factory = self._lookup(descriptor)
        if factory is None:
            raise NoDelegateError(descriptor.name, descriptor.declared_type,
                                  self.supported_types())

        delegate = factory(descriptor, config)
        if not isinstance(delegate, FieldDelegate):
            raise TypeError(
                f"Delegate factory for field '{descriptor.name}' returned "
                f"{type(delegate).__name__}, expected a FieldDelegate"
            )
        logger.debug(
            f"Resolved {type(delegate).__name__} for field '{descriptor.name}' "
            f"(type: {_type_name(descriptor.declared_type)})"
        )
        return delegate

    def supported_types(self) -> List[Any]:
        """Types with a built-in or type-level delegate."""
        return list(self._builtins.keys()) + [
            t for t in self._type_overrides if t not in self._builtins
        ]

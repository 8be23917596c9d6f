"""
gnuparse utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, parser and formatter.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- StorageGuard / view("attr")
  • Build-phase-only backing storage for immutable specs, exposed through read-only properties.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.
    """
    return object if object is not Unset else default


class StorageGuard:
    """
    internal mixin to protect backing storage and control mutation.

    rules
    - any attribute whose name starts with '-' is considered internal backing and:
      • cannot be read directly (AttributeError),
      • cannot be written outside of the guarded build phase.

    build phase
    - the context-managed __new__ yields the instance writable:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block, backing fields are locked (read-only).
    """
    __slots__ = ("__building", "__dict__")

    @contextmanager
    def __new__(cls):
        self = object.__new__(cls)
        object.__setattr__(self, "_StorageGuard__building", True)
        try:
            yield self
        finally:
            object.__setattr__(self, "_StorageGuard__building", False)

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if isinstance(name, str) and name.startswith("-"):
            if not self.__building:
                raise AttributeError("internal storage is read-only")
            return object.__setattr__(self, name, value)
        raise AttributeError("%s is immutable" % type(self).__name__)


def view(name, /):
    """
    internal: build a read-only property over a '-' prefixed backing field.

    behavior
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is
    """

    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "StorageGuard",
    "view",
)

"""Default descriptor and DefaultKind StrEnum for schema fields.

Each field of an AttributeSchema carries exactly one ``Default``:

- REQUIRED -> "required" : no default, the value must be supplied
- EAGER    -> "eager"    : a fixed value, deep-copied into every new instance
- LAZY     -> "lazy"     : a computation called once per instance that needs it

Eager vs lazy is decided by how the default is registered (``default=`` vs
``compute=``), never by inspecting the value.  A callable registered as an
eager default is stored and handed back as-is (same object, never called and
never copied); any other eager value is deep-copied per instance, so it must
support ``copy.deepcopy``.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, Final

__all__ = ["MISSING", "Default", "DefaultKind"]


class _MissingType:
    """Sentinel type for "no value given" (``None`` is a legitimate default)."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _MissingType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _MissingType:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _MissingType()


class DefaultKind(StrEnum):
    """The three ways a field can obtain its value."""

    REQUIRED = auto()
    EAGER = auto()
    LAZY = auto()


@dataclass(frozen=True, slots=True)
class Default:
    """How a field is resolved when construction does not supply it.

    Attributes:
        kind:  Which variant this is (see DefaultKind).
        value: The eager value for EAGER, the computation for LAZY, MISSING
               for REQUIRED.
    """

    kind: DefaultKind
    value: Any = MISSING

    @classmethod
    def required(cls) -> Default:
        return cls(DefaultKind.REQUIRED)

    @classmethod
    def eager(cls, value: Any) -> Default:
        """Build an eager default.

        Raises:
            ValueError: If ``value`` is not callable and cannot be deep-copied.
        """
        if not callable(value):
            try:
                copy.deepcopy(value)
            except (TypeError, copy.Error) as exc:
                msg = (
                    f"eager default of type {type(value).__name__} cannot be "
                    f"deep-copied ({exc}); use compute= to build one per instance"
                )
                raise ValueError(msg) from exc
        return cls(DefaultKind.EAGER, value)

    @classmethod
    def lazy(cls, computation: Callable[[Any], Any]) -> Default:
        if not callable(computation):
            msg = f"lazy default must be callable, got {type(computation).__name__}"
            raise TypeError(msg)
        return cls(DefaultKind.LAZY, computation)

    @classmethod
    def from_options(
        cls,
        default: Any = MISSING,
        compute: Callable[[Any], Any] | None = None,
    ) -> Default:
        """Build a descriptor from the ``default=`` / ``compute=`` pair.

        Raises:
            ValueError: If both are given.
        """
        if compute is not None and default is not MISSING:
            msg = "a field takes either default= or compute=, not both"
            raise ValueError(msg)
        if compute is not None:
            return cls.lazy(compute)
        if default is not MISSING:
            return cls.eager(default)
        return cls.required()

    @property
    def is_required(self) -> bool:
        return self.kind is DefaultKind.REQUIRED

    def resolve(self, context: Any) -> Any:
        """Produce the value for one new instance.

        Args:
            context: The read-only view of the instance under construction.
                     Only LAZY defaults use it.

        Returns:
            The eager value itself when callable, otherwise a deep copy of it;
            or the computation's result.

        Raises:
            ValueError: If called on a REQUIRED descriptor.
        """
        if self.kind is DefaultKind.LAZY:
            return self.value(context)
        if self.kind is DefaultKind.EAGER:
            return _copy_eager(self.value)
        msg = "a required field has no default to resolve"
        raise ValueError(msg)

    def duplicate(self) -> Default:
        """Return an independent descriptor with a structurally copied value."""
        if self.kind is DefaultKind.REQUIRED:
            return self
        if self.kind is DefaultKind.LAZY:
            return Default(self.kind, self.value)
        return Default(self.kind, _copy_eager(self.value))


def _copy_eager(value: Any) -> Any:
    # Callables (partials, bound methods, callable objects) keep their identity.
    if callable(value):
        return value
    return copy.deepcopy(value)

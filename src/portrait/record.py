"""Record: the base class that turns a field schema into a value object.

A record type declares its fields either with ``field()`` markers in the
class body, registered in source order when the class is created, or with
``register_field`` afterwards::

    class Point(Record):
        x = field()
        y = field(default=0)
        label = field(compute=lambda self: f"{self.x},{self.y}")

    Point.register_field("x", default=1)   # redeclared: moves behind label

Each registration updates the type's ``AttributeSchema`` and re-derives the
constructor signature and ``__match_args__``.  Subtypes start from an
independent copy of their parent's schema.

The record itself carries only dunder methods, so any identifier other than
a dunder name or a keyword can be a field.  Structural helpers (``freeze``, ``duplicate``,
``deconstruct`` ...) are module-level functions, as with ``dataclasses``.
"""

from __future__ import annotations

import inspect
import keyword
import logging
import reprlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from portrait.config import RecordOptions
from portrait.construction import ConstructionProtocol
from portrait.decomposition import visible_fields
from portrait.errors import FrozenViolationError
from portrait.nesting import define_nested_type
from portrait.schema.defaults import MISSING, Default, DefaultKind
from portrait.schema.registry import AttributeSchema
from portrait.structural import (
    SCHEMA_ATTRIBUTE,
    attributes,
    clone,
    duplicate,
    equal,
    is_frozen,
    is_record,
    record_hash,
)

__all__ = ["FieldSpec", "Record", "field"]

logger = logging.getLogger(__name__)


class _Computed:
    """Placeholder shown in signatures for lazily computed defaults."""

    def __repr__(self) -> str:
        return "<computed>"


_COMPUTED = _Computed()


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Class-body marker produced by ``field()``; consumed at class creation.

    Attributes:
        default: Eager default value, or MISSING.
        compute: Lazy default computation taking the instance view, or None.
        nested:  Declaration block for a nested record type, or None.
        define:  Explicit name for the nested type, or None.
    """

    default: Any = MISSING
    compute: Callable[[Any], Any] | None = None
    nested: Callable[[type], Any] | None = None
    define: str | None = None


def field(
    *,
    default: Any = MISSING,
    compute: Callable[[Any], Any] | None = None,
    nested: Callable[[type], Any] | None = None,
    define: str | None = None,
) -> Any:
    """Declare a record field in a class body.

    Args:
        default: A fixed value, deep-copied into each instance.  A callable
                 given here is stored as the value, never called or copied.
        compute: Called with the instance under construction to produce the
                 value when none is supplied.
        nested:  Called with a new nested record type to declare its fields.
        define:  Name for the nested type instead of the camelized field name.
    """
    return FieldSpec(default=default, compute=compute, nested=nested, define=define)


def _check_field_name(name: str) -> None:
    if not isinstance(name, str) or not name.isidentifier():
        msg = f"field name must be an identifier, got {name!r}"
        raise ValueError(msg)
    if keyword.iskeyword(name):
        msg = f"field name must not be a Python keyword, got {name!r}"
        raise ValueError(msg)
    if name.startswith("__") and name.endswith("__"):
        msg = f"field name must not be a dunder name, got {name!r}"
        raise ValueError(msg)


class Record:
    """Base class for value objects described by an ``AttributeSchema``.

    Construction takes keyword arguments only, one per field.  Instances
    compare and hash by concrete type and field values, copy with
    ``copy.copy`` / ``copy.deepcopy``, and refuse attribute assignment once
    frozen.

    Class keywords set ``RecordOptions`` for the type and its subtypes::

        class Loose(Record, unknown_fields="ignore"):
            ...
    """

    __record_schema__: ClassVar[AttributeSchema] = AttributeSchema("Record")
    __record_options__: ClassVar[RecordOptions] = RecordOptions()
    __match_args__: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **options: Any) -> None:
        super().__init_subclass__()
        inherited: AttributeSchema = getattr(cls, SCHEMA_ATTRIBUTE)
        cls.__record_schema__ = inherited.duplicate(owner=cls.__qualname__)
        cls.__record_options__ = cls.__record_options__.merged(options)
        logger.debug(
            "derived schema for %s from %s (%d fields)",
            cls.__qualname__,
            inherited.owner,
            len(inherited),
        )

        markers = [
            (name, value)
            for name, value in list(cls.__dict__.items())
            if isinstance(value, FieldSpec)
        ]
        # Strip every marker before registering: a field may shadow register_field.
        for name, _ in markers:
            delattr(cls, name)
        for name, spec in markers:
            cls.register_field(
                name,
                default=spec.default,
                compute=spec.compute,
                nested=spec.nested,
                define=spec.define,
            )
        cls._synthesize()

    @classmethod
    def register_field(
        cls,
        name: str,
        *,
        default: Any = MISSING,
        compute: Callable[[Any], Any] | None = None,
        nested: Callable[[type], Any] | None = None,
        define: str | None = None,
    ) -> str:
        """Declare or redeclare a field on this record type.

        Redeclaring an existing field replaces its default and moves it to the
        end of the field order.

        Args:
            name:    The field name.
            default: Eager default (see ``field``).
            compute: Lazy default (see ``field``).
            nested:  Declaration block for a nested record type.
            define:  Explicit nested type name; requires ``nested``.

        Returns:
            The field name.

        Raises:
            ValueError: Invalid name, both defaults given, an eager default
                that cannot be deep-copied, or ``define`` without ``nested``.
            AmbiguousNestingError: The nested type name is already taken.
        """
        if cls is Record:
            msg = "declare fields on a subclass of Record"
            raise TypeError(msg)
        _check_field_name(name)
        if define is not None and nested is None:
            msg = "define= names a nested type and requires nested="
            raise ValueError(msg)

        try:
            descriptor = Default.from_options(default, compute)
        except ValueError as exc:
            msg = f"{cls.__qualname__}.{name}: {exc}"
            raise ValueError(msg) from exc
        if nested is not None:
            define_nested_type(
                cls,
                name,
                nested,
                define=define,
                class_options=cls.__record_options__.as_class_options(),
            )

        redeclared = name in cls.__record_schema__
        cls.__record_schema__.register(name, descriptor)
        cls._synthesize()
        logger.debug(
            "%s %s.%s (%s)",
            "redeclared" if redeclared else "registered",
            cls.__qualname__,
            name,
            descriptor.kind,
        )
        return name

    @classmethod
    def _synthesize(cls) -> None:
        """Re-derive the constructor signature and match args from the schema."""
        parameters = []
        for name, descriptor in cls.__record_schema__.items():
            if descriptor.kind is DefaultKind.REQUIRED:
                shown: Any = inspect.Parameter.empty
            elif descriptor.kind is DefaultKind.LAZY:
                shown = _COMPUTED
            else:
                shown = descriptor.value
            parameters.append(
                inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=shown)
            )
        cls.__signature__ = inspect.Signature(parameters)
        cls.__match_args__ = visible_fields(cls)

    def __init__(self, **supplied: Any) -> None:
        cls = type(self)
        protocol = ConstructionProtocol(cls.__record_schema__, cls.__record_options__)
        protocol.resolve(supplied, context=self, attributes=self.__dict__)

    # ------------------------------------------------------------------
    # Mutation guard
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        if is_frozen(self):
            msg = f"cannot assign {name!r}: {type(self).__qualname__} is frozen"
            raise FrozenViolationError(msg)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if is_frozen(self):
            msg = f"cannot delete {name!r}: {type(self).__qualname__} is frozen"
            raise FrozenViolationError(msg)
        super().__delattr__(name)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not is_record(other):
            return NotImplemented
        return equal(self, other)

    def __hash__(self) -> int:
        return record_hash(self)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in attributes(self).items())
        return f"{type(self).__qualname__}({inner})"

    def __copy__(self) -> Any:
        return duplicate(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> Any:
        return clone(self, memo)

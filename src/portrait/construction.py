"""ConstructionProtocol: resolves the attribute set of a new record instance.

Resolution runs in three steps:

1. Validate the supplied names: unknown names are rejected (or dropped, per
   ``UnknownFieldPolicy``) and every required field that was not supplied is
   reported together in one ``MissingFieldError``.  No default runs before
   validation passes.
2. Place every supplied value verbatim.  A supplied callable is stored, never
   called.
3. Walk the schema in order and resolve each remaining field through its
   ``Default``.  Lazy computations receive an ``InstanceView`` that exposes the
   values placed so far: every supplied value plus the defaults of fields
   declared earlier.

Construction never mutates the schema, so one schema can serve any number of
concurrent constructions once its type is declared.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from portrait.config import RecordOptions, UnknownFieldPolicy
from portrait.errors import FrozenViolationError, MissingFieldError, UnknownFieldError
from portrait.schema.registry import AttributeSchema

__all__ = ["ConstructionProtocol", "InstanceView", "construct"]

logger = logging.getLogger(__name__)


class InstanceView:
    """Read-only view of an instance whose fields are still being resolved.

    Field names read from the values resolved so far.  A declared field that
    has not been resolved yet raises ``AttributeError``.  Any other name
    (methods, nested types, class attributes) is looked up on the instance
    itself, so lazy defaults can call instance behaviour::

        Order.register_field("total", compute=lambda self: self.subtotal() * 2)
    """

    __slots__ = ("__attributes", "__instance", "__schema")

    def __init__(
        self,
        instance: Any,
        attributes: Mapping[str, Any],
        schema: AttributeSchema,
    ) -> None:
        object.__setattr__(self, "_InstanceView__instance", instance)
        object.__setattr__(self, "_InstanceView__attributes", attributes)
        object.__setattr__(self, "_InstanceView__schema", schema)

    def __getattr__(self, name: str) -> Any:
        if name in self.__attributes:
            return self.__attributes[name]
        if name in self.__schema:
            msg = (
                f"field {name!r} of {self.__schema.owner} is not resolved yet; "
                "declare it before the fields whose defaults read it"
            )
            raise AttributeError(msg)
        if self.__instance is None:
            msg = f"{self.__schema.owner} view has no attribute {name!r}"
            raise AttributeError(msg)
        return getattr(self.__instance, name)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"cannot assign {name!r}: instance is read-only during construction"
        raise FrozenViolationError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"cannot delete {name!r}: instance is read-only during construction"
        raise FrozenViolationError(msg)

    def __repr__(self) -> str:
        resolved = ", ".join(f"{k}={v!r}" for k, v in self.__attributes.items())
        return f"<InstanceView {self.__schema.owner}({resolved})>"


class ConstructionProtocol:
    """Turns a schema plus supplied values into a complete attribute set.

    Args:
        schema:  The schema of the type being constructed.
        options: Per-type options.  Defaults to ``RecordOptions()``.
    """

    def __init__(
        self,
        schema: AttributeSchema,
        options: RecordOptions | None = None,
    ) -> None:
        self._schema = schema
        self._options = options if options is not None else RecordOptions()

    @property
    def schema(self) -> AttributeSchema:
        return self._schema

    def resolve(
        self,
        supplied: Mapping[str, Any],
        context: Any = None,
        attributes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Resolve every schema field for one new instance.

        Args:
            supplied:   Explicitly given ``name -> value`` pairs.
            context:    The instance under construction.  Lazy defaults see it
                        through an ``InstanceView``.  May be None for a bare
                        schema.
            attributes: Mapping to fill in place as fields resolve (a record
                        passes its own ``__dict__``).  A fresh dict when None.

        Returns:
            ``name -> value`` for every schema field, in schema order.

        Raises:
            UnknownFieldError: A supplied name is not declared and the policy
                is ``RAISE``.
            MissingFieldError: Required fields were not supplied; lists all.
        """
        schema = self._schema
        sink: dict[str, Any] = {} if attributes is None else attributes

        unknown = [name for name in supplied if name not in schema]
        if unknown:
            if self._options.unknown_fields is UnknownFieldPolicy.RAISE:
                raise UnknownFieldError(unknown, owner=schema.owner)
            logger.info(
                "%s: ignoring unknown fields %s", schema.owner, ", ".join(unknown)
            )

        missing = [name for name in schema.required_fields() if name not in supplied]
        if missing:
            raise MissingFieldError(missing, owner=schema.owner)

        resolved: dict[str, Any] = {}
        for name in schema:
            if name in supplied:
                resolved[name] = sink[name] = supplied[name]

        view = InstanceView(context, resolved, schema)
        for name, descriptor in schema.items():
            if name not in resolved:
                resolved[name] = sink[name] = descriptor.resolve(view)

        return {name: resolved[name] for name in schema}


def construct(
    schema: AttributeSchema,
    supplied: Mapping[str, Any],
    context: Any = None,
    options: RecordOptions | None = None,
) -> dict[str, Any]:
    """Resolve a schema against supplied values without a record type.

    Creates a fresh ``ConstructionProtocol`` per call; see
    ``ConstructionProtocol.resolve`` for the rules.
    """
    return ConstructionProtocol(schema, options).resolve(supplied, context)

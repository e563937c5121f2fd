"""NestedComposition: declares a child record type for a field of a parent.

The child type is a sibling of the parent in the type hierarchy: it derives
from the parent's bases, not from the parent, so it starts from the schema
the parent started from, not from the parent's fields.  The declaration
block receives the new type and registers its fields like any other record
type would, nesting further if it likes.

The child is attached to the parent as a class attribute named after the
field (``camelize``) unless an explicit name is given::

    class Order(Record):
        shipping = field(
            compute=lambda self: self.Shipping(city="Lisbon"),
            nested=lambda cls: cls.register_field("city"),
        )

    Order.Shipping            # <class 'Order.Shipping'>
    Order().shipping.city     # 'Lisbon'
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable
from typing import Any

from portrait.errors import AmbiguousNestingError
from portrait.schema.naming import camelize

__all__ = ["NESTED_FIELD_ATTRIBUTE", "define_nested_type", "nested_type_name"]

logger = logging.getLogger(__name__)

# Class attribute naming the parent field a generated nested type belongs to
NESTED_FIELD_ATTRIBUTE = "__nested_field__"


def nested_type_name(field_name: str, define: str | None = None) -> str:
    """Name of the nested type for ``field_name`` (``define`` wins if given)."""
    if define is None:
        return camelize(field_name)
    if not define.isidentifier():
        msg = f"nested type name must be an identifier, got {define!r}"
        raise ValueError(msg)
    return define


def define_nested_type(
    parent: type,
    field_name: str,
    block: Callable[[type], Any],
    define: str | None = None,
    class_options: dict[str, Any] | None = None,
) -> type:
    """Create, populate and attach the nested record type for ``field_name``.

    Args:
        parent:        The record type declaring the field.
        field_name:    The field whose values are instances of the new type.
        block:         Called with the new type to declare its fields.
        define:        Explicit type name; ``camelize(field_name)`` otherwise.
        class_options: Class keywords forwarded to the new type.

    Returns:
        The new type, already set as ``parent.<name>``.

    Raises:
        AmbiguousNestingError: ``parent`` already has an attribute of that
            name that is not the nested type of the same field.
    """
    type_name = nested_type_name(field_name, define)
    existing = parent.__dict__.get(type_name)
    if existing is not None and (
        not isinstance(existing, type)
        or existing.__dict__.get(NESTED_FIELD_ATTRIBUTE) != field_name
    ):
        msg = (
            f"cannot define nested type {parent.__qualname__}.{type_name} "
            f"for field {field_name!r}: the name is already taken"
        )
        raise AmbiguousNestingError(msg)

    def exec_body(namespace: dict[str, Any]) -> None:
        namespace["__module__"] = parent.__module__
        namespace["__qualname__"] = f"{parent.__qualname__}.{type_name}"
        namespace[NESTED_FIELD_ATTRIBUTE] = field_name

    child = types.new_class(type_name, parent.__bases__, class_options or {}, exec_body)
    block(child)
    setattr(parent, type_name, child)
    logger.debug(
        "defined nested type %s for field %r", child.__qualname__, field_name
    )
    return child

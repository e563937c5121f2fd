"""Positional and keyed decomposition of records.

Both read values through the field accessors, so a subtype that overrides an
accessor is honoured.  Fields whose name starts with an underscore are not
public and are left out silently.

The positional form also backs ``__match_args__``, so class patterns in
``match`` statements line up with ``deconstruct``::

    match point:
        case Point(x, y):
            ...
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from portrait.structural import schema_of

__all__ = ["deconstruct", "deconstruct_keys", "is_visible", "visible_fields"]


def is_visible(name: str) -> bool:
    """True when ``name`` is a public field name."""
    return not name.startswith("_")


def visible_fields(obj: Any) -> tuple[str, ...]:
    """Public field names of a record type or instance, in schema order."""
    return tuple(name for name in schema_of(obj).fields() if is_visible(name))


def deconstruct(record: Any) -> tuple[Any, ...]:
    """Return the public field values in schema order."""
    return tuple(getattr(record, name) for name in visible_fields(record))


def deconstruct_keys(record: Any, keys: Iterable[str] | None = None) -> dict[str, Any]:
    """Return ``name -> value`` for public fields, optionally filtered.

    Args:
        record: A record instance.
        keys:   Names to keep, in the order wanted.  None keeps every public
                field in schema order.  Unknown and non-public names are
                ignored; an empty iterable yields an empty dict.
    """
    visible = visible_fields(record)
    if keys is None:
        wanted: Iterable[str] = visible
    else:
        allowed = set(visible)
        wanted = dict.fromkeys(k for k in keys if k in allowed)
    return {name: getattr(record, name) for name in wanted}

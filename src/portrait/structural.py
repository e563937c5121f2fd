"""Structural operations defined purely over a record type's schema.

Equality, hashing, freezing, duplication and cloning never look at anything
but the declared fields:

- ``equal``     : strict, same concrete type and equal field values (``==``)
- ``alike``     : lenient, equal field names and values, any type
- ``record_hash``: hash of the concrete type plus the ordered field values
- ``freeze``    : mark frozen and freeze each field value one level deep
- ``duplicate`` : unfrozen copy, each field value ``copy.copy``'d (``copy.copy``)
- ``clone``     : copy that keeps the frozen flag, each field value
                  ``copy.deepcopy``'d (``copy.deepcopy``)

Strict equality implies equal hashes and lenient equality.  Lenient equality
is deliberately not what ``==`` does: two ``alike`` records of different types
hash differently, and Python requires ``a == b`` to imply equal hashes.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from portrait.frozen import freeze_value, hash_key

if TYPE_CHECKING:
    from portrait.schema.registry import AttributeSchema

__all__ = [
    "FROZEN_FLAG",
    "SCHEMA_ATTRIBUTE",
    "alike",
    "attributes",
    "clone",
    "duplicate",
    "equal",
    "fields",
    "freeze",
    "is_frozen",
    "is_record",
    "record_hash",
    "schema_of",
]

logger = logging.getLogger(__name__)

# Class attribute holding a record type's own AttributeSchema
SCHEMA_ATTRIBUTE = "__record_schema__"

# Instance __dict__ key holding the frozen flag (not a field, never compared)
FROZEN_FLAG = "__record_frozen__"


def schema_of(obj: Any) -> AttributeSchema:
    """Return the schema of a record type or record instance.

    Raises:
        TypeError: If ``obj`` is neither.
    """
    owner = obj if isinstance(obj, type) else type(obj)
    schema = getattr(owner, SCHEMA_ATTRIBUTE, None)
    if schema is None:
        msg = f"{owner.__qualname__} is not a record type"
        raise TypeError(msg)
    return schema


def is_record(obj: Any) -> bool:
    """True for record instances (not record types)."""
    return not isinstance(obj, type) and hasattr(type(obj), SCHEMA_ATTRIBUTE)


def fields(obj: Any) -> tuple[str, ...]:
    """Field names of a record type or instance, in schema order."""
    return schema_of(obj).fields()


def attributes(record: Any) -> dict[str, Any]:
    """Return ``name -> value`` for every field, read through the accessors."""
    return {name: getattr(record, name) for name in schema_of(record).fields()}


def _stored(record: Any) -> dict[str, Any]:
    """Field values as stored, bypassing any overridden accessor."""
    state = vars(record)
    return {name: state[name] for name in schema_of(record).fields()}


# ----------------------------------------------------------------------
# Equality and hashing
# ----------------------------------------------------------------------


def equal(left: Any, right: Any) -> bool:
    """Strict equality: identical concrete type and equal field values.

    Non-records fall back to ordinary ``==``.
    """
    if not (is_record(left) and is_record(right)):
        return bool(left == right)
    if type(left) is not type(right):
        return False
    return attributes(left) == attributes(right)


def alike(left: Any, right: Any) -> bool:
    """Lenient equality: same field names and values regardless of type.

    Nested records are compared with ``alike`` as well, including records held
    in lists, tuples and dict values.  Any other value is compared with ``==``.
    """
    for sequence in (list, tuple):
        if isinstance(left, sequence) and isinstance(right, sequence):
            return len(left) == len(right) and all(map(alike, left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            alike(value, right[key]) for key, value in left.items()
        )
    if not (is_record(left) and is_record(right)):
        return bool(left == right)
    left_attrs = attributes(left)
    right_attrs = attributes(right)
    if left_attrs.keys() != right_attrs.keys():
        return False
    return all(alike(value, right_attrs[name]) for name, value in left_attrs.items())


def record_hash(record: Any) -> int:
    """Hash consistent with ``equal``: type identity plus ordered values."""
    values = tuple((name, hash_key(value)) for name, value in attributes(record).items())
    return hash((type(record), values))


# ----------------------------------------------------------------------
# Freezing
# ----------------------------------------------------------------------


def is_frozen(record: Any) -> bool:
    schema_of(record)
    return bool(vars(record).get(FROZEN_FLAG, False))


def freeze(record: Any) -> Any:
    """Freeze ``record`` and each of its field values, then return it.

    Field values are frozen one level deep: containers are swapped for their
    frozen counterparts and nested records are frozen in turn.  Freezing an
    already frozen record is a no-op.

    Only types ``freeze_value`` knows about are frozen: list, dict, set,
    bytearray and records.  Instances of other classes are left as they are,
    since Python has no generic way to freeze an object.  Register a handler
    with ``freeze_value.register`` to freeze a type of your own::

        @freeze_value.register
        def _(value: Money) -> FrozenMoney:
            return FrozenMoney(value.amount)
    """
    if is_frozen(record):
        return record
    state = vars(record)
    # Flag first so reference cycles between records terminate.
    state[FROZEN_FLAG] = True
    for name, value in _stored(record).items():
        state[name] = freeze(value) if is_record(value) else freeze_value(value)
    logger.debug("froze %s", type(record).__qualname__)
    return record


# ----------------------------------------------------------------------
# Copying
# ----------------------------------------------------------------------


def _blank(record: Any) -> Any:
    cls = type(record)
    return cls.__new__(cls)


def duplicate(record: Any) -> Any:
    """Return an unfrozen copy whose field values are shallow copies.

    Mutating a container held by the copy never affects the source.  Nested
    records are duplicated one level only.
    """
    result = _blank(record)
    state = vars(result)
    state.update(vars(record))
    state.pop(FROZEN_FLAG, None)
    for name, value in _stored(record).items():
        state[name] = copy.copy(value)
    return result


def clone(record: Any, memo: dict[int, Any] | None = None) -> Any:
    """Return a deep copy that keeps the frozen flag of the source.

    Field values are deep-copied, so frozen containers stay frozen.
    """
    if memo is None:
        memo = {}
    result = _blank(record)
    memo[id(record)] = result
    state = vars(result)
    for key, value in vars(record).items():
        state[key] = copy.deepcopy(value, memo)
    return result

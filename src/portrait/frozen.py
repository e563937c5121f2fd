"""Frozen containers used when a record is frozen.

Freezing a record replaces each attribute value by its frozen counterpart:

- list      -> FrozenList
- dict      -> FrozenDict
- set       -> FrozenSet
- bytearray -> bytes

The frozen containers subclass the builtins, so they compare equal to, and
read exactly like, the originals.  Every mutating method raises
``FrozenViolationError``.  ``copy.copy`` hands back a plain mutable builtin;
``copy.deepcopy`` keeps the container frozen.

``freeze_value`` is a ``functools.singledispatch`` function, so callers can
register their own types.
"""

from __future__ import annotations

import copy
from functools import singledispatch
from typing import Any, NoReturn

from portrait.errors import FrozenViolationError

__all__ = ["FrozenDict", "FrozenList", "FrozenSet", "freeze_value", "hash_key"]


def _refuse(self: Any, *args: Any, **kwargs: Any) -> NoReturn:
    msg = f"cannot modify frozen {type(self).__name__}"
    raise FrozenViolationError(msg)


class FrozenList(list):  # type: ignore[type-arg]
    """A list that refuses mutation."""

    __slots__ = ()

    append = extend = insert = remove = pop = clear = sort = reverse = _refuse
    __setitem__ = __delitem__ = __iadd__ = __imul__ = _refuse

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(hash_key(self))

    def __copy__(self) -> list[Any]:
        return list(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> FrozenList:
        result = FrozenList(copy.deepcopy(list(self), memo))
        memo[id(self)] = result
        return result

    def __reduce__(self) -> tuple[Any, ...]:
        return (FrozenList, (list(self),))

    def __repr__(self) -> str:
        return f"FrozenList({list.__repr__(self)})"


class FrozenDict(dict):  # type: ignore[type-arg]
    """A dict that refuses mutation."""

    __slots__ = ()

    clear = pop = popitem = setdefault = update = _refuse
    __setitem__ = __delitem__ = __ior__ = _refuse

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(hash_key(self))

    def __copy__(self) -> dict[Any, Any]:
        return dict(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> FrozenDict:
        result = FrozenDict(copy.deepcopy(dict(self), memo))
        memo[id(self)] = result
        return result

    def __reduce__(self) -> tuple[Any, ...]:
        return (FrozenDict, (dict(self),))

    def __repr__(self) -> str:
        return f"FrozenDict({dict.__repr__(self)})"


class FrozenSet(set):  # type: ignore[type-arg]
    """A set that refuses mutation.

    Unlike ``frozenset`` it raises ``FrozenViolationError`` rather than
    ``AttributeError`` when ``add`` and friends are called.
    """

    __slots__ = ()

    add = discard = remove = pop = clear = update = _refuse
    difference_update = intersection_update = symmetric_difference_update = _refuse
    __ior__ = __iand__ = __isub__ = __ixor__ = _refuse

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(frozenset(self))

    def __copy__(self) -> set[Any]:
        return set(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> FrozenSet:
        result = FrozenSet(copy.deepcopy(set(self), memo))
        memo[id(self)] = result
        return result

    def __reduce__(self) -> tuple[Any, ...]:
        return (FrozenSet, (set(self),))

    def __repr__(self) -> str:
        return f"FrozenSet({set.__repr__(self)})"


@singledispatch
def freeze_value(value: Any) -> Any:
    """Return the frozen counterpart of ``value`` (``value`` itself by default).

    Objects of unregistered types are returned unchanged and stay mutable.
    """
    return value


@freeze_value.register
def _(value: list) -> FrozenList:  # type: ignore[type-arg]
    return value if isinstance(value, FrozenList) else FrozenList(value)


@freeze_value.register
def _(value: dict) -> FrozenDict:  # type: ignore[type-arg]
    return value if isinstance(value, FrozenDict) else FrozenDict(value)


@freeze_value.register
def _(value: set) -> FrozenSet:  # type: ignore[type-arg]
    return value if isinstance(value, FrozenSet) else FrozenSet(value)


@freeze_value.register
def _(value: bytearray) -> bytes:
    return bytes(value)


def hash_key(value: Any) -> Any:
    """Map ``value`` to a hashable key that is equal whenever values are equal.

    Lists and tuples become tuples, sets become frozensets and dicts become
    frozensets of ``(key, hash_key(value))`` pairs, recursively.  Anything else
    is returned unchanged and must be hashable itself.
    """
    if isinstance(value, (list, tuple)):
        return tuple(hash_key(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    if isinstance(value, dict):
        return frozenset((k, hash_key(v)) for k, v in value.items())
    return value

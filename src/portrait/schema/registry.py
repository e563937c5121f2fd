"""AttributeSchema: the ordered field registry owned by one record type.

Field order is insertion order, except that registering a name that already
exists moves it to the end.  That lets a subtype push a field behind another
one its lazy default depends on::

    schema.register("foo", Default.required())
    schema.register("bar", Default.required())
    schema.register("foo", Default.lazy(lambda self: self.bar))
    schema.fields()  # ("bar", "foo")
"""

from __future__ import annotations

from collections.abc import Iterator

from portrait.errors import UnknownFieldError
from portrait.schema.defaults import Default

__all__ = ["AttributeSchema"]


class AttributeSchema:
    """Ordered mapping of field name to ``Default``.

    Each record type owns exactly one schema.  Derived types get an
    independent copy through ``duplicate()``; they never share the parent's.

    Args:
        owner: Name used in error messages (normally the record type's
            qualified name).
    """

    __slots__ = ("_entries", "owner")

    def __init__(self, owner: str = "") -> None:
        self.owner = owner
        self._entries: dict[str, Default] = {}

    def register(self, name: str, descriptor: Default) -> None:
        """Insert ``name``, or replace it and move it to the end."""
        self._entries.pop(name, None)
        self._entries[name] = descriptor

    def duplicate(self, owner: str | None = None) -> AttributeSchema:
        """Return an independent schema with structurally copied defaults."""
        clone = AttributeSchema(self.owner if owner is None else owner)
        for name, descriptor in self._entries.items():
            clone._entries[name] = descriptor.duplicate()
        return clone

    def fields(self) -> tuple[str, ...]:
        """Field names in declared order."""
        return tuple(self._entries)

    def lookup(self, name: str) -> Default:
        """Return the descriptor for ``name``.

        Raises:
            UnknownFieldError: If ``name`` is not declared.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownFieldError([name], owner=self.owner) from None

    def required_fields(self) -> tuple[str, ...]:
        return tuple(n for n, d in self._entries.items() if d.is_required)

    def items(self) -> Iterator[tuple[str, Default]]:
        return iter(self._entries.items())

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{n}={d.kind}" for n, d in self._entries.items())
        return f"AttributeSchema({self.owner!r}, [{inner}])"

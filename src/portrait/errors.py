"""Exception hierarchy for portrait.

Every error raised by the library derives from ``PortraitError`` and also from
the builtin exception a caller would expect for the same mistake, so plain
``except TypeError`` / ``except AttributeError`` handlers keep working:

- MissingFieldError     (TypeError)      : required fields absent at construction
- UnknownFieldError     (LookupError)    : name not present in a schema
- FrozenViolationError  (AttributeError) : mutation of a frozen record or value
- AmbiguousNestingError                  : nested type name collides on the host
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "AmbiguousNestingError",
    "FrozenViolationError",
    "MissingFieldError",
    "PortraitError",
    "UnknownFieldError",
]


class PortraitError(Exception):
    """Base class for all portrait errors."""


class MissingFieldError(PortraitError, TypeError):
    """One or more required fields were not supplied.

    Attributes:
        fields: Every missing field name, in schema order.
    """

    def __init__(self, fields: Iterable[str], owner: str = "") -> None:
        self.fields: tuple[str, ...] = tuple(fields)
        self.owner = owner
        names = ", ".join(self.fields)
        prefix = f"{owner}: " if owner else ""
        plural = "s" if len(self.fields) != 1 else ""
        super().__init__(f"{prefix}missing required field{plural}: {names}")


class UnknownFieldError(PortraitError, LookupError):
    """A supplied or looked-up name is not declared in the schema.

    Attributes:
        fields: The offending names, in the order they were given.
    """

    def __init__(self, fields: Iterable[str], owner: str = "") -> None:
        self.fields: tuple[str, ...] = tuple(fields)
        self.owner = owner
        names = ", ".join(self.fields)
        prefix = f"{owner}: " if owner else ""
        plural = "s" if len(self.fields) != 1 else ""
        super().__init__(f"{prefix}unknown field{plural}: {names}")


class FrozenViolationError(PortraitError, AttributeError):
    """Mutation attempted on a frozen record or a value frozen with it."""


class AmbiguousNestingError(PortraitError):
    """A nested record type cannot be attached under the requested name."""

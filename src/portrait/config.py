"""RecordOptions and UnknownFieldPolicy for per-type record configuration.

RecordOptions is a frozen (immutable) dataclass holding the options a record
type is declared with.  Options are passed as class keywords and inherited by
subtypes and nested types::

    class Point(Record, unknown_fields="ignore"):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum, auto
from typing import Any


class UnknownFieldPolicy(StrEnum):
    """What construction does with a supplied name the schema does not declare.

    - RAISE:  Fail with UnknownFieldError (default).
    - IGNORE: Drop the value and log it at INFO level.
    """

    RAISE = auto()
    IGNORE = auto()


@dataclass(frozen=True, slots=True)
class RecordOptions:
    """Immutable options for one record type.

    Attributes:
        unknown_fields: Policy for supplied names missing from the schema.
    """

    unknown_fields: UnknownFieldPolicy = UnknownFieldPolicy.RAISE

    def __post_init__(self) -> None:
        try:
            policy = UnknownFieldPolicy(self.unknown_fields)
        except ValueError:
            allowed = ", ".join(p.value for p in UnknownFieldPolicy)
            msg = f"unknown_fields must be one of {allowed}, got {self.unknown_fields!r}"
            raise ValueError(msg) from None
        # Accept plain strings from class keywords; store the enum member.
        object.__setattr__(self, "unknown_fields", policy)

    def as_class_options(self) -> dict[str, Any]:
        """The options as class keywords, for declaring a related type."""
        return {name: getattr(self, name) for name in self.__slots__}

    def merged(self, overrides: dict[str, Any]) -> RecordOptions:
        """Return a copy with ``overrides`` applied (used when subclassing)."""
        if not overrides:
            return self
        unexpected = set(overrides) - set(self.__slots__)
        if unexpected:
            msg = f"unexpected record options: {', '.join(sorted(unexpected))}"
            raise TypeError(msg)
        return replace(self, **overrides)

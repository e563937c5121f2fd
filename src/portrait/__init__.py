"""portrait - declarative value objects built from an ordered field schema."""

from __future__ import annotations

from portrait.config import RecordOptions, UnknownFieldPolicy
from portrait.construction import ConstructionProtocol, InstanceView, construct
from portrait.decomposition import deconstruct, deconstruct_keys
from portrait.errors import (
    AmbiguousNestingError,
    FrozenViolationError,
    MissingFieldError,
    PortraitError,
    UnknownFieldError,
)
from portrait.frozen import FrozenDict, FrozenList, FrozenSet
from portrait.record import Record, field
from portrait.schema import MISSING, AttributeSchema, Default, DefaultKind, camelize
from portrait.structural import (
    alike,
    attributes,
    clone,
    duplicate,
    fields,
    freeze,
    is_frozen,
    is_record,
    schema_of,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "MISSING",
    "AmbiguousNestingError",
    "AttributeSchema",
    "ConstructionProtocol",
    "Default",
    "DefaultKind",
    "FrozenDict",
    "FrozenList",
    "FrozenSet",
    "FrozenViolationError",
    "InstanceView",
    "MissingFieldError",
    "PortraitError",
    "Record",
    "RecordOptions",
    "UnknownFieldError",
    "UnknownFieldPolicy",
    "alike",
    "attributes",
    "camelize",
    "clone",
    "construct",
    "deconstruct",
    "deconstruct_keys",
    "duplicate",
    "field",
    "fields",
    "freeze",
    "is_frozen",
    "is_record",
    "schema_of",
]

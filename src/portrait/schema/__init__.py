"""Schema subpackage: the per-type field registry and its default descriptors.

Re-exports the public API for the schema module:
- AttributeSchema: ordered field name -> Default registry owned by one type
- Default: REQUIRED / EAGER / LAZY descriptor for a single field
- DefaultKind: StrEnum of the three descriptor kinds
- MISSING: sentinel for "no default given"
- camelize: snake_case field name -> CamelCase nested type name
"""

from portrait.schema.defaults import MISSING, Default, DefaultKind
from portrait.schema.naming import camelize
from portrait.schema.registry import AttributeSchema

__all__ = ["MISSING", "AttributeSchema", "Default", "DefaultKind", "camelize"]

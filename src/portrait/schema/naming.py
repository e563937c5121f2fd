"""camelize: derives a nested type name from a snake_case field name.

Examples:
- "nested_class"   -> "NestedClass"
- "nested_class_1" -> "NestedClass1"
- "address__line"  -> "AddressLine"   (separator runs collapse)
- "_private"       -> "Private"       (leading underscores dropped)

Results are memoized in a bounded LRU cache: nested types are declared once
per program start, but the same field names recur across many record types.
"""

from __future__ import annotations

import re
import threading

from cachetools import LRUCache, cached

__all__ = ["camelize"]

# Start of string or a run of underscores, followed by the character to upcase
_WORD_START = re.compile(r"(?:^|_+)([^_])")


@cached(cache=LRUCache(maxsize=512), lock=threading.Lock())
def camelize(identifier: str) -> str:
    """Convert a snake_case identifier to a CamelCase type name.

    Args:
        identifier: A field name.

    Returns:
        The CamelCase name.

    Raises:
        ValueError: If the result is not a valid Python identifier.
    """
    name = _WORD_START.sub(lambda m: m.group(1).upper(), identifier)
    if not name.isidentifier():
        msg = f"cannot derive a type name from {identifier!r}"
        raise ValueError(msg)
    return name

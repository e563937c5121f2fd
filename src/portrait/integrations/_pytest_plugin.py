"""pytest plugin for portrait.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from portrait import alike, attributes, is_record


def _describe_difference(actual: Any, expected: Any) -> list[str]:
    """One line per mismatch between two records, in field order."""
    lines: list[str] = []
    if type(actual) is not type(expected):
        lines.append(
            f"  type: {type(actual).__qualname__} != {type(expected).__qualname__}"
        )
    actual_attrs = attributes(actual)
    expected_attrs = attributes(expected)
    for name in dict.fromkeys([*actual_attrs, *expected_attrs]):
        if name not in expected_attrs:
            lines.append(f"  {name}: unexpected field (actual={actual_attrs[name]!r})")
        elif name not in actual_attrs:
            lines.append(f"  {name}: missing field (expected={expected_attrs[name]!r})")
        elif actual_attrs[name] != expected_attrs[name]:
            lines.append(
                f"  {name}: {actual_attrs[name]!r} != {expected_attrs[name]!r}"
            )
    return lines


@pytest.fixture(scope="session")
def assert_records_equal() -> Any:
    """Fixture that returns a callable record equality asserter.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_point(assert_records_equal):
            assert_records_equal(Point(x=1, y=2), Point(x=1, y=2))

        def test_shape_only(assert_records_equal):
            assert_records_equal(Point(x=1, y=2), Vector(x=1, y=2), strict=False)

    Returns:
        A callable ``_assert(actual, expected, strict=True) -> None`` that raises
        ``AssertionError`` listing each differing field when the records differ.
    """

    def _assert(actual: Any, expected: Any, strict: bool = True) -> None:
        """Assert that two records are equal.

        Args:
            actual:   The record produced by the code under test.
            expected: The reference record.
            strict:   When True, compare with ``==`` (same type required).
                      When False, compare with ``alike`` (any type).

        Raises:
            AssertionError: When the records differ, or either is not a record.
        """
        for role, value in (("actual", actual), ("expected", expected)):
            if not is_record(value):
                raise AssertionError(f"{role} is not a record: {value!r}")

        same = actual == expected if strict else alike(actual, expected)
        if not same:
            mode = "strict" if strict else "lenient"
            details = "\n".join(_describe_difference(actual, expected))
            raise AssertionError(
                f"records not equal ({mode}):\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}\n"
                f"{details}"
            )

    return _assert

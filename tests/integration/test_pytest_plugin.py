"""Integration tests for the portrait pytest plugin.

These tests verify that the assert_records_equal fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require portrait to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from portrait import Record, field


class Point(Record):
    x = field()
    y = field(default=0)


class Vector(Record):
    x = field()
    y = field(default=0)


class Point3(Record):
    x = field()
    y = field()
    z = field()


def test_fixture_passes_equal_records(assert_records_equal: Any) -> None:
    """Records of the same type with equal fields pass."""
    assert_records_equal(Point(x=1, y=2), Point(x=1, y=2))


def test_fixture_fails_on_field_difference(assert_records_equal: Any) -> None:
    """A differing field is reported by name with both values."""
    with pytest.raises(AssertionError, match=r"y: 2 != 3"):
        assert_records_equal(Point(x=1, y=2), Point(x=1, y=3))


def test_fixture_strict_requires_same_type(assert_records_equal: Any) -> None:
    """Strict mode reports a type mismatch even when fields agree."""
    with pytest.raises(AssertionError, match=r"type: Point != Vector"):
        assert_records_equal(Point(x=1), Vector(x=1))


def test_fixture_lenient_ignores_type(assert_records_equal: Any) -> None:
    """strict=False compares field names and values only."""
    assert_records_equal(Point(x=1), Vector(x=1), strict=False)

    with pytest.raises(AssertionError, match=r"records not equal \(lenient\)"):
        assert_records_equal(Point(x=1), Vector(x=2), strict=False)


def test_fixture_reports_field_set_differences(assert_records_equal: Any) -> None:
    """Fields present on only one side are listed."""
    with pytest.raises(AssertionError) as exc_info:
        assert_records_equal(Point3(x=1, y=2, z=3), Point(x=1, y=2), strict=False)

    error_message = str(exc_info.value)
    assert "z: unexpected field (actual=3)" in error_message
    assert "actual:   Point3(x=1, y=2, z=3)" in error_message
    assert "expected: Point(x=1, y=2)" in error_message


def test_fixture_rejects_non_records(assert_records_equal: Any) -> None:
    """Plain values are not accepted."""
    with pytest.raises(AssertionError, match=r"expected is not a record"):
        assert_records_equal(Point(x=1), {"x": 1})


def test_fixture_returns_callable(assert_records_equal: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_records_equal), (
        "assert_records_equal fixture must return a callable, not a direct value"
    )


def test_plugin_discovery() -> None:
    """Verify assert_records_equal appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_records_equal" in result.stdout, (
        f"assert_records_equal not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )

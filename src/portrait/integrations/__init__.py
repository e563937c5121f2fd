"""Integrations subpackage for portrait.

Contains integration adapters for external tools:
- pytest plugin (auto-discovered via the pytest11 entry point), providing the
  ``assert_records_equal`` fixture
"""

from __future__ import annotations

__all__: list[str] = []

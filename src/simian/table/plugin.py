"""Syrupy snapshot extension and pytest hooks for rendered tables.

This module provides:
- TableSnapshotExtension: A syrupy extension for .table snapshot files
- pytest_assertrepr_compare: Line diff output for RenderedTable comparisons
- table_snapshot: Pre-configured snapshot fixture

Load it from a conftest with ``pytest_plugins = ["simian.table.plugin"]``.
"""

from __future__ import annotations

import difflib
import typing as t

import pytest
from syrupy.assertion import SnapshotAssertion
from syrupy.extensions.single_file import SingleFileSnapshotExtension, WriteMode

from simian.table.core import RenderedTable


class TableSnapshotExtension(SingleFileSnapshotExtension):
    """Single-file extension for table snapshots (.table files).

    Each snapshot is stored in its own file so box-drawing output diffs
    cleanly.

    Notes
    -----
    This extension serializes:
    - RenderedTable objects → their text
    - Other types → str() representation
    """

    _write_mode = WriteMode.TEXT
    file_extension = "table"

    def serialize(
        self,
        data: t.Any,
        *,
        exclude: t.Any = None,
        include: t.Any = None,
        matcher: t.Any = None,
    ) -> str:
        """Serialize data to its rendered text."""
        if isinstance(data, RenderedTable):
            return data.text
        return str(data)


def pytest_assertrepr_compare(
    config: pytest.Config,
    op: str,
    left: t.Any,
    right: t.Any,
) -> list[str] | None:
    """Show a line diff when two RenderedTable objects differ.

    Returns
    -------
    list[str] | None
        List of explanation lines, or None to use default behavior.
    """
    if not isinstance(left, RenderedTable) or not isinstance(right, RenderedTable):
        return None
    if op != "==":
        return None

    lines = ["RenderedTable comparison failed:"]
    if len(left.lines) != len(right.lines):
        lines.append(f"  rows: {len(left.lines)} != {len(right.lines)}")

    lines.append("")
    lines.append("Content diff:")
    lines.extend(difflib.ndiff(right.lines, left.lines))
    return lines


@pytest.fixture
def table_snapshot(snapshot: SnapshotAssertion) -> SnapshotAssertion:
    """Snapshot fixture configured with TableSnapshotExtension.

    Examples
    --------
    >>> def test_listing(table_snapshot):
    ...     table = TableBuilder().render([TableRow.values("a")])
    ...     assert table == table_snapshot
    """
    return snapshot.use_extension(TableSnapshotExtension)

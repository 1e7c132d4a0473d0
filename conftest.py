"""Conftest.py (root-level).

Makes fixtures available to pytest's doctest plugin and loads the table
snapshot plugin, which pytest only accepts from the root conftest.

See "pytest_plugins in non-top-level conftest files" in
https://docs.pytest.org/en/stable/deprecations.html
"""

from __future__ import annotations

import typing as t

import pytest
from _pytest.doctest import DoctestItem

from simian.table import TableBuilder, TableRow

pytest_plugins = ["simian.table.plugin"]


@pytest.fixture(autouse=True)
def add_doctest_fixtures(
    request: pytest.FixtureRequest,
    doctest_namespace: dict[str, t.Any],
) -> None:
    """Configure doctest fixtures for pytest-doctest."""
    if isinstance(request._pyfuncitem, DoctestItem):
        doctest_namespace["TableBuilder"] = TableBuilder
        doctest_namespace["TableRow"] = TableRow

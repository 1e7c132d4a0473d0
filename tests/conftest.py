"""Fixtures for simian's test suite."""

from __future__ import annotations

import itertools
import sys
import textwrap
import typing as t

import pytest

from tests.helpers import FakeRunner

if t.TYPE_CHECKING:
    import pathlib
    from collections.abc import Callable


@pytest.fixture
def runner() -> FakeRunner:
    """Return a fake simctl runner backed by :data:`SIMCTL_LIST`."""
    return FakeRunner()


@pytest.fixture
def script(tmp_path: pathlib.Path) -> Callable[[str], list[str]]:
    """Return a factory writing Python source to a file, returning its argv."""
    counter = itertools.count()

    def make(source: str) -> list[str]:
        path = tmp_path / f"child_{next(counter)}.py"
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return [sys.executable, str(path)]

    return make

"""simian, a helper for querying and controlling simulator devices."""

from __future__ import annotations

from .__about__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __package_name__,
    __title__,
    __version__,
)
from .shell import Shell, ShellResult, execute_sync, run_process
from .simctl import SimctlHelper
from .styles import StyleConfig
from .table import TableBuilder, TableRow, build_table

__all__ = (
    "Shell",
    "ShellResult",
    "SimctlHelper",
    "StyleConfig",
    "TableBuilder",
    "TableRow",
    "__author__",
    "__copyright__",
    "__description__",
    "__license__",
    "__package_name__",
    "__title__",
    "__version__",
    "build_table",
    "execute_sync",
    "run_process",
)

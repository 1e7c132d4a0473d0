"""Provide exceptions used by simian.

simian.exc
~~~~~~~~~~

Notes
-----
Process launch and exit failures are never raised by :mod:`simian.shell`,
they are returned as exit codes. The exceptions below cover the simulator
control layer and precondition violations in :mod:`simian.table`.
"""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from collections.abc import Sequence


class SimianError(Exception):
    """Base exception for all simian errors."""


class SimctlCommandFailed(SimianError):
    """Raised when ``simctl`` ran but exited with a non-zero status."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stderr: Sequence[str] | None = None,
        *args: object,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = list(stderr or [])
        err = "\n".join(self.stderr)
        detail = (
            f"stderr: {err}"
            if err
            else "Unknown error (no error output was provided by simctl)"
        )
        super().__init__(f"`{command}` failed with status {returncode}\n\n{detail}")


class SimctlDecodeError(SimianError):
    """Raised when ``simctl`` output does not match the expected JSON schema."""


class RuntimeNotFound(SimianError):
    """Raised when no runtime matches the requested platform version."""

    def __init__(self, platform: str, *args: object) -> None:
        self.platform = platform
        super().__init__(f"No runtimes found for platform version '{platform}'")


class DeviceNotFound(SimianError):
    """Raised when no available device matches the requested key and value."""

    def __init__(
        self,
        key: str,
        value: str,
        platform: str,
        candidates: Sequence[str] = (),
        *args: object,
    ) -> None:
        self.key = key
        self.value = value
        self.platform = platform
        self.candidates = list(candidates)
        msg = (
            f"No devices found for '{key}' -> '{value}' "
            f"and platform version '{platform}'."
        )
        names = [f" - {name}" for name in self.candidates if name.strip()]
        if names:
            msg += (
                "\nCheck the name you have provided matches one of the "
                "following devices for the platform:\n" + "\n".join(names)
            )
        super().__init__(msg)


class DeviceAlreadyBooted(SimianError):
    """Raised when booting a device that is already booted."""


class TableError(SimianError, ValueError):
    """Base exception for malformed table input.

    These are programming errors in the caller, not runtime conditions.
    """


class EmptyTable(TableError):
    """Raised when a table has no data rows to measure."""

    def __init__(self, *args: object) -> None:
        super().__init__("Table requires at least one data row")


class RaggedTableRows(TableError):
    """Raised when data rows do not share the same number of cells."""

    def __init__(self, row_index: int, expected: int, actual: int) -> None:
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row_index} has {actual} cells, expected {expected} "
            "(column count is fixed by the first data row)",
        )


class UnknownGlyphSet(TableError):
    """Raised when a glyph set name is not registered."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        msg = f"Unknown glyph set: {name!r}"
        if available:
            msg += f" (choose from: {', '.join(available)})"
        super().__init__(msg)

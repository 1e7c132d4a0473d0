"""Line framing for chunked process output.

Note
----
This is an internal API not covered by versioning policy.

Examples
--------
>>> framer = LineFramer()
>>> framer.feed("ab")
[]
>>> framer.feed("cd\\nef")
['abcd']
>>> framer.pending
'ef'
>>> framer.flush()
'ef'
>>> framer.flush() is None
True
"""

from __future__ import annotations

import re

from simian.constants import STDERR_TERMINATORS, STDOUT_TERMINATORS


class LineFramer:
    """Reassemble arbitrary text chunks into complete lines.

    Text that has not been terminated yet is kept as the pending tail and
    prefixed to the next chunk. The tail never contains a terminator.

    Parameters
    ----------
    terminators : str
        Every character in this string ends a line.

    Examples
    --------
    Carriage returns only split when configured:

    >>> LineFramer("\\n").feed("50%\\r100%\\n")
    ['50%\\r100%']
    >>> LineFramer("\\n\\r").feed("50%\\r100%\\n")
    ['50%', '100%']
    """

    def __init__(self, terminators: str = STDOUT_TERMINATORS) -> None:
        if not terminators:
            msg = "terminators must not be empty"
            raise ValueError(msg)
        self.terminators = terminators
        self._pattern = re.compile(f"[{re.escape(terminators)}]")
        self._pending = ""

    def __repr__(self) -> str:
        """Representation of :class:`LineFramer`."""
        return f"{self.__class__.__name__}({self.terminators!r})"

    @property
    def pending(self) -> str:
        """Text received but not yet terminated."""
        return self._pending

    def feed(self, chunk: str) -> list[str]:
        """Add a chunk and return the lines it completed, in order.

        Parameters
        ----------
        chunk : str
            Decoded text, split anywhere.

        Returns
        -------
        list[str]
            Completed lines without their terminators.
        """
        if not chunk:
            return []

        *lines, self._pending = self._pattern.split(self._pending + chunk)
        return lines

    def flush(self) -> str | None:
        """Return the pending tail as a final line and clear it.

        Returns
        -------
        str, optional
            The unterminated tail, or ``None`` when nothing is pending.
        """
        tail, self._pending = self._pending, ""
        return tail or None


def stdout_framer() -> LineFramer:
    """Return a framer that splits on newlines only."""
    return LineFramer(STDOUT_TERMINATORS)


def stderr_framer() -> LineFramer:
    """Return a framer that splits on newlines and carriage returns."""
    return LineFramer(STDERR_TERMINATORS)

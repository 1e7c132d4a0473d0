"""Run external commands and capture their output line by line.

simian.shell
~~~~~~~~~~~~

A :class:`Shell` spawns one child process and reads its standard output and
standard error on two reader threads. Each stream has its own
:class:`~simian._internal.framer.LineFramer`. Completed lines are delivered
to callbacks in batches, as they arrive. Every framer update, log append and
callback for one process happens under a single per-instance reentrant lock,
so the two streams never race on shared state and callbacks may read
:attr:`Shell.result`. Callbacks must not call :meth:`Shell.wait`, which only
returns after the termination callback has finished.

Launch failures are reported through :data:`~simian.constants.LAUNCH_FAILURE_CODE`
rather than raised. Callers tell "the tool ran and failed" apart from "the
tool could not run" by checking the returned code.

Examples
--------
>>> result = execute_sync("echo hello world")
>>> result.succeeded
True
>>> result.stdout
['hello world']
"""

from __future__ import annotations

import codecs
import dataclasses
import logging
import os
import pathlib
import subprocess
import threading
import typing as t

from simian._internal.framer import LineFramer, stderr_framer, stdout_framer
from simian.constants import EXTRA_SEARCH_PATH, LAUNCH_FAILURE_CODE, READ_CHUNK_SIZE

if t.TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from simian._internal.types import LinesCallback, StrPath, TerminationCallback

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ShellResult:
    """Summary of a finished run.

    Attributes
    ----------
    returncode : int
        Exit status, or ``LAUNCH_FAILURE_CODE`` if the process never started.
    stdout : list[str]
        Every completed standard output line, in order.
    stderr : list[str]
        Every standard error line, including a flushed unterminated tail.
    """

    returncode: int
    stdout: list[str]
    stderr: list[str]

    @property
    def succeeded(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0


def split_command(command: str | Sequence[str]) -> list[str]:
    """Return the argument vector for a command.

    Strings are split on runs of whitespace. Quoting and escaping are not
    honored.

    Examples
    --------
    >>> split_command("xcrun  simctl list -j")
    ['xcrun', 'simctl', 'list', '-j']
    >>> split_command(["echo", "two words"])
    ['echo', 'two words']
    """
    if isinstance(command, str):
        return command.split()
    return [str(token) for token in command]


def build_environment(
    extra_path: str = EXTRA_SEARCH_PATH,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Copy the environment and append ``extra_path`` to ``PATH``.

    Examples
    --------
    >>> build_environment("/opt/bin", {"PATH": "/usr/bin"})["PATH"]
    '/usr/bin:/opt/bin'
    >>> build_environment("/opt/bin", {})["PATH"]
    '/opt/bin'
    """
    env = dict(os.environ if environ is None else environ)
    path = env.get("PATH")
    env["PATH"] = f"{path}{os.pathsep}{extra_path}" if path else extra_path
    return env


class Shell:
    """Run a single command, framing its output into lines.

    Parameters
    ----------
    on_output : callable, optional
        Called with each batch of completed standard output lines.
    on_error : callable, optional
        Called with each batch of completed standard error lines.
    on_terminated : callable, optional
        Called once with the exit code, after all output was delivered.

    Notes
    -----
    Standard error splits on ``\\n`` and ``\\r``, and its unterminated tail is
    flushed when the process exits. Standard output splits on ``\\n`` only
    and an unterminated final stdout line is not delivered.

    Lines are appended to :attr:`stdout` and :attr:`stderr` before callbacks
    see them. An exception raised by a callback is logged and does not stop
    the run. Callbacks may read :attr:`result` but must not call
    :meth:`wait`.
    """

    def __init__(
        self,
        on_output: LinesCallback | None = None,
        on_error: LinesCallback | None = None,
        on_terminated: TerminationCallback | None = None,
    ) -> None:
        self.on_output = on_output
        self.on_error = on_error
        self.on_terminated = on_terminated

        self.stdout: list[str] = []
        self.stderr: list[str] = []
        self.returncode: int | None = None
        self.process: subprocess.Popen[bytes] | None = None
        self.collect_to_file: StrPath | None = None

        self._lock = threading.RLock()
        self._stdout_framer = stdout_framer()
        self._stderr_framer = stderr_framer()
        self._terminated = threading.Event()
        self._started = False

    @property
    def result(self) -> ShellResult:
        """Snapshot of the captured output."""
        with self._lock:
            return ShellResult(
                returncode=(
                    LAUNCH_FAILURE_CODE if self.returncode is None else self.returncode
                ),
                stdout=list(self.stdout),
                stderr=list(self.stderr),
            )

    def execute(
        self,
        args: str | Sequence[str],
        sync: bool = True,
        collect_to_file: StrPath | None = None,
    ) -> int | None:
        """Spawn the command.

        Parameters
        ----------
        args : str or list of str
            Command line, see :func:`split_command`.
        sync : bool
            Block until the process exits and return its exit code. When
            ``False``, return ``None`` immediately.
        collect_to_file : str or PathLike, optional
            Replace this file with the captured standard output once the
            process exits.

        Returns
        -------
        int, optional
            Exit code in synchronous mode (``LAUNCH_FAILURE_CODE`` if the
            process could not be started).
        """
        if self._started:
            msg = "Shell instances run a single command"
            raise RuntimeError(msg)
        self._started = True
        self.collect_to_file = collect_to_file

        argv = split_command(args)
        if not self._spawn(argv):
            self._finish(LAUNCH_FAILURE_CODE)
            return LAUNCH_FAILURE_CODE if sync else None

        assert self.process is not None
        readers = [
            self._start_reader(
                self.process.stdout,
                self._stdout_framer,
                self._deliver_output,
                "stdout",
            ),
            self._start_reader(
                self.process.stderr,
                self._stderr_framer,
                self._deliver_error,
                "stderr",
            ),
        ]

        if sync:
            self._wait_for_exit(self.process, readers)
            return self.returncode

        threading.Thread(
            target=self._wait_for_exit,
            args=(self.process, readers),
            name=f"simian-wait-{self.process.pid}",
            daemon=True,
        ).start()
        return None

    def wait(self, timeout: float | None = None) -> int | None:
        """Block until termination was signaled and return the exit code.

        Returns ``None`` if ``timeout`` elapsed first. Must not be called from
        a callback of this shell, since termination is signaled only after
        ``on_terminated`` returns.
        """
        if not self._terminated.wait(timeout):
            return None
        return self.returncode

    # Process -----------------------------------------------------------
    def _spawn(self, argv: list[str]) -> bool:
        if not argv:
            logger.error("Shell failed: empty command")
            return False

        logger.debug("Running %s", subprocess.list2cmdline(argv))
        try:
            self.process = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=build_environment(),
            )
        except (OSError, ValueError):
            logger.exception("Shell failed: %s", subprocess.list2cmdline(argv))
            return False
        return True

    def _start_reader(
        self,
        stream: t.IO[bytes] | None,
        framer: LineFramer,
        deliver: LinesCallback,
        name: str,
    ) -> threading.Thread:
        assert stream is not None
        assert self.process is not None
        thread = threading.Thread(
            target=self._reader,
            args=(stream, framer, deliver, name),
            name=f"simian-{name}-{self.process.pid}",
            daemon=True,
        )
        thread.start()
        return thread

    def _reader(
        self,
        stream: t.IO[bytes],
        framer: LineFramer,
        deliver: LinesCallback,
        name: str,
    ) -> None:
        # Characters split across reads are held back by the decoder until
        # their remaining bytes arrive.
        decoder = codecs.getincrementaldecoder("utf-8")()
        with stream:
            while True:
                data = stream.read1(READ_CHUNK_SIZE)  # type: ignore[attr-defined]
                final = not data
                try:
                    text = decoder.decode(data, final=final)
                except UnicodeDecodeError:
                    logger.warning("Error decoding %s data: %r", name, data)
                    decoder.reset()
                    text = ""
                if text:
                    with self._lock:
                        lines = framer.feed(text)
                        if lines:
                            deliver(lines)
                if final:
                    break

    def _wait_for_exit(
        self,
        process: subprocess.Popen[bytes],
        readers: Sequence[threading.Thread],
    ) -> None:
        for reader in readers:
            reader.join()
        self._finish(process.wait())

    def _finish(self, returncode: int) -> None:
        try:
            with self._lock:
                tail = self._stderr_framer.flush()
                if tail is not None:
                    self._deliver_error([tail])
                self.returncode = returncode

                logger.debug(
                    "exit %s, stdout: %s, stderr: %s",
                    returncode,
                    self.stdout,
                    self.stderr,
                )
                if self.collect_to_file is not None:
                    self._collect(self.collect_to_file)
                self._notify(self.on_terminated, returncode, "termination")
        finally:
            self._terminated.set()

    # Delivery (called with the lock held) --------------------------------
    def _deliver_output(self, lines: list[str]) -> None:
        self.stdout.extend(lines)
        self._notify(self.on_output, lines, "stdout")

    def _deliver_error(self, lines: list[str]) -> None:
        self.stderr.extend(lines)
        self._notify(self.on_error, lines, "stderr")

    def _notify(
        self,
        callback: t.Callable[[t.Any], None] | None,
        value: t.Any,
        name: str,
    ) -> None:
        """Invoke a caller's callback, logging instead of raising its errors."""
        if callback is None:
            return
        try:
            callback(value)
        except Exception:
            logger.exception("%s callback failed", name)

    def _collect(self, path: StrPath) -> None:
        target = pathlib.Path(path)
        try:
            target.unlink(missing_ok=True)
            target.write_text("\n".join(self.stdout), encoding="utf-8")
        except OSError:
            logger.exception("Could not write output to %s", target)


def run_process(
    command: str | Sequence[str],
    collect_to_file: StrPath | None = None,
    on_output: LinesCallback | None = None,
    on_error: LinesCallback | None = None,
    on_terminated: TerminationCallback | None = None,
    sync: bool = True,
) -> int | None:
    """Run ``command``, streaming its output lines to callbacks.

    Parameters
    ----------
    command : str or list of str
        Command line, see :func:`split_command`.
    collect_to_file : str or PathLike, optional
        Replace this file with the newline-joined standard output once the
        process exits.
    on_output, on_error : callable, optional
        Receive batches of completed lines per stream.
    on_terminated : callable, optional
        Receives the exit code exactly once, after all delivered output.
        Also called with ``LAUNCH_FAILURE_CODE`` if the process cannot start.
    sync : bool
        Block and return the exit code, or return ``None`` immediately.

    Returns
    -------
    int, optional
        Exit code in synchronous mode.

    Examples
    --------
    >>> batches = []
    >>> run_process("echo hi", on_output=batches.append)
    0
    >>> batches
    [['hi']]

    >>> run_process("simian-no-such-binary")
    -1
    """
    shell = Shell(on_output=on_output, on_error=on_error, on_terminated=on_terminated)
    return shell.execute(command, sync=sync, collect_to_file=collect_to_file)


def execute_sync(
    command: str | Sequence[str],
    collect_to_file: StrPath | None = None,
    on_output: LinesCallback | None = None,
    on_error: LinesCallback | None = None,
) -> ShellResult:
    """Run ``command`` to completion and return a :class:`ShellResult`."""
    shell = Shell(on_output=on_output, on_error=on_error)
    shell.execute(command, sync=True, collect_to_file=collect_to_file)
    return shell.result

"""Constant variables for simian.

Values that depend on the host can be overridden through environment
variables, read once at import time.
"""

from __future__ import annotations

import os

#: Appended to ``PATH`` for every spawned process
EXTRA_SEARCH_PATH = os.getenv("SIMIAN_EXTRA_PATH", "/usr/local/bin")

#: Returned (and passed to termination callbacks) when a process cannot start
LAUNCH_FAILURE_CODE = -1

#: Maximum bytes requested from a pipe per read
READ_CHUNK_SIZE = int(os.getenv("SIMIAN_READ_CHUNK_SIZE", 4096))

#: Line terminators for standard output
STDOUT_TERMINATORS = "\n"

#: Line terminators for standard error
STDERR_TERMINATORS = "\n\r"

#: Base command for the simulator control tool
SIMCTL_COMMAND = "xcrun simctl"

#: When set, the raw ``simctl list`` output is also written to this path
COLLECT_PATH: str | None = os.getenv("SIMIAN_COLLECT_PATH") or None

#: Prefix of fully qualified device type identifiers
DEVICE_TYPE_PREFIX = "com.apple.CoreSimulator.SimDeviceType."

#: Runtime names are ``<platform name> <version>``, e.g. ``iOS 17.5``
RUNTIME_PLATFORM_NAME = "iOS"

#: ``state`` value reported by simctl for running devices
BOOTED_STATE = "Booted"

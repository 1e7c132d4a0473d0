"""Query and control simulators through ``xcrun simctl``.

simian.simctl
~~~~~~~~~~~~~

"""

from __future__ import annotations

import logging
import re
import typing as t

from simian import exc
from simian.constants import (
    COLLECT_PATH,
    DEVICE_TYPE_PREFIX,
    RUNTIME_PLATFORM_NAME,
    SIMCTL_COMMAND,
)
from simian.models import Simulators
from simian.shell import ShellResult, execute_sync
from simian.styles import DEFAULT_STYLE, Color, StyleConfig, TextStyle, colorize, stylize
from simian.table import TableBuilder, TableRow, build_table_from_mapping

if t.TYPE_CHECKING:
    from collections.abc import Callable

    from simian._internal.types import StrPath
    from simian.models import Device, Runtime

    Runner = Callable[..., ShellResult]

logger = logging.getLogger(__name__)

DeviceKey = t.Literal["name", "device_type_identifier"]

_RUNTIME_VERSION_RE = re.compile(r"(\d+)-(\d+)$")
_NON_ALPHANUMERIC_RE = re.compile(r"[^a-zA-Z0-9]+")


def format_device_type(device: str) -> str:
    """Return the device type identifier for a human readable model name.

    Examples
    --------
    >>> format_device_type("iPhone 15 Pro")
    'com.apple.CoreSimulator.SimDeviceType.iPhone-15-Pro'
    """
    return DEVICE_TYPE_PREFIX + _NON_ALPHANUMERIC_RE.sub("-", device)


def format_runtime_name(identifier: str) -> str:
    """Return ``major.minor`` from a runtime identifier.

    Examples
    --------
    >>> format_runtime_name("com.apple.CoreSimulator.SimRuntime.iOS-17-5")
    '17.5'
    """
    match = _RUNTIME_VERSION_RE.search(identifier)
    if match is None:
        msg = f"Failed to match runtime in '{identifier}'"
        raise exc.SimctlDecodeError(msg)
    major, minor = match.groups()
    return f"{int(major)}.{int(minor)}"


class SimctlHelper:
    """Find devices and run ``simctl`` actions against them.

    Parameters
    ----------
    runner : callable, optional
        Runs a command string and returns a :class:`~simian.shell.ShellResult`.
        Defaults to :func:`~simian.shell.execute_sync`.
    style : StyleConfig
        Styling used for listings and messages.
    collect_path : str or PathLike, optional
        Where to keep a copy of the raw ``simctl list`` output.
    """

    def __init__(
        self,
        runner: Runner | None = None,
        style: StyleConfig = DEFAULT_STYLE,
        collect_path: StrPath | None = COLLECT_PATH,
    ) -> None:
        self.runner = runner or execute_sync
        self.style = style
        self.collect_path = collect_path

    def _run(self, args: str, **kwargs: t.Any) -> ShellResult:
        command = f"{SIMCTL_COMMAND} {args}"
        logger.debug("Running %s", command)
        return self.runner(command, **kwargs)

    # Lookups -----------------------------------------------------------
    def get_simulators(self) -> Simulators:
        """Return everything ``simctl list -j`` reports."""
        result = self._run("list -j", collect_to_file=self.collect_path)
        if not result.succeeded:
            raise exc.SimctlCommandFailed(
                f"{SIMCTL_COMMAND} list -j",
                result.returncode,
                result.stderr,
            )
        return Simulators.from_json("\n".join(result.stdout))

    def get_runtime(self, platform: str, simulators: Simulators) -> Runtime:
        """Return the runtime named ``iOS <platform>``."""
        logger.debug("Finding runtime ...")
        name = f"{RUNTIME_PLATFORM_NAME} {platform}"
        runtimes = [rt for rt in simulators.runtimes if rt.name == name]
        if len(runtimes) > 1:
            logger.warning(
                "WARNING: multiple runtimes found for platform version '%s'. "
                "Using first ...",
                platform,
            )
        if not runtimes:
            raise exc.RuntimeNotFound(platform)
        return runtimes[0]

    def get_device(self, key: DeviceKey, value: str, platform: str) -> Device:
        """Return the first available device where ``key`` equals ``value``.

        Parameters
        ----------
        key : str
            ``"name"`` or ``"device_type_identifier"``.
        value : str
            Value to match.
        platform : str
            Runtime version, e.g. ``"17.5"``.
        """
        logger.debug("Getting simulator info ...")
        simulators = self.get_simulators()
        runtime = self.get_runtime(platform, simulators)

        logger.debug("Finding device for runtime ...")
        all_devices = simulators.devices.get(runtime.identifier)
        if all_devices is None:
            raise exc.DeviceNotFound(key, value, platform)

        devices = [
            device
            for device in all_devices
            if device.is_available and getattr(device, key) == value
        ]
        if len(devices) > 1:
            logger.info(
                "Multiple devices found for '%s' -> '%s' for platform version "
                "'%s'. Using first ...",
                key,
                value,
                platform,
            )
        if not devices:
            raise exc.DeviceNotFound(
                key,
                value,
                platform,
                candidates=[device.name for device in all_devices],
            )
        return devices[0]

    # Actions -----------------------------------------------------------
    def boot(self, key: DeviceKey, value: str, platform: str) -> Device:
        """Boot the matching device."""
        device = self.get_device(key, value, platform)
        if device.is_booted:
            msg = "Device is already booted ✅"
            raise exc.DeviceAlreadyBooted(msg)

        logger.debug("Booting device ...")
        result = self._run(f"boot {device.udid}")
        if not result.succeeded:
            raise exc.SimctlCommandFailed(
                f"{SIMCTL_COMMAND} boot {device.udid}",
                result.returncode,
                result.stderr,
            )
        logger.info("Booted %s (%s) ✅", device.name, platform)
        return device

    def shutdown(self, key: DeviceKey, value: str, platform: str) -> Device:
        """Shut down the matching device, if it is booted."""
        device = self.get_device(key, value, platform)
        if not device.is_booted:
            logger.info("Device isn't booted ✅")
            return device
        return self._shutdown_device(device, platform)

    def _shutdown_device(self, device: Device, label: str) -> Device:
        logger.debug("Shutting down device ...")
        result = self._run(f"shutdown {device.udid}")
        if not result.succeeded:
            raise exc.SimctlCommandFailed(
                f"{SIMCTL_COMMAND} shutdown {device.udid}",
                result.returncode,
                result.stderr,
            )
        logger.info("Shut down %s (%s) ✅", device.name, label)
        return device

    def shutdown_all(self) -> list[Device]:
        """Shut down every booted device, addressing each by UDID.

        Devices of any platform are included, whatever runtime they belong to.
        """
        simulators = self.get_simulators()
        stopped = []
        for runtime_id, devices in simulators.devices.items():
            runtime = simulators.runtime(runtime_id)
            label = runtime.name if runtime is not None else runtime_id
            for device in devices:
                if device.is_booted:
                    stopped.append(self._shutdown_device(device, label))
        return stopped

    # Reports -----------------------------------------------------------
    def info(self, key: DeviceKey, value: str, platform: str) -> str:
        """Return a key/value table describing the matching device."""
        device = self.get_device(key, value, platform)
        details = {
            "Name": device.name,
            "UDID": device.udid,
            "State": device.state,
            "Device type": device.device_type_identifier,
            "Is Available": str(device.is_available),
            "Last booted at": device.last_booted_at or "N/A",
            "Data path": device.data_path,
            "Data path size": str(device.data_path_size),
        }
        rows = {colorize(k, Color.blue, self.style): v for k, v in details.items()}
        return build_table_from_mapping(rows, glyphs="single-curved", style=self.style)

    def list_devices(self) -> str:
        """Return a borderless listing of all devices grouped by runtime."""
        simulators = self.get_simulators()

        rows = [
            TableRow.values(
                *(
                    stylize(title, TextStyle.bold, self.style)
                    for title in ("Runtime", "Name", "State", "UDID")
                ),
            ),
            TableRow.separator(),
        ]
        for runtime_id, devices in simulators.devices.items():
            if not devices:
                continue
            runtime_label = format_runtime_name(runtime_id)
            for index, device in enumerate(sorted(devices, key=lambda d: d.name)):
                label = runtime_label if index == 0 else ""
                state_color = Color.green if device.is_booted else Color.gray
                rows.append(
                    TableRow.values(
                        colorize(label, Color.magenta, self.style),
                        colorize(device.name, Color.cyan, self.style),
                        colorize(device.state, state_color, self.style),
                        device.udid,
                    ),
                )

        return TableBuilder(glyphs="empty", style=self.style).build(rows)

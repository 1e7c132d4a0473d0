"""Simulator data decoded from ``simctl list -j``.

simian.models
~~~~~~~~~~~~~

Examples
--------
>>> sims = Simulators.from_json('''
... {"devicetypes": [], "runtimes": [], "devices": {"rt": [
...   {"udid": "A1", "name": "iPhone 15", "state": "Shutdown",
...    "isAvailable": true,
...    "deviceTypeIdentifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-15",
...    "dataPath": "/tmp/a1", "dataPathSize": 0, "logPath": "/tmp/a1.log"}
... ]}}
... ''')
>>> sims.devices["rt"][0].name
'iPhone 15'
"""

from __future__ import annotations

import dataclasses
import json
import typing as t

from simian import exc
from simian.constants import BOOTED_STATE

if t.TYPE_CHECKING:
    from typing_extensions import Self


def _require(data: t.Mapping[str, t.Any], key: str, kind: str) -> t.Any:
    try:
        return data[key]
    except KeyError:
        msg = f"{kind} is missing required key '{key}'"
        raise exc.SimctlDecodeError(msg) from None
    except TypeError:
        msg = f"{kind} must be an object, got {type(data).__name__}"
        raise exc.SimctlDecodeError(msg) from None


@dataclasses.dataclass(frozen=True)
class DeviceType:
    """A device model a runtime can host."""

    identifier: str
    name: str
    bundle_path: str = ""
    product_family: str = ""

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Self:
        """Decode a ``devicetypes`` entry."""
        return cls(
            identifier=_require(data, "identifier", "DeviceType"),
            name=_require(data, "name", "DeviceType"),
            bundle_path=data.get("bundlePath", ""),
            product_family=data.get("productFamily", ""),
        )


@dataclasses.dataclass(frozen=True)
class Runtime:
    """An installed OS runtime, e.g. ``iOS 17.5``."""

    identifier: str
    name: str
    version: str
    is_available: bool = True
    platform: str = ""
    buildversion: str = ""
    supported_device_types: tuple[DeviceType, ...] = ()

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Self:
        """Decode a ``runtimes`` entry."""
        return cls(
            identifier=_require(data, "identifier", "Runtime"),
            name=_require(data, "name", "Runtime"),
            version=_require(data, "version", "Runtime"),
            is_available=bool(data.get("isAvailable", True)),
            platform=data.get("platform", ""),
            buildversion=data.get("buildversion", ""),
            supported_device_types=tuple(
                DeviceType.from_dict(item)
                for item in data.get("supportedDeviceTypes", [])
            ),
        )


@dataclasses.dataclass(frozen=True)
class Device:
    """A simulator device instance."""

    udid: str
    name: str
    state: str
    is_available: bool
    device_type_identifier: str
    data_path: str = ""
    data_path_size: int = 0
    log_path: str = ""
    last_booted_at: str | None = None
    availability_error: str | None = None

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Self:
        """Decode an entry of a ``devices`` runtime list."""
        return cls(
            udid=_require(data, "udid", "Device"),
            name=_require(data, "name", "Device"),
            state=_require(data, "state", "Device"),
            is_available=bool(_require(data, "isAvailable", "Device")),
            device_type_identifier=_require(data, "deviceTypeIdentifier", "Device"),
            data_path=data.get("dataPath", ""),
            data_path_size=int(data.get("dataPathSize", 0)),
            log_path=data.get("logPath", ""),
            last_booted_at=data.get("lastBootedAt"),
            availability_error=data.get("availabilityError"),
        )

    @property
    def is_booted(self) -> bool:
        """Whether simctl reports the device as running."""
        return self.state == BOOTED_STATE


@dataclasses.dataclass(frozen=True)
class Simulators:
    """Everything ``simctl list -j`` reports."""

    device_types: tuple[DeviceType, ...]
    runtimes: tuple[Runtime, ...]
    devices: dict[str, list[Device]]

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Self:
        """Decode the top-level ``simctl list -j`` object."""
        devices = _require(data, "devices", "Simulators")
        if not isinstance(devices, dict):
            msg = "Simulators 'devices' must map runtime identifiers to lists"
            raise exc.SimctlDecodeError(msg)
        return cls(
            device_types=tuple(
                DeviceType.from_dict(item)
                for item in _require(data, "devicetypes", "Simulators")
            ),
            runtimes=tuple(
                Runtime.from_dict(item)
                for item in _require(data, "runtimes", "Simulators")
            ),
            devices={
                runtime_id: [Device.from_dict(item) for item in items]
                for runtime_id, items in devices.items()
            },
        )

    @classmethod
    def from_json(cls, text: str) -> Self:
        """Decode ``simctl list -j`` output.

        Raises
        ------
        :exc:`exc.SimctlDecodeError`
            If the text is not JSON or does not match the schema.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Failed to collect simulator info: {e}"
            raise exc.SimctlDecodeError(msg) from e
        return cls.from_dict(data)

    def runtime(self, identifier: str) -> Runtime | None:
        """Return the runtime with ``identifier``, if installed."""
        return next((rt for rt in self.runtimes if rt.identifier == identifier), None)

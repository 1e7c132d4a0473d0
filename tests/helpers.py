"""Helpers for simian's test suite."""

from __future__ import annotations

import json
import typing as t

from simian.shell import ShellResult

RUNTIME_17 = "com.apple.CoreSimulator.SimRuntime.iOS-17-5"
RUNTIME_16 = "com.apple.CoreSimulator.SimRuntime.iOS-16-4"

SIMCTL_LIST: dict[str, t.Any] = {
    "devicetypes": [
        {
            "bundlePath": "/Library/Developer/DeviceTypes/iPhone 15.simdevicetype",
            "name": "iPhone 15",
            "identifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-15",
            "productFamily": "iPhone",
            "maxRuntimeVersion": 4294967295,
            "maxRuntimeVersionString": "65535.255.255",
            "modelIdentifier": "iPhone15,4",
            "minRuntimeVersionString": "17.0.0",
            "minRuntimeVersion": 1114112,
        },
    ],
    "runtimes": [
        {
            "bundlePath": "/Library/Developer/CoreSimulator/iOS 17.5.simruntime",
            "buildversion": "21F79",
            "platform": "iOS",
            "runtimeRoot": "/Library/Developer/CoreSimulator/iOS 17.5/RuntimeRoot",
            "identifier": RUNTIME_17,
            "version": "17.5",
            "isInternal": False,
            "isAvailable": True,
            "name": "iOS 17.5",
            "supportedDeviceTypes": [
                {
                    "bundlePath": "/Library/Developer/DeviceTypes/iPhone 15.simdevicetype",
                    "name": "iPhone 15",
                    "identifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-15",
                    "productFamily": "iPhone",
                },
            ],
        },
        {
            "bundlePath": "/Library/Developer/CoreSimulator/iOS 16.4.simruntime",
            "buildversion": "20E247",
            "platform": "iOS",
            "runtimeRoot": "/Library/Developer/CoreSimulator/iOS 16.4/RuntimeRoot",
            "identifier": RUNTIME_16,
            "version": "16.4",
            "isInternal": False,
            "isAvailable": True,
            "name": "iOS 16.4",
            "supportedDeviceTypes": [],
        },
    ],
    "devices": {
        RUNTIME_17: [
            {
                "lastBootedAt": "2024-06-20T10:00:00Z",
                "dataPath": "/Users/dev/Devices/AAAA/data",
                "dataPathSize": 1048576,
                "logPath": "/Users/dev/Logs/AAAA",
                "udid": "AAAA",
                "isAvailable": True,
                "deviceTypeIdentifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-15",
                "state": "Shutdown",
                "name": "iPhone 15",
            },
            {
                "dataPath": "/Users/dev/Devices/BBBB/data",
                "dataPathSize": 2048,
                "logPath": "/Users/dev/Logs/BBBB",
                "udid": "BBBB",
                "isAvailable": True,
                "deviceTypeIdentifier": (
                    "com.apple.CoreSimulator.SimDeviceType.iPhone-15-Pro"
                ),
                "state": "Booted",
                "name": "iPhone 15 Pro",
            },
            {
                "dataPath": "/Users/dev/Devices/CCCC/data",
                "dataPathSize": 0,
                "logPath": "/Users/dev/Logs/CCCC",
                "udid": "CCCC",
                "isAvailable": False,
                "availabilityError": "runtime profile not found",
                "deviceTypeIdentifier": "com.apple.CoreSimulator.SimDeviceType.iPad-Air",
                "state": "Shutdown",
                "name": "iPad Air",
            },
        ],
        RUNTIME_16: [
            {
                "dataPath": "/Users/dev/Devices/DDDD/data",
                "dataPathSize": 0,
                "logPath": "/Users/dev/Logs/DDDD",
                "udid": "DDDD",
                "isAvailable": True,
                "deviceTypeIdentifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-14",
                "state": "Booted",
                "name": "iPhone 14",
            },
        ],
    },
}


class FakeRunner:
    """Stand-in for :func:`simian.shell.execute_sync` that records commands."""

    def __init__(self, listing: dict[str, t.Any] | str = SIMCTL_LIST) -> None:
        self.listing = listing if isinstance(listing, str) else json.dumps(listing)
        self.commands: list[str] = []
        self.kwargs: list[dict[str, t.Any]] = []
        self.failures: dict[str, ShellResult] = {}

    def fail(
        self,
        action: str,
        returncode: int = 1,
        stderr: list[str] | None = None,
    ) -> None:
        """Make commands containing ``action`` exit with ``returncode``."""
        self.failures[action] = ShellResult(returncode, [], stderr or [])

    def __call__(self, command: str, **kwargs: t.Any) -> ShellResult:
        self.commands.append(command)
        self.kwargs.append(kwargs)
        for action, result in self.failures.items():
            if action in command:
                return result
        if command.endswith("list -j"):
            return ShellResult(0, self.listing.split("\n"), [])
        return ShellResult(0, [], [])

"""Command-line interface for simian."""

from __future__ import annotations

import argparse
import logging
import sys
import typing as t

from simian import exc
from simian.__about__ import __version__
from simian.simctl import SimctlHelper, format_device_type
from simian.styles import Color, StyleConfig, colorize

if t.TYPE_CHECKING:
    from simian.simctl import DeviceKey

logger = logging.getLogger("simian")

COMMANDS = ("boot", "shutdown", "info", "list")


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Examples
    --------
    >>> args = create_parser().parse_args(
    ...     ["boot", "-platform", "17.5", "-name", "iPhone 15"]
    ... )
    >>> args.command, args.platform, args.name
    ('boot', '17.5', 'iPhone 15')
    """
    parser = argparse.ArgumentParser(
        prog="simian",
        description="Query, boot and shut down simulator devices.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("boot", "Boot a device."),
        ("shutdown", "Shut down a device."),
        ("info", "Show device details."),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("-platform", help="Runtime version, e.g. 17.5.")
        target = sub.add_mutually_exclusive_group()
        target.add_argument("-name", help="Device name, e.g. 'iPhone 15'.")
        target.add_argument("-device", help="Device type, e.g. 'iPhone 15 Pro'.")
        if command == "shutdown":
            target.add_argument(
                "-all",
                action="store_true",
                help="Shut down every booted device.",
            )

    subparsers.add_parser("list", help="List all devices.")
    return parser


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stdout as bare messages."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def device_arguments(args: argparse.Namespace) -> tuple[DeviceKey, str, str]:
    """Return ``(key, value, platform)`` from parsed arguments."""
    if not args.platform:
        msg = "-platform argument requires a string parameter"
        raise exc.SimianError(msg)
    if args.name:
        return "name", args.name, args.platform
    if args.device:
        value = format_device_type(args.device)
        logger.debug("Using device type identifier: %s", value)
        return "device_type_identifier", value, args.platform
    msg = "One of 'device' or 'name' arguments must be provided"
    raise exc.SimianError(msg)


def run_command(args: argparse.Namespace, helper: SimctlHelper) -> None:
    """Dispatch a parsed command to ``helper``."""
    if args.command == "list":
        logger.info(helper.list_devices())
    elif args.command == "shutdown" and args.all:
        helper.shutdown_all()
    elif args.command == "boot":
        helper.boot(*device_arguments(args))
    elif args.command == "shutdown":
        helper.shutdown(*device_arguments(args))
    elif args.command == "info":
        logger.info(helper.info(*device_arguments(args)))


def main(argv: list[str] | None = None, helper: SimctlHelper | None = None) -> int:
    """Run the simian CLI.

    Returns
    -------
    int
        Exit status code.
    """
    args = create_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    style = StyleConfig(enabled=False) if args.no_color else StyleConfig.from_env()
    if helper is None:
        helper = SimctlHelper(style=style)

    try:
        run_command(args, helper)
    except exc.SimianError as e:
        logger.error(colorize(str(e), Color.red, style))
        return 1
    return 0

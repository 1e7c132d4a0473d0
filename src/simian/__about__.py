"""Metadata for simian package."""

from __future__ import annotations

__title__ = "simian"
__package_name__ = "simian"
__version__ = "0.1.0"
__description__ = "Query, boot and shut down simulator devices from the command line"
__author__ = "Jack Newcombe"
__license__ = "MIT"
__copyright__ = "Copyright 2024- Jack Newcombe"

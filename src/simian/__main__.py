"""Run simian as ``python -m simian``."""

from __future__ import annotations

import sys

from simian.cli import main

if __name__ == "__main__":
    sys.exit(main())

"""Entry point for ``python -m line_distributor``."""

from __future__ import annotations

import sys

from line_distributor.cli import main

if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Run a Whoa console command, e.g. ``./run.py w:db migrate``."""

import sys
from pathlib import Path

# Add project to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from whoa.cli import main


if __name__ == "__main__":
    sys.exit(main())

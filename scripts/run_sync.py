#!/usr/bin/env python3
"""
Command-line entry point for the scheduled job board sync.

Intended to be invoked by a CI schedule:

    $ python scripts/run_sync.py run
"""

import sys
from pathlib import Path

# Add project root to path so we can import jobsync
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from jobsync.cli import app


if __name__ == "__main__":
    app()

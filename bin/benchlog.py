#!/usr/bin/env python3
"""
benchlog CLI launcher

Runs the benchlog command line from a source checkout.

Usage:
    go test -bench=. -benchmem | python bin/benchlog.py parse -o results.json
    python bin/benchlog.py compare baseline.json current.json
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from benchlog.adapters.inbound.cli.main import main


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
CLI entrypoint for importing and querying the musicians dataset.

Usage:
    python3 scripts/outlived.py -import data/musicians.csv
    python3 scripts/outlived.py -query 1990-09-25 -d 365
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.services import outlived  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(outlived.main())

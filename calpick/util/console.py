# calpick/util/console.py
from __future__ import annotations

import sys


def warn(msg: str) -> None:
    """User-facing warning on stderr (the CLI's non-fatal problems)."""
    print(f"[calpick] WARN: {msg}", file=sys.stderr)

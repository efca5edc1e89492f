"""Environment-driven defaults for the dustman host."""

from __future__ import annotations

import os
import time
from pathlib import Path

DEFAULT_STATE_PATH = Path(
    os.environ.get("DUSTMAN_STATE_PATH", Path.home() / ".dustman" / "state.json")
)

# Added to every wake delay; the inactivity threshold is strict.
WAKE_TOLERANCE_MS = float(os.environ.get("DUSTMAN_WAKE_TOLERANCE_MS", "1000"))


def now_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000

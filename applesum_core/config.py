from __future__ import annotations

import os

DEFAULT_DB = os.getenv("APPLESUM_DB", os.path.join("data", "applesum.db"))
RESOLVE_DELAY_MS = int(os.getenv("APPLESUM_RESOLVE_DELAY_MS", "500"))
HIGH_SCORE_KEY = "apple_sum_9_highscore"

GRID_SIZE = 8
TOTAL_CELLS = GRID_SIZE * GRID_SIZE
TARGET_SCORE = 30
PAIR_SUM = 9
POINTS_PER_PAIR = 2


def _flag(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def debug_enabled() -> bool:
    """Set APPLESUM_DEBUG=1 to print state-machine traces."""
    return _flag(os.getenv("APPLESUM_DEBUG", "0"))


def trace(tag: str, message: str) -> None:
    if debug_enabled():
        print(f"[{tag}] {message}")

from __future__ import annotations

# Facade module that re-exports the Apple Sum 9 core for the Flask app and tests.
# Single-responsibility modules live under applesum_core/*.

from applesum_core.board import Board, Coord, Tile
from applesum_core.config import (
    DEFAULT_DB,
    GRID_SIZE,
    HIGH_SCORE_KEY,
    PAIR_SUM,
    POINTS_PER_PAIR,
    RESOLVE_DELAY_MS,
    TARGET_SCORE,
    TOTAL_CELLS,
)
from applesum_core.controller import MatchController
from applesum_core.db import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from applesum_core.deal import TileDealer, board_from_values, generate_board, generate_tile, replace_at
from applesum_core.rules import (
    PendingPair,
    apply_score_progression,
    new_session,
    reset_session,
    resolve_pair,
    select_tile,
)
from applesum_core.scheduler import ManualScheduler, Scheduler, ThreadingScheduler
from applesum_core.state import EVALUATING, GAME_OVER, IDLE, ONE_SELECTED, GameSession


def main() -> None:
    # CLI driver delegated to applesum_core.cli
    from applesum_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()

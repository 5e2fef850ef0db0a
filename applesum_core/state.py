from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Tuple

from .board import Board
from .config import TARGET_SCORE

IDLE = "idle"
ONE_SELECTED = "one_selected"
EVALUATING = "evaluating"
GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSession:
    """Represents the whole state of one game: board, selection, score and flags."""
    board: Board
    score: int = 0
    selection: Tuple[int, ...] = ()  # 0..2 distinct indices, in click order
    processing: bool = False
    game_over: bool = False
    high_score: int = 0
    generation: int = 0  # bumped by reset so stale resolutions can be discarded

    @property
    def phase(self) -> str:
        if self.game_over:
            return GAME_OVER
        if self.processing:
            return EVALUATING
        return ONE_SELECTED if self.selection else IDLE

    @property
    def progress(self) -> float:
        """Percentage of the target score reached, capped at 100."""
        return min(self.score / TARGET_SCORE, 1) * 100

    def is_selected(self, index: int) -> bool:
        return index in self.selection

    def evolve(self, **changes: Any) -> 'GameSession':
        return replace(self, **changes)

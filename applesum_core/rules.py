from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import PAIR_SUM, POINTS_PER_PAIR, TARGET_SCORE, TOTAL_CELLS
from .deal import TileDealer, generate_board, replace_at
from .state import GameSession


@dataclass(frozen=True)
class PendingPair:
    """Two selected tiles captured at the moment the second one was picked."""
    first: int
    second: int
    first_value: int
    second_value: int
    generation: int

    @property
    def total(self) -> int:
        return self.first_value + self.second_value

    @property
    def is_match(self) -> bool:
        return self.total == PAIR_SUM


def new_session(dealer: Optional[TileDealer] = None, high_score: int = 0) -> GameSession:
    """Creates a fresh session: new board, score 0, nothing selected."""
    return GameSession(board=generate_board(dealer), high_score=max(0, int(high_score)))


def select_tile(session: GameSession, index: int) -> Tuple[GameSession, Optional[PendingPair]]:
    """
    Applies a tile click to the session.

    Returns the next session and, when this click completed a pair, the
    PendingPair to resolve later. Clicks while processing, after game over or
    on a matched tile leave the session untouched.
    """
    if not 0 <= index < TOTAL_CELLS:
        raise IndexError(f"tile index out of range: {index}")
    if session.processing or session.game_over or session.board.at(index).matched:
        return session, None

    if session.is_selected(index):
        remaining = tuple(i for i in session.selection if i != index)
        return session.evolve(selection=remaining), None

    selection = session.selection + (index,)
    if len(selection) < 2:
        return session.evolve(selection=selection), None

    first, second = selection
    pair = PendingPair(
        first=first,
        second=second,
        first_value=session.board.at(first).value,
        second_value=session.board.at(second).value,
        generation=session.generation,
    )
    return session.evolve(selection=selection, processing=True), pair


def apply_score_progression(session: GameSession, target: int = TARGET_SCORE) -> GameSession:
    """Raises the high score and flags game over after a score change."""
    high = max(session.high_score, session.score)
    over = session.game_over or session.score >= target
    if high == session.high_score and over == session.game_over:
        return session
    return session.evolve(high_score=high, game_over=over)


def resolve_pair(
    session: GameSession,
    pair: PendingPair,
    dealer: Optional[TileDealer] = None,
    target: int = TARGET_SCORE,
) -> GameSession:
    """Scores and replaces a matching pair; always clears the selection and the lock."""
    if pair.generation != session.generation:
        # Session was reset while this pair was pending.
        return session

    board = session.board
    score = session.score
    if pair.is_match:
        score += POINTS_PER_PAIR
        board = replace_at(board, pair.first, dealer)
        board = replace_at(board, pair.second, dealer)

    resolved = session.evolve(board=board, score=score, selection=(), processing=False)
    if score != session.score:
        resolved = apply_score_progression(resolved, target)
    return resolved


def reset_session(session: GameSession, dealer: Optional[TileDealer] = None) -> GameSession:
    """Starts over on a new board, keeping only the high score."""
    return GameSession(
        board=generate_board(dealer),
        high_score=session.high_score,
        generation=session.generation + 1,
    )

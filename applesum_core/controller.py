from __future__ import annotations

import threading
from typing import Callable, List, Optional

from .config import HIGH_SCORE_KEY, POINTS_PER_PAIR, RESOLVE_DELAY_MS, TARGET_SCORE, trace
from .db import KeyValueStore, MemoryKeyValueStore
from .deal import TileDealer
from .rules import (
    PendingPair,
    new_session,
    reset_session,
    resolve_pair,
    select_tile,
)
from .scheduler import Scheduler, ThreadingScheduler
from .state import GameSession

Listener = Callable[[GameSession], None]


class MatchController:
    """
    Owns the single GameSession and drives it through the click / pair /
    resolution cycle.

    The session itself is immutable; every change swaps in a new snapshot,
    persists a raised high score and notifies listeners. A completed pair is
    resolved by the scheduler after `resolve_delay_ms`, so the presentation can
    show both highlighted tiles first. Mutations are serialised by a lock so a
    timer thread and request threads never interleave.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        scheduler: Optional[Scheduler] = None,
        dealer: Optional[TileDealer] = None,
        session: Optional[GameSession] = None,
        resolve_delay_ms: int = RESOLVE_DELAY_MS,
        key: str = HIGH_SCORE_KEY,
    ) -> None:
        self.store = store if store is not None else MemoryKeyValueStore()
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.dealer = dealer if dealer is not None else TileDealer()
        self.resolve_delay_ms = resolve_delay_ms
        self.key = key
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        stored = self.store.load(self.key) or 0
        if session is None:
            session = new_session(self.dealer, high_score=stored)
        elif session.high_score < stored:
            session = session.evolve(high_score=stored)
        self._session = session

    @property
    def session(self) -> GameSession:
        return self._session

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def handle_tile_click(self, index: int) -> bool:
        """Applies a click. Returns False when the click was ignored."""
        with self._lock:
            before = self._session
            after, pair = select_tile(before, index)
            if after is before:
                trace("click", f"index={index} ignored phase={before.phase}")
                return False
            self._commit(before, after)
            trace("click", f"index={index} selection={list(after.selection)}")
        if pair is not None:
            trace("pair", f"{pair.first}+{pair.second}={pair.total} resolving in {self.resolve_delay_ms}ms")
            self.scheduler.schedule(self.resolve_delay_ms, lambda: self._resolve(pair))
        return True

    def reset_game(self) -> GameSession:
        with self._lock:
            before = self._session
            after = reset_session(before, self.dealer)
            self._commit(before, after)
            trace("reset", f"generation={after.generation} high_score={after.high_score}")
            return after

    def start_from(self, session: GameSession) -> GameSession:
        """
        Replaces the current game with a given position, e.g. to replay a known board.

        The score must be one reachable by play and below the target. The high
        score is carried over from the current game, never taken from the position.
        """
        if session.score < 0 or session.score % POINTS_PER_PAIR or session.score >= TARGET_SCORE:
            raise ValueError(f"score must be an even value in 0..{TARGET_SCORE - 1}: {session.score}")
        with self._lock:
            before = self._session
            after = session.evolve(
                selection=(),
                processing=False,
                game_over=False,
                high_score=before.high_score,
                generation=before.generation + 1,
            )
            self._commit(before, after)
            trace("reset", f"generation={after.generation} loaded score={after.score}")
            return after

    def _resolve(self, pair: PendingPair) -> None:
        with self._lock:
            before = self._session
            after = resolve_pair(before, pair, self.dealer, TARGET_SCORE)
            if after is before:
                trace("resolve", f"stale pair from generation {pair.generation} discarded")
                return
            trace("resolve", f"match={pair.is_match} score={after.score} game_over={after.game_over}")
            self._commit(before, after)

    def _commit(self, before: GameSession, after: GameSession) -> None:
        self._session = after
        if after.high_score > before.high_score:
            self.store.store(self.key, after.high_score)
        for listener in list(self._listeners):
            listener(after)

from __future__ import annotations

import argparse
import time
from typing import List, Optional

from .config import DEFAULT_DB, GRID_SIZE, RESOLVE_DELAY_MS, TARGET_SCORE, TOTAL_CELLS
from .controller import MatchController
from .db import SqliteKeyValueStore
from .deal import TileDealer
from .scheduler import ManualScheduler
from .state import GameSession


def parse_index(text: str) -> Optional[int]:
    """Accepts 'r,c', 'r c' or a flat index; returns None when unparseable or off the board."""
    text = text.strip()
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t != '']
    try:
        if len(parts) == 1:
            index = int(parts[0])
        elif len(parts) == 2:
            r, c = int(parts[0]), int(parts[1])
            if not (0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE):
                return None
            index = r * GRID_SIZE + c
        else:
            return None
    except ValueError:
        return None
    return index if 0 <= index < TOTAL_CELLS else None


def render(session: GameSession) -> str:
    header = f"Score {session.score}/{TARGET_SCORE}  High {session.high_score}  ({session.progress:.0f}%)"
    return header + "\n" + session.board.pretty(session.selection)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Apple Sum 9: pick two tiles that add up to 9')
    parser.add_argument('--db', default=DEFAULT_DB, help='SQLite DB file path for the high score')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--delay', type=int, default=RESOLVE_DELAY_MS, help='Pause before a pair resolves (ms)')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    args = parser.parse_args(argv)

    scheduler = ManualScheduler()
    controller = MatchController(
        store=SqliteKeyValueStore(args.db),
        scheduler=scheduler,
        dealer=TileDealer(args.seed),
        resolve_delay_ms=args.delay,
    )

    print(render(controller.session))
    if not args.play:
        return

    print("Enter a tile as r,c / r c / index. 'reset' starts over, 'quit' exits.")
    while True:
        try:
            text = input('> ').strip().lower()
        except EOFError:
            return
        if text in ('q', 'quit', 'exit'):
            return
        if text == 'reset':
            controller.reset_game()
            print(render(controller.session))
            continue
        index = parse_index(text)
        if index is None:
            print('Could not parse. Try again.')
            continue
        if not controller.handle_tile_click(index):
            print('Ignored.')
            continue
        session = controller.session
        if session.processing:
            print(render(session))
            time.sleep(max(0, args.delay) / 1000.0)
            scheduler.run_pending()
            after = controller.session
            print('Match! +2' if after.score > session.score else 'No match.')
            print(render(after))
            if after.game_over:
                print(f"VICTORY! You reached {TARGET_SCORE} points. Type 'reset' to play again.")
        else:
            print(render(session))

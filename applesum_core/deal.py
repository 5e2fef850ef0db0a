from __future__ import annotations

import itertools
import random
from typing import Iterable, Optional

from .board import Board, Tile
from .config import TOTAL_CELLS


# Shared by every dealer so ids stay unique across boards built by different dealers
_tile_ids = itertools.count(1)


class TileDealer:
    """Source of fresh tiles: a seedable RNG for values, ids from the process-wide counter."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def next_id(self) -> int:
        return next(_tile_ids)

    def next_tile(self) -> Tile:
        return Tile(id=self.next_id(), value=self.rng.randint(1, 9), matched=False)


_default_dealer = TileDealer()


def generate_tile(dealer: Optional[TileDealer] = None) -> Tile:
    """Creates a tile with a fresh id and a uniformly random value in 1..9."""
    return (dealer or _default_dealer).next_tile()


def generate_board(dealer: Optional[TileDealer] = None) -> Board:
    """Deals a full board of independently generated tiles."""
    d = dealer or _default_dealer
    return Board(tiles=tuple(d.next_tile() for _ in range(TOTAL_CELLS)))


def replace_at(board: Board, index: int, dealer: Optional[TileDealer] = None) -> Board:
    """Returns a copy of the board with a freshly generated tile at `index`."""
    if not 0 <= index < TOTAL_CELLS:
        raise IndexError(f"tile index out of range: {index}")
    tiles = list(board.tiles)
    tiles[index] = generate_tile(dealer)
    return Board(tiles=tuple(tiles))


def board_from_values(values: Iterable[int], dealer: Optional[TileDealer] = None) -> Board:
    """Builds a board from explicit values (fresh ids), e.g. to replay a known position."""
    d = dealer or _default_dealer
    tiles = []
    for v in values:
        # bool is an int subclass; floats and strings are not coerced
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"tile value must be an integer: {v!r}")
        if not 1 <= v <= 9:
            raise ValueError(f"tile value out of range: {v}")
        tiles.append(Tile(id=d.next_id(), value=v))
    return Board(tiles=tuple(tiles))

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import GRID_SIZE, TOTAL_CELLS

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Tile:
    """A single numbered cell. `id` only identifies the tile for rendering."""
    id: int
    value: int  # 1..9
    matched: bool = False


@dataclass(frozen=True)
class Board:
    """The 8x8 grid of tiles, row-major, always exactly 64 long."""
    tiles: Tuple[Tile, ...]

    width = GRID_SIZE
    height = GRID_SIZE

    def __post_init__(self) -> None:
        if len(self.tiles) != TOTAL_CELLS:
            raise ValueError(f"Board needs {TOTAL_CELLS} tiles, got {len(self.tiles)}")

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * self.width + c

    def at(self, index: int) -> Tile:
        if not 0 <= index < TOTAL_CELLS:
            raise IndexError(f"tile index out of range: {index}")
        return self.tiles[index]

    def values(self) -> List[int]:
        return [t.value for t in self.tiles]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(self.height):
            for c in range(self.width):
                yield (r, c)

    def pretty(self, selection: Optional[Sequence[int]] = None) -> str:
        """Generates a human-readable grid; selected tiles are bracketed."""
        chosen = set(selection or ())
        lines: List[str] = []
        for r in range(self.height):
            row: List[str] = []
            for c in range(self.width):
                i = self.index(r, c)
                tile = self.tiles[i]
                if tile.matched:
                    row.append(" . ")
                elif i in chosen:
                    row.append(f"[{tile.value}]")
                else:
                    row.append(f" {tile.value} ")
            lines.append("".join(row))
        return "\n".join(lines)

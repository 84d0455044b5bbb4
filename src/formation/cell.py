"""
A cell on the board

(placed in its own module as multiple other modules need to import it)

The board has no edges: any pair of integers is a valid cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

Vector = tuple[int, int]

# All 8 directions around a cell. Two cells are adjacent if one is reached from the other by a single step along one of these.
NEIGHBOUR_OFFSETS: tuple[Vector, ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass(frozen=True)
class Cell:
    x: int
    y: int

    @classmethod
    def from_key(cls, key: str) -> Cell:
        """Transport notation: '3,-2' gets converted to Cell(3, -2)"""
        x, y = key.split(",")
        return cls(int(x), int(y))

    def to_key(self) -> str:
        return f"{self.x},{self.y}"

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)

    def neighbours(self) -> Iterator[Cell]:
        for dx, dy in NEIGHBOUR_OFFSETS:
            yield self.offset(dx, dy)

    def is_adjacent(self, other: Cell) -> bool:
        return self != other and max(abs(self.x - other.x), abs(self.y - other.y)) == 1

"""
A cell position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.shared_types import BOARD_SIZE

Vector = tuple[int, int]

# The 8 compass directions, as (row, column) steps
DIRECTIONS: tuple[Vector, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    @classmethod
    def from_notation(cls, notation: str) -> Position:
        """Column letter + row number: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        col = ord(notation[0].lower()) - ord("a")
        row = int(notation[1:]) - 1
        return cls(row, col)

    def to_notation(self) -> str:
        return f"{chr(self.col + ord('a'))}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def step(self, direction: Vector) -> Position:
        """Neighbouring position in the given direction (may fall off the board)"""
        return Position(self.row + direction[0], self.col + direction[1])

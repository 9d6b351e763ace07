"""The Board holds the 8x8 grid of cells. It is immutable: every change produces a new Board."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import BOARD_SIZE, CELL_OF, Cell, Color
from src.reversi.position import Position

NOTATION_TO_CELL: dict[str, Cell] = {"B": Cell.BLACK, "W": Cell.WHITE}

CELL_TO_NOTATION: dict[Cell, str] = {value: key for key, value in NOTATION_TO_CELL.items()}

Rows = tuple[tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Board:
    rows: Rows

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple((Cell.EMPTY,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def starting(cls) -> Self:
        """Standard opening: two stones of each color, diagonally arranged on the 4 center cells."""
        return cls.empty().place([Position(3, 3), Position(4, 4)], Color.WHITE).place(
            [Position(3, 4), Position(4, 3)], Color.BLACK
        )

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> Self:
        """Construct from the nested lists used in the session record (0 empty, 1 black, 2 white)."""
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise InvalidBoardError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}.")
        try:
            return cls(tuple(tuple(Cell(value) for value in row) for row in grid))
        except ValueError as exc:
            raise InvalidBoardError(f"Unknown cell value in grid: {exc}") from exc

    def to_grid(self) -> list[list[Cell]]:
        return [list(row) for row in self.rows]

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board using the compact run-length notation.

        Rows are separated by slashes and read from row 0 to row 7, each row from column 0 to column 7.
        ex. the starting position:
        8/8/8/3WB3/3BW3/8/8/8
        means:
        * rows 0 to 2 have 8 consecutive empty cells
        * row 3: 3 empty cells, a white stone, a black stone, 3 empty cells
        * row 4: the mirror image
        * rows 5 to 7 empty again
        """
        notation_by_rows = notation.strip().split("/")
        if len(notation_by_rows) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Board notation must contain {BOARD_SIZE} rows: {notation!r}"
            )
        rows: list[tuple[Cell, ...]] = []
        for notation_one_row in notation_by_rows:
            row: list[Cell] = []
            for character in notation_one_row:
                if character.isdigit():
                    # A number denotes the amount of empty cells after each other
                    row.extend([Cell.EMPTY] * int(character))
                elif character.upper() in NOTATION_TO_CELL:
                    row.append(NOTATION_TO_CELL[character.upper()])
                else:
                    raise InvalidBoardError(
                        f"Unknown character {character!r} in board notation."
                    )
            if len(row) != BOARD_SIZE:
                raise InvalidBoardError(
                    f"Row {notation_one_row!r} does not describe {BOARD_SIZE} cells."
                )
            rows.append(tuple(row))
        return cls(tuple(rows))

    def to_notation(self) -> str:
        return "/".join(self._row_to_notation(row) for row in self.rows)

    def _row_to_notation(self, row: tuple[Cell, ...]) -> str:
        characters: list[str] = []
        empty_count = 0
        for cell in row:
            if cell == Cell.EMPTY:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(CELL_TO_NOTATION[cell])

        # an entirely empty row is still written as a number
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def cell(self, position: Position) -> Cell:
        return self.rows[position.row][position.col]

    def is_empty(self, position: Position) -> bool:
        return self.cell(position) == Cell.EMPTY

    def positions(self) -> Iterator[Position]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield Position(row, col)

    def locate(self, cell: Cell) -> list[Position]:
        return [position for position in self.positions() if self.cell(position) == cell]

    def empty_cells(self) -> list[Position]:
        return self.locate(Cell.EMPTY)

    def count(self, color: Color) -> int:
        return sum(row.count(CELL_OF[color]) for row in self.rows)

    def place(self, positions: Iterable[Position], color: Color) -> Self:
        """New board with every given position set to the color (placement and flips alike)."""
        grid = self.to_grid()
        for position in positions:
            grid[position.row][position.col] = CELL_OF[color]
        return type(self)(tuple(tuple(row) for row in grid))

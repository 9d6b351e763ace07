"""Unit tests for /src/reversi/board.py"""

import pytest

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Cell, Color
from src.reversi.board import Board
from src.reversi.position import Position

STARTING_NOTATION = "8/8/8/3WB3/3BW3/8/8/8"
EMPTY_NOTATION = "/".join(["8"] * 8)


# -- CREATION LOGIC ---
def test_starting_board() -> None:
    """Exactly the 4 center cells are occupied, diagonally arranged."""
    board = Board.starting()

    assert board.cell(Position(3, 3)) == Cell.WHITE
    assert board.cell(Position(3, 4)) == Cell.BLACK
    assert board.cell(Position(4, 3)) == Cell.BLACK
    assert board.cell(Position(4, 4)) == Cell.WHITE
    assert len(board.empty_cells()) == 60
    assert board.to_notation() == STARTING_NOTATION


def test_creating_board_from_notation() -> None:
    board = Board.from_notation("B7/8/8/3WB3/3BW3/8/8/6WW")

    assert board.cell(Position(0, 0)) == Cell.BLACK
    assert board.cell(Position(7, 6)) == Cell.WHITE
    assert board.cell(Position(7, 7)) == Cell.WHITE
    assert board.locate(Cell.BLACK) == [Position(0, 0), Position(3, 4), Position(4, 3)]


@pytest.mark.parametrize(
    "notation",
    [
        STARTING_NOTATION,
        EMPTY_NOTATION,
        "BWBWBWBW/WBWBWBWB/8/1B1W1B1W/8/8/8/7B",
    ],
)
def test_notation_roundtrip(notation: str) -> None:
    assert Board.from_notation(notation).to_notation() == notation


def test_lowercase_notation_is_accepted() -> None:
    assert Board.from_notation("8/8/8/3wb3/3bw3/8/8/8") == Board.starting()


@pytest.mark.parametrize(
    "notation",
    [
        "8/8/8/8/8/8/8",  # only 7 rows
        "8/8/8/8/8/8/8/8/8",  # 9 rows
        "8/8/8/3WB2/3BW3/8/8/8",  # a row with 7 cells
        "8/8/8/3WB4/3BW3/8/8/8",  # a row with 9 cells
        "8/8/8/3XB3/3BW3/8/8/8",  # unknown stone
    ],
)
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_notation(notation)


def test_grid_roundtrip() -> None:
    """The session record stores the board as nested lists of 0/1/2."""
    grid = Board.starting().to_grid()
    assert grid[3][3] == 2
    assert grid[3][4] == 1
    assert grid[0][0] == 0
    assert Board.from_grid(grid) == Board.starting()


@pytest.mark.parametrize(
    "grid",
    [
        [[0] * 8] * 7,
        [[0] * 7] * 8,
        [[0] * 8] * 7 + [[0] * 7 + [3]],
    ],
)
def test_invalid_grid(grid: list[list[int]]) -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_grid(grid)


# -- QUERIES --
def test_count_stones() -> None:
    board = Board.from_notation("BBB5/8/8/3WB3/3BW3/8/8/8")
    assert board.count(Color.BLACK) == 5
    assert board.count(Color.WHITE) == 2


def test_positions_cover_the_whole_board() -> None:
    positions = list(Board.empty().positions())
    assert len(positions) == 64
    assert len(set(positions)) == 64
    assert positions[0] == Position(0, 0)
    assert positions[-1] == Position(7, 7)


# -- UPDATES --
def test_place_returns_a_new_board() -> None:
    board = Board.starting()
    after = board.place([Position(2, 3), Position(3, 3)], Color.BLACK)

    assert after.cell(Position(2, 3)) == Cell.BLACK
    assert after.cell(Position(3, 3)) == Cell.BLACK
    # input board untouched
    assert board.cell(Position(2, 3)) == Cell.EMPTY
    assert board.cell(Position(3, 3)) == Cell.WHITE


def test_board_is_immutable() -> None:
    board = Board.starting()
    with pytest.raises(AttributeError):
        board.rows = Board.empty().rows  # type: ignore[misc]

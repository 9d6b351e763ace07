"""
Rules of Reversi (Othello)

Pure functions over a Board and a player color: legality, flipping, scoring and turn advancement.
None of them mutate their input; a move produces a new Board.

Illegal placements are an ordinary event (every misclick is one), so legality is probed with plain booleans / empty sets.
Only apply_move raises (IllegalMoveError), to refuse corrupting a board when a caller skipped the check.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import CELL_OF, Cell, Color, GamePhase, GameResult
from src.reversi.board import Board
from src.reversi.position import DIRECTIONS, Position, Vector


@dataclass(frozen=True)
class Transition:
    """Outcome of a move for the state machine: who moves next, in which phase, and the result once finished."""

    next_player: Color
    phase: GamePhase
    result: Optional[GameResult] = None


def opponent(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


def _bracketed_run(
    board: Board, position: Position, direction: Vector, color: Color
) -> list[Position]:
    """
    Raycast from the position in one direction.
    ---

    Collect contiguous opponent stones. The run counts only if a stone of our own color closes it (the bracket).
    Hitting an empty cell or the edge of the board first means the direction contributes nothing.
    """
    own = CELL_OF[color]
    theirs = CELL_OF[opponent(color)]
    run: list[Position] = []
    current = position.step(direction)
    while current.is_within_bounds():
        cell = board.cell(current)
        if cell == theirs:
            run.append(current)
        elif cell == own:
            return run
        else:
            break
        current = current.step(direction)
    return []


def flippable(board: Board, position: Position, color: Color) -> set[Position]:
    """Union over all 8 directions of the opponent stones that placing at the position would flip."""
    if not position.is_within_bounds():
        return set()
    flips: set[Position] = set()
    for direction in DIRECTIONS:
        flips.update(_bracketed_run(board, position, direction, color))
    return flips


def is_legal_move(board: Board, position: Position, color: Color) -> bool:
    return (
        position.is_within_bounds()
        and board.cell(position) == Cell.EMPTY
        and bool(flippable(board, position, color))
    )


def legal_moves(board: Board, color: Color) -> set[Position]:
    """Every empty cell that flips at least one stone. An empty set is a valid outcome (the player must pass)."""
    return {
        position
        for position in board.empty_cells()
        if flippable(board, position, color)
    }


def apply_move(board: Board, position: Position, color: Color) -> Board:
    """Place a stone and flip everything it brackets. Callers are expected to check legality first."""
    if not position.is_within_bounds():
        raise IllegalMoveError(f"Position {position} is off the board.")
    if board.cell(position) != Cell.EMPTY:
        raise IllegalMoveError(
            f"Cell {position.to_notation()} is already occupied."
        )
    flips = flippable(board, position, color)
    if not flips:
        raise IllegalMoveError(
            f"Placing {color} on {position.to_notation()} does not flip any stone."
        )
    return board.place([position, *flips], color)


def score(board: Board) -> tuple[int, int]:
    """(black count, white count)"""
    return board.count(Color.BLACK), board.count(Color.WHITE)


def decide_result(board: Board) -> GameResult:
    black, white = score(board)
    if black > white:
        return GameResult.BLACK
    if white > black:
        return GameResult.WHITE
    return GameResult.DRAW


def turn_transition(board: Board, just_moved: Color) -> Transition:
    """
    Decide what happens after `just_moved` played and produced `board`.
    ---

    1. The opponent has a legal move --> it is their turn.
    2. The opponent must pass, but the mover can still play --> the mover simply moves again (no explicit pass state).
    3. Neither color can move (double pass) --> game finished, result by majority of stones.

    The double pass is the only way a game ends (a full board is just a special case of it).
    """
    other = opponent(just_moved)
    if legal_moves(board, other):
        return Transition(next_player=other, phase=GamePhase.PLAYING)

    if legal_moves(board, just_moved):
        return Transition(next_player=just_moved, phase=GamePhase.PLAYING)

    # NOTE the result is only ever computed here, on the transition into FINISHED. The turn stays with the last mover.
    return Transition(
        next_player=just_moved,
        phase=GamePhase.FINISHED,
        result=decide_result(board),
    )

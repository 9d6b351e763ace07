"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Color(StrEnum):
    BLACK = "black"
    WHITE = "white"


class GamePhase(StrEnum):
    # SETUP only ever exists locally (no session yet). It is never stored in a SessionRecord.
    SETUP = "setup"
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class GameResult(StrEnum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"


# Reversi board is always 8x8 (rows and columns 0-indexed)
BOARD_SIZE = 8


# --- Color DOES NOT contain an option for empty cells. A cell on the board (and on the wire) uses the integer Cell values.
class Cell(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2


CELL_OF: dict[Color, Cell] = {Color.BLACK: Cell.BLACK, Color.WHITE: Cell.WHITE}

COLOR_OF: dict[Cell, Color] = {cell: color for color, cell in CELL_OF.items()}

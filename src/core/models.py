"""
Boundary layer data model(s).

The SessionRecord is the single shared document representing one game. Both participants read/write it through the shared store,
so it is the contract between the Session Coordinator (service layer), the store layer and the domain layer (Game).
(Keys on the wire are camelCase, the same document the web client writes.
A player color on the wire is the cell value of its stones: 1 black, 2 white.
Seats and the result keep their names: players.black, gameResult "white".)
"""

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from src.core.exceptions import MalformedRecordError
from src.core.shared_types import (
    BOARD_SIZE,
    CELL_OF,
    COLOR_OF,
    Cell,
    Color,
    GamePhase,
    GameResult,
)

# Type aliases to make SessionRecord easier to read
ParticipantId = str
Grid = list[list[Cell]]


def now_ms() -> int:
    """Timestamps in the record are epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def color_from_wire(value: Any) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"player color must be an integer, got {value!r}")
    if value not in (Cell.BLACK, Cell.WHITE):
        raise ValueError(f"{value} is not a player color")
    return COLOR_OF[Cell(value)]


def color_to_wire(color: Color) -> int:
    return int(CELL_OF[color])


class LastMove(BaseModel):
    """Most recently applied move. Only used for a "last move" indicator, never by the rules."""

    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)
    player: Color
    timestamp: int

    @field_validator("player", mode="before")
    @classmethod
    def validate_player(cls, value: Any) -> Color:
        return color_from_wire(value)

    @field_serializer("player", when_used="json")
    def serialize_player(self, value: Color) -> int:
        return color_to_wire(value)


class SessionRecord(BaseModel):
    """Authoritative state of one session, as stored in the shared document store."""

    model_config = ConfigDict(populate_by_name=True)

    board: Grid
    current_player: Color = Field(alias="currentPlayer")
    phase: GamePhase = Field(alias="gamePhase")
    result: Optional[GameResult] = Field(default=None, alias="gameResult")
    seats: dict[Color, ParticipantId] = Field(alias="players")
    created_at: int = Field(alias="createdAt")
    last_move: Optional[LastMove] = Field(default=None, alias="lastMove")

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: Grid) -> Grid:
        if len(value) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in value):
            raise ValueError(f"board must be a {BOARD_SIZE}x{BOARD_SIZE} grid")
        return value

    @field_validator("current_player", mode="before")
    @classmethod
    def validate_current_player(cls, value: Any) -> Color:
        return color_from_wire(value)

    @field_serializer("current_player", when_used="json")
    def serialize_current_player(self, value: Color) -> int:
        return color_to_wire(value)

    @field_validator("phase")
    @classmethod
    def validate_phase(cls, value: GamePhase) -> GamePhase:
        if value == GamePhase.SETUP:
            raise ValueError("'setup' is a local condition and cannot be stored")
        return value


# Fields published after every move. Always the full state, never a diff against what the other side is assumed to have.
MOVE_FIELDS = {"board", "current_player", "phase", "result", "last_move"}


def parse_record(document: Any) -> SessionRecord:
    """Validate the shape of a stored document."""
    try:
        return SessionRecord.model_validate(document)
    except ValidationError as exc:
        raise MalformedRecordError(
            f"Session document has an unexpected shape ({exc.error_count()} error(s)): {exc}"
        ) from exc


def dump_record(record: SessionRecord, fields: Optional[set[str]] = None) -> dict[str, Any]:
    """JSON-compatible document (camelCase keys). Optionally restricted to a subset of fields."""
    return record.model_dump(mode="json", by_alias=True, include=fields)


# --- Identifiers ---
# Session tokens are short enough to be read out / typed in by hand
SESSION_ID_LENGTH = 6
SESSION_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_session_id() -> str:
    return "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_LENGTH))


def generate_participant_id() -> ParticipantId:
    return uuid4().hex

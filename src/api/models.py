"""Requests and Response models (what a presentation layer hands to / gets from the Session Coordinator)"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import (
    SESSION_ID_ALPHABET,
    SESSION_ID_LENGTH,
    Grid,
    LastMove,
    ParticipantId,
)
from src.core.shared_types import Color, GamePhase, GameResult


# --- REQUEST MODELS ---
class JoinSessionRequest(BaseModel):
    session_id: str

    @field_validator("session_id")
    @classmethod
    def validate_session_id(cls, value: str) -> str:
        # tokens get typed in by hand: be lenient with whitespace and case
        session_id = value.strip().upper()
        if len(session_id) != SESSION_ID_LENGTH or any(
            character not in SESSION_ID_ALPHABET for character in session_id
        ):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a session token ({SESSION_ID_LENGTH} letters/digits)."
            )
        return session_id


# --- RESPONSE MODELS ---
class SessionView(BaseModel):
    """Snapshot of one participant's view of the session. Everything a UI needs to draw, no rules logic required."""

    session_id: Optional[str]
    participant_id: ParticipantId
    color: Optional[Color]
    phase: GamePhase
    current_player: Color
    result: Optional[GameResult]
    board: Grid
    black_count: int
    white_count: int
    is_my_turn: bool
    opponent_connected: bool
    legal_moves: list[tuple[int, int]]
    last_move: Optional[LastMove]

"""Unit tests for src/api/models.py"""

import pytest

from src.api.models import JoinSessionRequest, SessionView
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GamePhase
from src.reversi.board import Board


# -- Validation - JoinSessionRequest --
def test_valid_token() -> None:
    request = JoinSessionRequest(session_id="AB12CD")
    assert request.session_id == "AB12CD"


def test_token_is_normalised() -> None:
    """Tokens get typed in by hand: surrounding whitespace and lower case are tolerated."""
    request = JoinSessionRequest(session_id="  ab12cd\n")
    assert request.session_id == "AB12CD"


@pytest.mark.parametrize(
    "token",
    [
        "",
        "AB12C",  # too short
        "AB12CDE",  # too long
        "AB 2CD",  # space inside
        "ÄB12CD",  # not in the alphabet
    ],
)
def test_invalid_token(token: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = JoinSessionRequest(session_id=token)


# -- SessionView --
def test_session_view_serialises_to_json() -> None:
    view = SessionView(
        session_id=None,
        participant_id="someone",
        color=None,
        phase=GamePhase.SETUP,
        current_player=Color.BLACK,
        result=None,
        board=Board.starting().to_grid(),
        black_count=2,
        white_count=2,
        is_my_turn=False,
        opponent_connected=False,
        legal_moves=[],
        last_move=None,
    )
    dumped = view.model_dump(mode="json")
    assert dumped["phase"] == "setup"
    assert dumped["board"][3][3] == 2
    assert dumped["legal_moves"] == []

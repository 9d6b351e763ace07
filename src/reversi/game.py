"""
The Game class is the entrypoint into the domain layer for the service layer.
It wraps one SessionRecord with the business logic required to seat players and play a turn -->
the service layer then publishes the resulting fields to the shared store.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Self

from src.core.exceptions import GameStateError, NotYourTurnError, SeatTakenError
from src.core.models import (
    MOVE_FIELDS,
    LastMove,
    ParticipantId,
    SessionRecord,
    dump_record,
    now_ms,
)
from src.core.shared_types import Color, GamePhase, GameResult
from src.reversi import rules
from src.reversi.board import Board
from src.reversi.position import Position

logger = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Color
    phase: GamePhase
    result: Optional[GameResult]
    players: dict[Color, ParticipantId]
    created_at: int
    last_move: Optional[LastMove] = None

    @classmethod
    def from_record(cls, record: SessionRecord) -> Self:
        """Define how to construct a Game from the record the Service layer actually has"""
        return cls(
            board=Board.from_grid(record.board),
            current_player=record.current_player,
            phase=record.phase,
            result=record.result,
            players=dict(record.seats),
            created_at=record.created_at,
            last_move=record.last_move,
        )

    def to_record(self) -> SessionRecord:
        """Encode back into the format the Service layer uses"""
        return SessionRecord(
            board=self.board.to_grid(),
            current_player=self.current_player,
            phase=self.phase,
            result=self.result,
            seats=dict(self.players),
            created_at=self.created_at,
            last_move=self.last_move,
        )

    @classmethod
    def new_game(cls, host_id: ParticipantId, created_at: Optional[int] = None) -> Self:
        """The host always plays black, and black always opens. The white seat stays open until someone joins."""
        return cls(
            board=Board.starting(),
            current_player=Color.BLACK,
            phase=GamePhase.WAITING,
            result=None,
            players={Color.BLACK: host_id},
            created_at=created_at if created_at is not None else now_ms(),
        )

    @property
    def score(self) -> tuple[int, int]:
        return rules.score(self.board)

    def has_opponent(self, color: Color) -> bool:
        return rules.opponent(color) in self.players

    def register_player(self, participant_id: ParticipantId) -> Color:
        """Registering the 2nd player (always white) to an open game"""
        if Color.WHITE in self.players:
            raise SeatTakenError(
                "Cannot join this game. The white seat is already taken."
            )
        self.players[Color.WHITE] = participant_id
        self.phase = GamePhase.PLAYING
        return Color.WHITE

    def seat_fields(self, color: Color) -> dict[str, Any]:
        """The partial update claiming a seat. Touches only the seat and the phase."""
        return {
            f"players/{color}": self.players[color],
            "gamePhase": str(self.phase),
        }

    def legal_moves(self, color: Color) -> list[Position]:
        """Moves available to the color. Only the player to move has any (for move hints)."""
        if self.phase != GamePhase.PLAYING or color != self.current_player:
            return []
        return sorted(rules.legal_moves(self.board, color))

    def play(self, position: Position, color: Color) -> None:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) in progress and it is your turn
        2. place the stone and flip (the rules refuse an illegal position)
        3. decide who moves next / whether the game is over
        4. remember the move for the "last move" indicator
        """
        if self.phase != GamePhase.PLAYING:
            raise GameStateError(f"Game is not in progress. phase: {self.phase}")

        if color != self.current_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.current_player} to make a move first."
            )

        self.board = rules.apply_move(self.board, position, color)

        transition = rules.turn_transition(self.board, color)
        self.current_player = transition.next_player
        self.phase = transition.phase
        self.result = transition.result
        self.last_move = LastMove(
            row=position.row, col=position.col, player=color, timestamp=now_ms()
        )
        logger.debug(
            "%s played %s -> %s", color, position.to_notation(), self.board.to_notation()
        )

    def move_fields(self) -> dict[str, Any]:
        """Full game state after a move, as a partial document for the shared store."""
        return dump_record(self.to_record(), MOVE_FIELDS)

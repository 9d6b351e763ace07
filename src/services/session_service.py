"""Orchestration of one participant's session: local actions go through the rules, then out to the shared store (and remote changes come back in)."""

import logging
from typing import Optional

from src.api.models import JoinSessionRequest, SessionView
from src.core.config import Settings
from src.core.exceptions import (
    MalformedRecordError,
    SessionError,
    SessionNotFoundError,
    StoreUnavailableError,
)
from src.core.models import (
    LastMove,
    ParticipantId,
    SessionRecord,
    dump_record,
    generate_participant_id,
    generate_session_id,
    parse_record,
)
from src.core.shared_types import Color, GamePhase, GameResult
from src.reversi import rules
from src.reversi.board import Board
from src.reversi.game import Game
from src.reversi.position import Position
from src.store.shared_store import Document, SharedStore

logger = logging.getLogger(__name__)

# Collisions of 6 character tokens are rare, a handful of retries is plenty
MAX_SESSION_ID_ATTEMPTS = 5


class SessionCoordinator:
    """
    One participant's view of a shared session record.
    ----

    There is no server: both participants write to the same document.
    Seat claims and turns are checked on this side only, so join_session() and attempt_move() are best-effort, NOT linearizable.
    Two joiners racing for the white seat can both succeed (last write wins), and a misbehaving client could write out of turn.

    The local view only ever changes through on_remote_update() (the store's subscription), apart from create/join/leave.
    Every incoming record replaces the local view as a whole and is trusted as-is.
    """

    def __init__(
        self,
        store: Optional[SharedStore],
        settings: Optional[Settings] = None,
        participant_id: Optional[ParticipantId] = None,
    ) -> None:
        self.store = store
        self.settings = settings or Settings()
        self.participant_id = participant_id or generate_participant_id()
        self.session_id: Optional[str] = None
        self.color: Optional[Color] = None
        self._record: Optional[SessionRecord] = None

    # -- Session lifecycle ---
    def create_session(self) -> str:
        """Host a new game (as black). Returns the token to share with the opponent."""
        store = self._require_store()

        game = Game.new_game(host_id=self.participant_id)
        session_id = self._unused_session_id(store)
        record = game.to_record()
        store.write(self.settings.session_path(session_id), dump_record(record))

        # a new game discards whatever session we were in before
        self.leave_session()
        self._enter(session_id, Color.BLACK, record)
        logger.info("Created session %s as %s", session_id, Color.BLACK)
        return session_id

    def join_session(self, session_id: str) -> None:
        """
        Take the white seat of an existing session.
        ---

        Read-then-write, not atomic: the seat check happens on the record as read.
        Raises SessionNotFoundError / SeatTakenError before anything is written.
        """
        store = self._require_store()
        request = JoinSessionRequest(session_id=session_id)
        path = self.settings.session_path(request.session_id)

        document = store.read(path)
        if document is None:
            raise SessionNotFoundError(f"No session with token {request.session_id!r}.")

        game = Game.from_record(parse_record(document))
        color = game.register_player(self.participant_id)
        store.patch(path, game.seat_fields(color))

        self.leave_session()
        self._enter(request.session_id, color, game.to_record())
        logger.info("Joined session %s as %s", request.session_id, color)

    def leave_session(self) -> None:
        """Stop listening and go back to setup. The remote record is left as it is."""
        if self.session_id is None:
            return
        if self.store is not None:
            self.store.unsubscribe(
                self.settings.session_path(self.session_id), self.on_remote_update
            )
        logger.info("Left session %s", self.session_id)
        self.session_id = None
        self.color = None
        self._record = None

    # -- Playing ---
    def attempt_move(self, position: Position) -> bool:
        """
        Try to place a stone for the local player.
        ---

        False (and nothing written) unless the game is in progress, it is our turn and the move is legal on the local board.
        Otherwise the full resulting state is published in a single patch. True once the store accepted it.
        NOTE the local view is not updated here, the subscription delivers the new record.
        """
        if self._record is None or self.color is None:
            return False

        if not self.is_my_turn:
            logger.debug(
                "Ignoring move %s: phase %s, %s to move",
                position.to_notation(),
                self._record.phase,
                self._record.current_player,
            )
            return False

        game = Game.from_record(self._record)
        if not rules.is_legal_move(game.board, position, self.color):
            logger.debug("Rejected illegal move %s for %s", position.to_notation(), self.color)
            return False

        game.play(position, self.color)
        store = self._require_store()
        store.patch(self.settings.session_path(self.session_id), game.move_fields())
        logger.info(
            "%s played %s in session %s (next: %s, phase: %s)",
            self.color,
            position.to_notation(),
            self.session_id,
            game.current_player,
            game.phase,
        )
        return True

    def on_remote_update(self, document: Optional[Document]) -> None:
        """Subscription callback. The remote record always wins over the local view."""
        if document is None:
            logger.warning(
                "Session %s has no stored record, keeping local state", self.session_id
            )
            return
        try:
            record = parse_record(document)
        except MalformedRecordError as exc:
            logger.warning("Discarding update of session %s: %s", self.session_id, exc)
            return
        self._record = record

    # -- Local view ---
    @property
    def is_connected(self) -> bool:
        return self.session_id is not None

    @property
    def phase(self) -> GamePhase:
        return self._record.phase if self._record else GamePhase.SETUP

    @property
    def board(self) -> Board:
        return Board.from_grid(self._record.board) if self._record else Board.starting()

    @property
    def current_player(self) -> Color:
        return self._record.current_player if self._record else Color.BLACK

    @property
    def result(self) -> Optional[GameResult]:
        return self._record.result if self._record else None

    @property
    def last_move(self) -> Optional[LastMove]:
        return self._record.last_move if self._record else None

    @property
    def opponent_connected(self) -> bool:
        if self._record is None or self.color is None:
            return False
        return Game.from_record(self._record).has_opponent(self.color)

    @property
    def is_my_turn(self) -> bool:
        return (
            self._record is not None
            and self._record.phase == GamePhase.PLAYING
            and self._record.current_player == self.color
        )

    @property
    def score(self) -> tuple[int, int]:
        return rules.score(self.board)

    def legal_moves(self) -> list[Position]:
        """Move hints: only non-empty while it is our turn."""
        if self._record is None or self.color is None:
            return []
        return Game.from_record(self._record).legal_moves(self.color)

    def is_valid_move(self, position: Position) -> bool:
        return position in self.legal_moves()

    def view(self) -> SessionView:
        black_count, white_count = self.score
        return SessionView(
            session_id=self.session_id,
            participant_id=self.participant_id,
            color=self.color,
            phase=self.phase,
            current_player=self.current_player,
            result=self.result,
            board=self.board.to_grid(),
            black_count=black_count,
            white_count=white_count,
            is_my_turn=self.is_my_turn,
            opponent_connected=self.opponent_connected,
            legal_moves=[(move.row, move.col) for move in self.legal_moves()],
            last_move=self.last_move,
        )

    # -- Internal helpers --
    def _enter(self, session_id: str, color: Color, record: SessionRecord) -> None:
        """Adopt the session locally, then follow the remote record."""
        self.session_id = session_id
        self.color = color
        self._record = record
        try:
            self._require_store().subscribe(
                self.settings.session_path(session_id), self.on_remote_update
            )
        except StoreUnavailableError:
            self.session_id = None
            self.color = None
            self._record = None
            raise

    def _unused_session_id(self, store: SharedStore) -> str:
        for _ in range(MAX_SESSION_ID_ATTEMPTS):
            session_id = generate_session_id()
            if store.read(self.settings.session_path(session_id)) is None:
                return session_id
        raise SessionError("Could not find an unused session token. Try again.")

    def _require_store(self) -> SharedStore:
        if self.store is None:
            raise StoreUnavailableError("No shared store configured.")
        return self.store

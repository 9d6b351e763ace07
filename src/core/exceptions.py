"""
Custom exceptions.

Every exception raised on purpose by this project derives from GameError, so a caller (ex. a UI) can catch a single base class.
"""


class GameError(Exception):
    """Base class of all project specific errors."""


class InvalidRequestError(GameError):
    """Input coming from the outside (ex. a typed-in session token) has the wrong shape."""


class InvalidBoardError(GameError):
    """Board notation / grid cannot be interpreted."""


class GameStateError(GameError):
    """Action is not allowed in the current phase of the game."""


class NotYourTurnError(GameStateError):
    """Player attempted to move while the other color is to move."""


class IllegalMoveError(GameError):
    """Placement on an occupied cell, or a placement that flips nothing."""


class SessionError(GameError):
    """Join-time conditions. Recoverable: retry with another token or wait."""


class SessionNotFoundError(SessionError):
    """No session record stored under the token."""


class SeatTakenError(SessionError):
    """The white seat of the session is already claimed."""


class StoreUnavailableError(GameError):
    """The shared store could not be reached (no connection configured, transport or auth failure)."""


class MalformedRecordError(GameError):
    """A stored session document does not have the expected shape."""

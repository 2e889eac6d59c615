"""
Custom exceptions.

Every layer raises a subclass of GameError, so callers higher up can decide to catch broadly or narrowly.
"""


class GameError(Exception):
    """Top-level exception for anything raised by this project."""


# --- ENGINE ---
class InvalidMoveError(GameError):
    """A move that cannot be applied to the current game."""


class OutOfRangeError(InvalidMoveError):
    """Coordinates outside the board."""


class CellOccupiedError(InvalidMoveError):
    """Target cell already holds a stone."""


class GameStateError(GameError):
    """Operation not allowed in the current state of the game."""


# --- SESSION ---
class SessionError(GameError):
    """Problems with the online session."""


class InvalidRoomIdError(SessionError):
    """Room identifier is not 5 alphanumeric characters."""


class InvalidMessageError(SessionError):
    """Inbound data could not be decoded into a known message."""


class TransportError(SessionError):
    """The transport could not open, dial or deliver."""


# --- COLLABORATORS ---
class SuggesterError(GameError):
    """The move-suggestion service failed or returned garbage."""


class RepositoryError(GameError):
    """Persistence layer failures."""


class InvalidRequestError(GameError):
    """Request data that does not pass validation."""

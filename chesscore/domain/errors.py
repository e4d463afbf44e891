from __future__ import annotations


class GameError(Exception):
    """Base class for game-related domain errors."""


class IllegalMoveError(GameError):
    """Raised when a move cannot be played on the current board."""


class GameNotFoundError(GameError):
    """Raised when the requested game does not exist."""


class NoLegalMovesError(GameError):
    """Raised when a move selector is asked to move in a terminal position."""


class InvalidSquareError(GameError, ValueError):
    """Raised when a square name is not a valid board coordinate."""


class InvalidPositionError(GameError, ValueError):
    """Raised when a FEN string cannot be loaded."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import chess

from chesscore.domain.entities.check_geometry import CheckGeometry
from chesscore.domain.errors import InvalidSquareError


class PlayerSide(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def color(self) -> chess.Color:
        return chess.WHITE if self is PlayerSide.WHITE else chess.BLACK

    @classmethod
    def from_color(cls, color: chess.Color) -> "PlayerSide":
        return cls.WHITE if color == chess.WHITE else cls.BLACK


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


class ControllerState(str, Enum):
    IDLE = "idle"
    PENDING_PROMOTION = "pending_promotion"
    AUTOMATED_TURN = "automated_turn"
    GAME_OVER = "game_over"


class MoveResultKind(str, Enum):
    APPLIED = "applied"
    PROMOTION_REQUIRED = "promotion_required"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    WRONG_STATE = "wrong_state"
    GAME_OVER = "game_over"
    EMPTY_SQUARE = "empty_square"
    WRONG_TURN = "wrong_turn"
    AUTOMATED_SIDE = "automated_side"
    ILLEGAL_MOVE = "illegal_move"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move submission.

    A rejected result is a normal answer ("snap the piece back"), never an
    exception. ``san`` is set only for applied moves.
    """

    kind: MoveResultKind
    san: Optional[str] = None
    reason: Optional[RejectionReason] = None

    @classmethod
    def applied(cls, san: str) -> "MoveResult":
        return cls(MoveResultKind.APPLIED, san=san)

    @classmethod
    def promotion_required(cls) -> "MoveResult":
        return cls(MoveResultKind.PROMOTION_REQUIRED)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "MoveResult":
        return cls(MoveResultKind.REJECTED, reason=reason)

    @property
    def is_applied(self) -> bool:
        return self.kind is MoveResultKind.APPLIED

    @property
    def is_rejected(self) -> bool:
        return self.kind is MoveResultKind.REJECTED


@dataclass(frozen=True)
class PendingPromotion:
    from_square: chess.Square
    to_square: chess.Square


@dataclass(frozen=True)
class LastMove:
    from_square: chess.Square
    to_square: chess.Square


@dataclass(frozen=True)
class GameOutcome:
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[PlayerSide] = None

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS


@dataclass(frozen=True)
class HistoryEntry:
    """One numbered row of the move list: white's move and black's reply."""

    number: int
    white: Optional[str] = None
    black: Optional[str] = None


@dataclass(frozen=True)
class GameSnapshot:
    fen: str
    history: Tuple[str, ...]
    check_geometry: CheckGeometry
    state: ControllerState
    side_to_move: PlayerSide
    in_check: bool
    outcome: GameOutcome
    pending_promotion: Optional[PendingPromotion] = None
    last_move: Optional[LastMove] = None


def parse_square(name: str) -> chess.Square:
    """Return the square index for a name such as ``"e4"``."""
    try:
        return chess.parse_square(name.strip().lower())
    except (ValueError, AttributeError) as exc:
        raise InvalidSquareError(f"Invalid square: {name!r}") from exc


def is_promotion_rank(square: chess.Square, color: chess.Color) -> bool:
    return chess.square_rank(square) == (7 if color == chess.WHITE else 0)

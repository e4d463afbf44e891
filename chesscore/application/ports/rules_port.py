from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import chess

from chesscore.domain.entities.game import GameOutcome


class RulesPort(ABC):
    """Boundary to the chess rules engine.

    Positions handed to an implementation are never mutated; ``apply``
    returns a new position.
    """

    @abstractmethod
    def initial_position(self) -> chess.Board:
        """Return the standard starting position."""

    @abstractmethod
    def legal_moves(
        self, position: chess.Board, from_square: Optional[chess.Square] = None
    ) -> List[chess.Move]:
        """Return legal moves, optionally only those leaving ``from_square``."""

    @abstractmethod
    def pseudo_legal_moves(
        self, position: chess.Board, from_square: Optional[chess.Square] = None
    ) -> List[chess.Move]:
        """Like legal_moves, but moves that expose the mover's own king are kept."""

    @abstractmethod
    def apply(self, position: chess.Board, move: chess.Move) -> chess.Board:
        """Return the position after ``move``; raise IllegalMoveError if illegal."""

    @abstractmethod
    def san(self, position: chess.Board, move: chess.Move) -> str:
        """Return ``move`` in standard algebraic notation."""

    @abstractmethod
    def side_to_move(self, position: chess.Board) -> chess.Color:
        ...

    @abstractmethod
    def piece_at(self, position: chess.Board, square: chess.Square) -> Optional[chess.Piece]:
        ...

    @abstractmethod
    def is_check(self, position: chess.Board) -> bool:
        ...

    @abstractmethod
    def is_checkmate(self, position: chess.Board) -> bool:
        ...

    @abstractmethod
    def is_draw(self, position: chess.Board) -> bool:
        ...

    @abstractmethod
    def is_game_over(self, position: chess.Board) -> bool:
        ...

    @abstractmethod
    def outcome(self, position: chess.Board) -> GameOutcome:
        ...

    @abstractmethod
    def load(self, fen: str) -> chess.Board:
        """Return the position described by ``fen``; raise InvalidPositionError."""

    @abstractmethod
    def export(self, position: chess.Board) -> str:
        """Return the FEN of ``position``."""

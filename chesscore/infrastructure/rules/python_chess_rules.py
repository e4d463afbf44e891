from __future__ import annotations

from typing import List, Optional

import chess

from chesscore.application.ports.rules_port import RulesPort
from chesscore.domain.entities.game import GameOutcome, GameStatus, PlayerSide
from chesscore.domain.errors import IllegalMoveError, InvalidPositionError


class PythonChessRules(RulesPort):
    """Rules adapter backed by python-chess.

    Every query works on the board it is given without touching it; ``apply``
    pushes onto a copy so the caller's position stays as it was.
    """

    def initial_position(self) -> chess.Board:
        return chess.Board()

    def legal_moves(
        self, position: chess.Board, from_square: Optional[chess.Square] = None
    ) -> List[chess.Move]:
        if from_square is None:
            return list(position.legal_moves)
        return list(position.generate_legal_moves(from_mask=chess.BB_SQUARES[from_square]))

    def pseudo_legal_moves(
        self, position: chess.Board, from_square: Optional[chess.Square] = None
    ) -> List[chess.Move]:
        if from_square is None:
            return list(position.pseudo_legal_moves)
        return list(position.generate_pseudo_legal_moves(from_mask=chess.BB_SQUARES[from_square]))

    def apply(self, position: chess.Board, move: chess.Move) -> chess.Board:
        if not position.is_legal(move):
            raise IllegalMoveError(f"Illegal move for current position: {move.uci()}")
        board = position.copy()
        board.push(move)
        return board

    def san(self, position: chess.Board, move: chess.Move) -> str:
        if not position.is_legal(move):
            raise IllegalMoveError(f"Illegal move for current position: {move.uci()}")
        return position.san(move)

    def side_to_move(self, position: chess.Board) -> chess.Color:
        return position.turn

    def piece_at(self, position: chess.Board, square: chess.Square) -> Optional[chess.Piece]:
        return position.piece_at(square)

    def is_check(self, position: chess.Board) -> bool:
        return position.is_check()

    def is_checkmate(self, position: chess.Board) -> bool:
        return position.is_checkmate()

    def is_draw(self, position: chess.Board) -> bool:
        outcome = self._final_outcome(position)
        return outcome is not None and outcome.winner is None

    def is_game_over(self, position: chess.Board) -> bool:
        return self._final_outcome(position) is not None

    def outcome(self, position: chess.Board) -> GameOutcome:
        outcome = self._final_outcome(position)
        if outcome is None:
            return GameOutcome()
        if outcome.winner is not None:
            return GameOutcome(GameStatus.CHECKMATE, PlayerSide.from_color(outcome.winner))
        if outcome.termination is chess.Termination.STALEMATE:
            return GameOutcome(GameStatus.STALEMATE)
        return GameOutcome(GameStatus.DRAW)

    def load(self, fen: str) -> chess.Board:
        try:
            return chess.Board(fen)
        except ValueError as exc:
            raise InvalidPositionError(f"Invalid FEN: {fen!r}") from exc

    def export(self, position: chess.Board) -> str:
        return position.fen()

    @staticmethod
    def _final_outcome(position: chess.Board) -> Optional[chess.Outcome]:
        """The game result once a draw has actually happened.

        ``outcome(claim_draw=True)`` also ends the game when the side to move
        could reach a repetition or the fifty-move mark with its next move.
        Here threefold repetition and the fifty-move rule only count once the
        position is on the board.
        """
        outcome = position.outcome(claim_draw=False)
        if outcome is not None:
            return outcome
        if position.halfmove_clock >= 100:
            return chess.Outcome(chess.Termination.FIFTY_MOVES, None)
        if position.is_repetition(3):
            return chess.Outcome(chess.Termination.THREEFOLD_REPETITION, None)
        return None

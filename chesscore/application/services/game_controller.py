"""GameController: the single owner of a game's position.

Every change to the board goes through ``attempt_move``,
``resolve_promotion``, ``reset`` or the automated path in
``maybe_trigger_automated_move``. The controller never schedules work on its
own; callers decide when the computer should move.
"""

from __future__ import annotations

import logging
import random
from typing import FrozenSet, List, Optional, Union

import chess

from chesscore.application.ports.move_selector import MoveSelector
from chesscore.application.ports.rules_port import RulesPort
from chesscore.application.services.check_geometry import resolve_check_geometry
from chesscore.config import GameConfig
from chesscore.domain.entities.check_geometry import CheckGeometry
from chesscore.domain.entities.game import (
    ControllerState,
    GameOutcome,
    GameSnapshot,
    HistoryEntry,
    LastMove,
    MoveResult,
    PendingPromotion,
    PlayerSide,
    RejectionReason,
    is_promotion_rank,
    parse_square,
)
from chesscore.domain.errors import IllegalMoveError, InvalidSquareError, NoLegalMovesError

logger = logging.getLogger(__name__)

SquareLike = Union[chess.Square, str]
PieceTypeLike = Union[chess.PieceType, str]

PROMOTION_PIECES = (chess.QUEEN, chess.ROOK, chess.BISHOP, chess.KNIGHT)


class GameController:
    def __init__(
        self,
        rules: RulesPort,
        selector: MoveSelector,
        automated_side: Optional[PlayerSide] = PlayerSide.BLACK,
        starting_fen: Optional[str] = None,
    ) -> None:
        self._rules = rules
        self._selector = selector
        self._automated_side = automated_side
        self._epoch = 0
        self._in_flight = False
        self._history: List[str] = []
        self._pending: Optional[PendingPromotion] = None
        self._geometry = CheckGeometry.empty()
        self._outcome = GameOutcome()
        self._state = ControllerState.IDLE
        self._position = rules.load(starting_fen) if starting_fen else rules.initial_position()
        self._first_mover = rules.side_to_move(self._position)
        self._refresh()

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        rules: Optional[RulesPort] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameController":
        from chesscore.infrastructure.rules.python_chess_rules import PythonChessRules
        from chesscore.infrastructure.selectors.factory import create_selector

        rules = rules or PythonChessRules()
        selector = create_selector(config.selector, rules, think_delay=config.think_delay, rng=rng)
        return cls(
            rules,
            selector,
            automated_side=config.automated_side,
            starting_fen=config.starting_fen,
        )

    # Read-only views

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def automated_side(self) -> Optional[PlayerSide]:
        return self._automated_side

    @property
    def selector(self) -> MoveSelector:
        return self._selector

    @property
    def position(self) -> chess.Board:
        """A copy of the current position; the controller keeps its own board."""
        return self._position.copy()

    @property
    def history(self) -> List[str]:
        return list(self._history)

    def snapshot(self) -> GameSnapshot:
        last_move = None
        if self._position.move_stack:
            move = self._position.move_stack[-1]
            last_move = LastMove(move.from_square, move.to_square)
        return GameSnapshot(
            fen=self._rules.export(self._position),
            history=tuple(self._history),
            check_geometry=self._geometry,
            state=self._state,
            side_to_move=PlayerSide.from_color(self._rules.side_to_move(self._position)),
            in_check=self._rules.is_check(self._position),
            outcome=self._outcome,
            pending_promotion=self._pending,
            last_move=last_move,
        )

    def export(self) -> str:
        return self._rules.export(self._position)

    def history_entries(self) -> List[HistoryEntry]:
        """Pair the history into numbered rows, white's move first."""
        if not self._history:
            return []
        moves: List[Optional[str]] = list(self._history)
        if self._first_mover == chess.BLACK:
            moves.insert(0, None)
        entries = []
        for index in range(0, len(moves), 2):
            black = moves[index + 1] if index + 1 < len(moves) else None
            entries.append(HistoryEntry(index // 2 + 1, moves[index], black))
        return entries

    def legal_targets(self, from_square: SquareLike) -> FrozenSet[chess.Square]:
        """Squares the piece on ``from_square`` may move to right now."""
        square = _coerce_square(from_square)
        if square is None or self._state is not ControllerState.IDLE:
            return frozenset()
        piece = self._rules.piece_at(self._position, square)
        mover = self._rules.side_to_move(self._position)
        if piece is None or piece.color != mover or self._is_automated(mover):
            return frozenset()
        return frozenset(move.to_square for move in self._rules.legal_moves(self._position, square))

    # Mutations

    def attempt_move(self, from_square: SquareLike, to_square: SquareLike) -> MoveResult:
        if self._state is ControllerState.GAME_OVER:
            return self._reject(RejectionReason.GAME_OVER)
        if self._state is not ControllerState.IDLE:
            return self._reject(RejectionReason.WRONG_STATE)

        origin = _coerce_square(from_square)
        target = _coerce_square(to_square)
        if origin is None or target is None or origin == target:
            return self._reject(RejectionReason.ILLEGAL_MOVE)

        piece = self._rules.piece_at(self._position, origin)
        if piece is None:
            return self._reject(RejectionReason.EMPTY_SQUARE)
        mover = self._rules.side_to_move(self._position)
        if piece.color != mover:
            return self._reject(RejectionReason.WRONG_TURN)
        if self._is_automated(mover):
            return self._reject(RejectionReason.AUTOMATED_SIDE)

        if piece.piece_type == chess.PAWN and is_promotion_rank(target, piece.color):
            legal = self._rules.legal_moves(self._position, origin)
            if any(move.to_square == target for move in legal):
                self._pending = PendingPromotion(origin, target)
                self._state = ControllerState.PENDING_PROMOTION
                return MoveResult.promotion_required()

        return self._submit(chess.Move(origin, target))

    def resolve_promotion(self, piece_type: PieceTypeLike) -> MoveResult:
        if self._state is not ControllerState.PENDING_PROMOTION or self._pending is None:
            return self._reject(RejectionReason.WRONG_STATE)

        pending = self._pending
        self._pending = None
        self._state = self._next_state()

        kind = _coerce_piece_type(piece_type)
        if kind not in PROMOTION_PIECES:
            return self._reject(RejectionReason.ILLEGAL_MOVE)
        return self._submit(chess.Move(pending.from_square, pending.to_square, promotion=kind))

    def cancel_promotion(self) -> None:
        if self._state is not ControllerState.PENDING_PROMOTION:
            return
        self._pending = None
        self._state = self._next_state()

    def reset(self, starting_fen: Optional[str] = None) -> None:
        position = self._rules.load(starting_fen) if starting_fen else self._rules.initial_position()
        self._epoch += 1
        self._in_flight = False
        self._position = position
        self._first_mover = self._rules.side_to_move(position)
        self._history = []
        self._pending = None
        self._refresh()
        logger.info("Game reset (epoch %d, %s)", self._epoch, self._state.value)

    async def maybe_trigger_automated_move(self) -> Optional[MoveResult]:
        """Ask the selector for a move if it is the computer's turn.

        Returns None when there was nothing to do or when the answer arrived
        after a reset and was dropped.
        """
        if self._state is not ControllerState.AUTOMATED_TURN or self._in_flight:
            return None

        epoch = self._epoch
        self._in_flight = True
        try:
            move = await self._selector.get_move(self._position.copy())
        except NoLegalMovesError:
            logger.error(
                "%s found no legal move in %s", self._selector.name, self.export()
            )
            raise
        finally:
            if epoch == self._epoch:
                self._in_flight = False

        if epoch != self._epoch or self._state is not ControllerState.AUTOMATED_TURN:
            logger.debug("Discarding stale move %s from epoch %d", move.uci(), epoch)
            return None

        result = self._submit(move)
        if result.is_rejected:
            logger.warning("%s proposed illegal move %s", self._selector.name, move.uci())
        return result

    # Internals

    def _submit(self, move: chess.Move) -> MoveResult:
        try:
            san = self._rules.san(self._position, move)
            position = self._rules.apply(self._position, move)
        except IllegalMoveError:
            return self._reject(RejectionReason.ILLEGAL_MOVE, move)

        self._position = position
        self._history.append(san)
        self._refresh()
        logger.info("Applied %s (%s)", san, self._state.value)
        return MoveResult.applied(san)

    def _refresh(self) -> None:
        self._outcome = self._rules.outcome(self._position)
        if self._outcome.is_over:
            self._geometry = CheckGeometry.empty()
        else:
            self._geometry = resolve_check_geometry(self._rules, self._position)
        self._state = self._next_state()

    def _next_state(self) -> ControllerState:
        if self._rules.is_game_over(self._position):
            return ControllerState.GAME_OVER
        if self._is_automated(self._rules.side_to_move(self._position)):
            return ControllerState.AUTOMATED_TURN
        return ControllerState.IDLE

    def _is_automated(self, color: chess.Color) -> bool:
        return self._automated_side is not None and self._automated_side.color == color

    def _reject(self, reason: RejectionReason, move: Optional[chess.Move] = None) -> MoveResult:
        logger.debug("Rejected %s: %s", move.uci() if move else "move", reason.value)
        return MoveResult.rejected(reason)


def _coerce_square(value: SquareLike) -> Optional[chess.Square]:
    if isinstance(value, str):
        try:
            return parse_square(value)
        except InvalidSquareError:
            return None
    if isinstance(value, int) and value in chess.SQUARES:
        return value
    return None


def _coerce_piece_type(value: PieceTypeLike) -> Optional[chess.PieceType]:
    if isinstance(value, str):
        symbol = value.strip().lower()
        if symbol in ("queen", "rook", "bishop", "knight"):
            return chess.PIECE_NAMES.index(symbol)
        return chess.PIECE_SYMBOLS.index(symbol) if symbol in chess.PIECE_SYMBOLS[1:] else None
    return value

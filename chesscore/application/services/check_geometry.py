"""Derive the squares involved in a check for board highlighting.

The rules engine only reports *whether* the side to move is in check. To
find *who* gives it, the resolver asks the engine for the opponent's moves
on a copy of the position with the turn handed over, then traces the line
from every sliding attacker to the king.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Set

import chess

from chesscore.application.ports.rules_port import RulesPort
from chesscore.domain.entities.check_geometry import CheckGeometry

logger = logging.getLogger(__name__)

_KNIGHT_OFFSETS = frozenset({(1, 2), (2, 1)})


def resolve_check_geometry(rules: RulesPort, position: chess.Board) -> CheckGeometry:
    if not rules.is_check(position) or rules.is_checkmate(position):
        return CheckGeometry.empty()

    defender = rules.side_to_move(position)
    king_square = _find_king(rules, position, defender)
    if king_square is None:
        logger.warning("Position %s is in check but has no king to move", rules.export(position))
        return CheckGeometry.empty()

    flipped = _with_turn_passed(rules, position)
    attackers: Set[chess.Square] = set()
    path: Set[chess.Square] = set()
    for square in chess.SQUARES:
        piece = rules.piece_at(flipped, square)
        if piece is None or piece.color == defender:
            continue
        # A pinned piece still gives check, so its own king safety is ignored.
        if any(move.to_square == king_square for move in rules.pseudo_legal_moves(flipped, square)):
            attackers.add(square)
            path.update(squares_between(square, king_square))

    return CheckGeometry(king_square, frozenset(attackers), frozenset(path))


def squares_between(origin: chess.Square, target: chess.Square) -> Iterator[chess.Square]:
    """Yield the squares strictly between ``origin`` and ``target``.

    Nothing is yielded for knight jumps, adjacent squares, or pairs that do
    not share a rank, file or diagonal.
    """
    file_delta = chess.square_file(target) - chess.square_file(origin)
    rank_delta = chess.square_rank(target) - chess.square_rank(origin)
    span = (abs(file_delta), abs(rank_delta))
    if span in _KNIGHT_OFFSETS or max(span) <= 1:
        return
    if file_delta and rank_delta and span[0] != span[1]:
        return

    file_step = (file_delta > 0) - (file_delta < 0)
    rank_step = (rank_delta > 0) - (rank_delta < 0)
    file = chess.square_file(origin) + file_step
    rank = chess.square_rank(origin) + rank_step
    while (file, rank) != (chess.square_file(target), chess.square_rank(target)):
        yield chess.square(file, rank)
        file += file_step
        rank += rank_step


def _find_king(rules: RulesPort, position: chess.Board, color: chess.Color) -> Optional[chess.Square]:
    for square in chess.SQUARES:
        piece = rules.piece_at(position, square)
        if piece is not None and piece.piece_type == chess.KING and piece.color == color:
            return square
    return None


def _with_turn_passed(rules: RulesPort, position: chess.Board) -> chess.Board:
    # The en-passant target belongs to the defender's turn and is dropped.
    fields = rules.export(position).split(" ")
    fields[1] = "b" if fields[1] == "w" else "w"
    fields[3] = "-"
    return rules.load(" ".join(fields))

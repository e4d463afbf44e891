"""Unit tests for chesscore/infrastructure/rules/python_chess_rules.py"""

import chess
import pytest
from conftest import FOOLS_MATE_FEN, STALEMATE_FEN

from chesscore.domain.entities.game import GameStatus, PlayerSide
from chesscore.domain.errors import IllegalMoveError, InvalidPositionError
from chesscore.infrastructure.rules.python_chess_rules import PythonChessRules


def test_apply_returns_new_position(rules: PythonChessRules) -> None:
    start = rules.initial_position()
    after = rules.apply(start, chess.Move.from_uci("e2e4"))

    assert start.fen() == chess.STARTING_FEN
    assert rules.side_to_move(after) == chess.BLACK
    assert rules.piece_at(after, chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)


def test_apply_illegal_move_raises(rules: PythonChessRules) -> None:
    with pytest.raises(IllegalMoveError):
        rules.apply(rules.initial_position(), chess.Move.from_uci("e2e5"))


def test_san_of_knight_move(rules: PythonChessRules) -> None:
    assert rules.san(rules.initial_position(), chess.Move.from_uci("g1f3")) == "Nf3"


def test_legal_moves_filtered_by_square(rules: PythonChessRules) -> None:
    moves = rules.legal_moves(rules.initial_position(), chess.G1)
    assert {move.uci() for move in moves} == {"g1f3", "g1h3"}
    assert len(rules.legal_moves(rules.initial_position())) == 20


def test_load_export_round_trip(rules: PythonChessRules) -> None:
    position = rules.initial_position()
    for uci in ("e2e4", "c7c5", "g1f3"):
        position = rules.apply(position, chess.Move.from_uci(uci))

    reloaded = rules.load(rules.export(position))

    assert rules.side_to_move(reloaded) == rules.side_to_move(position)
    assert set(rules.legal_moves(reloaded)) == set(rules.legal_moves(position))


def test_load_rejects_garbage(rules: PythonChessRules) -> None:
    with pytest.raises(InvalidPositionError):
        rules.load("not a fen")


def test_checkmate_outcome(rules: PythonChessRules) -> None:
    position = rules.load(FOOLS_MATE_FEN)

    assert rules.is_check(position)
    assert rules.is_checkmate(position)
    assert rules.is_game_over(position)
    assert not rules.is_draw(position)
    outcome = rules.outcome(position)
    assert outcome.status is GameStatus.CHECKMATE
    assert outcome.winner is PlayerSide.BLACK


def test_stalemate_outcome(rules: PythonChessRules) -> None:
    position = rules.load(STALEMATE_FEN)

    assert not rules.is_check(position)
    assert rules.is_draw(position)
    assert rules.outcome(position).status is GameStatus.STALEMATE
    assert rules.outcome(position).winner is None


def test_insufficient_material_is_a_draw(rules: PythonChessRules) -> None:
    position = rules.load("8/8/8/8/8/k7/8/K7 w - - 0 1")

    assert rules.is_game_over(position)
    assert rules.outcome(position).status is GameStatus.DRAW


def test_game_in_progress_outcome(rules: PythonChessRules) -> None:
    outcome = rules.outcome(rules.initial_position())
    assert outcome.status is GameStatus.IN_PROGRESS
    assert not outcome.is_over


def _after(rules: PythonChessRules, *moves: str) -> chess.Board:
    position = rules.initial_position()
    for uci in moves:
        position = rules.apply(position, chess.Move.from_uci(uci))
    return position


def test_claimable_repetition_is_not_a_draw_yet(rules: PythonChessRules) -> None:
    position = _after(rules, "g1f3", "g8f6", "f3g1", "f6g8", "g1f3", "g8f6", "f3g1")

    assert not rules.is_draw(position)
    assert not rules.is_game_over(position)
    assert rules.outcome(position).status is GameStatus.IN_PROGRESS


def test_third_occurrence_is_a_draw(rules: PythonChessRules) -> None:
    position = _after(rules, "g1f3", "g8f6", "f3g1", "f6g8", "g1f3", "g8f6", "f3g1", "f6g8")

    assert rules.is_draw(position)
    assert rules.is_game_over(position)
    assert rules.outcome(position).status is GameStatus.DRAW


@pytest.mark.parametrize("halfmoves, over", [(99, False), (100, True)])
def test_fifty_move_rule_needs_a_hundred_plies(
    rules: PythonChessRules, halfmoves: int, over: bool
) -> None:
    position = rules.load(f"4k3/8/8/8/8/8/8/R3K3 b - - {halfmoves} 60")

    assert rules.is_draw(position) is over
    assert rules.is_game_over(position) is over
    assert rules.outcome(position).is_over is over

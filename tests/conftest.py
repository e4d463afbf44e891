"""Shared fixtures and test doubles for the chesscore test suite."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import chess
import pytest

from chesscore.application.ports.move_selector import MoveSelector
from chesscore.domain.errors import NoLegalMovesError
from chesscore.infrastructure.rules.python_chess_rules import PythonChessRules

FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
PROMOTION_FEN = "8/4P3/8/8/8/8/k7/4K3 w - - 0 1"
# White king on e1 checked along the open e-file by the queen on e7.
QUEEN_CHECK_FEN = "rnb1kbnr/ppppqppp/8/8/8/8/PPPP1PPP/RNBQKBNR w KQkq - 0 1"


class ScriptedSelector(MoveSelector):
    """Returns queued moves in order and records every request."""

    def __init__(self, moves: Optional[List[chess.Move]] = None) -> None:
        self.moves = list(moves or [])
        self.calls = 0

    @property
    def name(self) -> str:
        return "Scripted"

    async def get_move(self, position: chess.Board) -> chess.Move:
        self.calls += 1
        if not self.moves:
            raise NoLegalMovesError("script exhausted")
        return self.moves.pop(0)


class GatedSelector(MoveSelector):
    """Suspends inside get_move until ``release`` is called.

    Build it inside a running event loop.
    """

    def __init__(self, move: chess.Move) -> None:
        self._move = move
        self._gate = asyncio.Event()
        self.calls = 0

    @property
    def name(self) -> str:
        return "Gated"

    def release(self) -> None:
        self._gate.set()

    async def get_move(self, position: chess.Board) -> chess.Move:
        self.calls += 1
        await self._gate.wait()
        return self._move


@pytest.fixture
def rules() -> PythonChessRules:
    return PythonChessRules()


@pytest.fixture
def scripted() -> ScriptedSelector:
    return ScriptedSelector()

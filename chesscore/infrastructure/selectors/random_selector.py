from __future__ import annotations

import asyncio
import random
from typing import Optional

import chess

from chesscore.application.ports.move_selector import MoveSelector
from chesscore.application.ports.rules_port import RulesPort
from chesscore.domain.errors import NoLegalMovesError


class RandomMoveSelector(MoveSelector):
    """Plays a uniformly random legal move.

    ``think_delay`` pauses before answering so the reply does not land
    instantly; pass a seeded ``rng`` for reproducible games.
    """

    def __init__(
        self,
        rules: RulesPort,
        rng: Optional[random.Random] = None,
        think_delay: float = 0.0,
    ) -> None:
        self._rules = rules
        self._rng = rng or random.Random()
        self._think_delay = think_delay

    @property
    def name(self) -> str:
        return "Random AI"

    async def get_move(self, position: chess.Board) -> chess.Move:
        moves = self._rules.legal_moves(position)
        if not moves:
            raise NoLegalMovesError(
                f"No legal moves available in {self._rules.export(position)}"
            )
        if self._think_delay > 0:
            await asyncio.sleep(self._think_delay)
        return self._rng.choice(moves)

from __future__ import annotations

import logging
import random
from typing import Optional

import chess

from chesscore.application.ports.move_selector import MoveSelector
from chesscore.application.ports.rules_port import RulesPort
from chesscore.infrastructure.selectors.random_selector import RandomMoveSelector

logger = logging.getLogger(__name__)


class SearchMoveSelector(MoveSelector):
    """Slot for a search-based engine.

    No search is wired in yet, so moves come from a RandomMoveSelector.
    """

    def __init__(
        self,
        rules: RulesPort,
        depth: int = 10,
        rng: Optional[random.Random] = None,
        think_delay: float = 0.0,
    ) -> None:
        self._depth = depth
        self._fallback = RandomMoveSelector(rules, rng=rng, think_delay=think_delay)
        self._warned = False

    @property
    def name(self) -> str:
        return "Search AI"

    @property
    def depth(self) -> int:
        return self._depth

    async def get_move(self, position: chess.Board) -> chess.Move:
        if not self._warned:
            logger.warning("%s has no search backend, using %s", self.name, self._fallback.name)
            self._warned = True
        return await self._fallback.get_move(position)

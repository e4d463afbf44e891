from __future__ import annotations

from abc import ABC, abstractmethod

import chess


class MoveSelector(ABC):
    """Abstraction for an automated opponent capable of choosing moves."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def get_move(self, position: chess.Board) -> chess.Move:
        """Return one legal move for the side to move in ``position``.

        Raises NoLegalMovesError when the position has no legal move.
        """

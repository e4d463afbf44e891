from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesscore.application.services.game_controller import GameController


class GameRepository(ABC):
    """Storage boundary for live game controllers, keyed by session id."""

    @abstractmethod
    def add(self, game_id: str, controller: GameController) -> None:
        ...

    @abstractmethod
    def get(self, game_id: str) -> GameController:
        ...

    @abstractmethod
    def remove(self, game_id: str) -> None:
        ...

    @abstractmethod
    def exists(self, game_id: str) -> bool:
        ...

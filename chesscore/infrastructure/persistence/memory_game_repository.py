from __future__ import annotations

from threading import Lock
from typing import Dict

from chesscore.application.ports.game_repository import GameRepository
from chesscore.application.services.game_controller import GameController
from chesscore.domain.errors import GameNotFoundError


class InMemoryGameRepository(GameRepository):
    """Thread-safe in-memory storage for game controllers."""

    def __init__(self) -> None:
        self._games: Dict[str, GameController] = {}
        self._lock = Lock()

    def add(self, game_id: str, controller: GameController) -> None:
        with self._lock:
            self._games[game_id] = controller

    def get(self, game_id: str) -> GameController:
        with self._lock:
            try:
                return self._games[game_id]
            except KeyError as exc:
                raise GameNotFoundError(f"Game {game_id} not found.") from exc

    def remove(self, game_id: str) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(f"Game {game_id} not found.")

    def exists(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._games

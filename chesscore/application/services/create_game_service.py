from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chesscore.application.ports.game_repository import GameRepository
from chesscore.application.services.game_controller import GameController
from chesscore.config import GameConfig
from chesscore.domain.entities.game import GameSnapshot, MoveResult
from chesscore.domain.id_generator import generate_game_id


@dataclass
class CreateGameResult:
    game_id: str
    engine_result: Optional[MoveResult]
    snapshot: GameSnapshot


class CreateGameService:
    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository

    async def execute(self, config: GameConfig) -> CreateGameResult:
        game_id = self._generate_unique_id()
        controller = GameController.from_config(config)
        self._repository.add(game_id, controller)

        engine_result = await controller.maybe_trigger_automated_move()
        return CreateGameResult(game_id, engine_result, controller.snapshot())

    def _generate_unique_id(self) -> str:
        for _ in range(32):
            candidate = generate_game_id()
            if not self._repository.exists(candidate):
                return candidate
        raise RuntimeError("Unable to allocate unique game id.")

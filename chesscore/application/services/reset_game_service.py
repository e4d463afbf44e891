from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chesscore.application.ports.game_repository import GameRepository
from chesscore.domain.entities.game import GameSnapshot, MoveResult


@dataclass
class ResetGameResult:
    game_id: str
    engine_result: Optional[MoveResult]
    snapshot: GameSnapshot


class ResetGameService:
    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository

    async def execute(self, game_id: str, starting_fen: Optional[str] = None) -> ResetGameResult:
        controller = self._repository.get(game_id)
        controller.reset(starting_fen)
        engine_result = await controller.maybe_trigger_automated_move()
        return ResetGameResult(game_id, engine_result, controller.snapshot())

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chesscore.application.ports.game_repository import GameRepository
from chesscore.application.services.game_controller import GameController
from chesscore.domain.entities.game import GameSnapshot, MoveResult


@dataclass
class MoveOutcome:
    game_id: str
    result: MoveResult
    engine_result: Optional[MoveResult]
    snapshot: GameSnapshot


class MakeMoveService:
    """Plays a human move and, when it lands, the computer's reply."""

    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository

    async def execute(self, game_id: str, from_square: str, to_square: str) -> MoveOutcome:
        controller = self._repository.get(game_id)
        result = controller.attempt_move(from_square, to_square)
        return await self._reply(game_id, controller, result)

    async def promote(self, game_id: str, piece: str) -> MoveOutcome:
        controller = self._repository.get(game_id)
        result = controller.resolve_promotion(piece)
        return await self._reply(game_id, controller, result)

    def cancel_promotion(self, game_id: str) -> GameSnapshot:
        controller = self._repository.get(game_id)
        controller.cancel_promotion()
        return controller.snapshot()

    async def _reply(
        self, game_id: str, controller: GameController, result: MoveResult
    ) -> MoveOutcome:
        engine_result: Optional[MoveResult] = None
        if result.is_applied:
            engine_result = await controller.maybe_trigger_automated_move()
        return MoveOutcome(game_id, result, engine_result, controller.snapshot())

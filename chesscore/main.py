from __future__ import annotations

import logging

import chess
from fastapi import APIRouter, FastAPI, HTTPException

from chesscore.api.schemas import (
    CreateGameRequest,
    GameResponse,
    HistoryEntryModel,
    HistoryResponse,
    MoveRequest,
    MoveResultModel,
    PromotionRequest,
    ResetRequest,
    SnapshotModel,
    TargetsResponse,
)
from chesscore.application.services.create_game_service import CreateGameService
from chesscore.application.services.game_controller import GameController
from chesscore.application.services.make_move_service import MakeMoveService
from chesscore.application.services.reset_game_service import ResetGameService
from chesscore.config import GameConfig, Settings
from chesscore.domain.entities.game import PlayerSide, parse_square
from chesscore.domain.errors import (
    GameNotFoundError,
    InvalidPositionError,
    InvalidSquareError,
)
from chesscore.infrastructure.persistence.memory_game_repository import (
    InMemoryGameRepository,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Chesscore API")

_settings = Settings()
_repository = InMemoryGameRepository()
_create_game = CreateGameService(_repository)
_make_move = MakeMoveService(_repository)
_reset_game = ResetGameService(_repository)

router = APIRouter(prefix="/api/v1")


@router.post("/games", response_model=GameResponse)
async def create_game(request: CreateGameRequest) -> GameResponse:
    overrides = {
        "automated_side": PlayerSide(request.computerSide) if request.computerSide else None,
        "starting_fen": request.fen,
    }
    if request.selector:
        overrides["selector"] = request.selector
    try:
        config = GameConfig.from_settings(_settings, **overrides)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    result = await _create_game.execute(config)
    logger.info("Created game %s", result.game_id)
    return GameResponse(
        gameId=result.game_id,
        snapshot=SnapshotModel.from_snapshot(result.snapshot),
        engineResult=MoveResultModel.from_result(result.engine_result),
    )


@router.get("/games/{game_id}", response_model=GameResponse)
async def get_game(game_id: str) -> GameResponse:
    controller = _get_controller(game_id)
    return GameResponse(gameId=game_id, snapshot=SnapshotModel.from_snapshot(controller.snapshot()))


@router.delete("/games/{game_id}", status_code=204)
async def delete_game(game_id: str) -> None:
    try:
        _repository.remove(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    logger.info("Deleted game %s", game_id)


@router.get("/games/{game_id}/history", response_model=HistoryResponse)
async def get_history(game_id: str) -> HistoryResponse:
    controller = _get_controller(game_id)
    return HistoryResponse(
        gameId=game_id,
        entries=[HistoryEntryModel.from_entry(entry) for entry in controller.history_entries()],
    )


@router.get("/games/{game_id}/targets/{square}", response_model=TargetsResponse)
async def get_targets(game_id: str, square: str) -> TargetsResponse:
    controller = _get_controller(game_id)
    origin = _parse(square)
    targets = sorted(chess.square_name(target) for target in controller.legal_targets(origin))
    return TargetsResponse(gameId=game_id, square=chess.square_name(origin), targets=targets)


@router.post("/games/{game_id}/move", response_model=GameResponse)
async def make_move(game_id: str, request: MoveRequest) -> GameResponse:
    _parse(request.from_square)
    _parse(request.to_square)
    try:
        outcome = await _make_move.execute(game_id, request.from_square, request.to_square)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return GameResponse(
        gameId=outcome.game_id,
        snapshot=SnapshotModel.from_snapshot(outcome.snapshot),
        result=MoveResultModel.from_result(outcome.result),
        engineResult=MoveResultModel.from_result(outcome.engine_result),
    )


@router.post("/games/{game_id}/promotion", response_model=GameResponse)
async def promote(game_id: str, request: PromotionRequest) -> GameResponse:
    try:
        outcome = await _make_move.promote(game_id, request.piece)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return GameResponse(
        gameId=outcome.game_id,
        snapshot=SnapshotModel.from_snapshot(outcome.snapshot),
        result=MoveResultModel.from_result(outcome.result),
        engineResult=MoveResultModel.from_result(outcome.engine_result),
    )


@router.delete("/games/{game_id}/promotion", response_model=GameResponse)
async def cancel_promotion(game_id: str) -> GameResponse:
    try:
        snapshot = _make_move.cancel_promotion(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return GameResponse(gameId=game_id, snapshot=SnapshotModel.from_snapshot(snapshot))


@router.post("/games/{game_id}/reset", response_model=GameResponse)
async def reset_game(game_id: str, request: ResetRequest) -> GameResponse:
    try:
        result = await _reset_game.execute(game_id, request.fen)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidPositionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return GameResponse(
        gameId=result.game_id,
        snapshot=SnapshotModel.from_snapshot(result.snapshot),
        engineResult=MoveResultModel.from_result(result.engine_result),
    )


def _get_controller(game_id: str) -> GameController:
    try:
        return _repository.get(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _parse(square: str) -> chess.Square:
    try:
        return parse_square(square)
    except InvalidSquareError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=_settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("chesscore.main:app", host=_settings.host, port=_settings.port, reload=False)

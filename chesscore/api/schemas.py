from __future__ import annotations

from typing import Iterable, List, Literal, Optional

import chess
from pydantic import BaseModel, ConfigDict, Field

from chesscore.domain.entities.game import GameSnapshot, HistoryEntry, MoveResult


class CreateGameRequest(BaseModel):
    computerSide: Optional[Literal["white", "black"]] = Field(default="black")
    selector: Optional[Literal["random", "search"]] = None
    fen: Optional[str] = None


class MoveRequest(BaseModel):
    from_square: str = Field(..., alias="from")
    to_square: str = Field(..., alias="to")

    model_config = ConfigDict(populate_by_name=True)


class PromotionRequest(BaseModel):
    piece: Literal["q", "r", "b", "n"]


class ResetRequest(BaseModel):
    fen: Optional[str] = None


class MoveResultModel(BaseModel):
    kind: str
    san: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: Optional[MoveResult]) -> Optional["MoveResultModel"]:
        if result is None:
            return None
        return cls(
            kind=result.kind.value,
            san=result.san,
            reason=result.reason.value if result.reason else None,
        )


class CheckGeometryModel(BaseModel):
    kingSquare: Optional[str] = None
    attackers: List[str] = Field(default_factory=list)
    path: List[str] = Field(default_factory=list)


class HistoryEntryModel(BaseModel):
    number: int
    white: Optional[str] = None
    black: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryModel":
        return cls(number=entry.number, white=entry.white, black=entry.black)


class SnapshotModel(BaseModel):
    fen: str
    state: str
    sideToMove: str
    inCheck: bool
    status: str
    winner: Optional[str] = None
    history: List[str]
    checkGeometry: CheckGeometryModel
    pendingPromotion: Optional[List[str]] = None
    lastMove: Optional[List[str]] = None

    @classmethod
    def from_snapshot(cls, snapshot: GameSnapshot) -> "SnapshotModel":
        geometry = snapshot.check_geometry
        pending = snapshot.pending_promotion
        last = snapshot.last_move
        return cls(
            fen=snapshot.fen,
            state=snapshot.state.value,
            sideToMove=snapshot.side_to_move.value,
            inCheck=snapshot.in_check,
            status=snapshot.outcome.status.value,
            winner=snapshot.outcome.winner.value if snapshot.outcome.winner else None,
            history=list(snapshot.history),
            checkGeometry=CheckGeometryModel(
                kingSquare=_name(geometry.king_square),
                attackers=_names(geometry.attackers),
                path=_names(geometry.path),
            ),
            pendingPromotion=(
                [_name(pending.from_square), _name(pending.to_square)] if pending else None
            ),
            lastMove=[_name(last.from_square), _name(last.to_square)] if last else None,
        )


class GameResponse(BaseModel):
    gameId: str
    snapshot: SnapshotModel
    result: Optional[MoveResultModel] = None
    engineResult: Optional[MoveResultModel] = None


class TargetsResponse(BaseModel):
    gameId: str
    square: str
    targets: List[str]


class HistoryResponse(BaseModel):
    gameId: str
    entries: List[HistoryEntryModel]


def _name(square: Optional[chess.Square]) -> Optional[str]:
    return chess.square_name(square) if square is not None else None


def _names(squares: Iterable[chess.Square]) -> List[str]:
    return sorted(chess.square_name(square) for square in squares)

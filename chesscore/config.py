from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import chess
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chesscore.domain.entities.game import PlayerSide


class SelectorKind(str, Enum):
    RANDOM = "random"
    SEARCH = "search"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        return default


def _env_selector(name: str) -> SelectorKind:
    raw = (os.getenv(name) or "").strip().lower()
    try:
        return SelectorKind(raw)
    except ValueError:
        return SelectorKind.RANDOM


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults, read from the environment."""

    selector: SelectorKind = field(default_factory=lambda: _env_selector("CHESSCORE_SELECTOR"))
    think_delay: float = field(default_factory=lambda: _env_float("CHESSCORE_THINK_DELAY", 0.0))
    log_level: str = field(
        default_factory=lambda: os.getenv("CHESSCORE_LOG_LEVEL", "INFO").upper()
    )
    host: str = field(default_factory=lambda: os.getenv("CHESSCORE_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("CHESSCORE_PORT", "8000")))


class GameConfig(BaseModel):
    """Per-game configuration, fixed when the controller is built.

    ``automated_side`` is the colour the computer plays; ``None`` means both
    sides are human.
    """

    model_config = ConfigDict(frozen=True)

    automated_side: Optional[PlayerSide] = PlayerSide.BLACK
    selector: SelectorKind = SelectorKind.RANDOM
    starting_fen: Optional[str] = None
    think_delay: float = Field(default=0.0, ge=0.0)

    @field_validator("starting_fen")
    @classmethod
    def _check_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        try:
            chess.Board(value)
        except ValueError as exc:
            raise ValueError(f"invalid FEN: {exc}") from exc
        return value

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> "GameConfig":
        values = {"selector": settings.selector, "think_delay": settings.think_delay}
        values.update(overrides)
        return cls(**values)

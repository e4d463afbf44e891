from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import chess


@dataclass(frozen=True)
class CheckGeometry:
    """Squares involved in the current check.

    ``path`` holds the squares strictly between each sliding attacker and
    the king; knights, pawns and adjacent pieces add nothing to it.
    """

    king_square: Optional[chess.Square] = None
    attackers: FrozenSet[chess.Square] = field(default_factory=frozenset)
    path: FrozenSet[chess.Square] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "CheckGeometry":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.king_square is None and not self.attackers and not self.path

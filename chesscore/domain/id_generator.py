from __future__ import annotations

import secrets
import string

_OPENINGS = [
    "sicilian",
    "french",
    "italian",
    "scotch",
    "english",
    "dutch",
    "slav",
    "catalan",
    "vienna",
    "nimzo",
    "pirc",
    "caro",
]

_PIECES = [
    "rook",
    "bishop",
    "knight",
    "queen",
    "king",
    "pawn",
]


def generate_game_id() -> str:
    """Return a readable session slug such as ``scotch-knight-4f2a``."""
    opening = secrets.choice(_OPENINGS)
    piece = secrets.choice(_PIECES)
    suffix = "".join(secrets.choice(string.digits + "abcdef") for _ in range(4))
    return f"{opening}-{piece}-{suffix}"

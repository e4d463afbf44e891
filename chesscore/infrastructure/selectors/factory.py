from __future__ import annotations

import random
from typing import Optional, Union

from chesscore.application.ports.move_selector import MoveSelector
from chesscore.application.ports.rules_port import RulesPort
from chesscore.config import SelectorKind
from chesscore.infrastructure.selectors.random_selector import RandomMoveSelector
from chesscore.infrastructure.selectors.search_selector import SearchMoveSelector


def create_selector(
    kind: Union[SelectorKind, str],
    rules: RulesPort,
    think_delay: float = 0.0,
    rng: Optional[random.Random] = None,
) -> MoveSelector:
    """Build the selector for ``kind``; unknown kinds get the random one."""
    try:
        kind = SelectorKind(kind)
    except ValueError:
        kind = SelectorKind.RANDOM

    if kind is SelectorKind.SEARCH:
        return SearchMoveSelector(rules, rng=rng, think_delay=think_delay)
    return RandomMoveSelector(rules, rng=rng, think_delay=think_delay)

"""Unit tests for chesscore/infrastructure/selectors"""

import asyncio
import logging
import random

import pytest
from conftest import FOOLS_MATE_FEN

from chesscore.config import SelectorKind
from chesscore.domain.errors import NoLegalMovesError
from chesscore.infrastructure.rules.python_chess_rules import PythonChessRules
from chesscore.infrastructure.selectors.factory import create_selector
from chesscore.infrastructure.selectors.random_selector import RandomMoveSelector
from chesscore.infrastructure.selectors.search_selector import SearchMoveSelector


def test_random_selector_returns_a_legal_move(rules: PythonChessRules) -> None:
    selector = RandomMoveSelector(rules, rng=random.Random(7))
    position = rules.initial_position()

    move = asyncio.run(selector.get_move(position))

    assert move in rules.legal_moves(position)
    assert selector.name == "Random AI"


def test_random_selector_is_reproducible_with_a_seed(rules: PythonChessRules) -> None:
    position = rules.initial_position()
    first = RandomMoveSelector(rules, rng=random.Random(42))
    second = RandomMoveSelector(rules, rng=random.Random(42))

    moves_a = [asyncio.run(first.get_move(position)) for _ in range(5)]
    moves_b = [asyncio.run(second.get_move(position)) for _ in range(5)]

    assert moves_a == moves_b


def test_random_selector_does_not_touch_the_position(rules: PythonChessRules) -> None:
    position = rules.initial_position()
    asyncio.run(RandomMoveSelector(rules, think_delay=0.01).get_move(position))
    assert rules.export(position) == rules.export(rules.initial_position())


def test_random_selector_without_moves_raises(rules: PythonChessRules) -> None:
    selector = RandomMoveSelector(rules)
    with pytest.raises(NoLegalMovesError):
        asyncio.run(selector.get_move(rules.load(FOOLS_MATE_FEN)))


def test_search_selector_delegates_to_random(
    rules: PythonChessRules, caplog: pytest.LogCaptureFixture
) -> None:
    selector = SearchMoveSelector(rules, rng=random.Random(3))
    position = rules.initial_position()

    with caplog.at_level(logging.WARNING):
        move = asyncio.run(selector.get_move(position))
        asyncio.run(selector.get_move(position))

    assert move in rules.legal_moves(position)
    assert selector.name == "Search AI"
    assert selector.depth == 10
    assert sum("no search backend" in record.getMessage() for record in caplog.records) == 1


def test_search_selector_without_moves_raises(rules: PythonChessRules) -> None:
    with pytest.raises(NoLegalMovesError):
        asyncio.run(SearchMoveSelector(rules).get_move(rules.load(FOOLS_MATE_FEN)))


@pytest.mark.parametrize(
    "kind, expected",
    [
        (SelectorKind.RANDOM, RandomMoveSelector),
        (SelectorKind.SEARCH, SearchMoveSelector),
        ("search", SearchMoveSelector),
        ("stockfish", RandomMoveSelector),
    ],
)
def test_factory(rules: PythonChessRules, kind, expected) -> None:
    assert isinstance(create_selector(kind, rules), expected)

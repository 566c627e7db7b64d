"""Integration tests: whole games driven through the engine's command surface."""

import pytest

from klondike.engine.config import EngineConfig
from klondike.engine.game import GameStatus, KlondikeEngine
from klondike.engine.players import GreedyPlayer, RandomPlayer, play_game
from klondike.model.schema import SUITS


def make_engine(seed: int, **config) -> KlondikeEngine:
    engine = KlondikeEngine(EngineConfig(seed=seed, **config), clock=lambda: 0.0)
    engine.new_game()
    return engine


@pytest.mark.parametrize("seed", range(10))
def test_greedy_games_keep_every_card(seed):
    engine = make_engine(seed)
    ids = sorted(engine.snapshot().card_ids())

    play_game(engine, GreedyPlayer(seed=seed), max_moves=2000)

    assert sorted(engine.snapshot().card_ids()) == ids


@pytest.mark.parametrize("seed", range(10))
def test_foundations_stay_suit_locked_and_ordered(seed):
    engine = make_engine(seed)

    play_game(engine, GreedyPlayer(seed=seed), max_moves=2000)

    for suit in SUITS:
        pile = engine.foundations[suit].snapshot()
        assert all(card.suit == suit for card in pile)
        assert [card.value for card in pile] == list(range(1, len(pile) + 1))


def test_games_end_in_terminal_or_stuck_state():
    outcomes = []
    for seed in range(20):
        engine = make_engine(seed)
        result = play_game(engine, GreedyPlayer(seed=seed), max_moves=5000)
        if engine.status == GameStatus.STOCK_LIMIT_REACHED:
            assert engine.stock_recycle_count == engine.config.max_stock_recycles
        elif not engine.is_terminal and result.moves_played < 5000:
            assert not engine.has_any_legal_move()
        outcomes.append(result.status)

    # Greedy play draws whenever nothing better exists, so most deals run out of resets
    assert GameStatus.STOCK_LIMIT_REACHED in outcomes


def test_full_undo_returns_to_deal():
    # A generous recycle limit keeps the game open so every move can be undone
    engine = make_engine(8, max_stock_recycles=1000)
    dealt = engine.snapshot()

    result = play_game(engine, RandomPlayer(seed=8), max_moves=300)
    assert not engine.is_terminal
    assert result.moves_played > 0

    undone = 0
    while engine.undo():
        undone += 1

    assert undone == result.moves_played
    assert engine.snapshot() == dealt


def test_stock_limit_reached_by_drawing_only():
    engine = make_engine(5, max_stock_recycles=3)

    draws = 0
    while engine.draw_three():
        draws += 1

    assert engine.status == GameStatus.STOCK_LIMIT_REACHED
    assert engine.stock_recycle_count == 3
    assert engine.move_count == draws - 3

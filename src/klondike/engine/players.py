"""Automatic players that drive an engine through its command surface."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from klondike.engine.game import GameStatus, KlondikeEngine
from klondike.engine.moves import (
    Draw,
    Move,
    TableauToFoundation,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
)

logger = logging.getLogger(__name__)


class AIPlayer(ABC):
    """Base class for automatic players."""

    @abstractmethod
    def choose_move(self, engine: KlondikeEngine, legal_moves: List[Move]) -> Move:
        """Choose a move from legal moves."""
        pass


class RandomPlayer(AIPlayer):
    """Player that chooses randomly from legal moves."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose_move(self, engine: KlondikeEngine, legal_moves: List[Move]) -> Move:
        """Choose uniformly from legal moves."""
        if not legal_moves:
            raise ValueError("No legal moves available")
        return self.rng.choice(legal_moves)


class GreedyPlayer(AIPlayer):
    """Prefers foundation plays, then moves that turn over a hidden card."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose_move(self, engine: KlondikeEngine, legal_moves: List[Move]) -> Move:
        if not legal_moves:
            raise ValueError("No legal moves available")

        def score_move(move: Move) -> int:
            if isinstance(move, (WasteToFoundation, TableauToFoundation)):
                return 4
            if isinstance(move, TableauToTableau) and _reveals_card(engine, move):
                return 3
            if isinstance(move, WasteToTableau):
                return 2
            if isinstance(move, Draw):
                return 1
            return 0

        best = max(score_move(m) for m in legal_moves)
        # Randomly pick among ties
        ties = [m for m in legal_moves if score_move(m) == best]
        return self.rng.choice(ties)


def _reveals_card(engine: KlondikeEngine, move: TableauToTableau) -> bool:
    """True when the card left behind is face down and will be turned over."""
    below = engine.tableau[move.from_column].get_at(move.card_index - 1)
    return below is not None and not below.face_up


@dataclass(frozen=True)
class GameResult:
    """Result of an automatically played game."""

    status: GameStatus
    moves_played: int
    move_count: int
    score: int
    foundation_cards: int

    @property
    def won(self) -> bool:
        return self.status == GameStatus.WON


def play_game(engine: KlondikeEngine, player: AIPlayer, max_moves: int = 1000) -> GameResult:
    """Play the engine's current game until it ends, stalls or hits ``max_moves``."""
    moves_played = 0

    while moves_played < max_moves and not engine.is_terminal:
        legal_moves = list(engine.legal_moves())
        if not legal_moves:
            break

        move = player.choose_move(engine, legal_moves)
        if not engine.apply(move):
            # Legal moves are generated from the same rules the commands check
            raise RuntimeError(f"Engine rejected a generated move: {move!r}")
        moves_played += 1

    logger.debug(
        f"Autoplay finished: {engine.status.value} after {moves_played} moves, "
        f"{engine.foundation_card_count()} cards on foundations"
    )
    return GameResult(
        status=engine.status,
        moves_played=moves_played,
        move_count=engine.move_count,
        score=engine.score,
        foundation_cards=engine.foundation_card_count(),
    )

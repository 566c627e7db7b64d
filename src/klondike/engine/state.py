"""Immutable game state snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator

from klondike.model.cards import Card
from klondike.model.schema import Suit, SUITS


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActivityEntry:
    """One line of the recent-activity log."""

    timestamp: datetime
    description: str


@dataclass(frozen=True)
class GameState:
    """Structural snapshot of every pile and counter (the undo/redo unit).

    All piles are tuples of frozen cards, bottom to top, so a snapshot can
    never be changed by later play.
    """

    stock: tuple[Card, ...]
    waste: tuple[Card, ...]
    foundations: tuple[tuple[Card, ...], ...]  # One per suit, in SUITS order
    tableau: tuple[tuple[Card, ...], ...]  # Seven columns
    move_count: int
    score: int
    stock_recycle_count: int

    def foundation(self, suit: Suit) -> tuple[Card, ...]:
        return self.foundations[SUITS.index(suit)]

    def all_cards(self) -> Iterator[Card]:
        """Every card in every pile."""
        yield from self.stock
        yield from self.waste
        for pile in self.foundations:
            yield from pile
        for column in self.tableau:
            yield from column

    def card_ids(self) -> list[str]:
        return [card.card_id for card in self.all_cards()]

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state with specified changes."""
        current = {
            "stock": self.stock,
            "waste": self.waste,
            "foundations": self.foundations,
            "tableau": self.tableau,
            "move_count": self.move_count,
            "score": self.score,
            "stock_recycle_count": self.stock_recycle_count,
        }
        current.update(changes)
        return GameState(**current)

"""Card representation, deck construction and shuffling."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, replace
from typing import Optional

from klondike.model.schema import Color, Rank, Suit, RANK_VALUES, RANKS, SUITS


# Unicode card symbols
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


def new_card_id(suit: Suit, rank: Rank) -> str:
    """Generate a fresh card identifier."""
    return f"{suit.value}-{rank.value}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Card:
    """Immutable playing card.

    Suit, rank and card_id never change. Turning a card over yields a new
    Card with the same identity and the other face_up value; the pile that
    owns the card stores the turned instance in its place.
    """

    suit: Suit
    rank: Rank
    card_id: str
    face_up: bool = False

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def color(self) -> Color:
        return self.suit.color

    @property
    def label(self) -> str:
        """Short label such as 10♥."""
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"

    def turned(self, face_up: bool) -> "Card":
        """Return this card with the given face_up flag."""
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def __str__(self) -> str:
        return self.label


def build_deck() -> list[Card]:
    """Create a standard 52-card deck, all face-down, with fresh ids."""
    return [
        Card(suit=suit, rank=rank, card_id=new_card_id(suit, rank))
        for suit in SUITS
        for rank in RANKS
    ]


def shuffle(cards: list, rng: Optional[random.Random] = None) -> None:
    """Shuffle in place with a backward Fisher-Yates pass.

    For each index i from the last down to 1, swap with a uniformly chosen
    index in [0, i].
    """
    rng = rng or random.Random()
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]

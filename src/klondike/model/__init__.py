"""Card model: schema enums, cards, pile containers and placement rules."""

from klondike.model.schema import Color, Rank, Suit, RANK_VALUES
from klondike.model.cards import Card, build_deck, shuffle
from klondike.model.containers import Queue, Sequence, Stack
from klondike.model.rules import (
    can_place_on_foundation,
    can_place_on_tableau,
    is_valid_run,
)

__all__ = [
    "Color",
    "Rank",
    "Suit",
    "RANK_VALUES",
    "Card",
    "build_deck",
    "shuffle",
    "Queue",
    "Sequence",
    "Stack",
    "can_place_on_foundation",
    "can_place_on_tableau",
    "is_valid_run",
]

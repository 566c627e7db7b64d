"""Placement rules for tableau runs and foundations."""

from __future__ import annotations

from typing import Iterable

from klondike.model.cards import Card
from klondike.model.containers import Sequence, Stack
from klondike.model.schema import Rank


def is_valid_run(cards: Iterable[Card]) -> bool:
    """Check a descending, alternating-color run.

    Every adjacent pair must differ in color, and the earlier card must be
    exactly one rank above the next. Empty and single-card runs are valid.
    """
    run = list(cards)
    for current, following in zip(run, run[1:]):
        if current.color == following.color:
            return False
        if current.value != following.value + 1:
            return False
    return True


def can_place_on_tableau(card: Card, column: Sequence[Card]) -> bool:
    """Kings go on empty columns; otherwise opposite color, one rank lower."""
    top = column.get_last()
    if top is None:
        return card.rank == Rank.KING
    return card.color != top.color and card.value == top.value - 1


def can_place_on_foundation(card: Card, foundation: Stack[Card]) -> bool:
    """Aces start a foundation; each later card is exactly one rank higher.

    Foundations are suit-locked where they are stored, so the suit is not
    checked here.
    """
    top = foundation.peek()
    if top is None:
        return card.rank == Rank.ACE
    return card.value == top.value + 1

"""Core card schema types and enumerations."""

from __future__ import annotations

from enum import Enum


class Color(Enum):
    """Card colors."""

    RED = "red"
    BLACK = "black"


class Suit(Enum):
    """Playing card suits."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def color(self) -> Color:
        """Hearts and diamonds are red, clubs and spades black."""
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Color.RED
        return Color.BLACK


class Rank(Enum):
    """Playing card ranks."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


# Rank value mapping for card comparison (Ace low, King high)
RANK_VALUES = {rank: i + 1 for i, rank in enumerate(Rank)}

SUITS: tuple[Suit, ...] = tuple(Suit)
RANKS: tuple[Rank, ...] = tuple(Rank)

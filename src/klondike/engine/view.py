"""Read model handed to renderers and input layers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from klondike.engine.state import ActivityEntry
from klondike.model.cards import Card


class CardView(BaseModel):
    """A card as a consumer sees it."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    suit: str
    rank: str
    color: str
    face_up: bool
    label: str

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(
            card_id=card.card_id,
            suit=card.suit.value,
            rank=card.rank.value,
            color=card.color.value,
            face_up=card.face_up,
            label=card.label,
        )


class WasteCardView(BaseModel):
    """A visible waste card with its address in the visible window."""

    model_config = ConfigDict(frozen=True)

    position: int  # 0 = bottommost of the visible cards
    card: CardView


class FoundationView(BaseModel):
    model_config = ConfigDict(frozen=True)

    suit: str
    size: int
    top: Optional[CardView] = None


class ActivityView(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    description: str

    @classmethod
    def from_entry(cls, entry: ActivityEntry) -> "ActivityView":
        return cls(timestamp=entry.timestamp, description=entry.description)


class BoardView(BaseModel):
    """Everything a consumer needs to draw the board."""

    model_config = ConfigDict(frozen=True)

    stock_size: int
    waste_size: int
    waste: list[WasteCardView]
    foundations: list[FoundationView]
    tableau: list[list[CardView]]
    move_count: int
    score: int
    stock_recycle_count: int
    max_stock_recycles: int
    status: str
    can_undo: bool
    can_redo: bool
    recent_activity: list[ActivityView]

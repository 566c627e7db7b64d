"""Terminal display for the board and legal moves."""

from __future__ import annotations

from typing import Sequence as SequenceType

from klondike.engine.moves import Move
from klondike.engine.view import BoardView, CardView

# Unicode suit symbols keyed by suit name
SUIT_SYMBOLS = {"hearts": "♥", "diamonds": "♦", "clubs": "♣", "spades": "♠"}

FACE_DOWN = "##"
EMPTY = "--"


def format_card(card: CardView) -> str:
    """Format card with unicode suit symbol, or a placeholder when face down."""
    if not card.face_up:
        return FACE_DOWN
    return f"{card.rank}{SUIT_SYMBOLS.get(card.suit, card.suit)}"


class BoardRenderer:
    """Renders a BoardView as text."""

    def render(self, view: BoardView, show_activity: bool = True) -> str:
        lines: list[str] = []

        # Header
        lines.append(
            f"=== Moves {view.move_count} | Score {view.score} | "
            f"Stock cycles {view.stock_recycle_count}/{view.max_stock_recycles} ==="
        )
        lines.append("")

        # Stock and waste
        hidden = view.waste_size - len(view.waste)
        waste_cards = "  ".join(
            f"[{w.position + 1}] {format_card(w.card)}" for w in view.waste
        )
        if not waste_cards:
            waste_cards = EMPTY
        elif hidden > 0:
            waste_cards = f"(+{hidden}) {waste_cards}"
        lines.append(f"Stock: {view.stock_size:>2}    Waste: {waste_cards}")

        # Foundations
        piles = "  ".join(
            f"{SUIT_SYMBOLS[f.suit]} {format_card(f.top) if f.top else EMPTY}"
            for f in view.foundations
        )
        lines.append(f"Foundations: {piles}")
        lines.append("")

        # Tableau
        for col, column in enumerate(view.tableau):
            if column:
                cards = " ".join(
                    f"{i + 1}:{format_card(card)}" if card.face_up else FACE_DOWN
                    for i, card in enumerate(column)
                )
            else:
                cards = EMPTY
            lines.append(f"Col {col + 1}: {cards}")

        if view.status != "playing":
            lines.append("")
            lines.append(f"Status: {view.status.replace('_', ' ')}")

        if show_activity and view.recent_activity:
            lines.append("")
            lines.append("Recent:")
            for entry in view.recent_activity:
                lines.append(f"  {entry.timestamp:%H:%M:%S} {entry.description}")

        return "\n".join(lines)


class MovePresenter:
    """Presents legal moves to a human player."""

    def present(self, moves: SequenceType[Move]) -> str:
        if not moves:
            return "No legal moves available."
        options = [f"  [{i + 1}] {move.describe()}" for i, move in enumerate(moves)]
        return "Legal moves:\n" + "\n".join(options)

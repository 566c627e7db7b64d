"""Move value types accepted by the engine's command surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Draw:
    """Draw three from stock, or recycle the waste when stock is empty."""

    def describe(self) -> str:
        return "Draw from stock"


@dataclass(frozen=True)
class WasteToTableau:
    """Move a visible waste card onto a tableau column."""

    visible_index: int  # 0 = bottommost of the visible three
    column: int

    def describe(self) -> str:
        return f"Waste card {self.visible_index + 1} to column {self.column + 1}"


@dataclass(frozen=True)
class WasteToFoundation:
    """Move a visible waste card onto its foundation."""

    visible_index: int

    def describe(self) -> str:
        return f"Waste card {self.visible_index + 1} to foundation"


@dataclass(frozen=True)
class TableauToFoundation:
    """Move a column's last card onto its foundation."""

    column: int

    def describe(self) -> str:
        return f"Column {self.column + 1} to foundation"


@dataclass(frozen=True)
class TableauToTableau:
    """Move the run starting at ``card_index`` to another column."""

    from_column: int
    card_index: int
    to_column: int

    def describe(self) -> str:
        return (
            f"Column {self.from_column + 1} from card {self.card_index + 1} "
            f"to column {self.to_column + 1}"
        )


Move = Union[Draw, WasteToTableau, WasteToFoundation, TableauToFoundation, TableauToTableau]

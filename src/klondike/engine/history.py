"""Undo/redo history of recorded moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from klondike.engine.state import GameState, utc_now
from klondike.model.containers import Stack

logger = logging.getLogger(__name__)


class MoveType(Enum):
    """Kinds of recorded moves."""

    DRAW = "draw"
    RECYCLE = "recycle"
    WASTE_TO_TABLEAU = "waste_to_tableau"
    WASTE_TO_FOUNDATION = "waste_to_foundation"
    TABLEAU_TO_FOUNDATION = "tableau_to_foundation"
    TABLEAU_TO_TABLEAU = "tableau_to_tableau"


@dataclass(frozen=True)
class RecordedMove:
    """A move in history.

    ``state`` is the snapshot to restore when this entry is popped: the
    state before the move while on the undo stack, the state after it while
    on the redo stack.
    """

    move_type: MoveType
    state: GameState
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)


class MoveHistory:
    """Linear undo/redo history built on two stacks.

    Recording a new move clears the redo stack. ``limit`` caps the undo
    depth (oldest entries are dropped); None keeps every move.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        self.limit = limit
        self.undo_stack: Stack[RecordedMove] = Stack()
        self.redo_stack: Stack[RecordedMove] = Stack()

    def record(
        self,
        move_type: MoveType,
        prior_state: GameState,
        data: Optional[dict[str, Any]] = None,
    ) -> RecordedMove:
        """Push a move with the state it started from."""
        move = RecordedMove(move_type=move_type, state=prior_state, data=data or {})
        self.undo_stack.push(move)
        self.redo_stack.clear()

        if self.limit is not None and self.undo_stack.size() > self.limit:
            dropped = self.undo_stack.drop_bottom(self.undo_stack.size() - self.limit)
            logger.debug(f"History limit {self.limit} reached, dropped {dropped} oldest move(s)")

        return move

    def undo(self, current_state: GameState) -> Optional[RecordedMove]:
        """Pop the latest move; it moves to the redo stack holding ``current_state``.

        Returns the popped entry (whose ``state`` is the one to restore), or
        None when there is nothing to undo.
        """
        move = self.undo_stack.pop()
        if move is None:
            return None
        self.redo_stack.push(replace(move, state=current_state))
        return move

    def redo(self, current_state: GameState) -> Optional[RecordedMove]:
        """Pop the latest undone move; it returns to the undo stack holding ``current_state``."""
        move = self.redo_stack.pop()
        if move is None:
            return None
        self.undo_stack.push(replace(move, state=current_state))
        return move

    def can_undo(self) -> bool:
        return not self.undo_stack.is_empty()

    def can_redo(self) -> bool:
        return not self.redo_stack.is_empty()

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

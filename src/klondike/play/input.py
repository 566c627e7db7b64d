"""Human input handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from klondike.engine.moves import (
    Draw,
    Move,
    TableauToFoundation,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
)

HELP_TEXT = """Commands (columns, waste cards and card positions count from 1):
  d               draw three (or reset the stock)
  wt <w> <col>    waste card w onto a column
  wf <w>          waste card w onto its foundation
  tf <col>        last card of a column onto its foundation
  tt <col> <n> <col>  run starting at card n onto another column
  <number>        play that entry of the last move list
  m  list legal moves    u  undo    r  redo
  n  new game            h  help    q  quit"""

ACTIONS = {
    "u": "undo",
    "undo": "undo",
    "r": "redo",
    "redo": "redo",
    "m": "moves",
    "moves": "moves",
    "n": "new",
    "new": "new",
    "h": "help",
    "help": "help",
    "?": "help",
}

# Command word -> (number of arguments, move factory taking 0-based ints)
MOVE_COMMANDS: dict[str, tuple[int, Callable[..., Move]]] = {
    "d": (0, lambda: Draw()),
    "draw": (0, lambda: Draw()),
    "wt": (2, lambda w, col: WasteToTableau(visible_index=w, column=col)),
    "wf": (1, lambda w: WasteToFoundation(visible_index=w)),
    "tf": (1, lambda col: TableauToFoundation(column=col)),
    "tt": (3, lambda src, idx, dst: TableauToTableau(from_column=src, card_index=idx, to_column=dst)),
}


@dataclass
class InputResult:
    """Result of human input."""

    move: Optional[Move] = None
    action: Optional[str] = None  # undo, redo, moves, new, help
    choice: Optional[int] = None  # 0-based entry of the last presented move list
    quit: bool = False
    error: Optional[str] = None


class CommandParser:
    """Turns typed commands into moves and actions."""

    def parse(self, raw: str) -> InputResult:
        words = raw.strip().lower().split()
        if not words:
            return InputResult(error="Enter a command ('h' for help).")

        head, args = words[0], words[1:]

        if head in ("q", "quit", "exit"):
            return InputResult(quit=True)

        if head in ACTIONS:
            return InputResult(action=ACTIONS[head])

        if head.isdigit() and not args:
            choice = int(head)
            if choice < 1:
                return InputResult(error=f"Invalid choice {choice}.")
            return InputResult(choice=choice - 1)

        if head not in MOVE_COMMANDS:
            return InputResult(error=f"Unknown command '{head}'. Enter 'h' for help.")

        arity, factory = MOVE_COMMANDS[head]
        if len(args) != arity:
            return InputResult(error=f"'{head}' takes {arity} number(s), got {len(args)}.")

        try:
            numbers = [int(a) for a in args]
        except ValueError:
            return InputResult(error=f"Invalid input '{raw.strip()}'. Arguments must be numbers.")

        if any(n < 1 for n in numbers):
            return InputResult(error="Columns and positions start at 1.")

        return InputResult(move=factory(*(n - 1 for n in numbers)))


class HumanPlayer:
    """Reads commands from the terminal."""

    def __init__(self, input_fn: Callable[[str], str] = input) -> None:
        self.input_fn = input_fn
        self.parser = CommandParser()

    def get_command(self, prompt: str = "> ") -> InputResult:
        try:
            raw = self.input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            return InputResult(quit=True)
        return self.parser.parse(raw)

    def get_yes_no(self, prompt: str) -> Optional[bool]:
        """Get yes/no response.

        Returns:
            True for yes, False for no, None for quit/cancel
        """
        try:
            raw = self.input_fn(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            return None

        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        return None

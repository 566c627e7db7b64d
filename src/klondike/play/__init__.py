"""Terminal front end for playing Klondike."""

from klondike.play.display import BoardRenderer, MovePresenter, format_card
from klondike.play.input import CommandParser, HumanPlayer, InputResult
from klondike.play.session import PlaySession, SessionConfig, SessionResult

__all__ = [
    "BoardRenderer",
    "MovePresenter",
    "format_card",
    "CommandParser",
    "HumanPlayer",
    "InputResult",
    "PlaySession",
    "SessionConfig",
    "SessionResult",
]

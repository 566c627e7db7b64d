"""Game engine: state, history, commands and terminal-condition detection."""

from klondike.engine.config import ConfigError, EngineConfig
from klondike.engine.game import GameStatus, KlondikeEngine
from klondike.engine.history import MoveHistory, MoveType, RecordedMove
from klondike.engine.moves import (
    Draw,
    Move,
    TableauToFoundation,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
)
from klondike.engine.scoring import calculate_score
from klondike.engine.stalemate import StalemateMonitor
from klondike.engine.state import ActivityEntry, GameState
from klondike.engine.view import BoardView

__all__ = [
    "ConfigError",
    "EngineConfig",
    "GameStatus",
    "KlondikeEngine",
    "MoveHistory",
    "MoveType",
    "RecordedMove",
    "Draw",
    "Move",
    "TableauToFoundation",
    "TableauToTableau",
    "WasteToFoundation",
    "WasteToTableau",
    "calculate_score",
    "StalemateMonitor",
    "ActivityEntry",
    "GameState",
    "BoardView",
]

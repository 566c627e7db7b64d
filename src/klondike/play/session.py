"""Terminal play session management."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from klondike.engine.config import EngineConfig
from klondike.engine.game import GameStatus, KlondikeEngine
from klondike.engine.moves import Move
from klondike.engine.players import AIPlayer, GreedyPlayer, RandomPlayer, play_game
from klondike.engine.stalemate import StalemateMonitor
from klondike.play.display import BoardRenderer, MovePresenter
from klondike.play.input import HELP_TEXT, HumanPlayer, InputResult

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a play session."""

    seed: Optional[int] = None
    autoplay: bool = False
    player: str = "greedy"  # random, greedy (autoplay only)
    max_moves: int = 2000  # Autoplay move cap
    max_stock_recycles: Optional[int] = None  # None = KLONDIKE_MAX_STOCK_RECYCLES or 5
    history_limit: Optional[int] = None
    show_activity: bool = True

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)

    def engine_config(self) -> EngineConfig:
        return EngineConfig.from_env(
            seed=self.seed,
            max_stock_recycles=self.max_stock_recycles,
            history_limit=self.history_limit,
        )


@dataclass
class SessionResult:
    """Outcome of a play session."""

    seed: int
    status: str
    move_count: int
    score: int
    foundation_cards: int
    games_started: int
    quit_early: bool = False


class PlaySession:
    """Runs one engine through the terminal, by hand or on autoplay."""

    def __init__(self, config: SessionConfig, engine: Optional[KlondikeEngine] = None):
        self.config = config
        self.engine = engine or KlondikeEngine(config.engine_config())
        self.renderer = BoardRenderer()
        self.presenter = MovePresenter()
        self.monitor = StalemateMonitor(
            self.engine,
            on_stalemate=lambda _: self._notices.append(
                "No moves left. Undo, or start a new game with 'n'."
            ),
            on_stock_limit=lambda _: self._notices.append(
                "Stock recycle limit reached. Start a new game with 'n'."
            ),
        )
        self.games_started = 0
        self._last_moves: list[Move] = []
        self._notices: list[str] = []

    def new_game(self) -> None:
        """Stop the old game's monitor and deal a new game."""
        self.monitor.stop()
        self.engine.new_game()
        self.games_started += 1
        self._last_moves = []
        self._notices = []

    def run(
        self,
        output_fn: Callable[[str], None] = print,
        input_fn: Callable[[str], str] = input,
    ) -> SessionResult:
        """Run the session.

        Args:
            output_fn: Function to output text (default: print)
            input_fn: Function to read a line (default: input)

        Returns:
            SessionResult with the final engine status
        """
        self.new_game()
        output_fn(f"Seed: {self.config.seed} (use --seed {self.config.seed} to replay)")

        if self.config.autoplay:
            return self._run_autoplay(output_fn)
        return self._run_interactive(output_fn, HumanPlayer(input_fn))

    def _run_autoplay(self, output_fn: Callable[[str], None]) -> SessionResult:
        player = self._make_player()
        result = play_game(self.engine, player, max_moves=self.config.max_moves)
        output_fn("")
        output_fn(self.renderer.render(self.engine.view(), self.config.show_activity))
        output_fn("")
        output_fn(
            f"Autoplay ({self.config.player}): {result.status.value} after "
            f"{result.moves_played} moves, {result.foundation_cards} cards on foundations"
        )
        return self._result()

    def _run_interactive(self, output_fn: Callable[[str], None], human: HumanPlayer) -> SessionResult:
        output_fn(HELP_TEXT)
        quit_early = False

        while True:
            output_fn("")
            output_fn(self.renderer.render(self.engine.view(), self.config.show_activity))
            for notice in self._notices:
                output_fn(f"! {notice}")
            self._notices = []

            if self.engine.status == GameStatus.WON:
                output_fn("\n=== You Win! ===")
                again = human.get_yes_no("Play again? [y/n]: ")
                if again:
                    self.new_game()
                    continue
                break

            result = human.get_command()
            if result.quit:
                quit_early = not self.engine.is_terminal
                break
            self._handle(result, output_fn)
            self.monitor.tick()

        return self._result(quit_early=quit_early)

    def _handle(self, result: InputResult, output_fn: Callable[[str], None]) -> None:
        """Apply one parsed command."""
        if result.error:
            output_fn(result.error)
            return

        if result.action == "help":
            output_fn(HELP_TEXT)
            return
        if result.action == "moves":
            self._last_moves = list(self.engine.legal_moves())
            output_fn(self.presenter.present(self._last_moves))
            return
        if result.action == "new":
            self.new_game()
            output_fn("New game dealt.")
            return
        if result.action == "undo":
            if not self.engine.undo():
                output_fn("Nothing to undo.")
            return
        if result.action == "redo":
            if not self.engine.redo():
                output_fn("Nothing to redo.")
            return

        move = result.move
        if result.choice is not None:
            if result.choice >= len(self._last_moves):
                output_fn("List moves with 'm' first, then pick a number from the list.")
                return
            move = self._last_moves[result.choice]

        if move is None:
            return
        self._last_moves = []
        if not self.engine.apply(move):
            output_fn("That move is not allowed.")

    def _make_player(self) -> AIPlayer:
        if self.config.player == "random":
            return RandomPlayer(seed=self.config.seed)
        return GreedyPlayer(seed=self.config.seed)

    def _result(self, quit_early: bool = False) -> SessionResult:
        return SessionResult(
            seed=self.config.seed if self.config.seed is not None else 0,
            status=self.engine.status.value,
            move_count=self.engine.move_count,
            score=self.engine.score,
            foundation_cards=self.engine.foundation_card_count(),
            games_started=self.games_started,
            quit_early=quit_early,
        )

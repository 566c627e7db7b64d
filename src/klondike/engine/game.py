"""Klondike game engine: piles, move validation, history and terminal states."""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from klondike.engine.config import EngineConfig
from klondike.engine.history import MoveHistory, MoveType
from klondike.engine.moves import (
    Draw,
    Move,
    TableauToFoundation,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
)
from klondike.engine.scoring import calculate_score
from klondike.engine.state import ActivityEntry, GameState, utc_now
from klondike.engine.view import (
    ActivityView,
    BoardView,
    CardView,
    FoundationView,
    WasteCardView,
)
from klondike.model.cards import Card, build_deck, shuffle
from klondike.model.containers import Queue, Sequence, Stack
from klondike.model.rules import can_place_on_foundation, can_place_on_tableau, is_valid_run
from klondike.model.schema import RANKS, SUITS, Suit

logger = logging.getLogger(__name__)

TABLEAU_COLUMNS = 7
VISIBLE_WASTE = 3
FULL_FOUNDATION = 13
DECK_SIZE = 52


class GameStatus(Enum):
    """Alert conditions layered over the pile contents."""

    PLAYING = "playing"
    STALEMATE_PENDING = "stalemate_pending"  # Advisory only
    STOCK_LIMIT_REACHED = "stock_limit_reached"  # Absorbing
    WON = "won"  # Absorbing


TERMINAL_STATUSES = frozenset({GameStatus.STOCK_LIMIT_REACHED, GameStatus.WON})


class KlondikeEngine:
    """Three-draw Klondike game engine.

    Owns the stock, waste, four suit-locked foundations and seven tableau
    columns. Every command validates completely before it mutates anything
    and answers with a bool; illegal input never raises.

    Construct it, then call :meth:`new_game` to deal.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            rng: Random source for shuffling (default: seeded from config.seed)
            clock: Monotonic seconds source used for scoring (default: time.monotonic)
        """
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.clock = clock or time.monotonic

        self.history = MoveHistory(limit=self.config.history_limit)
        self._recent: Queue[ActivityEntry] = Queue()

        self.stock: Stack[Card] = Stack()
        self.waste: Stack[Card] = Stack()
        self.foundations: dict[Suit, Stack[Card]] = {}
        self.tableau: list[Sequence[Card]] = []
        self._reset_piles()

        self.move_count = 0
        self.score = 0
        self.stock_recycle_count = 0
        self.status = GameStatus.PLAYING
        self.consecutive_no_moves = 0
        self.started_at = self.clock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def new_game(self) -> None:
        """Shuffle a fresh deck, deal the tableau and reset every counter."""
        self._reset_piles()

        cards = build_deck()
        shuffle(cards, self.rng)
        deck: Stack[Card] = Stack(cards)

        # Column c gets c + 1 cards; only the last one is face up
        for col in range(TABLEAU_COLUMNS):
            for row in range(col + 1):
                card = deck.pop()
                assert card is not None
                self.tableau[col].append(card.turned(row == col))

        while not deck.is_empty():
            card = deck.pop()
            assert card is not None
            self.stock.push(card)

        self.move_count = 0
        self.stock_recycle_count = 0
        self.status = GameStatus.PLAYING
        self.consecutive_no_moves = 0
        self.started_at = self.clock()
        self.history.clear()
        self._recent.clear()
        self.update_score()
        self._log_activity("Game started")

        logger.info(f"New game dealt: {self.stock.size()} cards in stock")

    def _reset_piles(self) -> None:
        self.stock = Stack()
        self.waste = Stack()
        self.foundations = {suit: Stack() for suit in SUITS}
        self.tableau = [Sequence() for _ in range(TABLEAU_COLUMNS)]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def draw_three(self) -> bool:
        """Draw up to three cards, or recycle the waste into an empty stock."""
        if self._rejected("draw"):
            return False
        if self.stock.is_empty() and self.waste.is_empty():
            logger.debug("Draw rejected: stock and waste are empty")
            return False

        prior = self.snapshot()

        if self.stock.is_empty():
            # Waste holds cards in draw order; the first card drawn this cycle
            # must end on top of the stock so the next pass repeats it.
            cards = self.waste.snapshot()
            self.waste.clear()
            for card in reversed(cards):
                self.stock.push(card.turned(False))
            self.stock_recycle_count += 1
            limit_reached = self.stock_recycle_count >= self.config.max_stock_recycles

            description = "Reset stock from waste"
            if limit_reached:
                description += "; stock recycle limit reached"
            self._commit(
                MoveType.RECYCLE,
                prior,
                description,
                {"cards": len(cards), "stock_recycle_count": self.stock_recycle_count},
                counts_as_move=False,
            )
            logger.debug(
                f"Stock recycled ({self.stock_recycle_count}/{self.config.max_stock_recycles})"
            )
            if limit_reached:
                self._enter_terminal(GameStatus.STOCK_LIMIT_REACHED, "Stock recycle limit reached")
            return True

        drawn: list[Card] = []
        for _ in range(self.config.draw_count):
            card = self.stock.pop()
            if card is None:
                break
            card = card.turned(True)
            self.waste.push(card)
            drawn.append(card)

        self._commit(
            MoveType.DRAW,
            prior,
            f"Drew {len(drawn)} card(s) from stock",
            {"cards": [card.card_id for card in drawn]},
        )
        return True

    def move_waste_to_tableau(self, visible_index: int, column: int) -> bool:
        """Move one of the visible waste cards onto a tableau column."""
        if self._rejected("waste to tableau"):
            return False
        if not self._valid_column(column):
            return False
        position = self._waste_position(visible_index)
        if position is None:
            return False

        card = self.waste.snapshot()[position]
        if not can_place_on_tableau(card, self.tableau[column]):
            logger.debug(f"{card.label} cannot go on column {column + 1}")
            return False

        prior = self.snapshot()
        taken = self._take_from_waste(position)
        self.tableau[column].append(taken)

        self._commit(
            MoveType.WASTE_TO_TABLEAU,
            prior,
            f"Moved {taken.label} from waste to column {column + 1}",
            {"card": taken.card_id, "waste_position": position, "to_column": column},
        )
        return True

    def move_waste_to_foundation(self, visible_index: int) -> bool:
        """Move one of the visible waste cards onto its suit's foundation."""
        if self._rejected("waste to foundation"):
            return False
        position = self._waste_position(visible_index)
        if position is None:
            return False

        card = self.waste.snapshot()[position]
        if not can_place_on_foundation(card, self.foundations[card.suit]):
            logger.debug(f"{card.label} cannot go on the {card.suit.value} foundation")
            return False

        prior = self.snapshot()
        taken = self._take_from_waste(position)
        self.foundations[taken.suit].push(taken)

        self._commit(
            MoveType.WASTE_TO_FOUNDATION,
            prior,
            self._with_win_notice(
                f"Moved {taken.label} from waste to {taken.suit.value} foundation"
            ),
            {"card": taken.card_id, "waste_position": position},
        )
        self._enter_won_if_complete()
        return True

    def move_tableau_to_foundation(self, column: int) -> bool:
        """Move a column's last card onto its suit's foundation."""
        if self._rejected("tableau to foundation"):
            return False
        if not self._valid_column(column):
            return False

        card = self.tableau[column].get_last()
        if card is None or not card.face_up:
            return False
        if not can_place_on_foundation(card, self.foundations[card.suit]):
            logger.debug(f"{card.label} cannot go on the {card.suit.value} foundation")
            return False

        prior = self.snapshot()
        self.tableau[column].remove_last()
        self.foundations[card.suit].push(card)
        self._reveal_last(column)

        self._commit(
            MoveType.TABLEAU_TO_FOUNDATION,
            prior,
            self._with_win_notice(
                f"Moved {card.label} from column {column + 1} to {card.suit.value} foundation"
            ),
            {"card": card.card_id, "from_column": column},
        )
        self._enter_won_if_complete()
        return True

    def move_tableau_to_tableau(self, from_column: int, card_index: int, to_column: int) -> bool:
        """Move the face-up run starting at ``card_index`` onto another column."""
        if self._rejected("tableau to tableau"):
            return False
        if not (self._valid_column(from_column) and self._valid_column(to_column)):
            return False
        if from_column == to_column:
            return False

        source = self.tableau[from_column]
        run = source.slice(card_index)
        if run.is_empty():
            return False
        if not all(card.face_up for card in run):
            return False
        if not is_valid_run(run):
            return False
        first = run.get_at(0)
        assert first is not None
        if not can_place_on_tableau(first, self.tableau[to_column]):
            logger.debug(f"{first.label} cannot go on column {to_column + 1}")
            return False

        prior = self.snapshot()
        moved = source.splice(card_index, source.size() - card_index)
        for card in moved:
            self.tableau[to_column].append(card)
        self._reveal_last(from_column)

        self._commit(
            MoveType.TABLEAU_TO_TABLEAU,
            prior,
            f"Moved {moved.size()} card(s) from column {from_column + 1} to column {to_column + 1}",
            {
                "from_column": from_column,
                "to_column": to_column,
                "card_index": card_index,
                "cards": [card.card_id for card in moved],
            },
        )
        return True

    def undo(self) -> bool:
        """Restore the state before the latest move."""
        if self._rejected("undo"):
            return False
        move = self.history.undo(self.snapshot())
        if move is None:
            return False
        self._load(move.state)
        self._after_history_step(f"Undid {move.move_type.value.replace('_', ' ')}")
        return True

    def redo(self) -> bool:
        """Re-apply the latest undone move."""
        if self._rejected("redo"):
            return False
        move = self.history.redo(self.snapshot())
        if move is None:
            return False
        self._load(move.state)
        self._after_history_step(f"Redid {move.move_type.value.replace('_', ' ')}")
        return True

    def apply(self, move: Move) -> bool:
        """Dispatch a move value to the matching command."""
        if isinstance(move, Draw):
            return self.draw_three()
        if isinstance(move, WasteToTableau):
            return self.move_waste_to_tableau(move.visible_index, move.column)
        if isinstance(move, WasteToFoundation):
            return self.move_waste_to_foundation(move.visible_index)
        if isinstance(move, TableauToFoundation):
            return self.move_tableau_to_foundation(move.column)
        if isinstance(move, TableauToTableau):
            return self.move_tableau_to_tableau(move.from_column, move.card_index, move.to_column)
        raise TypeError(f"Not a move: {move!r}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def legal_moves(self) -> Iterator[Move]:
        """Yield legal moves lazily.

        Order: waste to tableau, waste to foundation, tableau to tableau
        (every face-up valid run), tableau to foundation, then drawing.
        Nothing is legal in a terminal state.
        """
        if self.is_terminal:
            return

        visible = self.visible_waste()

        for i, card in enumerate(visible):
            for col in range(TABLEAU_COLUMNS):
                if can_place_on_tableau(card, self.tableau[col]):
                    yield WasteToTableau(visible_index=i, column=col)

        for i, card in enumerate(visible):
            if can_place_on_foundation(card, self.foundations[card.suit]):
                yield WasteToFoundation(visible_index=i)

        for from_col, column in enumerate(self.tableau):
            cards = column.snapshot()
            for index, card in enumerate(cards):
                run = cards[index:]
                if not all(c.face_up for c in run) or not is_valid_run(run):
                    continue
                for to_col in range(TABLEAU_COLUMNS):
                    if to_col != from_col and can_place_on_tableau(card, self.tableau[to_col]):
                        yield TableauToTableau(from_column=from_col, card_index=index, to_column=to_col)

        for col, column in enumerate(self.tableau):
            last = column.get_last()
            if last is not None and last.face_up and can_place_on_foundation(
                last, self.foundations[last.suit]
            ):
                yield TableauToFoundation(column=col)

        if self._can_draw():
            yield Draw()

    def has_any_legal_move(self) -> bool:
        return next(self.legal_moves(), None) is not None

    def check_win_condition(self) -> bool:
        """True when every foundation is complete; enters WON as a side effect."""
        won = self._foundations_complete()
        if won and self.status != GameStatus.WON:
            self._enter_terminal(GameStatus.WON, "Game won")
            self._log_activity("Game won")
        return won

    def check_stalemate(self) -> GameStatus:
        """Run one periodic stalemate check and return the resulting status.

        After ``stalemate_threshold`` consecutive checks without a legal move
        the status becomes STALEMATE_PENDING. Terminal states are left alone.
        """
        if self.is_terminal:
            return self.status

        if self.has_any_legal_move():
            self.consecutive_no_moves = 0
            return self.status

        self.consecutive_no_moves += 1
        logger.debug(f"No legal moves ({self.consecutive_no_moves} consecutive checks)")
        if (
            self.consecutive_no_moves >= self.config.stalemate_threshold
            and self.status != GameStatus.STALEMATE_PENDING
        ):
            self.status = GameStatus.STALEMATE_PENDING
            logger.info("Stalemate pending: no legal moves found")
        return self.status

    def visible_waste(self) -> tuple[Card, ...]:
        """Top three waste cards, bottommost first."""
        return self.waste.snapshot()[-VISIBLE_WASTE:]

    def foundation_card_count(self) -> int:
        return sum(pile.size() for pile in self.foundations.values())

    def card_count(self) -> int:
        return (
            self.stock.size()
            + self.waste.size()
            + self.foundation_card_count()
            + sum(column.size() for column in self.tableau)
        )

    def can_undo(self) -> bool:
        return not self.is_terminal and self.history.can_undo()

    def can_redo(self) -> bool:
        return not self.is_terminal and self.history.can_redo()

    def recent_activity(self) -> list[ActivityEntry]:
        """Recent-activity entries, oldest first."""
        return list(self._recent.snapshot())

    def update_score(self) -> int:
        """Recompute the cached display score from the clock."""
        elapsed = self.clock() - self.started_at
        self.score = calculate_score(self.move_count, elapsed, self.foundation_card_count())
        return self.score

    # ------------------------------------------------------------------
    # Snapshots and read model
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """Capture every pile and counter as an immutable GameState."""
        return GameState(
            stock=self.stock.snapshot(),
            waste=self.waste.snapshot(),
            foundations=tuple(self.foundations[suit].snapshot() for suit in SUITS),
            tableau=tuple(column.snapshot() for column in self.tableau),
            move_count=self.move_count,
            score=self.score,
            stock_recycle_count=self.stock_recycle_count,
        )

    def restore(self, state: GameState) -> None:
        """Replace the live state wholesale with ``state``.

        History is kept; the status is recomputed from the restored piles.
        """
        self._load(state)
        self.consecutive_no_moves = 0
        self.status = self._status_for_piles()

    def view(self) -> BoardView:
        """Build the read model for renderers."""
        visible = self.visible_waste()
        return BoardView(
            stock_size=self.stock.size(),
            waste_size=self.waste.size(),
            waste=[
                WasteCardView(position=i, card=CardView.from_card(card))
                for i, card in enumerate(visible)
            ],
            foundations=[
                FoundationView(
                    suit=suit.value,
                    size=self.foundations[suit].size(),
                    top=_card_view_or_none(self.foundations[suit].peek()),
                )
                for suit in SUITS
            ],
            tableau=[[CardView.from_card(card) for card in column] for column in self.tableau],
            move_count=self.move_count,
            score=self.score,
            stock_recycle_count=self.stock_recycle_count,
            max_stock_recycles=self.config.max_stock_recycles,
            status=self.status.value,
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
            recent_activity=[ActivityView.from_entry(entry) for entry in self._recent],
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rejected(self, command: str) -> bool:
        if self.is_terminal:
            logger.debug(f"{command} rejected: game is {self.status.value}")
            return True
        return False

    def _valid_column(self, column: int) -> bool:
        return 0 <= column < TABLEAU_COLUMNS

    def _can_draw(self) -> bool:
        if not self.stock.is_empty():
            return True
        return (
            not self.waste.is_empty()
            and self.stock_recycle_count < self.config.max_stock_recycles
        )

    def _waste_position(self, visible_index: int) -> Optional[int]:
        """Translate a visible-window index into a position in the full waste."""
        visible = min(VISIBLE_WASTE, self.waste.size())
        if visible_index < 0 or visible_index >= visible:
            return None
        return self.waste.size() - visible + visible_index

    def _take_from_waste(self, position: int) -> Card:
        """Remove the card at ``position`` (0 = bottom) keeping the others in order."""
        held: Stack[Card] = Stack()
        while self.waste.size() > position + 1:
            held.push(self.waste.pop())  # type: ignore[arg-type]
        card = self.waste.pop()
        assert card is not None
        while not held.is_empty():
            self.waste.push(held.pop())  # type: ignore[arg-type]
        return card

    def _reveal_last(self, column: int) -> None:
        pile = self.tableau[column]
        last = pile.get_last()
        if last is not None and not last.face_up:
            pile.set_at(pile.size() - 1, last.turned(True))

    def _commit(
        self,
        move_type: MoveType,
        prior: GameState,
        description: str,
        data: dict[str, Any],
        counts_as_move: bool = True,
    ) -> None:
        """Bookkeeping shared by every successful forward move."""
        if counts_as_move:
            self.move_count += 1
        self.history.record(move_type, prior, data)
        self.consecutive_no_moves = 0
        if self.status == GameStatus.STALEMATE_PENDING:
            self.status = GameStatus.PLAYING
        self.update_score()
        self._log_activity(description)
        logger.debug(f"{description} (moves: {self.move_count}, score: {self.score})")

    def _after_history_step(self, description: str) -> None:
        self.consecutive_no_moves = 0
        self.status = self._status_for_piles()
        self._log_activity(description)
        logger.debug(description)

    def _load(self, state: GameState) -> None:
        self.stock = Stack(state.stock)
        self.waste = Stack(state.waste)
        self.foundations = {suit: Stack(pile) for suit, pile in zip(SUITS, state.foundations)}
        self.tableau = [Sequence(column) for column in state.tableau]
        self.move_count = state.move_count
        self.score = state.score
        self.stock_recycle_count = state.stock_recycle_count

    def _status_for_piles(self) -> GameStatus:
        if self._foundations_complete():
            return GameStatus.WON
        if self.stock_recycle_count >= self.config.max_stock_recycles:
            return GameStatus.STOCK_LIMIT_REACHED
        return GameStatus.PLAYING

    def _foundations_complete(self) -> bool:
        """Every foundation holds all thirteen ranks of its own suit."""
        return all(
            pile.size() == FULL_FOUNDATION
            and {card.rank for card in pile} == set(RANKS)
            and all(card.suit == suit for card in pile)
            for suit, pile in self.foundations.items()
        )

    def _with_win_notice(self, description: str) -> str:
        if self._foundations_complete():
            return f"{description}; game won"
        return description

    def _enter_won_if_complete(self) -> None:
        if self._foundations_complete() and self.status != GameStatus.WON:
            self._enter_terminal(GameStatus.WON, "Game won")

    def _enter_terminal(self, status: GameStatus, description: str) -> None:
        """Switch to a terminal status; the triggering move already logged activity."""
        self.status = status
        logger.info(f"{description} after {self.move_count} moves (score: {self.score})")

    def _log_activity(self, description: str) -> None:
        self._recent.enqueue(ActivityEntry(timestamp=utc_now(), description=description))
        while self._recent.size() > self.config.recent_activity_limit:
            self._recent.dequeue()


def _card_view_or_none(card: Optional[Card]) -> Optional[CardView]:
    return CardView.from_card(card) if card is not None else None

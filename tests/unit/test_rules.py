"""Tests for tableau and foundation placement rules."""

import pytest

from klondike.model.cards import Card
from klondike.model.containers import Sequence, Stack
from klondike.model.rules import can_place_on_foundation, can_place_on_tableau, is_valid_run
from klondike.model.schema import Rank, Suit


def make_card(rank: str, suit: str, face_up: bool = True) -> Card:
    """Create a card like make_card("7", "spades")."""
    return Card(suit=Suit(suit), rank=Rank(rank), card_id=f"{suit}-{rank}", face_up=face_up)


class TestValidRun:
    """Tests for is_valid_run."""

    def test_alternating_descending_run(self):
        run = [make_card("9", "spades"), make_card("8", "hearts"), make_card("7", "clubs")]

        assert is_valid_run(run)

    def test_same_color_breaks_run(self):
        run = [make_card("9", "spades"), make_card("8", "clubs")]

        assert not is_valid_run(run)

    def test_rank_gap_breaks_run(self):
        run = [make_card("9", "spades"), make_card("7", "hearts")]

        assert not is_valid_run(run)

    def test_ascending_breaks_run(self):
        run = [make_card("7", "hearts"), make_card("8", "spades")]

        assert not is_valid_run(run)

    def test_empty_and_single_runs_are_valid(self):
        assert is_valid_run([])
        assert is_valid_run([make_card("4", "diamonds")])


class TestTableauPlacement:
    """Tests for can_place_on_tableau."""

    def test_king_on_empty_column(self):
        assert can_place_on_tableau(make_card("K", "hearts"), Sequence())

    def test_non_king_on_empty_column(self):
        assert not can_place_on_tableau(make_card("Q", "hearts"), Sequence())

    def test_opposite_color_one_lower(self):
        column = Sequence([make_card("8", "spades")])

        assert can_place_on_tableau(make_card("7", "hearts"), column)
        assert can_place_on_tableau(make_card("7", "diamonds"), column)

    def test_same_color_rejected(self):
        column = Sequence([make_card("8", "spades")])

        assert not can_place_on_tableau(make_card("7", "clubs"), column)

    def test_wrong_rank_rejected(self):
        column = Sequence([make_card("8", "spades")])

        assert not can_place_on_tableau(make_card("6", "hearts"), column)
        assert not can_place_on_tableau(make_card("9", "hearts"), column)


class TestFoundationPlacement:
    """Tests for can_place_on_foundation."""

    def test_ace_starts_foundation(self):
        assert can_place_on_foundation(make_card("A", "clubs"), Stack())

    def test_non_ace_on_empty_foundation(self):
        assert not can_place_on_foundation(make_card("2", "clubs"), Stack())

    def test_next_rank_up(self):
        foundation = Stack([make_card("A", "clubs"), make_card("2", "clubs")])

        assert can_place_on_foundation(make_card("3", "clubs"), foundation)
        assert not can_place_on_foundation(make_card("4", "clubs"), foundation)
        assert not can_place_on_foundation(make_card("2", "clubs"), foundation)


class TestPlacementExamples:
    """Worked examples of the placement rules."""

    @pytest.mark.parametrize(
        "labels,valid",
        [
            ([], True),
            ([("7", "spades")], True),
            ([("7", "spades"), ("6", "hearts"), ("5", "clubs")], True),
            ([("7", "spades"), ("6", "spades"), ("5", "clubs")], False),
            ([("7", "spades"), ("5", "hearts"), ("4", "clubs")], False),
        ],
    )
    def test_runs(self, labels, valid):
        assert is_valid_run([make_card(rank, suit) for rank, suit in labels]) is valid

    def test_hearts_foundation_sequence(self):
        foundation = Stack()

        assert not can_place_on_foundation(make_card("2", "hearts"), foundation)
        assert can_place_on_foundation(make_card("A", "hearts"), foundation)
        foundation.push(make_card("A", "hearts"))
        assert not can_place_on_foundation(make_card("3", "hearts"), foundation)
        assert can_place_on_foundation(make_card("2", "hearts"), foundation)

    def test_six_of_clubs(self):
        assert can_place_on_tableau(make_card("6", "clubs"), Sequence([make_card("7", "hearts")]))
        assert not can_place_on_tableau(make_card("6", "clubs"), Sequence([make_card("7", "spades")]))

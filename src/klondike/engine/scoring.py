"""Score calculation."""

from __future__ import annotations

import math

BASE_SCORE = 1000
MIN_SCORE = 100
MOVE_PENALTY = 2
SECONDS_PER_POINT = 10
FOUNDATION_CARD_BONUS = 50


def calculate_score(move_count: int, elapsed_seconds: float, foundation_cards: int) -> int:
    """Compute the display score.

    1000, minus 2 per move, minus 1 per full 10 seconds elapsed, plus 50 per
    card on the foundations; never below 100.
    """
    score = (
        BASE_SCORE
        - MOVE_PENALTY * move_count
        - math.floor(max(0.0, elapsed_seconds) / SECONDS_PER_POINT)
        + FOUNDATION_CARD_BONUS * foundation_cards
    )
    return max(MIN_SCORE, score)

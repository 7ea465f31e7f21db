"""Elo-style rating update rule.

Ratings follow a logistic expected-score model. Each participant moves by
its own K-factor, which shrinks as the participant accumulates
comparisons, so established items settle while newcomers move quickly.
"""

import math
from collections.abc import Collection, Sequence

import structlog

from src.picker.constants import (
    DRAW_SCORE,
    INITIAL_RATING,
    K_FACTOR_DECAY,
    K_FACTOR_MAX,
    K_FACTOR_MIN,
    RATING_SCALE,
)
from src.picker.models import Item


logger = structlog.get_logger()


def expected_score(rating_a: float, rating_b: float) -> float:
    """Expected score of A against B.

    Args:
        rating_a: Rating of A.
        rating_b: Rating of B.

    Returns:
        Probability-like score in ``(0, 1)``; 0.5 for equal ratings.
    """
    return 1 / (1 + 10 ** ((rating_b - rating_a) / RATING_SCALE))


def k_factor(comparisons: int) -> int:
    """K-factor for an item with ``comparisons`` prior comparisons."""
    return max(K_FACTOR_MIN, K_FACTOR_MAX - K_FACTOR_DECAY * comparisons)


def _sanitized_rating(item: Item) -> float:
    """Return the item's rating, substituting the initial rating if corrupt."""
    if math.isfinite(item.rating):
        return item.rating
    logger.warning(
        "non_finite_rating_reset",
        item_id=item.id,
        rating=str(item.rating),
    )
    return INITIAL_RATING


def rating_deltas(
    rating_a: float,
    comparisons_a: int,
    rating_b: float,
    comparisons_b: int,
    score_a: float,
) -> tuple[float, float]:
    """Compute the rating change for both sides of one comparison.

    Args:
        rating_a: Prior rating of A.
        comparisons_a: Prior comparison count of A.
        rating_b: Prior rating of B.
        comparisons_b: Prior comparison count of B.
        score_a: Outcome for A: 1 win, 0 loss, 0.5 draw.

    Returns:
        Tuple of (delta_a, delta_b).
    """
    expected_a = expected_score(rating_a, rating_b)
    expected_b = expected_score(rating_b, rating_a)
    delta_a = k_factor(comparisons_a) * (score_a - expected_a)
    delta_b = k_factor(comparisons_b) * ((1 - score_a) - expected_b)
    return delta_a, delta_b


def update_ratings(winner: Item, loser: Item, is_draw: bool = False) -> None:
    """Apply a single pairwise comparison in place.

    Args:
        winner: Preferred item (or either side of a draw).
        loser: Other item.
        is_draw: Whether neither side was preferred.
    """
    score = DRAW_SCORE if is_draw else 1.0
    winner_rating = _sanitized_rating(winner)
    loser_rating = _sanitized_rating(loser)
    delta_w, delta_l = rating_deltas(
        winner_rating, winner.comparisons, loser_rating, loser.comparisons, score
    )
    winner.rating = winner_rating + delta_w
    loser.rating = loser_rating + delta_l

    if not is_draw:
        winner.wins += 1
        loser.losses += 1

    winner.comparisons += 1
    loser.comparisons += 1


def apply_decision(
    batch: Sequence[Item], picked_ids: Collection[str]
) -> dict[str, float]:
    """Resolve one round of a group comparison.

    Every winner is scored against every loser as a win, every pair of
    co-winners as a draw. With no winners every pair in the batch draws.
    All deltas are computed from the ratings and comparison counts as they
    stood at the start of the round, then applied together. Each batch
    member counts one comparison for the round; winners count one win and
    losers one loss when the round had both.

    Args:
        batch: Items presented this round, in presentation order.
        picked_ids: Ids of the preferred items. Ids outside the batch are
            ignored.

    Returns:
        Mapping of item id to the total rating change applied.
    """
    winners = [item for item in batch if item.id in picked_ids]
    losers = [item for item in batch if item.id not in picked_ids]

    priors = {item.id: (_sanitized_rating(item), item.comparisons) for item in batch}
    deltas = dict.fromkeys(priors, 0.0)

    def accumulate(a: Item, b: Item, score_a: float) -> None:
        rating_a, comparisons_a = priors[a.id]
        rating_b, comparisons_b = priors[b.id]
        delta_a, delta_b = rating_deltas(
            rating_a, comparisons_a, rating_b, comparisons_b, score_a
        )
        deltas[a.id] += delta_a
        deltas[b.id] += delta_b

    if winners:
        for winner in winners:
            for loser in losers:
                accumulate(winner, loser, 1.0)
        for i, first in enumerate(winners):
            for second in winners[i + 1 :]:
                accumulate(first, second, DRAW_SCORE)
    else:
        for i, first in enumerate(batch):
            for second in batch[i + 1 :]:
                accumulate(first, second, DRAW_SCORE)

    decisive = bool(winners) and bool(losers)
    for item in batch:
        item.rating = priors[item.id][0] + deltas[item.id]
        item.comparisons += 1
    if decisive:
        for winner in winners:
            winner.wins += 1
        for loser in losers:
            loser.losses += 1

    return deltas

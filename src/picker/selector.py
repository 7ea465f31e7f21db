"""Diverse batch selection.

Builds each round's batch from a few strong contenders, one representative
per unrepresented hue bucket, and random filler. The strongest item is
skipped often enough that it does not appear in every round.
"""

import hashlib
import math
import random
from collections.abc import Sequence

from src.picker.constants import (
    BUCKET_TOP_CHOICES,
    HIGH_RATED_INCLUDE_PROBABILITY,
    HIGH_RATED_MAX,
    HIGH_RATED_MIN,
    HUE_BUCKET_COUNT,
    HUE_BUCKET_DEGREES,
    SKIP_TOP_MAX,
    SKIP_TOP_PROBABILITY,
)
from src.picker.models import Item
from src.picker.protocols import RandomSource


def hue_bucket(hue: float) -> int:
    """Diversity bucket (0-11) for a hue in degrees."""
    return math.floor(hue / HUE_BUCKET_DEGREES) % HUE_BUCKET_COUNT


def item_bucket(item: Item) -> int:
    """Diversity bucket for an item.

    Colored items use their hue. Colorless items are spread over the
    buckets by a hash of their id, so the same id always lands in the
    same bucket.
    """
    if item.hsl is not None:
        return hue_bucket(item.hue)
    digest = hashlib.sha256(item.id.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") % HUE_BUCKET_COUNT


def group_by_hue(items: Sequence[Item]) -> dict[int, list[Item]]:
    """Partition items into diversity buckets, each sorted by descending rating.

    Args:
        items: Items to partition.

    Returns:
        Mapping of every bucket index to its items (possibly empty).
    """
    groups: dict[int, list[Item]] = {i: [] for i in range(HUE_BUCKET_COUNT)}
    for item in items:
        groups[item_bucket(item)].append(item)
    for group in groups.values():
        group.sort(key=lambda item: item.rating, reverse=True)
    return groups


def _sort_by_hue(items: list[Item]) -> list[Item]:
    return sorted(items, key=lambda item: item.hue)


class BatchSelector:
    """Selects bounded, hue-diverse batches from the active pool.

    The selector keeps no random state of its own; every call draws from
    the source it was given.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        """Initialize the selector.

        Args:
            rng: Random source. A fresh ``random.Random`` when omitted.
        """
        self._rng: RandomSource = (
            rng if rng is not None else random.Random()  # noqa: S311
        )

    def select_batch(self, available: Sequence[Item], size: int) -> list[Item]:
        """Select ``min(size, len(available))`` distinct items.

        Args:
            available: Active items to choose from.
            size: Requested batch size.

        Returns:
            Selected items sorted by hue.
        """
        if size <= 0:
            return []
        if len(available) <= size:
            return _sort_by_hue(list(available))

        rng = self._rng
        groups = group_by_hue(available)
        batch: list[Item] = []
        selected: set[int] = set()
        used_groups: set[int] = set()

        def add(item: Item) -> None:
            batch.append(item)
            selected.add(id(item))
            used_groups.add(item_bucket(item))

        # Strong contenders, starting past the very top most of the time
        by_rating = sorted(available, key=lambda item: item.rating, reverse=True)
        start = (
            rng.randrange(SKIP_TOP_MAX) + 1
            if rng.random() < SKIP_TOP_PROBABILITY
            else 0
        )
        high_count = min(
            size, HIGH_RATED_MIN + rng.randrange(HIGH_RATED_MAX - HIGH_RATED_MIN + 1)
        )
        for item in by_rating[start:]:
            if len(batch) >= high_count:
                break
            if rng.random() < HIGH_RATED_INCLUDE_PROBABILITY:
                add(item)

        # One representative per missing hue bucket
        bucket_order = list(groups)
        rng.shuffle(bucket_order)
        for bucket in bucket_order:
            if len(batch) >= size:
                break
            group = groups[bucket]
            if not group or bucket in used_groups:
                continue
            candidate = group[rng.randrange(min(BUCKET_TOP_CHOICES, len(group)))]
            if id(candidate) not in selected:
                add(candidate)

        # Random filler
        remaining = [item for item in available if id(item) not in selected]
        while len(batch) < size and remaining:
            add(remaining.pop(rng.randrange(len(remaining))))

        return _sort_by_hue(batch)


def select_batch(
    available: Sequence[Item], size: int, rng: RandomSource | None = None
) -> list[Item]:
    """Pure function API for batch selection.

    Args:
        available: Active items to choose from.
        size: Requested batch size.
        rng: Random source.

    Returns:
        Selected items sorted by hue.
    """
    return BatchSelector(rng).select_batch(available, size)

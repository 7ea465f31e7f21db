"""Perceptually distinct color pool generation."""

import math
import random

from src.palette.color_space import hsl_to_hex, hsl_to_rgb
from src.palette.constants import (
    GOLDEN_RATIO_CONJUGATE,
    LIGHTNESS_LEVELS,
    SATURATION_LEVELS,
)
from src.palette.models import HSLColor
from src.picker.models import Item


def new_palette_seed() -> float:
    """Draw a run-scoped hue offset in ``[0, 1)``."""
    return random.random()  # noqa: S311


def generate_distinct_colors(count: int, seed: float | None = None) -> list[Item]:
    """Generate a pool of perceptually separated colors.

    Hue advances by the golden-ratio conjugate per item so consecutive
    colors land far apart on the wheel. Saturation cycles with the item
    index and lightness advances once per saturation cycle, so no two
    neighbours share all three components.

    Args:
        count: Number of colors to generate. Non-positive yields none.
        seed: Starting hue offset in ``[0, 1)``. A fresh offset is drawn
            when omitted, rotating the palette between sessions.

    Returns:
        Items with ids ``color_0`` .. ``color_{count-1}`` and initial
        statistics.
    """
    hue = new_palette_seed() if seed is None else seed % 1
    items: list[Item] = []

    for i in range(max(count, 0)):
        hue = (hue + GOLDEN_RATIO_CONJUGATE) % 1

        h = math.floor(hue * 360)
        s = SATURATION_LEVELS[i % len(SATURATION_LEVELS)]
        l = LIGHTNESS_LEVELS[  # noqa: E741
            (i // len(SATURATION_LEVELS)) % len(LIGHTNESS_LEVELS)
        ]

        items.append(
            Item(
                id=f"color_{i}",
                name=f"Color {i + 1}",
                hsl=HSLColor(h=h, s=s, l=l),
                rgb=hsl_to_rgb(h, s, l),
                hex=hsl_to_hex(h, s, l),
            )
        )

    return items

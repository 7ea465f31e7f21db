"""Color palette primitives.

Conversions between HSL, RGB and hex, plus accessibility helpers used when
presenting picker items.
"""

from src.palette.color_space import (
    hsl_to_hex,
    hsl_to_rgb,
    pattern_for_color,
    simulate_color_blindness,
)
from src.palette.models import HSLColor, RGBColor


__all__ = [
    "HSLColor",
    "RGBColor",
    "hsl_to_hex",
    "hsl_to_rgb",
    "pattern_for_color",
    "simulate_color_blindness",
]

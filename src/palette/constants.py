"""Constants for palette generation."""

from typing import Final


# Fractional hue step between consecutive colors. Irrational, so hues never
# settle into a repeating cycle.
GOLDEN_RATIO_CONJUGATE: Final[float] = 0.618033988749895

# Saturation levels (percent), cycled by item index
SATURATION_LEVELS: Final[tuple[int, ...]] = (40, 60, 80, 100)

# Lightness levels (percent), advanced once per full saturation cycle
LIGHTNESS_LEVELS: Final[tuple[int, ...]] = (30, 40, 50, 60, 70, 80, 90)

# Texture names used as a non-color cue alongside each swatch
PATTERNS: Final[tuple[str, ...]] = (
    "solid",
    "dots",
    "stripes",
    "diagonal",
    "crosshatch",
    "waves",
    "checkers",
    "grid",
    "circles",
    "triangles",
)

# Color vision deficiency simulation matrices (linear RGB rows)
COLOR_BLINDNESS_MATRICES: Final[
    dict[str, tuple[tuple[float, float, float], ...]]
] = {
    "protanopia": (
        (0.567, 0.433, 0.0),
        (0.558, 0.442, 0.0),
        (0.0, 0.242, 0.758),
    ),
    "deuteranopia": (
        (0.625, 0.375, 0.0),
        (0.7, 0.3, 0.0),
        (0.0, 0.3, 0.7),
    ),
    "tritanopia": (
        (0.95, 0.05, 0.0),
        (0.0, 0.433, 0.567),
        (0.0, 0.475, 0.525),
    ),
}

"""Color space conversions and accessibility helpers."""

from src.palette.constants import COLOR_BLINDNESS_MATRICES, PATTERNS
from src.palette.models import RGBColor


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGBColor:  # noqa: E741
    """Convert HSL to 8-bit RGB.

    Args:
        h: Hue in degrees.
        s: Saturation percent.
        l: Lightness percent.

    Returns:
        RGBColor with channels rounded to the nearest integer.
    """
    h = h / 360
    s = s / 100
    l = l / 100  # noqa: E741

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return RGBColor(r=round(r * 255), g=round(g * 255), b=round(b * 255))


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    """Convert HSL to a ``#rrggbb`` hex string."""
    rgb = hsl_to_rgb(h, s, l)
    return f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}"


def simulate_color_blindness(rgb: RGBColor, kind: str) -> RGBColor:
    """Approximate how a color appears with a color vision deficiency.

    Args:
        rgb: Source color.
        kind: One of ``protanopia``, ``deuteranopia`` or ``tritanopia``.

    Returns:
        Simulated color. Unknown kinds return the input unchanged.
    """
    matrix = COLOR_BLINDNESS_MATRICES.get(kind)
    if matrix is None:
        return rgb

    channels = (rgb.r / 255, rgb.g / 255, rgb.b / 255)
    r, g, b = (
        min(255, max(0, round(sum(w * c for w, c in zip(row, channels)) * 255)))
        for row in matrix
    )
    return RGBColor(r=r, g=g, b=b)


def pattern_for_color(index: int) -> str:
    """Get the texture name paired with the color at ``index``."""
    return PATTERNS[index % len(PATTERNS)]

"""Color value types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HSLColor:
    """A color in HSL space.

    Attributes:
        h: Hue in degrees, 0-359.
        s: Saturation percent, 0-100.
        l: Lightness percent, 0-100.
    """

    h: int
    s: int
    l: int  # noqa: E741

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"h": self.h, "s": self.s, "l": self.l}


@dataclass(frozen=True)
class RGBColor:
    """A color in 8-bit RGB space."""

    r: int
    g: int
    b: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"r": self.r, "g": self.g, "b": self.b}

"""Data models for the preference picker."""

from dataclasses import dataclass, field
from enum import Enum

from src.palette.models import HSLColor, RGBColor
from src.picker.constants import INITIAL_RATING, MAX_DECISION_TIMES


class ItemStatus(str, Enum):
    """Membership of an item within the candidate pool.

    - ACTIVE: Eligible for batching and elimination
    - ELIMINATED: Removed from batching for the rest of the session
    - FAVORITE: Promoted as a confirmed top preference
    """

    ACTIVE = "active"
    ELIMINATED = "eliminated"
    FAVORITE = "favorite"


@dataclass(eq=False)
class Item:
    """A candidate in the pool with its ranking statistics.

    Display attributes are fixed at creation. Statistics are mutated in
    place by every round. Items compare by identity since membership
    collections hold references into the pool.

    Attributes:
        id: Stable identifier.
        name: Display name.
        hsl: Color in HSL space, if the item is a color.
        rgb: Color in RGB space, if the item is a color.
        hex: Hex color string, if the item is a color.
        attributes: Free-form descriptive fields for non-color items.
        rating: Elo-style rating.
        comparisons: Rounds this item participated in.
        wins: Rounds in which this item was picked over another.
        losses: Rounds in which another item was picked over this one.
        status: Current membership set.
    """

    id: str
    name: str = ""
    hsl: HSLColor | None = None
    rgb: RGBColor | None = None
    hex: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    rating: float = INITIAL_RATING
    comparisons: int = 0
    wins: int = 0
    losses: int = 0
    status: ItemStatus = ItemStatus.ACTIVE

    @property
    def hue(self) -> float:
        """Hue in degrees (0 if colorless; see ``selector.item_bucket``)."""
        return float(self.hsl.h) if self.hsl is not None else 0.0

    @property
    def is_active(self) -> bool:
        """Check if the item is still eligible for batching."""
        return self.status == ItemStatus.ACTIVE

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with display attributes and statistics.
        """
        return {
            "id": self.id,
            "name": self.name,
            "hex": self.hex,
            "hsl": self.hsl.to_dict() if self.hsl else None,
            "rgb": self.rgb.to_dict() if self.rgb else None,
            "attributes": dict(self.attributes),
            "rating": self.rating,
            "comparisons": self.comparisons,
            "wins": self.wins,
            "losses": self.losses,
            "status": self.status.value,
        }


@dataclass
class SessionAnalytics:
    """Per-session decision counters.

    Attributes:
        session_start_time: Epoch seconds when the session was initialized.
        session_comparisons: Rounds resolved in the current session.
        total_comparisons: Rounds resolved across resets.
        picks: Rounds resolved by picking.
        passes: Rounds resolved by passing.
        decision_times: Most recent decision latencies in milliseconds.
        average_decision_time: Mean of ``decision_times``.
    """

    session_start_time: float = 0.0
    session_comparisons: int = 0
    total_comparisons: int = 0
    picks: int = 0
    passes: int = 0
    decision_times: list[float] = field(default_factory=list)
    average_decision_time: float = 0.0

    def record_decision_time(self, elapsed_ms: float) -> None:
        """Append a decision latency and refresh the running average.

        Args:
            elapsed_ms: Time since the previous action in milliseconds.
        """
        self.decision_times.append(elapsed_ms)
        if len(self.decision_times) > MAX_DECISION_TIMES:
            del self.decision_times[: len(self.decision_times) - MAX_DECISION_TIMES]
        self.average_decision_time = sum(self.decision_times) / len(
            self.decision_times
        )

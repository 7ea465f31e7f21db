"""Synthetic decision makers for driving sessions without a UI."""

from dataclasses import dataclass, field

import structlog

from src.picker.constants import COMPONENT_PICKER
from src.picker.models import Item
from src.picker.session import PickerSession


logger = structlog.get_logger()


def hue_distance(a: float, b: float) -> float:
    """Shortest angular distance between two hues in degrees."""
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


@dataclass(frozen=True)
class HueChooser:
    """Picks every batch item whose hue lies near a target hue.

    Attributes:
        target_hue: Preferred hue in degrees.
        tolerance: Maximum angular distance for an item to be picked.
    """

    target_hue: float
    tolerance: float = 30.0

    def choose(self, batch: tuple[Item, ...]) -> list[str]:
        """Return the ids to pick; empty means pass."""
        return [
            item.id
            for item in batch
            if hue_distance(item.hue, self.target_hue) <= self.tolerance
        ]


@dataclass
class SimulationResult:
    """Outcome of a simulated session.

    Attributes:
        rounds: Rounds resolved.
        picks: Rounds resolved by picking.
        passes: Rounds resolved by passing.
        top_items: Highest-rated items at the end.
        favorites: Promoted items.
    """

    rounds: int = 0
    picks: int = 0
    passes: int = 0
    top_items: list[Item] = field(default_factory=list)
    favorites: list[Item] = field(default_factory=list)


def run_simulation(
    session: PickerSession, chooser: HueChooser, top: int = 10
) -> SimulationResult:
    """Drive an initialized session to completion.

    Args:
        session: Session with a batch on screen (or already complete).
        chooser: Decision maker.
        top: Number of top items to report.

    Returns:
        SimulationResult for the finished session.
    """
    result = SimulationResult()
    for _ in range(session.config.max_rounds):
        if session.is_complete or not session.evaluating:
            break
        picked = chooser.choose(session.evaluating)
        if picked:
            session.pick(picked)
            result.picks += 1
        else:
            session.pass_batch()
            result.passes += 1
        result.rounds += 1

    result.top_items = session.get_top_colors(top)
    result.favorites = list(session.favorites)

    logger.info(
        "simulation_complete",
        component=COMPONENT_PICKER,
        session_id=session.session_id,
        rounds=result.rounds,
        picks=result.picks,
        passes=result.passes,
        complete=session.is_complete,
    )
    return result

"""Unit tests for simulated decision makers."""

import random

import pytest

from src.picker.config import PickerConfig
from src.picker.session import PickerSession
from src.picker.simulation import HueChooser, hue_distance, run_simulation
from tests.helpers.items import make_item
from tests.helpers.time import FakeClock


class TestHueDistance:
    """Tests for hue_distance."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [(10, 20, 10), (350, 10, 20), (0, 180, 180), (90, 90, 0)],
    )
    def test_wraps_around(self, a: float, b: float, expected: float) -> None:
        """Test distances take the short way around the wheel."""
        assert hue_distance(a, b) == expected


class TestHueChooser:
    """Tests for HueChooser."""

    def test_picks_items_within_tolerance(self) -> None:
        """Test only nearby hues are picked."""
        batch = (
            make_item("near", hue=200),
            make_item("far", hue=20),
            make_item("edge", hue=240),
        )
        assert HueChooser(210, tolerance=30).choose(batch) == ["near", "edge"]

    def test_passes_without_match(self) -> None:
        """Test an empty choice when nothing is close."""
        batch = (make_item("a", hue=0), make_item("b", hue=90))
        assert HueChooser(210, tolerance=10).choose(batch) == []


class TestRunSimulation:
    """Tests for run_simulation."""

    def test_runs_to_completion(self) -> None:
        """Test a simulation resolves every round."""
        session = PickerSession(
            PickerConfig(generate_items=True, item_count=80, seed=0.3),
            rng=random.Random(8),
            clock=FakeClock(),
        )
        session.initialize()

        result = run_simulation(session, HueChooser(210), top=5)

        assert session.is_complete
        assert result.rounds == 20
        assert result.picks + result.passes == 20
        assert len(result.top_items) == 5
        assert result.picks == session.analytics.picks

    def test_complete_session_runs_no_rounds(self) -> None:
        """Test an already complete session is reported as is."""
        session = PickerSession({"generateItems": True, "itemCount": 0})
        session.initialize()

        result = run_simulation(session, HueChooser(0))

        assert result.rounds == 0
        assert result.top_items == []

"""Integration tests for complete picker sessions.

These tests drive sessions end to end over generated palettes: initialize,
decide every round, persist, restore and report.
"""

import json
import math
import random

from src.picker import PickerConfig, PickerSession, SessionSnapshot
from src.picker.simulation import HueChooser, hue_distance, run_simulation
from tests.helpers.time import FakeClock, fixed_wall_clock


def new_session(config: PickerConfig, seed: int) -> PickerSession:
    """Create a session with a seeded random source."""
    return PickerSession(
        config,
        rng=random.Random(seed),
        clock=FakeClock(),
        wall_clock=fixed_wall_clock,
    )


class TestFullSession:
    """End-to-end sessions over a 200-color palette."""

    def test_default_session_completes_in_twenty_rounds(self) -> None:
        """Test the default options run twenty rounds then stop."""
        config = PickerConfig(generate_items=True, seed=0.11)
        session = new_session(config, seed=1)
        session.initialize()

        assert len(session.items) == 200
        result = run_simulation(session, HueChooser(210))

        assert session.is_complete
        assert result.rounds == 20
        assert session.analytics.session_comparisons == 20
        assert len(session.favorites) <= 1

    def test_ratings_reward_preferred_hue(self) -> None:
        """Test the highest-rated color was picked at least once."""
        config = PickerConfig(generate_items=True, seed=0.61)
        session = new_session(config, seed=9)
        session.initialize()

        result = run_simulation(session, HueChooser(120, tolerance=40))

        assert result.picks > 0
        leader = result.top_items[0]
        assert leader.wins >= 1
        assert hue_distance(leader.hue, 120) <= 40

    def test_invariants_after_session(self) -> None:
        """Test statistics stay consistent over a finished session."""
        config = PickerConfig(generate_items=True, item_count=120, max_rounds=35)
        session = new_session(config, seed=4)
        session.initialize({"batchSize": 6})

        run_simulation(session, HueChooser(300, tolerance=45))

        for item in session.items:
            assert math.isfinite(item.rating)
            assert item.wins + item.losses <= item.comparisons
        favorite_ids = {item.id for item in session.favorites}
        eliminated_ids = {item.id for item in session.eliminated}
        assert not favorite_ids & eliminated_ids
        assert session.evaluating == ()

    def test_top_colors_stable_after_completion(self) -> None:
        """Test top colors are reproducible once the session is complete."""
        config = PickerConfig(generate_items=True, item_count=50, seed=0.2)
        session = new_session(config, seed=3)
        session.initialize()
        run_simulation(session, HueChooser(30))

        first = [item.id for item in session.get_top_colors(10)]
        session.pick([session.items[0].id])
        session.pass_batch()

        assert [item.id for item in session.get_top_colors(10)] == first


class TestPersistence:
    """Snapshot and resume across session instances."""

    def test_resume_mid_session(self) -> None:
        """Test a session resumed halfway finishes the remaining rounds."""
        config = PickerConfig(generate_items=True, item_count=100)
        chooser = HueChooser(45, tolerance=35)

        first = new_session(config, seed=21)
        first.initialize()
        for _ in range(8):
            picked = chooser.choose(first.evaluating)
            if picked:
                first.pick(picked)
            else:
                first.pass_batch()

        stored = json.loads(first.snapshot().to_json())
        assert stored["analytics"]["sessionComparisons"] == 8

        second = new_session(config, seed=99)
        second.restore_state(stored)

        assert [item.hex for item in second.items] == [
            item.hex for item in first.items
        ]
        assert [item.id for item in second.evaluating] == [
            item.id for item in first.evaluating
        ]

        result = run_simulation(second, chooser)

        assert result.rounds == 12
        assert second.is_complete
        assert second.analytics.total_comparisons == 20

    def test_restore_capped_snapshot(self) -> None:
        """Test a snapshot already at the round cap restores complete."""
        config = PickerConfig(generate_items=True, item_count=30, seed=0.9)
        snapshot = SessionSnapshot.model_validate(
            {
                "evaluating": ["color_1", "color_2"],
                "analytics": {"sessionComparisons": 20, "totalComparisons": 20},
                "sessionComplete": False,
            }
        )

        session = new_session(config, seed=0)
        session.restore_state(snapshot)

        assert session.is_complete
        assert session.evaluating == ()

    def test_legacy_snapshot_accepted(self) -> None:
        """Test snapshots using legacy keys restore."""
        config = PickerConfig(generate_items=True, item_count=10, seed=0.5)
        payload = {
            "colors": [
                {"id": "color_3", "eloRating": 1720.5, "comparisons": 6, "wins": 4},
                {"id": "color_7", "eloRating": 1310.0, "comparisons": 6, "losses": 5},
            ],
            "evaluating": ["color_3", "color_7"],
            "favorites": [],
            "eliminated": [],
            "settings": {"batchSize": 5, "highContrast": True},
            "analytics": {"sessionComparisons": 6, "picks": 5, "passes": 1},
            "sessionComplete": False,
        }

        session = new_session(config, seed=0)
        session.restore_state(json.dumps(payload))

        top = session.get_top_colors(1)[0]
        assert top.id == "color_3"
        assert top.rating == 1720.5
        assert session.settings.batch_size == 5
        assert session.snapshot().settings["highContrast"] is True
        assert [item.id for item in session.evaluating] == ["color_3", "color_7"]

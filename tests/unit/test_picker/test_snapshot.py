"""Unit tests for session snapshots."""

import json

import pytest
from pydantic import ValidationError

from src.picker.models import SessionAnalytics
from src.picker.snapshot import AnalyticsSnapshot, ItemStats, SessionSnapshot
from tests.helpers.items import make_item


class TestItemStats:
    """Tests for ItemStats."""

    def test_from_item(self) -> None:
        """Test statistics are projected from an item."""
        item = make_item("a", rating=1612.5, comparisons=4)
        item.wins = 2
        item.losses = 1

        stats = ItemStats.from_item(item)

        assert stats.id == "a"
        assert stats.rating == 1612.5
        assert (stats.comparisons, stats.wins, stats.losses) == (4, 2, 1)

    def test_legacy_rating_key(self) -> None:
        """Test the legacy rating key is accepted."""
        stats = ItemStats.model_validate({"id": "a", "eloRating": 1444})
        assert stats.rating == 1444

    def test_negative_counts_rejected(self) -> None:
        """Test counters cannot be negative."""
        with pytest.raises(ValidationError):
            ItemStats.model_validate({"id": "a", "comparisons": -1})


class TestAnalyticsSnapshot:
    """Tests for AnalyticsSnapshot."""

    def test_round_trip(self) -> None:
        """Test conversion to and from live analytics."""
        analytics = SessionAnalytics(
            session_start_time=12.0,
            session_comparisons=3,
            total_comparisons=9,
            picks=2,
            passes=1,
            decision_times=[100.0, 300.0],
            average_decision_time=200.0,
        )

        restored = AnalyticsSnapshot.from_analytics(analytics).to_analytics()

        assert restored == analytics
        assert restored.decision_times is not analytics.decision_times


class TestSessionSnapshot:
    """Tests for SessionSnapshot."""

    def test_json_uses_camel_case(self) -> None:
        """Test serialized keys are camelCase."""
        snapshot = SessionSnapshot(
            items=[ItemStats(id="a")],
            evaluating=["a"],
            analytics=AnalyticsSnapshot(session_comparisons=2),
            session_complete=False,
            palette_seed=0.25,
        )

        data = json.loads(snapshot.to_json())

        assert data["sessionComplete"] is False
        assert data["paletteSeed"] == 0.25
        assert data["analytics"]["sessionComparisons"] == 2
        assert data["items"][0]["id"] == "a"

    def test_from_json(self) -> None:
        """Test parsing JSON text."""
        snapshot = SessionSnapshot.from_json(
            '{"items": [{"id": "a", "rating": 1600}], "favorites": ["a"]}'
        )
        assert snapshot.items[0].rating == 1600
        assert snapshot.favorites == ["a"]
        assert snapshot.analytics is None

    def test_legacy_colors_key(self) -> None:
        """Test the legacy pool key is accepted."""
        snapshot = SessionSnapshot.model_validate(
            {"colors": [{"id": "color_0", "eloRating": 1520}]}
        )
        assert [stats.id for stats in snapshot.items] == ["color_0"]

    def test_null_lists_become_empty(self) -> None:
        """Test null collections are treated as empty."""
        snapshot = SessionSnapshot.model_validate(
            {"items": None, "evaluating": None, "favorites": None, "eliminated": None}
        )
        assert snapshot.items == []
        assert snapshot.evaluating == []

    def test_unknown_keys_ignored(self) -> None:
        """Test snapshots from newer writers still load."""
        snapshot = SessionSnapshot.model_validate({"version": 3, "evaluating": ["x"]})
        assert snapshot.evaluating == ["x"]

    def test_malformed_json_raises(self) -> None:
        """Test malformed JSON raises a validation error."""
        with pytest.raises(ValidationError):
            SessionSnapshot.from_json("{not json")

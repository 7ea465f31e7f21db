"""Unit tests for picker metrics."""

from src.picker.metrics import PickerMetrics


class TestPickerMetrics:
    """Tests for PickerMetrics."""

    def test_initial_values(self) -> None:
        """Test all counters start at zero."""
        metrics = PickerMetrics()
        assert metrics.rounds_total == 0
        assert metrics.batches_selected == 0
        assert metrics.get_selection_percentiles() == {
            "p50": 0.0,
            "p90": 0.0,
            "p99": 0.0,
        }

    def test_record_decisions(self) -> None:
        """Test picks and passes both count as rounds."""
        metrics = PickerMetrics()
        metrics.record_pick()
        metrics.record_pick()
        metrics.record_pass()

        assert metrics.rounds_total == 3
        assert metrics.picks_total == 2
        assert metrics.passes_total == 1

    def test_record_membership_changes(self) -> None:
        """Test eliminations and favorites accumulate."""
        metrics = PickerMetrics()
        metrics.record_eliminations(3)
        metrics.record_eliminations(2)
        metrics.record_favorite()

        assert metrics.eliminated_total == 5
        assert metrics.favorites_total == 1

    def test_selection_percentiles(self) -> None:
        """Test percentile calculation over recorded durations."""
        metrics = PickerMetrics()
        for i in range(1, 101):
            metrics.record_selection_duration(float(i))

        percentiles = metrics.get_selection_percentiles()

        assert metrics.batches_selected == 100
        assert percentiles["p50"] == 51.0
        assert percentiles["p90"] == 91.0
        assert percentiles["p99"] == 100.0

    def test_to_dict(self) -> None:
        """Test dictionary export."""
        metrics = PickerMetrics()
        metrics.record_pick()
        metrics.record_selection_duration(1.5)

        result = metrics.to_dict()

        assert result["rounds_total"] == 1
        assert result["picks_total"] == 1
        assert result["batches_selected"] == 1
        assert result["selection_percentiles_ms"] == {
            "p50": 1.5,
            "p90": 1.5,
            "p99": 1.5,
        }

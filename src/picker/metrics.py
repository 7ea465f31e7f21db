"""Metrics collection for picker sessions."""

from dataclasses import dataclass, field


@dataclass
class PickerMetrics:
    """Metrics for one picker session.

    Attributes:
        rounds_total: Rounds resolved.
        picks_total: Rounds resolved by picking.
        passes_total: Rounds resolved by passing.
        eliminated_total: Items eliminated.
        favorites_total: Items promoted to favorite.
        batches_selected: Batches produced by the selector.
        selection_durations_ms: Time spent in each batch selection.
    """

    rounds_total: int = 0
    picks_total: int = 0
    passes_total: int = 0
    eliminated_total: int = 0
    favorites_total: int = 0
    batches_selected: int = 0
    selection_durations_ms: list[float] = field(default_factory=list)

    def record_pick(self) -> None:
        """Record a round resolved by picking."""
        self.rounds_total += 1
        self.picks_total += 1

    def record_pass(self) -> None:
        """Record a round resolved by passing."""
        self.rounds_total += 1
        self.passes_total += 1

    def record_eliminations(self, count: int) -> None:
        """Record eliminated items.

        Args:
            count: Number of items eliminated in one pass.
        """
        self.eliminated_total += count

    def record_favorite(self) -> None:
        """Record a favorite promotion."""
        self.favorites_total += 1

    def record_selection_duration(self, duration_ms: float) -> None:
        """Record a batch selection.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.batches_selected += 1
        self.selection_durations_ms.append(duration_ms)

    def get_selection_percentiles(self) -> dict[str, float]:
        """Calculate selection duration percentiles (p50/p90/p99).

        Returns:
            Dictionary with p50, p90, p99 values.
        """
        if not self.selection_durations_ms:
            return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

        sorted_durations = sorted(self.selection_durations_ms)
        n = len(sorted_durations)

        def percentile(p: float) -> float:
            idx = int(p * n / 100)
            return sorted_durations[min(idx, n - 1)]

        return {
            "p50": percentile(50),
            "p90": percentile(90),
            "p99": percentile(99),
        }

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "rounds_total": self.rounds_total,
            "picks_total": self.picks_total,
            "passes_total": self.passes_total,
            "eliminated_total": self.eliminated_total,
            "favorites_total": self.favorites_total,
            "batches_selected": self.batches_selected,
            "selection_percentiles_ms": self.get_selection_percentiles(),
        }

"""Shared, deterministic clocks for tests."""

from dataclasses import dataclass


# Fixed epoch timestamp used as the session start time in tests.
FIXED_EPOCH = 1_497_312_000.0


@dataclass
class FakeClock:
    """Manually advanced clock returning seconds."""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += seconds


def fixed_wall_clock() -> float:
    """Wall clock that always reports ``FIXED_EPOCH``."""
    return FIXED_EPOCH

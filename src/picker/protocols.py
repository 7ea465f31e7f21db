"""Protocol interface for random sources."""

from collections.abc import MutableSequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for the randomness used by batch selection.

    ``random.Random`` satisfies it; tests pass a seeded instance to get
    reproducible batches.
    """

    def random(self) -> float:
        """Return a float in ``[0, 1)``."""
        ...

    def randrange(self, stop: int) -> int:
        """Return an integer in ``[0, stop)``."""
        ...

    def shuffle(self, x: MutableSequence[Any]) -> None:
        """Shuffle a sequence in place."""
        ...

"""Constants for the preference picker engine."""

from typing import Final


COMPONENT_PICKER: Final[str] = "picker"

# Rating model
INITIAL_RATING: Final[float] = 1500.0
RATING_SCALE: Final[float] = 400.0
K_FACTOR_MAX: Final[int] = 64
K_FACTOR_MIN: Final[int] = 32
K_FACTOR_DECAY: Final[int] = 2  # K lost per prior comparison
DRAW_SCORE: Final[float] = 0.5

# Session defaults
DEFAULT_ITEM_COUNT: Final[int] = 200
DEFAULT_MAX_ROUNDS: Final[int] = 20
DEFAULT_BATCH_SIZE: Final[int] = 10
MAX_DECISION_TIMES: Final[int] = 100

# Elimination policy
ELIMINATION_MIN_ROUNDS: Final[int] = 10
ELIMINATION_MIN_COMPARISONS: Final[int] = 8
ELIMINATION_PERCENTILE: Final[float] = 0.75
ELIMINATION_MARGIN: Final[float] = 200.0

# Favorite promotion policy
FAVORITE_MIN_ROUNDS: Final[int] = 20
FAVORITE_FORCE_ROUNDS: Final[int] = 25
FAVORITE_MIN_COMPARISONS: Final[int] = 10
FAVORITE_LEAD: Final[float] = 100.0

# Batch selection
HUE_BUCKET_COUNT: Final[int] = 12
HUE_BUCKET_DEGREES: Final[int] = 30
SKIP_TOP_PROBABILITY: Final[float] = 0.6
SKIP_TOP_MAX: Final[int] = 3
HIGH_RATED_MIN: Final[int] = 2
HIGH_RATED_MAX: Final[int] = 3
HIGH_RATED_INCLUDE_PROBABILITY: Final[float] = 0.7
BUCKET_TOP_CHOICES: Final[int] = 3

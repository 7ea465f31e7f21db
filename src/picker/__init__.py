"""Preference picker engine.

This module elicits a ranked set of preferred colors from a large pool
through repeated small-batch group comparisons. An Elo-style rating rule
scores every decision, a diverse batch selector keeps rounds varied, and a
session state machine handles elimination, favorite promotion and
termination after a capped number of rounds.
"""

from src.picker.config import (
    ItemSpec,
    PickerConfig,
    SessionSettings,
    build_config,
    load_picker_config,
)
from src.picker.errors import PickerConfigError, PickerError
from src.picker.generator import generate_distinct_colors
from src.picker.metrics import PickerMetrics
from src.picker.models import Item, ItemStatus, SessionAnalytics
from src.picker.protocols import RandomSource
from src.picker.rating import apply_decision, expected_score, k_factor, update_ratings
from src.picker.selector import BatchSelector, select_batch
from src.picker.session import PickerSession
from src.picker.snapshot import SessionSnapshot
from src.picker.state_machine import (
    PickerStateTransitionError,
    SessionState,
    SessionStateMachine,
)


__all__ = [
    "BatchSelector",
    "Item",
    "ItemSpec",
    "ItemStatus",
    "PickerConfig",
    "PickerConfigError",
    "PickerError",
    "PickerMetrics",
    "PickerSession",
    "PickerStateTransitionError",
    "RandomSource",
    "SessionAnalytics",
    "SessionSettings",
    "SessionSnapshot",
    "SessionState",
    "SessionStateMachine",
    "apply_decision",
    "build_config",
    "expected_score",
    "generate_distinct_colors",
    "k_factor",
    "load_picker_config",
    "select_batch",
    "update_ratings",
]

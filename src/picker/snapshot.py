"""Serializable session snapshots.

A snapshot is the only contract between a session and whatever persists
it. Keys serialize in camelCase. Legacy snapshots
(``colors`` / ``eloRating``) are accepted on input.
"""

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.picker.constants import INITIAL_RATING
from src.picker.models import Item, SessionAnalytics


_SNAPSHOT_CONFIG = ConfigDict(
    extra="ignore", alias_generator=to_camel, populate_by_name=True
)


class ItemStats(BaseModel):
    """Ranking statistics of one item."""

    model_config = _SNAPSHOT_CONFIG

    id: Annotated[str, Field(min_length=1)]
    rating: float = Field(
        default=INITIAL_RATING,
        validation_alias=AliasChoices("rating", "eloRating"),
    )
    comparisons: Annotated[int, Field(ge=0)] = 0
    wins: Annotated[int, Field(ge=0)] = 0
    losses: Annotated[int, Field(ge=0)] = 0

    @classmethod
    def from_item(cls, item: Item) -> "ItemStats":
        """Project an item's statistics."""
        return cls(
            id=item.id,
            rating=item.rating,
            comparisons=item.comparisons,
            wins=item.wins,
            losses=item.losses,
        )


class AnalyticsSnapshot(BaseModel):
    """Session analytics counters."""

    model_config = _SNAPSHOT_CONFIG

    session_start_time: float = 0.0
    session_comparisons: Annotated[int, Field(ge=0)] = 0
    total_comparisons: Annotated[int, Field(ge=0)] = 0
    picks: Annotated[int, Field(ge=0)] = 0
    passes: Annotated[int, Field(ge=0)] = 0
    decision_times: list[float] = Field(default_factory=list)
    average_decision_time: float = 0.0

    @classmethod
    def from_analytics(cls, analytics: SessionAnalytics) -> "AnalyticsSnapshot":
        """Project live analytics."""
        return cls(
            session_start_time=analytics.session_start_time,
            session_comparisons=analytics.session_comparisons,
            total_comparisons=analytics.total_comparisons,
            picks=analytics.picks,
            passes=analytics.passes,
            decision_times=list(analytics.decision_times),
            average_decision_time=analytics.average_decision_time,
        )

    def to_analytics(self) -> SessionAnalytics:
        """Create live analytics from this snapshot."""
        return SessionAnalytics(
            session_start_time=self.session_start_time,
            session_comparisons=self.session_comparisons,
            total_comparisons=self.total_comparisons,
            picks=self.picks,
            passes=self.passes,
            decision_times=list(self.decision_times),
            average_decision_time=self.average_decision_time,
        )


class SessionSnapshot(BaseModel):
    """Projection of session state sufficient to resume ranking progress.

    Attributes:
        items: Per-item statistics.
        evaluating: Ids of the batch on screen (empty when complete).
        favorites: Ids of promoted items, in promotion order.
        eliminated: Ids of eliminated items, in elimination order.
        settings: Session settings, including caller-defined keys.
        analytics: Analytics counters.
        session_complete: Whether the session reached its terminal state.
        palette_seed: Hue offset used to generate the palette, if generated.
    """

    model_config = _SNAPSHOT_CONFIG

    items: list[ItemStats] = Field(
        default_factory=list,
        validation_alias=AliasChoices("items", "colors"),
    )
    evaluating: list[str] = Field(default_factory=list)
    favorites: list[str] = Field(default_factory=list)
    eliminated: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    analytics: AnalyticsSnapshot | None = None
    session_complete: bool = False
    palette_seed: float | None = None

    @field_validator("items", "evaluating", "favorites", "eliminated", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_json(self) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "SessionSnapshot":
        """Parse a JSON snapshot.

        Raises:
            pydantic.ValidationError: If the JSON is malformed.
        """
        return cls.model_validate_json(data)

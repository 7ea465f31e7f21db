"""Picker session orchestrator.

A session owns the candidate pool, the membership sets, the batch on
screen and the analytics. It runs the round loop:

    select batch -> decision (pick / pass) -> rating update
        -> favorite promotion -> elimination -> next batch | complete

Every public operation runs to completion synchronously. Operations called
in a state where they make no sense are ignored rather than raised, since
callers are driven by UI events that may arrive late or twice.
"""

import math
import random
import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from src.picker.config import PickerConfig, SessionSettings, build_config
from src.picker.constants import (
    COMPONENT_PICKER,
    ELIMINATION_MARGIN,
    ELIMINATION_MIN_COMPARISONS,
    ELIMINATION_MIN_ROUNDS,
    ELIMINATION_PERCENTILE,
    FAVORITE_FORCE_ROUNDS,
    FAVORITE_LEAD,
    FAVORITE_MIN_COMPARISONS,
    FAVORITE_MIN_ROUNDS,
    INITIAL_RATING,
)
from src.picker.errors import PickerConfigError
from src.picker.generator import generate_distinct_colors
from src.picker.metrics import PickerMetrics
from src.picker.models import Item, ItemStatus, SessionAnalytics
from src.picker.protocols import RandomSource
from src.picker.rating import apply_decision
from src.picker.selector import BatchSelector
from src.picker.snapshot import AnalyticsSnapshot, ItemStats, SessionSnapshot
from src.picker.state_machine import SessionState, SessionStateMachine


logger = structlog.get_logger()


def _coerce_settings(
    settings: SessionSettings | Mapping[str, Any] | None,
) -> SessionSettings | None:
    if settings is None or isinstance(settings, SessionSettings):
        return settings
    try:
        return SessionSettings.model_validate(dict(settings))
    except ValidationError as e:
        raise PickerConfigError.from_validation_error(e, "<settings>") from e


class PickerSession:
    """Preference ranking session over a pool of items.

    Implements a state machine flow:
        IDLE -> ACTIVE -> COMPLETE

    ``initialize``, ``restore_state`` and ``reset`` start the flow again
    from IDLE.
    """

    def __init__(
        self,
        config: PickerConfig | Mapping[str, Any],
        rng: RandomSource | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        metrics: PickerMetrics | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize the session.

        The pool is not built until ``initialize`` or ``restore_state``.

        Args:
            config: Construction options.
            rng: Random source for palette rotation and batch selection.
            clock: Monotonic clock (seconds) for decision latencies.
            wall_clock: Epoch clock (seconds) for the session start time.
            metrics: Optional metrics instance.
            session_id: Identifier for logging; generated when omitted.

        Raises:
            PickerConfigError: If the options are invalid.
        """
        self._config = build_config(config)
        self._session_id = session_id or uuid.uuid4().hex[:12]
        self._rng: RandomSource = (
            rng if rng is not None else random.Random()  # noqa: S311
        )
        self._selector = BatchSelector(self._rng)
        self._clock = clock
        self._wall_clock = wall_clock
        self._metrics = metrics or PickerMetrics()
        self._state_machine = SessionStateMachine(self._session_id)

        self._items: list[Item] = []
        self._index: dict[str, Item] = {}
        self._favorites: list[Item] = []
        self._eliminated: list[Item] = []
        self._evaluating: list[Item] = []
        self._settings = self._config.default_settings.model_copy()
        self._analytics = SessionAnalytics()
        self._last_action_time = clock()
        self._palette_seed: float | None = None

        self._log = logger.bind(
            component=COMPONENT_PICKER,
            session_id=self._session_id,
        )

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        """Get the session identifier."""
        return self._session_id

    @property
    def config(self) -> PickerConfig:
        """Get the construction options."""
        return self._config

    @property
    def state(self) -> SessionState:
        """Get the current session state."""
        return self._state_machine.state

    @property
    def is_complete(self) -> bool:
        """Check if the session reached its terminal state."""
        return self._state_machine.is_terminal

    @property
    def settings(self) -> SessionSettings:
        """Get the current session settings."""
        return self._settings

    @property
    def analytics(self) -> SessionAnalytics:
        """Get the live analytics counters."""
        return self._analytics

    @property
    def metrics(self) -> PickerMetrics:
        """Get the session metrics."""
        return self._metrics

    @property
    def palette_seed(self) -> float | None:
        """Hue offset of the generated palette, if the pool was generated."""
        return self._palette_seed

    @property
    def items(self) -> tuple[Item, ...]:
        """Get every item in the pool."""
        return tuple(self._items)

    @property
    def active_items(self) -> list[Item]:
        """Get items still eligible for batching, in pool order."""
        return [item for item in self._items if item.is_active]

    @property
    def favorites(self) -> tuple[Item, ...]:
        """Get promoted items in promotion order."""
        return tuple(self._favorites)

    @property
    def eliminated(self) -> tuple[Item, ...]:
        """Get eliminated items in elimination order."""
        return tuple(self._eliminated)

    @property
    def evaluating(self) -> tuple[Item, ...]:
        """Get the batch on screen (empty when complete)."""
        return tuple(self._evaluating)

    def get_item(self, item_id: str) -> Item | None:
        """Look up a pool item by id."""
        return self._index.get(item_id)

    def get_top_colors(self, count: int) -> list[Item]:
        """Get the highest-rated items regardless of membership.

        Args:
            count: Maximum number of items to return.

        Returns:
            Items sorted by descending rating; ties keep pool order.
        """
        ranked = sorted(self._items, key=lambda item: item.rating, reverse=True)
        return ranked[: max(count, 0)]

    def snapshot(self) -> SessionSnapshot:
        """Project the session state for persistence.

        Returns:
            SessionSnapshot that ``restore_state`` accepts.
        """
        return SessionSnapshot(
            items=[ItemStats.from_item(item) for item in self._items],
            evaluating=[item.id for item in self._evaluating],
            favorites=[item.id for item in self._favorites],
            eliminated=[item.id for item in self._eliminated],
            settings=self._settings.model_dump(by_alias=True),
            analytics=AnalyticsSnapshot.from_analytics(self._analytics),
            session_complete=self.is_complete,
            palette_seed=self._palette_seed,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self, settings: SessionSettings | Mapping[str, Any] | None = None
    ) -> None:
        """Start a new session and present the first batch.

        Lifetime analytics (total comparisons, picks, passes) carry over;
        the session round counter restarts at zero.

        Args:
            settings: Session settings. Defaults from the config when omitted.

        Raises:
            PickerConfigError: If ``settings`` is an invalid mapping.
        """
        coerced = _coerce_settings(settings)
        self._settings = coerced or self._config.default_settings.model_copy()

        self._state_machine.restart()
        self._build_pool(palette_seed=None)
        self._favorites = []
        self._eliminated = []
        self._evaluating = []

        self._analytics.session_start_time = self._wall_clock()
        self._analytics.session_comparisons = 0

        self._log.info(
            "picker_session_initialized",
            pool_size=len(self._items),
            batch_size=self._settings.batch_size,
            max_rounds=self._config.max_rounds,
        )

        self.next_batch()

    def reset(self) -> None:
        """Re-initialize with the last-known settings."""
        self.initialize(self._settings)

    def restore_state(
        self, snapshot: SessionSnapshot | Mapping[str, Any] | str | bytes
    ) -> None:
        """Rebuild the session from a snapshot.

        The pool is rebuilt from the config (regenerated with the snapshot's
        palette seed when present) and saved statistics are overlaid by id.
        Ids that match nothing in the pool are dropped. A session that had
        already reached its round cap comes back complete. Snapshots that
        fail validation are logged and ignored.

        Args:
            snapshot: Snapshot model, mapping or JSON text.
        """
        try:
            if isinstance(snapshot, SessionSnapshot):
                parsed = snapshot
            elif isinstance(snapshot, str | bytes):
                parsed = SessionSnapshot.from_json(snapshot)
            else:
                parsed = SessionSnapshot.model_validate(dict(snapshot))
        except ValidationError as e:
            self._log.warning(
                "snapshot_rejected",
                error_count=e.error_count(),
                errors=[
                    {"loc": ".".join(str(loc) for loc in err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            )
            return

        self._settings = self._restored_settings(parsed.settings)
        self._state_machine.restart()
        self._build_pool(palette_seed=parsed.palette_seed)
        dropped = self._overlay_statistics(parsed.items)
        self._restore_membership(parsed.favorites, parsed.eliminated)
        self._evaluating = []
        if parsed.analytics is not None:
            self._analytics = parsed.analytics.to_analytics()

        self._log.info(
            "picker_session_restored",
            pool_size=len(self._items),
            dropped_ids=dropped,
            favorites=len(self._favorites),
            eliminated=len(self._eliminated),
            session_comparisons=self._analytics.session_comparisons,
        )

        if parsed.session_complete or self._round_cap_reached():
            self._complete()
            return

        seen: set[str] = set()
        batch: list[Item] = []
        for item_id in parsed.evaluating:
            item = self._index.get(item_id)
            if item is not None and item.is_active and item_id not in seen:
                seen.add(item_id)
                batch.append(item)

        if batch:
            self._evaluating = batch
            self._state_machine.to_active()
            self._last_action_time = self._clock()
        else:
            self.next_batch()

    # ------------------------------------------------------------------
    # Round loop
    # ------------------------------------------------------------------

    def next_batch(self) -> None:
        """Apply the elimination policy and present the next batch.

        Completes the session when the round cap is reached or no active
        item is left.
        """
        if self.is_complete:
            return
        if self._round_cap_reached():
            self._complete()
            return

        active = self.active_items
        if active and self._analytics.session_comparisons >= ELIMINATION_MIN_ROUNDS:
            self._eliminate(active)
            active = [item for item in active if item.is_active]

        if not active:
            self._complete()
            return

        size = min(self._settings.batch_size, len(active))
        start = time.perf_counter()
        self._evaluating = self._selector.select_batch(active, size)
        self._metrics.record_selection_duration((time.perf_counter() - start) * 1000)

        if self.state == SessionState.IDLE:
            self._state_machine.to_active()
        self._last_action_time = self._clock()

        self._log.debug(
            "picker_batch_selected",
            batch_ids=[item.id for item in self._evaluating],
            active_count=len(active),
        )

    def pick(self, picked_ids: Iterable[str]) -> None:
        """Resolve the current batch with the user's preferred items.

        Ids outside the current batch are ignored. A pick that names only
        such ids still resolves the round: latency and counters are
        recorded and the next batch is shown, but no rating changes.

        Args:
            picked_ids: Ids of the preferred items.
        """
        if not self._evaluating:
            self._log.debug("pick_ignored", reason="no_batch")
            return
        picked = set(picked_ids)
        if not picked:
            self._log.debug("pick_ignored", reason="empty_pick")
            return
        if self._round_cap_reached():
            self._complete()
            return

        winners = picked & {item.id for item in self._evaluating}

        self._record_decision_time()
        deltas = apply_decision(self._evaluating, winners) if winners else {}

        self._analytics.session_comparisons += 1
        self._analytics.total_comparisons += 1
        self._analytics.picks += 1
        self._metrics.record_pick()

        self._log.info(
            "picker_round_resolved",
            decision="pick",
            round=self._analytics.session_comparisons,
            winners=sorted(winners),
            batch_size=len(self._evaluating),
            max_gain=max(deltas.values(), default=0.0),
        )

        self._check_for_new_favorite()
        self._advance()

    def pass_batch(self) -> None:
        """Resolve the current batch without a preference.

        Every pair in the batch is scored as a draw. Favorite promotion is
        not evaluated on a pass.
        """
        if not self._evaluating:
            self._log.debug("pass_ignored", reason="no_batch")
            return
        if self._round_cap_reached():
            self._complete()
            return

        self._record_decision_time()
        apply_decision(self._evaluating, ())

        self._analytics.session_comparisons += 1
        self._analytics.total_comparisons += 1
        self._analytics.passes += 1
        self._metrics.record_pass()

        self._log.info(
            "picker_round_resolved",
            decision="pass",
            round=self._analytics.session_comparisons,
            batch_size=len(self._evaluating),
        )

        self._advance()

    # ------------------------------------------------------------------
    # Caller adjustments
    # ------------------------------------------------------------------

    def set_settings(self, settings: SessionSettings | Mapping[str, Any]) -> None:
        """Replace the session settings; takes effect from the next batch.

        Raises:
            PickerConfigError: If ``settings`` is an invalid mapping.
        """
        coerced = _coerce_settings(settings)
        if coerced is not None:
            self._settings = coerced

    def set_favorites(self, item_ids: Iterable[str]) -> None:
        """Replace the favorite set.

        Previous favorites not listed return to the active pool. Listed
        items become favorites even if they had been eliminated. Unknown
        ids are ignored.

        Args:
            item_ids: Ids of the new favorites, in order.
        """
        wanted: list[Item] = []
        for item_id in item_ids:
            item = self._index.get(item_id)
            if item is not None and item not in wanted:
                wanted.append(item)

        for item in self._favorites:
            if item not in wanted:
                item.status = ItemStatus.ACTIVE
        for item in wanted:
            if item.status == ItemStatus.ELIMINATED:
                self._eliminated.remove(item)
            item.status = ItemStatus.FAVORITE
        self._favorites = wanted

        self._log.info("favorites_replaced", favorites=[item.id for item in wanted])

        if self._evaluating:
            self._evaluating = [item for item in self._evaluating if item.is_active]
            if not self._evaluating:
                self.next_batch()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _round_cap_reached(self) -> bool:
        return self._analytics.session_comparisons >= self._config.max_rounds

    def _advance(self) -> None:
        if self._round_cap_reached():
            self._complete()
        else:
            self.next_batch()

    def _complete(self) -> None:
        self._evaluating = []
        if self.is_complete:
            return
        self._state_machine.to_complete()
        self._log.info(
            "picker_session_complete",
            rounds=self._analytics.session_comparisons,
            favorites=[item.id for item in self._favorites],
            eliminated_count=len(self._eliminated),
        )

    def _build_pool(self, palette_seed: float | None) -> None:
        if self._config.generate_items:
            if palette_seed is None:
                palette_seed = (
                    self._config.seed
                    if self._config.seed is not None
                    else self._rng.random()
                )
            self._palette_seed = palette_seed
            self._items = generate_distinct_colors(
                self._config.item_count, palette_seed
            )
        else:
            self._palette_seed = None
            self._items = [spec.to_item() for spec in self._config.items or []]
        self._index = {item.id: item for item in self._items}

    def _restored_settings(self, raw: Mapping[str, Any]) -> SessionSettings:
        if not raw:
            return self._config.default_settings.model_copy()
        try:
            return SessionSettings.model_validate(dict(raw))
        except ValidationError:
            self._log.warning("snapshot_settings_rejected", settings=dict(raw))
            return self._config.default_settings.model_copy()

    def _overlay_statistics(self, saved: Iterable[ItemStats]) -> int:
        dropped = 0
        for stats in saved:
            item = self._index.get(stats.id)
            if item is None:
                dropped += 1
                continue
            if math.isfinite(stats.rating):
                item.rating = stats.rating
            else:
                self._log.warning("snapshot_rating_ignored", item_id=stats.id)
            item.wins = stats.wins
            item.losses = stats.losses
            item.comparisons = max(stats.comparisons, stats.wins + stats.losses)
        return dropped

    def _restore_membership(
        self, favorite_ids: Iterable[str], eliminated_ids: Iterable[str]
    ) -> None:
        self._favorites = []
        self._eliminated = []
        for item_id in favorite_ids:
            item = self._index.get(item_id)
            if item is not None and item.is_active:
                item.status = ItemStatus.FAVORITE
                self._favorites.append(item)
        for item_id in eliminated_ids:
            item = self._index.get(item_id)
            if item is not None and item.is_active:
                item.status = ItemStatus.ELIMINATED
                self._eliminated.append(item)

    def _record_decision_time(self) -> None:
        now = self._clock()
        self._analytics.record_decision_time((now - self._last_action_time) * 1000)
        self._last_action_time = now

    def _eliminate(self, active: list[Item]) -> None:
        """Eliminate well-sampled items far below the active pool's upper quartile.

        The threshold is computed once, before any of this pass's
        eliminations apply.
        """
        ratings = sorted((item.rating for item in active), reverse=True)
        threshold = (
            ratings[math.floor(len(ratings) * ELIMINATION_PERCENTILE)]
            if ratings
            else INITIAL_RATING
        )
        cutoff = threshold - ELIMINATION_MARGIN

        newly_eliminated = [
            item
            for item in active
            if item.comparisons >= ELIMINATION_MIN_COMPARISONS and item.rating < cutoff
        ]
        for item in newly_eliminated:
            item.status = ItemStatus.ELIMINATED
            self._eliminated.append(item)

        if newly_eliminated:
            self._metrics.record_eliminations(len(newly_eliminated))
            self._log.info(
                "items_eliminated",
                count=len(newly_eliminated),
                item_ids=[item.id for item in newly_eliminated],
                threshold=threshold,
            )

    def _check_for_new_favorite(self) -> None:
        """Promote the clear leader once enough rounds have been played."""
        rounds = self._analytics.session_comparisons
        if rounds < FAVORITE_MIN_ROUNDS:
            return

        candidates = sorted(
            (
                item
                for item in self._items
                if item.is_active and item.comparisons >= FAVORITE_MIN_COMPARISONS
            ),
            key=lambda item: item.rating,
            reverse=True,
        )
        if not candidates:
            return

        top = candidates[0]
        runner_up = candidates[1].rating if len(candidates) > 1 else INITIAL_RATING
        if top.rating > runner_up + FAVORITE_LEAD or rounds >= FAVORITE_FORCE_ROUNDS:
            top.status = ItemStatus.FAVORITE
            self._favorites.append(top)
            self._metrics.record_favorite()
            self._log.info(
                "favorite_promoted",
                item_id=top.id,
                rating=top.rating,
                runner_up_rating=runner_up,
                round=rounds,
            )

"""View controllers for recording portions and editing goals."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from portion_tracker.adapters.counter_client import CounterClient
from portion_tracker.domain.dates import DateCursor
from portion_tracker.domain.dots import DotDecomposition, can_decrease, decompose
from portion_tracker.domain.portions import NUTRIENTS, Direction, Scope
from portion_tracker.services.cache import CounterCache
from portion_tracker.services.events import Listener, Listeners
from portion_tracker.services.notifications import Notifier
from portion_tracker.services.reconciler import MutationReconciler

LOAD_ERROR_MESSAGE = "Error loading data"

_logger = logging.getLogger(__name__)


class ViewState(StrEnum):
    """Lifecycle of a view's data."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class NutrientRow:
    """Everything needed to draw one nutrient row."""

    nutrient: str
    count: int
    pending: int
    goal: int
    dots: DotDecomposition
    can_decrease: bool


@dataclass
class CounterView(ABC):
    """Shared behaviour of the portions and goals views."""

    client: CounterClient
    cache: CounterCache
    notifier: Notifier
    nutrients: tuple[str, ...] = NUTRIENTS
    state: ViewState = field(default=ViewState.LOADING, init=False)
    _reconcilers: dict[Scope, MutationReconciler] = field(
        default_factory=dict, init=False
    )
    _listeners: Listeners = field(default_factory=Listeners, init=False)
    _unsubscribers: dict[Scope, Callable[[], None]] = field(
        default_factory=dict, init=False
    )

    def __post_init__(self) -> None:
        self._unsubscribe_cache = self.cache.subscribe(self._listeners.notify)

    @property
    @abstractmethod
    def scope(self) -> Scope:
        """The scope whose counters this view adjusts."""

    @property
    def error_message(self) -> str | None:
        return LOAD_ERROR_MESSAGE if self.state is ViewState.ERROR else None

    @property
    def goal_scope(self) -> Scope | None:
        return None

    @property
    def reconciler(self) -> MutationReconciler:
        """Return the reconciler for the scope currently shown."""
        scope = self.scope
        reconciler = self._reconcilers.get(scope)
        if reconciler is None:
            reconciler = MutationReconciler(
                client=self.client,
                cache=self.cache,
                scope=scope,
                notifier=self.notifier,
            )
            self._unsubscribers[scope] = reconciler.subscribe(self._listeners.notify)
            self._reconcilers[scope] = reconciler
        return reconciler

    def _prune_idle_reconcilers(self) -> None:
        """Drop reconcilers of other scopes that have nothing in flight."""
        current = self.scope
        for scope, reconciler in list(self._reconcilers.items()):
            if scope == current or reconciler.in_flight:
                continue
            if any(reconciler.snapshot().values()):
                continue
            self._unsubscribers.pop(scope)()
            del self._reconcilers[scope]

    async def load(self) -> ViewState:
        """Fetch the snapshots this view needs.

        Cached data stays visible while it is refreshed. A failed read puts
        the view into the error state instead of rendering partial data.
        """
        scope = self.scope
        scopes = self._scopes()
        if not self._has_data():
            self._set_state(ViewState.LOADING)

        try:
            snapshots = await asyncio.gather(
                *(self.client.fetch_counters(s) for s in scopes)
            )
        except Exception as exc:
            _logger.warning("Failed to load %s: %s", "/".join(scope.cache_key), exc)
            if scope == self.scope:
                self._set_state(ViewState.ERROR)
            return self.state

        for fetched_scope, snapshot in zip(scopes, snapshots, strict=True):
            self.cache.store(fetched_scope, snapshot)
        if scope == self.scope:
            self._set_state(ViewState.READY)
        return self.state

    def rows(self) -> list[NutrientRow]:
        """Return the rows to render, or nothing unless the data is ready."""
        if self.state is not ViewState.READY:
            return []
        counts = self.cache.get(self.scope) or {}
        goals = {}
        if self.goal_scope is not None:
            goals = self.cache.get(self.goal_scope) or {}
        reconciler = self.reconciler
        rows = []
        for nutrient in self.nutrients:
            count = counts.get(nutrient, 0)
            pending = reconciler.pending(nutrient)
            goal = goals.get(nutrient, 0)
            rows.append(
                NutrientRow(
                    nutrient=nutrient,
                    count=count,
                    pending=pending,
                    goal=goal,
                    dots=decompose(count, pending, goal),
                    can_decrease=can_decrease(count, pending),
                )
            )
        return rows

    def increase(self, nutrient: str) -> asyncio.Task[bool]:
        return self.reconciler.apply(nutrient, Direction.INCREASE)

    def decrease(self, nutrient: str) -> asyncio.Task[bool]:
        return self.reconciler.apply(nutrient, Direction.DECREASE)

    async def wait_idle(self) -> None:
        """Wait for in-flight adjustments in every scope this view touched."""
        await asyncio.gather(*(r.wait_idle() for r in self._reconcilers.values()))

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a callback fired whenever the rendered rows may change."""
        return self._listeners.subscribe(callback)

    def close(self) -> None:
        self._unsubscribe_cache()

    def _scopes(self) -> list[Scope]:
        if self.goal_scope is None:
            return [self.scope]
        return [self.scope, self.goal_scope]

    def _has_data(self) -> bool:
        return all(self.cache.get(scope) is not None for scope in self._scopes())

    def _set_state(self, state: ViewState) -> None:
        if state is not self.state:
            self.state = state
            self._listeners.notify()


@dataclass
class PortionsView(CounterView):
    """Daily portions against goals, navigable by day."""

    today: Callable[[], DateCursor] = DateCursor.today
    cursor: DateCursor | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.cursor is None:
            self.cursor = self.today()

    @property
    def scope(self) -> Scope:
        return Scope.for_day(self.cursor)

    @property
    def goal_scope(self) -> Scope:
        return Scope.goals()

    async def previous_day(self) -> ViewState:
        self._move_to(self.cursor.previous_day())
        return await self.load()

    async def next_day(self) -> ViewState:
        self._move_to(self.cursor.next_day())
        return await self.load()

    def reset_to_today(self) -> None:
        """Discard any navigation and show the current day."""
        self._move_to(self.today())

    def _move_to(self, cursor: DateCursor) -> None:
        self.cursor = cursor
        self._prune_idle_reconcilers()
        self.state = ViewState.READY if self._has_data() else ViewState.LOADING
        self._listeners.notify()


@dataclass
class GoalsView(CounterView):
    """Daily goals editor."""

    @property
    def scope(self) -> Scope:
        return Scope.goals()


@dataclass
class AppController:
    """Switches between recording portions and editing goals."""

    portions: PortionsView
    goals: GoalsView
    setting_goals: bool = False

    @property
    def active_view(self) -> CounterView:
        return self.goals if self.setting_goals else self.portions

    async def toggle_mode(self) -> ViewState:
        """Switch modes; the portions view always comes back on today."""
        self.setting_goals = not self.setting_goals
        self.portions.reset_to_today()
        _logger.info(
            "Switched to %s mode", "goals" if self.setting_goals else "recording"
        )
        return await self.active_view.load()

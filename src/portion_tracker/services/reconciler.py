"""Optimistic counter mutations with per-nutrient pending tracking."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from portion_tracker.adapters.counter_client import CounterClient
from portion_tracker.domain.portions import Direction, PortionsOfNutrients, Scope
from portion_tracker.services.cache import CounterCache
from portion_tracker.services.events import Listener, Listeners
from portion_tracker.services.notifications import BACKEND_ERROR_MESSAGE, Notifier

_logger = logging.getLogger(__name__)


@dataclass
class MutationReconciler:
    """Tracks in-flight adjustments for one scope and reconciles them.

    ``{"protein": 2}`` means two protein increases are still in flight.
    Every request undoes only its own contribution when it settles, so
    overlapping requests for the same nutrient may settle in any order.
    """

    client: CounterClient
    cache: CounterCache
    scope: Scope
    notifier: Notifier
    _pending: dict[str, int] = field(default_factory=dict)
    _tasks: set[asyncio.Task[bool]] = field(default_factory=set)
    _listeners: Listeners = field(default_factory=Listeners)

    def apply(self, nutrient: str, direction: Direction) -> asyncio.Task[bool]:
        """Record the change optimistically and send it to the backend.

        The returned task resolves to ``True`` when the backend accepted the
        adjustment and ``False`` when it was rolled back.
        """
        loop = asyncio.get_running_loop()
        self._shift(nutrient, direction.step)
        task = loop.create_task(self._send(nutrient, direction))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def pending(self, nutrient: str) -> int:
        """Return the net in-flight delta for a nutrient."""
        return self._pending.get(nutrient, 0)

    def snapshot(self) -> PortionsOfNutrients:
        """Return a copy of all pending deltas."""
        return dict(self._pending)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait until every request issued so far has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        return self._listeners.subscribe(callback)

    async def _send(self, nutrient: str, direction: Direction) -> bool:
        try:
            await self.client.adjust_counter(self.scope, nutrient, direction)
        except Exception as exc:
            _logger.warning(
                "Adjustment failed: scope=%s nutrient=%s direction=%s: %s",
                "/".join(self.scope.cache_key),
                nutrient,
                direction,
                exc,
            )
            self._shift(nutrient, -direction.step)
            self.notifier.error(BACKEND_ERROR_MESSAGE)
            return False
        except asyncio.CancelledError:
            self._shift(nutrient, -direction.step)
            raise

        # The pending delta is removed silently so that the cache
        # notification below already sees a consistent count.
        self._shift(nutrient, -direction.step, notify=False)
        self.cache.patch(self.scope, nutrient, direction.step)
        self._listeners.notify()
        return True

    def _shift(self, nutrient: str, delta: int, *, notify: bool = True) -> None:
        self._pending[nutrient] = self._pending.get(nutrient, 0) + delta
        if notify:
            self._listeners.notify()

"""Client-side cache of authoritative counter snapshots."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from portion_tracker.domain.portions import PortionsOfNutrients, Scope
from portion_tracker.services.events import Listener, Listeners


class CounterCache(Protocol):
    """Cache interface for per-scope counter snapshots."""

    def get(self, scope: Scope) -> PortionsOfNutrients | None:
        """Return the cached snapshot for a scope, if present."""

    def store(self, scope: Scope, snapshot: PortionsOfNutrients) -> None:
        """Replace the snapshot for a scope."""

    def patch(self, scope: Scope, nutrient: str, delta: int) -> None:
        """Adjust one cached counter in place."""

    def invalidate(self, scope: Scope) -> None:
        """Drop the snapshot for a scope."""

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a change listener."""


@dataclass
class InMemoryCounterCache(CounterCache):
    """In-memory counter cache; every write is last-write-wins."""

    _entries: dict[tuple[str, ...], PortionsOfNutrients] = field(default_factory=dict)
    _listeners: Listeners = field(default_factory=Listeners)

    def get(self, scope: Scope) -> PortionsOfNutrients | None:
        """Return a copy of the cached snapshot."""
        entry = self._entries.get(scope.cache_key)
        if entry is None:
            return None
        return dict(entry)

    def store(self, scope: Scope, snapshot: PortionsOfNutrients) -> None:
        """Overwrite the snapshot with a fresh server read."""
        self._entries[scope.cache_key] = dict(snapshot)
        self._listeners.notify()

    def patch(self, scope: Scope, nutrient: str, delta: int) -> None:
        """Apply a confirmed adjustment without refetching.

        A scope that was never fetched gets a snapshot holding only the
        patched counter.
        """
        entry = self._entries.setdefault(scope.cache_key, {})
        entry[nutrient] = entry.get(nutrient, 0) + delta
        self._listeners.notify()

    def invalidate(self, scope: Scope) -> None:
        """Forget a snapshot so the next read refetches it."""
        if self._entries.pop(scope.cache_key, None) is not None:
            self._listeners.notify()

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        return self._listeners.subscribe(callback)

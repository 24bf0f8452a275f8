"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from portion_tracker.adapters.counter_client import CounterClient
from portion_tracker.config import Settings
from portion_tracker.domain.portions import Direction, PortionsOfNutrients, Scope
from portion_tracker.services.notifications import Notifier


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that records messages."""

    messages: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.messages.append(message)


@dataclass
class FakeCounterClient(CounterClient):
    """Counter client backed by dictionaries, optionally failing."""

    snapshots: dict[tuple[str, ...], PortionsOfNutrients] = field(default_factory=dict)
    adjustments: list[tuple[tuple[str, ...], str, Direction]] = field(
        default_factory=list
    )
    fail_reads: bool = False
    fail_writes: bool = False

    async def fetch_counters(self, scope: Scope) -> PortionsOfNutrients:
        if self.fail_reads:
            raise httpx.ConnectError("backend unreachable")
        return dict(self.snapshots.get(scope.cache_key, {}))

    async def adjust_counter(
        self, scope: Scope, nutrient: str, direction: Direction
    ) -> None:
        if self.fail_writes:
            raise httpx.ConnectError("backend unreachable")
        self.adjustments.append((scope.cache_key, nutrient, direction))
        snapshot = self.snapshots.setdefault(scope.cache_key, {})
        snapshot[nutrient] = snapshot.get(nutrient, 0) + direction.step


@dataclass
class GatedCounterClient(CounterClient):
    """Counter client whose adjustments settle only when the test says so.

    Each adjustment parks on a future; ``succeed(i)`` and ``fail(i)`` settle
    the i-th issued request. Successful requests update ``snapshots``.
    """

    snapshots: dict[tuple[str, ...], PortionsOfNutrients] = field(default_factory=dict)
    gates: list["asyncio.Future[None]"] = field(default_factory=list)

    async def fetch_counters(self, scope: Scope) -> PortionsOfNutrients:
        return dict(self.snapshots.get(scope.cache_key, {}))

    async def adjust_counter(
        self, scope: Scope, nutrient: str, direction: Direction
    ) -> None:
        gate = asyncio.get_running_loop().create_future()
        self.gates.append(gate)
        await gate
        snapshot = self.snapshots.setdefault(scope.cache_key, {})
        snapshot[nutrient] = snapshot.get(nutrient, 0) + direction.step

    def succeed(self, index: int) -> None:
        self.gates[index].set_result(None)

    def fail(self, index: int) -> None:
        self.gates[index].set_exception(httpx.ReadTimeout("timed out"))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        backend_base_url="http://backend.test",
        request_timeout_seconds=5,
        timezone="UTC",
    )

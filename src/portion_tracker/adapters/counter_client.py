"""HTTP client for the portions backend."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from portion_tracker.domain.errors import CounterStoreError
from portion_tracker.domain.portions import Direction, PortionsOfNutrients, Scope

_PORTIONS_ADAPTER = TypeAdapter(PortionsOfNutrients)


class CounterClient(Protocol):
    """Interface for reading and adjusting counters on the backend."""

    async def fetch_counters(self, scope: Scope) -> PortionsOfNutrients:
        """Return the authoritative counters for a scope."""

    async def adjust_counter(
        self, scope: Scope, nutrient: str, direction: Direction
    ) -> None:
        """Adjust one counter by one unit; raise on failure."""


@dataclass
class HttpxCounterClient(CounterClient):
    """HTTPX-backed counter client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float = 10) -> "HttpxCounterClient":
        """Create a counter client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_counters(self, scope: Scope) -> PortionsOfNutrients:
        """Fetch and validate a scope snapshot."""
        url = f"{self.base_url}{scope.query_path}"
        response = await self.http_client.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()
        try:
            return _PORTIONS_ADAPTER.validate_json(response.content)
        except ValidationError as exc:
            raise CounterStoreError(f"malformed counters from {url}") from exc

    async def adjust_counter(
        self, scope: Scope, nutrient: str, direction: Direction
    ) -> None:
        """Post a one-unit adjustment command."""
        url = f"{self.base_url}{scope.adjust_path(nutrient, direction)}"
        response = await self.http_client.post(url, timeout=self.timeout_seconds)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

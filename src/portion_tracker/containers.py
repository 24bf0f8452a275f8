"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from portion_tracker.adapters.counter_client import CounterClient, HttpxCounterClient
from portion_tracker.app_logging import configure_logging
from portion_tracker.config import Settings, parse_nutrients
from portion_tracker.domain.dates import DateCursor
from portion_tracker.services.cache import CounterCache, InMemoryCounterCache
from portion_tracker.services.notifications import QueueNotifier
from portion_tracker.services.views import AppController, GoalsView, PortionsView


@dataclass
class AppContainer:
    """Holds client-wide dependencies."""

    settings: Settings
    counter_client: CounterClient
    cache: CounterCache
    notifier: QueueNotifier
    app_controller: AppController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    nutrients = parse_nutrients(resolved_settings.nutrients)
    counter_client = HttpxCounterClient.create(
        base_url=resolved_settings.backend_base_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    cache = InMemoryCounterCache()
    notifier = QueueNotifier()
    portions_view = PortionsView(
        client=counter_client,
        cache=cache,
        notifier=notifier,
        nutrients=nutrients,
        today=partial(DateCursor.today, resolved_settings.timezone),
    )
    goals_view = GoalsView(
        client=counter_client,
        cache=cache,
        notifier=notifier,
        nutrients=nutrients,
    )

    async def close_resources() -> None:
        portions_view.close()
        goals_view.close()
        await counter_client.close()

    return AppContainer(
        settings=resolved_settings,
        counter_client=counter_client,
        cache=cache,
        notifier=notifier,
        app_controller=AppController(portions=portions_view, goals=goals_view),
        close_resources=close_resources,
    )

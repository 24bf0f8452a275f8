"""Change notification helpers."""

from collections.abc import Callable
from dataclasses import dataclass, field

Listener = Callable[[], None]


@dataclass
class Listeners:
    """A list of callbacks invoked whenever observed state changes."""

    _callbacks: list[Listener] = field(default_factory=list)

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a callback and return a function that removes it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self) -> None:
        for callback in list(self._callbacks):
            callback()

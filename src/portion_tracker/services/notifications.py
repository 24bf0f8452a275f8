"""User-facing transient notifications."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

BACKEND_ERROR_MESSAGE = (
    "Error communicating with the backend. Please check your Internet connection."
)

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for one-shot, non-fatal user notices."""

    def error(self, message: str) -> None:
        """Show an error notice."""


@dataclass
class QueueNotifier(Notifier):
    """Keeps recent notices for the UI to drain and logs each one."""

    max_items: int = 20
    _notices: deque[str] = field(init=False)

    def __post_init__(self) -> None:
        self._notices = deque(maxlen=self.max_items)

    def error(self, message: str) -> None:
        _logger.warning("User notice: %s", message)
        self._notices.append(message)

    def drain(self) -> list[str]:
        """Return and clear the pending notices, oldest first."""
        notices = list(self._notices)
        self._notices.clear()
        return notices

"""Calendar cursor for navigating per-day portion records."""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

_ONE_DAY = timedelta(days=1)
_KEY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class DateCursor:
    """The calendar day currently being viewed.

    Cursors are never mutated; every navigation step returns a new one.
    Arithmetic is done on ``datetime.date`` so there is no time-of-day
    component and no local UTC offset can shift the day.
    """

    day: date

    @classmethod
    def today(cls, timezone_name: str = "UTC") -> "DateCursor":
        """Return the cursor for the current day in the given timezone."""
        return cls(datetime.now(tz=ZoneInfo(timezone_name)).date())

    @classmethod
    def from_key(cls, key: str) -> "DateCursor":
        """Parse a ``YYYY-MM-DD`` key."""
        if not _KEY_PATTERN.fullmatch(key):
            raise ValueError(f"invalid date key: {key!r}")
        return cls(date.fromisoformat(key))

    def previous_day(self) -> "DateCursor":
        """Return the cursor one calendar day earlier."""
        return DateCursor(self.day - _ONE_DAY)

    def next_day(self) -> "DateCursor":
        """Return the cursor one calendar day later."""
        return DateCursor(self.day + _ONE_DAY)

    def to_key(self) -> str:
        """Return the ``YYYY-MM-DD`` lookup key for the day's record."""
        return self.day.isoformat()

    def label(self) -> str:
        """Return a full date such as ``Monday, 1 January 2024``."""
        return f"{self.day:%A}, {self.day.day} {self.day:%B %Y}"

    def __str__(self) -> str:
        return self.to_key()

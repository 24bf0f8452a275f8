"""Domain models for nutrient portions and goals."""

from dataclasses import dataclass
from enum import StrEnum

from portion_tracker.domain.dates import DateCursor

NUTRIENTS = ("protein", "carbs", "vegetables", "fats")

PortionsOfNutrients = dict[str, int]


class Direction(StrEnum):
    """One-unit adjustment direction."""

    INCREASE = "increase"
    DECREASE = "decrease"

    @property
    def step(self) -> int:
        return 1 if self is Direction.INCREASE else -1


@dataclass(frozen=True)
class Scope:
    """A set of counters addressed together: one day, or the goals.

    ``cache_key`` identifies the scope's snapshot in the counter cache;
    the remaining fields describe where the backend serves it.
    """

    cache_key: tuple[str, ...]
    query_path: str
    adjust_prefix: str
    increase_command: str
    decrease_command: str

    @classmethod
    def for_day(cls, cursor: DateCursor) -> "Scope":
        """Return the portions scope for a day."""
        key = cursor.to_key()
        return cls(
            cache_key=("portions", key),
            query_path=f"/days/{key}/portions",
            adjust_prefix=f"/days/{key}/portions",
            increase_command="consume",
            decrease_command="unconsume",
        )

    @classmethod
    def goals(cls) -> "Scope":
        """Return the daily goals scope."""
        return cls(
            cache_key=("goals",),
            query_path="/goals",
            adjust_prefix="/goals/portions",
            increase_command="inc",
            decrease_command="dec",
        )

    def command(self, direction: Direction) -> str:
        if direction is Direction.INCREASE:
            return self.increase_command
        return self.decrease_command

    def adjust_path(self, nutrient: str, direction: Direction) -> str:
        return f"{self.adjust_prefix}/{nutrient}/{self.command(direction)}"

"""Event ledger behind the reference backend."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

from portion_tracker.domain.errors import AdjustmentRejected
from portion_tracker.domain.portions import NUTRIENTS, PortionsOfNutrients

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

PORTION_EVENTS = {"consume": 1, "unconsume": -1}
GOAL_EVENTS = {"inc": 1, "dec": -1}


@dataclass(frozen=True)
class LedgerEvent:
    """A single recorded adjustment. ``date`` is ``None`` for goal events."""

    nutrient: str
    type: str
    date: str | None
    recorded_at: datetime


@dataclass
class PortionLedger:
    """Append-only event log; counters are sums over matching events."""

    nutrients: tuple[str, ...] = NUTRIENTS
    events: list[LedgerEvent] = field(default_factory=list)

    def portions_for(self, date: str) -> PortionsOfNutrients:
        """Return consumed portions per nutrient for a day."""
        return self._totals(PORTION_EVENTS, date)

    def goals(self) -> PortionsOfNutrients:
        """Return the daily goal per nutrient."""
        return self._totals(GOAL_EVENTS, None)

    def record_portion(self, date: str, nutrient: str, event_type: str) -> None:
        """Record a consume/unconsume event for a day."""
        if not _DATE_PATTERN.fullmatch(date):
            raise AdjustmentRejected("invalid date")
        self._validate(nutrient, event_type, PORTION_EVENTS)
        if PORTION_EVENTS[event_type] < 0 and not self.portions_for(date).get(nutrient):
            raise AdjustmentRejected("can't unconsume because the count is already 0")
        self._append(nutrient, event_type, date)

    def record_goal(self, nutrient: str, event_type: str) -> None:
        """Record an inc/dec event for a goal."""
        self._validate(nutrient, event_type, GOAL_EVENTS)
        if GOAL_EVENTS[event_type] < 0 and not self.goals().get(nutrient):
            raise AdjustmentRejected("can't decrease because the goal is already 0")
        self._append(nutrient, event_type, None)

    def _validate(self, nutrient: str, event_type: str, kinds: dict[str, int]) -> None:
        if nutrient not in self.nutrients:
            raise AdjustmentRejected("invalid nutrient")
        if event_type not in kinds:
            raise AdjustmentRejected("invalid command")

    def _append(self, nutrient: str, event_type: str, date: str | None) -> None:
        self.events.append(
            LedgerEvent(
                nutrient=nutrient,
                type=event_type,
                date=date,
                recorded_at=datetime.now(tz=UTC),
            )
        )

    def _totals(self, kinds: dict[str, int], date: str | None) -> PortionsOfNutrients:
        totals: PortionsOfNutrients = {}
        for event in self.events:
            if event.type not in kinds or event.date != date:
                continue
            totals[event.nutrient] = totals.get(event.nutrient, 0) + kinds[event.type]
        return totals

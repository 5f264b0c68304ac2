"""Event records: single events and recurring definitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .constants import DATETIME_FORMAT


class RecurrenceUnit(str, Enum):
    """Time granularity a recurring event repeats on."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


@dataclass
class Event:
    """A single calendar event."""

    event_id: int
    title: str
    description: str
    start: datetime
    end: datetime

    def duration_minutes(self) -> int:
        """Whole minutes between start and end."""
        return int((self.end - self.start).total_seconds() / 60)

    @property
    def is_recurring(self) -> bool:
        return False

    def __str__(self) -> str:
        return (
            f"#{self.event_id} {self.title} "
            f"[{self.start.strftime(DATETIME_FORMAT)} -> {self.end.strftime(DATETIME_FORMAT)}]"
        )


@dataclass
class RecurringEvent(Event):
    """
    An event that repeats every ``interval`` units of ``recurrence_unit``.

    Termination is either a fixed number of occurrences or an inclusive end
    date. When ``occurrences`` is positive it wins over ``recurrence_end_date``.
    The unit is kept as a string so that an unrecognised value still loads;
    such an event never advances (see ``recurrence.next_occurrence``).
    """

    recurrence_unit: str = RecurrenceUnit.DAILY.value
    interval: int = 1
    occurrences: int = 0
    recurrence_end_date: Optional[date] = None

    def __post_init__(self) -> None:
        unit = self.recurrence_unit
        if isinstance(unit, RecurrenceUnit):
            unit = unit.value
        self.recurrence_unit = str(unit).upper()
        self.interval = max(1, int(self.interval))

    @property
    def is_recurring(self) -> bool:
        return True

    @property
    def uses_count(self) -> bool:
        return self.occurrences > 0

    @property
    def uses_end_date(self) -> bool:
        return not self.uses_count and self.recurrence_end_date is not None

    def __str__(self) -> str:
        if self.uses_count:
            until = f"{self.occurrences} times"
        elif self.recurrence_end_date is not None:
            until = f"until {self.recurrence_end_date.isoformat()}"
        else:
            until = "no occurrences"
        every = self.recurrence_unit if self.interval == 1 else f"every {self.interval} x {self.recurrence_unit}"
        return f"{super().__str__()} ({every}, {until})"

"""Recurrence engine: advance and expand recurring events."""

from __future__ import annotations

import calendar
import logging
from datetime import datetime, timedelta
from typing import Optional

from .constants import MAX_EXPANDED_OCCURRENCES, OCCURRENCE_TITLE_TEMPLATE
from .models import Event, RecurrenceUnit, RecurringEvent

logger = logging.getLogger(__name__)


def add_months(value: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def next_occurrence(event: RecurringEvent, current: datetime) -> datetime:
    """Return the start of the occurrence following ``current``.

    An unrecognised unit returns ``current`` unchanged.
    """
    unit = event.recurrence_unit
    if unit == RecurrenceUnit.DAILY.value:
        return current + timedelta(days=event.interval)
    if unit == RecurrenceUnit.WEEKLY.value:
        return current + timedelta(weeks=event.interval)
    if unit == RecurrenceUnit.MONTHLY.value:
        return add_months(current, event.interval)
    return current


def _advance(event: RecurringEvent, current: datetime, duration: timedelta) -> Optional[datetime]:
    """Next start, or ``None`` once the next occurrence would fall past ``datetime.max``."""
    try:
        following = next_occurrence(event, current)
        # The matching end has to be representable too.
        following + duration
    except (OverflowError, ValueError):
        logger.debug("Event %s stops at %s: next occurrence is out of range", event.event_id, current)
        return None
    return following


def _occurrence(event: RecurringEvent, index: int, start: datetime, duration: timedelta) -> Event:
    return Event(
        event_id=event.event_id,
        title=OCCURRENCE_TITLE_TEMPLATE.format(title=event.title, index=index),
        description=event.description,
        start=start,
        end=start + duration,
    )


def expand_occurrences(event: Event) -> list[Event]:
    """Materialise every occurrence of ``event`` as a plain :class:`Event`.

    A non-recurring event expands to a copy of itself. Count mode emits exactly
    ``occurrences`` entries; end-date mode emits while the start date is on or
    before the end date, capped at ``MAX_EXPANDED_OCCURRENCES``. With neither
    set the result is empty. Either mode stops early rather than step past
    ``datetime.max``.
    """
    if not isinstance(event, RecurringEvent):
        return [Event(event.event_id, event.title, event.description, event.start, event.end)]

    duration = timedelta(minutes=event.duration_minutes())
    current = event.start
    results: list[Event] = []

    if event.uses_count:
        for index in range(1, event.occurrences + 1):
            results.append(_occurrence(event, index, current, duration))
            if index == event.occurrences:
                break
            following = _advance(event, current, duration)
            if following is None:
                break
            current = following
        return results

    if not event.uses_end_date:
        return results

    while current.date() <= event.recurrence_end_date:
        if len(results) >= MAX_EXPANDED_OCCURRENCES:
            logger.warning(
                "Event %s hit the expansion cap of %d occurrences",
                event.event_id,
                MAX_EXPANDED_OCCURRENCES,
            )
            break
        results.append(_occurrence(event, len(results) + 1, current, duration))
        following = _advance(event, current, duration)
        if following is None:
            break
        current = following
    return results

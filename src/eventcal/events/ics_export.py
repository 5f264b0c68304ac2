"""Export events to an iCalendar (.ics) file."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from icalendar import Calendar, Event as ICalEvent

from .constants import DEFAULT_CALENDAR_NAME, PROD_ID, UID_DOMAIN
from .errors import EventFileError
from .models import Event
from .recurrence import expand_occurrences


def _build_calendar(name: str) -> Calendar:
    calendar = Calendar()
    calendar.add("prodid", PROD_ID)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("x-wr-calname", name)
    return calendar


def _occurrence_component(occurrence: Event, index: int, stamp: datetime) -> ICalEvent:
    component = ICalEvent()
    component.add("uid", f"{occurrence.event_id}-{index}@{UID_DOMAIN}")
    component.add("summary", occurrence.title)
    # Naive datetimes are written as floating local times.
    component.add("dtstart", occurrence.start)
    component.add("dtend", occurrence.end)
    component.add("dtstamp", stamp)
    if occurrence.description:
        component.add("description", occurrence.description)
    return component


def build_calendar(events: Iterable[Event], name: Optional[str] = None) -> Calendar:
    calendar = _build_calendar(name or DEFAULT_CALENDAR_NAME)
    stamp = datetime.now(tz=timezone.utc)
    for event in events:
        for index, occurrence in enumerate(expand_occurrences(event), start=1):
            calendar.add_component(_occurrence_component(occurrence, index, stamp))
    return calendar


def export_events(events: Iterable[Event], path: Path, name: Optional[str] = None) -> int:
    """Write every occurrence of ``events`` to ``path``; returns the VEVENT count."""
    calendar = build_calendar(events, name=name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(calendar.to_ical())
    except OSError as exc:
        raise EventFileError("Unable to write calendar file", path=str(path)) from exc
    return len(calendar.walk("VEVENT"))

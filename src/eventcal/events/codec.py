"""Line-oriented persistence for the event store.

Each event is one comma-separated record::

    id,NORMAL,title,description,start,end
    id,RECURRING,title,description,start,end,unit,count[,interval,end_date]

The trailing ``interval,end_date`` pair is only written when the event uses a
non-default interval or an end date, so count-based daily/weekly/monthly rows
stay in the short form. Fields are quoted only when they contain a comma,
quote or line break.
"""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

from .constants import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    NORMAL_FIELD_COUNT,
    RECORD_NORMAL,
    RECORD_RECURRING,
    RECURRING_MIN_FIELD_COUNT,
)
from .errors import EventFileError, EventParseError
from .models import Event, RecurringEvent
from .store import EventStore

logger = logging.getLogger(__name__)


def format_datetime(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def _parse_datetime(value: str) -> datetime:
    return datetime.strptime(value, DATETIME_FORMAT)


def _parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def encode_event(event: Event) -> list[str]:
    row = [
        str(event.event_id),
        RECORD_RECURRING if event.is_recurring else RECORD_NORMAL,
        event.title,
        event.description,
        format_datetime(event.start),
        format_datetime(event.end),
    ]
    if isinstance(event, RecurringEvent):
        row.extend([event.recurrence_unit, str(event.occurrences)])
        if event.interval != 1 or event.recurrence_end_date is not None:
            end_date = event.recurrence_end_date.strftime(DATE_FORMAT) if event.recurrence_end_date else ""
            row.extend([str(event.interval), end_date])
    return row


def _optional_field(row: list[str], index: int) -> Optional[str]:
    if len(row) > index and row[index] != "":
        return row[index]
    return None


def decode_row(row: list[str]) -> Event:
    """Build an event from one record; raises ``ValueError`` on malformed input."""
    if len(row) < NORMAL_FIELD_COUNT:
        raise ValueError(f"expected at least {NORMAL_FIELD_COUNT} fields, got {len(row)}")

    event_id = int(row[0])
    record_type = row[1]
    title = row[2]
    description = row[3]
    start = _parse_datetime(row[4])
    end = _parse_datetime(row[5])

    if record_type == RECORD_NORMAL:
        return Event(event_id, title, description, start, end)
    if record_type != RECORD_RECURRING:
        raise ValueError(f"unknown record type {record_type!r}")

    if len(row) < RECURRING_MIN_FIELD_COUNT:
        raise ValueError(f"recurring record needs at least {RECURRING_MIN_FIELD_COUNT} fields, got {len(row)}")
    count = _optional_field(row, 7)
    interval = _optional_field(row, 8)
    end_date = _optional_field(row, 9)
    return RecurringEvent(
        event_id,
        title,
        description,
        start,
        end,
        recurrence_unit=row[6],
        occurrences=int(count) if count is not None else 0,
        interval=int(interval) if interval is not None else 1,
        recurrence_end_date=_parse_date(end_date) if end_date is not None else None,
    )


def write_events(events: Iterable[Event], path: Path) -> int:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EventFileError("Unable to create events directory", path=str(path)) from exc

    written = 0
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            for event in events:
                writer.writerow(encode_event(event))
                written += 1
    except OSError as exc:
        raise EventFileError("Unable to write events file", path=str(path)) from exc
    return written


def save_events(store: EventStore, path: Path) -> int:
    """Overwrite ``path`` with every event in ``store``; returns the count written."""
    written = write_events(store.all(), path)
    logger.info("Saved %d event(s) to %s", written, path)
    return written


def load_events(store: EventStore, path: Path) -> int:
    """Append the events stored in ``path`` to ``store``.

    A missing file leaves the store untouched. A malformed record stops the
    load with :class:`EventParseError`; records before it stay in the store.
    On success the id counter is set to one past the highest id read.
    """
    if not path.exists():
        logger.info("No events file at %s", path)
        return 0
    if path.is_dir():
        raise EventFileError("Events path is a directory", path=str(path))

    loaded = 0
    max_id = 0
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            for row in reader:
                if not row or all(not field.strip() for field in row):
                    continue
                try:
                    event = decode_row(row)
                except ValueError as exc:
                    store.set_next_id(max(store.next_id, max_id + 1))
                    raise EventParseError(
                        f"Invalid event record: {exc}",
                        line_number=reader.line_num,
                        line=",".join(row),
                    ) from exc
                store.add(event)
                loaded += 1
                max_id = max(max_id, event.event_id)
    except csv.Error as exc:
        raise EventParseError(f"Invalid event record: {exc}", line_number=None) from exc
    except UnicodeDecodeError as exc:
        raise EventFileError("Events file is not valid UTF-8", path=str(path)) from exc
    except OSError as exc:
        raise EventFileError("Unable to read events file", path=str(path)) from exc

    store.set_next_id(max_id + 1)
    logger.info("Loaded %d event(s) from %s", loaded, path)
    return loaded

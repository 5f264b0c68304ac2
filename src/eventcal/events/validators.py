"""Validation and parsing helpers for event input."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from .errors import EventValidationError
from .models import RecurrenceUnit


@dataclass(frozen=True)
class EventCreateParams:
    title: str
    description: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class RecurrenceParams:
    unit: RecurrenceUnit
    interval: int
    occurrences: int
    end_date: Optional[date]


@dataclass(frozen=True)
class EventListParams:
    range_start: Optional[datetime]
    range_end: Optional[datetime]
    query: Optional[str]
    expand: bool


def validate_title(title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise EventValidationError("Title is required", field="title")
    return cleaned


def validate_event_id(event_id: int) -> int:
    if event_id < 1:
        raise EventValidationError("Event id must be a positive integer", field="id", value=event_id)
    return event_id


def parse_event_datetime(value: str, field: str = "datetime") -> datetime:
    if not value:
        raise EventValidationError("Date/time value is required", field=field)
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        try:
            parsed_date = date.fromisoformat(value.strip())
        except ValueError as exc:
            raise EventValidationError(
                "Invalid datetime format. Use YYYY-MM-DD HH:MM (e.g. 2024-03-01 12:00)",
                field=field,
                value=value,
            ) from exc
        parsed = datetime.combine(parsed_date, time.min)
    if parsed.tzinfo is not None:
        raise EventValidationError("Timezone offsets are not supported; use local time", field=field, value=value)
    return parsed


def parse_end_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise EventValidationError(
            "Invalid date format. Use YYYY-MM-DD",
            field="until",
            value=value,
        ) from exc


def validate_start_end(start: datetime, end: datetime) -> None:
    if end < start:
        raise EventValidationError("End time must not be before start time", field="end")


def validate_recurrence_unit(unit: str) -> RecurrenceUnit:
    try:
        return RecurrenceUnit((unit or "").strip().upper())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in RecurrenceUnit)
        raise EventValidationError(
            f"Invalid recurrence unit. Use one of: {allowed}",
            field="unit",
            value=unit,
        ) from exc


def validate_interval(interval: int) -> int:
    if interval < 1:
        raise EventValidationError("Interval must be at least 1", field="interval", value=interval)
    return interval


def validate_create_params(
    title: str,
    start: str,
    end: Optional[str],
    description: Optional[str],
) -> EventCreateParams:
    validated_title = validate_title(title)
    parsed_start = parse_event_datetime(start, field="start")
    parsed_end = parse_event_datetime(end, field="end") if end else parsed_start
    validate_start_end(parsed_start, parsed_end)
    return EventCreateParams(
        title=validated_title,
        description=description or "",
        start=parsed_start,
        end=parsed_end,
    )


def validate_recurrence_params(
    unit: str,
    interval: int,
    occurrences: Optional[int],
    until: Optional[str],
    start: Optional[datetime] = None,
) -> RecurrenceParams:
    recurrence_unit = validate_recurrence_unit(unit)
    validated_interval = validate_interval(interval)
    if occurrences is not None and until:
        raise EventValidationError("Use either --count or --until, not both", field="count")
    if occurrences is None and not until:
        raise EventValidationError("Either --count or --until is required", field="count")

    end_date = None
    count = 0
    if occurrences is not None:
        if occurrences < 1:
            raise EventValidationError("Occurrence count must be at least 1", field="count", value=occurrences)
        count = occurrences
    else:
        end_date = parse_end_date(until)  # type: ignore[arg-type]
        if start is not None and end_date < start.date():
            raise EventValidationError("Recurrence end date must not be before the start date", field="until")

    return RecurrenceParams(
        unit=recurrence_unit,
        interval=validated_interval,
        occurrences=count,
        end_date=end_date,
    )


def parse_event_range(
    range_start: Optional[str],
    range_end: Optional[str],
) -> tuple[Optional[datetime], Optional[datetime]]:
    def parse_range_value(value: str, is_end: bool) -> datetime:
        try:
            parsed_date = date.fromisoformat(value)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError as exc:
                raise EventValidationError(
                    "Invalid range value. Use YYYY-MM-DD or YYYY-MM-DD HH:MM",
                    field="range",
                    value=value,
                ) from exc
        else:
            parsed = datetime.combine(parsed_date, time.max if is_end else time.min)
        if parsed.tzinfo is not None:
            raise EventValidationError("Timezone offsets are not supported; use local time", field="range", value=value)
        return parsed

    start_value = parse_range_value(range_start, is_end=False) if range_start else None
    end_value = parse_range_value(range_end, is_end=True) if range_end else None
    if start_value and end_value and end_value < start_value:
        raise EventValidationError("Range end must not be before range start", field="range")
    return start_value, end_value


def validate_list_params(
    range_start: Optional[str],
    range_end: Optional[str],
    query: Optional[str],
    expand: bool,
) -> EventListParams:
    parsed_start, parsed_end = parse_event_range(range_start, range_end)
    cleaned_query = query.strip() if query else None
    # A date range only makes sense against concrete occurrences.
    expand = expand or parsed_start is not None or parsed_end is not None
    return EventListParams(range_start=parsed_start, range_end=parsed_end, query=cleaned_query or None, expand=expand)


def validate_recurrence_changes(
    unit: Optional[str],
    interval: Optional[int],
    occurrences: Optional[int],
    until: Optional[str],
    start: datetime,
) -> dict[str, object]:
    """Field changes for an existing recurring event; only given options are set.

    ``--count`` and ``--until`` switch the termination mode, so each clears the other.
    """
    changes: dict[str, object] = {}
    if unit is not None:
        changes["recurrence_unit"] = validate_recurrence_unit(unit)
    if interval is not None:
        changes["interval"] = validate_interval(interval)
    if occurrences is not None and until:
        raise EventValidationError("Use either --count or --until, not both", field="count")
    if occurrences is not None:
        if occurrences < 1:
            raise EventValidationError("Occurrence count must be at least 1", field="count", value=occurrences)
        changes["occurrences"] = occurrences
        changes["recurrence_end_date"] = None
    elif until:
        end_date = parse_end_date(until)
        if end_date < start.date():
            raise EventValidationError("Recurrence end date must not be before the start date", field="until")
        changes["occurrences"] = 0
        changes["recurrence_end_date"] = end_date
    return changes

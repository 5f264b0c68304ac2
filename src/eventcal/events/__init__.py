"""Event model, recurrence engine, store and file codec."""

from .codec import decode_row, encode_event, load_events, save_events
from .config import default_events_path, resolve_events_path
from .errors import (
    EventError,
    EventFileError,
    EventNotFoundError,
    EventParseError,
    EventValidationError,
    format_error_for_user,
)
from .ics_export import build_calendar, export_events
from .models import Event, RecurrenceUnit, RecurringEvent
from .recurrence import add_months, expand_occurrences, next_occurrence
from .store import EventStore
from .validators import (
    EventCreateParams,
    EventListParams,
    RecurrenceParams,
    parse_event_datetime,
    validate_create_params,
    validate_event_id,
    validate_list_params,
    validate_recurrence_params,
    validate_title,
)

__all__ = [
    "Event",
    "RecurringEvent",
    "RecurrenceUnit",
    "EventStore",
    "add_months",
    "next_occurrence",
    "expand_occurrences",
    "encode_event",
    "decode_row",
    "load_events",
    "save_events",
    "build_calendar",
    "export_events",
    "default_events_path",
    "resolve_events_path",
    "EventError",
    "EventFileError",
    "EventNotFoundError",
    "EventParseError",
    "EventValidationError",
    "format_error_for_user",
    "EventCreateParams",
    "EventListParams",
    "RecurrenceParams",
    "parse_event_datetime",
    "validate_create_params",
    "validate_event_id",
    "validate_list_params",
    "validate_recurrence_params",
    "validate_title",
]

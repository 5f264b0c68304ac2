"""Constants for event storage and recurrence."""

from __future__ import annotations

DEFAULT_EVENTS_FILENAME = "events.csv"
EVENTS_FILE_ENV = "EVENTCAL_FILE"
LOG_LEVEL_ENV = "EVENTCAL_LOG_LEVEL"

DATETIME_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"

RECORD_NORMAL = "NORMAL"
RECORD_RECURRING = "RECURRING"

NORMAL_FIELD_COUNT = 6
RECURRING_MIN_FIELD_COUNT = 7

# Upper bound on occurrences produced in end-date mode.
MAX_EXPANDED_OCCURRENCES = 10_000

OCCURRENCE_TITLE_TEMPLATE = "{title} (Occurrence {index})"

PROD_ID = "-//eventcal//EN"
DEFAULT_CALENDAR_NAME = "eventcal"
UID_DOMAIN = "eventcal"

"""
Shared pytest fixtures for eventcal tests.
"""

import logging
from datetime import date, datetime

import pytest

from eventcal.events.models import Event, RecurringEvent
from eventcal.events.store import EventStore


@pytest.fixture
def store():
    """Empty event store."""
    return EventStore()


@pytest.fixture
def lunch():
    """Plain one-hour event."""
    return Event(
        event_id=1,
        title="Lunch",
        description="",
        start=datetime(2024, 3, 1, 12, 0),
        end=datetime(2024, 3, 1, 13, 0),
    )


@pytest.fixture
def daily_standup():
    """Daily recurring event limited to three occurrences."""
    return RecurringEvent(
        event_id=2,
        title="X",
        description="team sync",
        start=datetime(2024, 1, 1, 9, 0),
        end=datetime(2024, 1, 1, 10, 0),
        recurrence_unit="DAILY",
        occurrences=3,
    )


@pytest.fixture
def biweekly_review():
    """Every-other-week event bounded by an end date."""
    return RecurringEvent(
        event_id=3,
        title="Review",
        description="",
        start=datetime(2024, 1, 1, 14, 0),
        end=datetime(2024, 1, 1, 15, 30),
        recurrence_unit="WEEKLY",
        interval=2,
        recurrence_end_date=date(2024, 2, 1),
    )


@pytest.fixture
def events_file(tmp_path):
    """Path to a not-yet-existing events file."""
    return tmp_path / "events.csv"


@pytest.fixture(autouse=True)
def reset_eventcal_logger():
    """Drop handlers the CLI attaches so they never outlive the runner's streams."""
    yield
    logger = logging.getLogger("eventcal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

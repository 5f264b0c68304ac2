"""In-memory event collection keyed by id."""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Iterator, Optional

from .errors import EventValidationError
from .models import Event

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = {"event_id"}


class EventStore:
    """
    Ordered collection of events plus the id counter that feeds new events.

    Lookups that miss return ``None`` or ``False``; they never raise.
    """

    def __init__(self, next_id: int = 1) -> None:
        self._events: list[Event] = []
        self._next_id = next_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def generate_id(self) -> int:
        event_id = self._next_id
        self._next_id += 1
        return event_id

    def set_next_id(self, next_id: int) -> None:
        self._next_id = next_id

    def add(self, event: Event) -> None:
        # Duplicate ids are accepted; lookups return the first match.
        self._events.append(event)
        logger.debug("Added event %s (%s)", event.event_id, event.title)

    def all(self) -> list[Event]:
        return list(self._events)

    def find_by_id(self, event_id: int) -> Optional[Event]:
        for event in self._events:
            if event.event_id == event_id:
                return event
        return None

    def delete(self, event_id: int) -> bool:
        event = self.find_by_id(event_id)
        if event is None:
            return False
        self._events.remove(event)
        logger.debug("Deleted event %s", event_id)
        return True

    def update(self, event_id: int, /, **changes: Any) -> Optional[Event]:
        """Replace fields of the stored event, keeping its position and id."""
        event = self.find_by_id(event_id)
        if event is None:
            return None
        allowed = {f.name for f in fields(event)} - _IMMUTABLE_FIELDS
        unknown = set(changes) - allowed
        if unknown:
            raise EventValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}",
                field="changes",
                value=sorted(unknown),
            )
        updated = replace(event, **changes)
        for index, existing in enumerate(self._events):
            if existing is event:
                self._events[index] = updated
                break
        logger.debug("Updated event %s: %s", event_id, ", ".join(sorted(changes)))
        return updated

    def search(self, query: str) -> list[Event]:
        needle = query.casefold()
        return [
            event
            for event in self._events
            if needle in " ".join(filter(None, [event.title, event.description])).casefold()
        ]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

"""CLI entry point for eventcal."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from eventcal import __version__
from eventcal.events import (
    Event,
    EventNotFoundError,
    EventValidationError,
    EventStore,
    RecurringEvent,
    expand_occurrences,
    export_events,
    format_error_for_user,
    load_events,
    parse_event_datetime,
    resolve_events_path,
    save_events,
    validate_create_params,
    validate_event_id,
    validate_list_params,
    validate_recurrence_params,
    validate_title,
)
from eventcal.events.codec import format_datetime
from eventcal.events.validators import validate_recurrence_changes, validate_start_end
from eventcal.logger import setup_logger

app = typer.Typer(help="Manage calendar events stored in a flat file.")

FILE_HELP = "Events file path (defaults to $EVENTCAL_FILE or ./events.csv)."


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        typer.echo(f"eventcal version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
):
    """Manage single and recurring calendar events."""
    setup_logger(level=logging.DEBUG if debug else None)


def _open_store(file: Optional[str]) -> tuple[Path, EventStore]:
    path = resolve_events_path(Path(file) if file else None)
    store = EventStore()
    load_events(store, path)
    return path, store


def _require_event(store: EventStore, event_id: int) -> Event:
    event = store.find_by_id(validate_event_id(event_id))
    if event is None:
        raise EventNotFoundError(f"No event with id {event_id}", event_id=event_id)
    return event


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(format_error_for_user(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _describe_recurrence(event: RecurringEvent) -> str:
    every = event.recurrence_unit if event.interval == 1 else f"every {event.interval} x {event.recurrence_unit}"
    if event.uses_count:
        return f"{every}, {event.occurrences} occurrence(s)"
    if event.uses_end_date:
        return f"{every}, until {event.recurrence_end_date.isoformat()}"
    return f"{every}, no occurrences"


def _format_event_compact(event: Event) -> str:
    line = f"{event.event_id} | {format_datetime(event.start)} -> {format_datetime(event.end)} | {event.title}"
    if event.is_recurring:
        line += f" [{_describe_recurrence(event)}]"
    return line


def _format_event_detail(event: Event) -> str:
    lines = [
        f"ID: {event.event_id}",
        f"Title: {event.title}",
        f"Start: {format_datetime(event.start)}",
        f"End: {format_datetime(event.end)}",
    ]
    if event.description:
        lines.append(f"Description: {event.description}")
    if event.is_recurring:
        lines.append(f"Recurrence: {_describe_recurrence(event)}")
    return "\n".join(lines)


def _overlaps(event: Event, range_start: Optional[datetime], range_end: Optional[datetime]) -> bool:
    if range_start and event.end < range_start:
        return False
    if range_end and event.start > range_end:
        return False
    return True


@app.command("add")
def add(
    title: str = typer.Option(..., "--title", "-t", help="Event title."),
    start: str = typer.Option(..., "--start", help="Event start (YYYY-MM-DD HH:MM)."),
    end: Optional[str] = typer.Option(None, "--end", help="Event end (defaults to the start)."),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Event description."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Add a single event."""
    try:
        params = validate_create_params(title, start, end, description)
        path, store = _open_store(file)
        event = Event(store.generate_id(), params.title, params.description, params.start, params.end)
        store.add(event)
        save_events(store, path)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(f"✅ Added event {event.event_id}")
    typer.echo(_format_event_compact(event))


@app.command("add-recurring")
def add_recurring(
    title: str = typer.Option(..., "--title", "-t", help="Event title."),
    start: str = typer.Option(..., "--start", help="First occurrence start (YYYY-MM-DD HH:MM)."),
    end: Optional[str] = typer.Option(None, "--end", help="First occurrence end (defaults to the start)."),
    unit: str = typer.Option(..., "--unit", "-u", help="DAILY, WEEKLY or MONTHLY."),
    interval: int = typer.Option(1, "--interval", "-i", help="Repeat every N units."),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of occurrences."),
    until: Optional[str] = typer.Option(None, "--until", help="Last allowed start date (YYYY-MM-DD)."),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Event description."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Add a recurring event ending after a count or on a date."""
    try:
        params = validate_create_params(title, start, end, description)
        recurrence = validate_recurrence_params(unit, interval, count, until, start=params.start)
        path, store = _open_store(file)
        event = RecurringEvent(
            store.generate_id(),
            params.title,
            params.description,
            params.start,
            params.end,
            recurrence_unit=recurrence.unit,
            interval=recurrence.interval,
            occurrences=recurrence.occurrences,
            recurrence_end_date=recurrence.end_date,
        )
        store.add(event)
        save_events(store, path)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(f"✅ Added recurring event {event.event_id}")
    typer.echo(_format_event_compact(event))


@app.command("update")
def update(
    event_id: int = typer.Option(..., "--id", help="Event id."),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Event title."),
    start: Optional[str] = typer.Option(None, "--start", help="Event start (YYYY-MM-DD HH:MM)."),
    end: Optional[str] = typer.Option(None, "--end", help="Event end (YYYY-MM-DD HH:MM)."),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Event description."),
    unit: Optional[str] = typer.Option(None, "--unit", "-u", help="Recurring events: DAILY, WEEKLY or MONTHLY."),
    interval: Optional[int] = typer.Option(None, "--interval", "-i", help="Recurring events: repeat every N units."),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Recurring events: number of occurrences."),
    until: Optional[str] = typer.Option(None, "--until", help="Recurring events: last allowed start date (YYYY-MM-DD)."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Update fields of an event by id."""
    try:
        path, store = _open_store(file)
        current = _require_event(store, event_id)
        changes: dict[str, object] = {}
        if title is not None:
            changes["title"] = validate_title(title)
        if description is not None:
            changes["description"] = description
        if start is not None:
            changes["start"] = parse_event_datetime(start, field="start")
        if end is not None:
            changes["end"] = parse_event_datetime(end, field="end")
        validate_start_end(changes.get("start", current.start), changes.get("end", current.end))  # type: ignore[arg-type]
        if any(option is not None for option in (unit, interval, count, until)):
            if not current.is_recurring:
                raise EventValidationError(
                    "Recurrence options only apply to recurring events",
                    field="unit",
                    value=current.event_id,
                )
            changes.update(
                validate_recurrence_changes(unit, interval, count, until, changes.get("start", current.start))  # type: ignore[arg-type]
            )
        event = store.update(current.event_id, **changes)
        save_events(store, path)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(f"✅ Updated event {event.event_id}")
    typer.echo(_format_event_compact(event))


@app.command("delete")
def delete(
    event_id: int = typer.Option(..., "--id", help="Event id."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Delete an event by id."""
    try:
        path, store = _open_store(file)
        event = _require_event(store, event_id)
        store.delete(event.event_id)
        save_events(store, path)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(f"✅ Deleted event {event.event_id} | {event.title}")


@app.command("get")
def get(
    event_id: int = typer.Option(..., "--id", help="Event id."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Show event details by id."""
    try:
        _, store = _open_store(file)
        event = _require_event(store, event_id)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(_format_event_detail(event))


@app.command("list")
def list_command(
    range_from: Optional[str] = typer.Option(None, "--from", help="Filter start range (YYYY-MM-DD[ HH:MM])."),
    range_to: Optional[str] = typer.Option(None, "--to", help="Filter end range (YYYY-MM-DD[ HH:MM])."),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Keyword search over title and description."),
    expand: bool = typer.Option(False, "--expand", "-e", help="List every occurrence of recurring events."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """List events (optionally expanded, filtered by date range or keyword)."""
    try:
        params = validate_list_params(range_from, range_to, query, expand)
        _, store = _open_store(file)
        events = store.search(params.query) if params.query else store.all()
        if params.expand:
            events = [occurrence for event in events for occurrence in expand_occurrences(event)]
            events = [event for event in events if _overlaps(event, params.range_start, params.range_end)]
            events.sort(key=lambda event: (event.start, event.event_id))
    except Exception as exc:
        raise _fail(exc)

    if not events:
        typer.echo("No events found.")
        return

    for event in events:
        typer.echo(_format_event_compact(event))
    typer.echo(f"Total: {len(events)} event(s)")


@app.command("occurrences")
def occurrences(
    event_id: int = typer.Option(..., "--id", help="Event id."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Expand an event into its concrete occurrences."""
    try:
        _, store = _open_store(file)
        event = _require_event(store, event_id)
        expanded = expand_occurrences(event)
    except Exception as exc:
        raise _fail(exc)

    if not expanded:
        typer.echo("No occurrences.")
        return

    for occurrence in expanded:
        typer.echo(_format_event_compact(occurrence))
    typer.echo(f"Total: {len(expanded)} occurrence(s)")


@app.command("export")
def export(
    output: str = typer.Option(..., "--output", "-o", help="Destination .ics file."),
    name: Optional[str] = typer.Option(None, "--name", help="Calendar display name."),
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
):
    """Export every occurrence to an iCalendar (.ics) file."""
    try:
        _, store = _open_store(file)
        output_path = Path(output).expanduser()
        written = export_events(store.all(), output_path, name=name)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(f"✅ Exported {written} occurrence(s) to {output_path}")


def cli():
    """Entry point for the CLI."""
    app()

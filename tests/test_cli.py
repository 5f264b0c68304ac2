"""
Integration tests for the command-line interface.
"""

from typer.testing import CliRunner

from eventcal import __version__
from eventcal.cli import app
from eventcal.events.codec import load_events
from eventcal.events.store import EventStore

runner = CliRunner()


def _invoke(events_file, *args):
    return runner.invoke(app, [*args, "--file", str(events_file)])


def _stored(events_file):
    store = EventStore()
    load_events(store, events_file)
    return store


class TestCli:
    """End-to-end command tests against a temporary events file."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_add_writes_file(self, events_file):
        result = _invoke(
            events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00", "--end", "2024-03-01 13:00"
        )

        assert result.exit_code == 0, result.output
        assert "Added event 1" in result.output
        assert events_file.read_text(encoding="utf-8") == "1,NORMAL,Lunch,,2024-03-01 12:00,2024-03-01 13:00\n"

    def test_ids_continue_after_reload(self, events_file):
        _invoke(events_file, "add", "--title", "A", "--start", "2024-03-01 12:00")
        _invoke(events_file, "add", "--title", "B", "--start", "2024-03-02 12:00")
        _invoke(events_file, "delete", "--id", "2")
        result = _invoke(events_file, "add", "--title", "C", "--start", "2024-03-03 12:00")

        assert "Added event 2" in result.output
        assert [e.title for e in _stored(events_file).all()] == ["A", "C"]

    def test_add_recurring_and_expand(self, events_file):
        result = _invoke(
            events_file,
            "add-recurring",
            "--title", "X",
            "--start", "2024-01-01 09:00",
            "--end", "2024-01-01 10:00",
            "--unit", "daily",
            "--count", "3",
        )
        assert result.exit_code == 0, result.output

        result = _invoke(events_file, "occurrences", "--id", "1")
        assert result.exit_code == 0, result.output
        assert "2024-01-03 09:00 -> 2024-01-03 10:00 | X (Occurrence 3)" in result.output
        assert "Total: 3 occurrence(s)" in result.output

    def test_add_recurring_until_persists_end_date(self, events_file):
        result = _invoke(
            events_file,
            "add-recurring",
            "--title", "Review",
            "--start", "2024-01-01 14:00",
            "--unit", "WEEKLY",
            "--interval", "2",
            "--until", "2024-02-01",
        )
        assert result.exit_code == 0, result.output

        event = _stored(events_file).find_by_id(1)
        assert event.interval == 2
        assert event.recurrence_end_date.isoformat() == "2024-02-01"

    def test_invalid_unit_rejected(self, events_file):
        result = _invoke(
            events_file, "add-recurring", "--title", "X", "--start", "2024-01-01 09:00", "--unit", "hourly", "--count", "2"
        )
        assert result.exit_code == 1
        assert "Validation Error" in result.output
        assert not events_file.exists()

    def test_list_and_search(self, events_file):
        _invoke(events_file, "add", "--title", "Dentist", "--start", "2024-02-01 10:00")
        _invoke(events_file, "add", "--title", "Lunch", "--start", "2024-02-02 12:00")

        result = _invoke(events_file, "list")
        assert "Total: 2 event(s)" in result.output

        result = _invoke(events_file, "list", "--query", "dent")
        assert "Dentist" in result.output
        assert "Lunch" not in result.output

    def test_list_range_expands_occurrences(self, events_file):
        _invoke(
            events_file,
            "add-recurring",
            "--title", "Standup",
            "--start", "2024-01-01 09:00",
            "--unit", "daily",
            "--count", "10",
        )

        result = _invoke(events_file, "list", "--from", "2024-01-03", "--to", "2024-01-04")

        assert result.exit_code == 0, result.output
        assert "Standup (Occurrence 3)" in result.output
        assert "Standup (Occurrence 4)" in result.output
        assert "Total: 2 event(s)" in result.output

    def test_list_empty(self, events_file):
        result = _invoke(events_file, "list")
        assert result.exit_code == 0
        assert "No events found." in result.output

    def test_update(self, events_file):
        _invoke(events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00", "--end", "2024-03-01 13:00")

        result = _invoke(events_file, "update", "--id", "1", "--title", "Brunch", "--start", "2024-03-01 11:00")

        assert result.exit_code == 0, result.output
        event = _stored(events_file).find_by_id(1)
        assert event.title == "Brunch"
        assert event.start.hour == 11

    def test_update_rejects_end_before_start(self, events_file):
        _invoke(events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00", "--end", "2024-03-01 13:00")
        result = _invoke(events_file, "update", "--id", "1", "--start", "2024-03-01 14:00")
        assert result.exit_code == 1
        assert "End time" in result.output

    def test_get_and_delete_missing(self, events_file):
        result = _invoke(events_file, "get", "--id", "7")
        assert result.exit_code == 1
        assert "Not Found" in result.output

        result = _invoke(events_file, "delete", "--id", "7")
        assert result.exit_code == 1
        assert "Not Found" in result.output

    def test_get_shows_details(self, events_file):
        _invoke(
            events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00", "--description", "with Sam"
        )
        result = _invoke(events_file, "get", "--id", "1")
        assert "Title: Lunch" in result.output
        assert "Description: with Sam" in result.output

    def test_corrupt_file_reports_parse_error(self, events_file):
        events_file.write_text("garbage\n", encoding="utf-8")
        result = _invoke(events_file, "list")
        assert result.exit_code == 1
        assert "Parse Error" in result.output

    def test_export(self, events_file, tmp_path):
        _invoke(events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00")
        output = tmp_path / "calendar.ics"

        result = _invoke(events_file, "export", "--output", str(output))

        assert result.exit_code == 0, result.output
        assert "Exported 1 occurrence(s)" in result.output
        assert b"BEGIN:VEVENT" in output.read_bytes()

    def test_events_file_from_environment(self, events_file, monkeypatch):
        monkeypatch.setenv("EVENTCAL_FILE", str(events_file))

        result = runner.invoke(app, ["add", "--title", "Env", "--start", "2024-03-01 12:00"])

        assert result.exit_code == 0, result.output
        assert _stored(events_file).find_by_id(1).title == "Env"

    def test_update_recurrence_switches_to_end_date(self, events_file):
        _invoke(
            events_file,
            "add-recurring",
            "--title", "Review",
            "--start", "2024-01-01 14:00",
            "--unit", "daily",
            "--count", "5",
        )

        result = _invoke(
            events_file, "update", "--id", "1", "--unit", "weekly", "--interval", "2", "--until", "2024-02-01"
        )

        assert result.exit_code == 0, result.output
        assert "[every 2 x WEEKLY, until 2024-02-01]" in result.output
        event = _stored(events_file).find_by_id(1)
        assert event.recurrence_unit == "WEEKLY"
        assert event.interval == 2
        assert event.occurrences == 0
        assert event.recurrence_end_date.isoformat() == "2024-02-01"

    def test_update_recurrence_count_clears_end_date(self, events_file):
        _invoke(
            events_file,
            "add-recurring",
            "--title", "Review",
            "--start", "2024-01-01 14:00",
            "--unit", "weekly",
            "--until", "2024-03-01",
        )

        result = _invoke(events_file, "update", "--id", "1", "--count", "4")

        assert result.exit_code == 0, result.output
        event = _stored(events_file).find_by_id(1)
        assert event.occurrences == 4
        assert event.recurrence_end_date is None
        assert "[WEEKLY, 4 occurrence(s)]" in result.output

    def test_update_recurrence_on_plain_event_rejected(self, events_file):
        _invoke(events_file, "add", "--title", "Lunch", "--start", "2024-03-01 12:00")

        result = _invoke(events_file, "update", "--id", "1", "--count", "3")

        assert result.exit_code == 1
        assert "only apply to recurring events" in result.output
        assert not _stored(events_file).find_by_id(1).is_recurring

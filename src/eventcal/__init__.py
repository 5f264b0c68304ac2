"""Calendar events with recurrence, stored in a flat file."""

__version__ = "0.1.0"

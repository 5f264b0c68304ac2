"""Configuration helpers for the events file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_EVENTS_FILENAME, EVENTS_FILE_ENV


def default_events_path() -> Path:
    override = os.environ.get(EVENTS_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / DEFAULT_EVENTS_FILENAME


def resolve_events_path(path: Optional[Path]) -> Path:
    resolved = (path or default_events_path()).expanduser()
    return resolved.resolve()

"""Shared constants and defaults for the workout tracker core."""

from __future__ import annotations

from pathlib import Path

# Reps pre-filled for sets that have no previous value
DEFAULT_REPS = 10

# Default rest countdown after a completed set, in seconds
DEFAULT_REST_DURATION = 90

# Interval of the rest countdown tick, in seconds
REST_TICK_INTERVAL = 1

# Placeholder shown when an exercise has no previous performance
NO_PREVIOUS_DATA = "-"

# Path to the local key-value database
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "data" / "tracker.db"

# Base path for the in-progress workout recovery files.  ``_1.json`` and
# ``_2.json`` are appended to the name.
DEFAULT_RECOVERY_BASE = (
    Path(__file__).resolve().parent.parent / "data" / "session_recovery"
)

__all__ = [
    "DEFAULT_REPS",
    "DEFAULT_REST_DURATION",
    "REST_TICK_INTERVAL",
    "NO_PREVIOUS_DATA",
    "DEFAULT_DB_PATH",
    "DEFAULT_RECOVERY_BASE",
]

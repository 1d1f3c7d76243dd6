"""Recovery files for the in-progress workout.

The state is written to two identical JSON files so a crash in the middle of
a write still leaves one readable copy behind.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from . import DEFAULT_RECOVERY_BASE


def recovery_paths(base: Path = DEFAULT_RECOVERY_BASE) -> tuple[Path, Path]:
    """Return the primary and backup recovery file paths for ``base``."""

    base = Path(base)
    return (
        base.with_name(base.name + "_1.json"),
        base.with_name(base.name + "_2.json"),
    )


def save_recovery_state(state: dict, base: Path = DEFAULT_RECOVERY_BASE) -> None:
    """Persist ``state`` to both recovery files."""

    payload = json.dumps(state)
    try:
        for path in recovery_paths(base):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
    except OSError:
        logging.exception("Failed to write recovery state to %s", base)


def load_recovery_state(base: Path = DEFAULT_RECOVERY_BASE) -> dict | None:
    """Return the first readable recovery state or ``None``."""

    for path in recovery_paths(base):
        try:
            if not path.exists():
                continue
            text = path.read_text(encoding="utf-8").strip()
            if not text:
                continue
            data = json.loads(text)
        except (OSError, ValueError):
            logging.exception("Unreadable recovery file %s", path)
            continue
        if isinstance(data, dict):
            return data
    return None


def clear_recovery_state(base: Path = DEFAULT_RECOVERY_BASE) -> None:
    """Remove any existing recovery files."""

    for path in recovery_paths(base):
        try:
            path.unlink()
        except FileNotFoundError:
            pass

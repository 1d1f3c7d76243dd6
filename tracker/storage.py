"""Key-value persistence for the workout collections.

Each collection (``workouts``, ``routines`` and ``user``) is stored as a
single JSON document in a small SQLite table.  Storage problems never reach
the caller: failed writes are logged and dropped, failed reads are logged and
reported as "no data yet".
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from . import DEFAULT_DB_PATH
from .models import Routine, User, Workout

WORKOUTS_KEY = "workouts"
ROUTINES_KEY = "routines"
USER_KEY = "user"

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL
)
"""


class KeyValueStore:
    """Opaque blob store keyed by collection name."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.execute(SCHEMA)
        return conn

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None``."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [r[0] for r in rows]


class CollectionStore:
    """Save and load whole collections of model objects.

    ``save_*`` never raises and ``load_*`` returns an empty collection (or
    ``None`` for the user) when nothing usable is stored.
    """

    def __init__(self, kv: KeyValueStore | None = None) -> None:
        self.kv = kv or KeyValueStore()

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def _save(self, key: str, payload: Any) -> bool:
        try:
            self.kv.set(key, json.dumps(payload))
        except (TypeError, ValueError):
            logging.exception("Failed to encode %s", key)
            return False
        except sqlite3.Error:
            logging.exception("Failed to write %s to %s", key, self.kv.db_path)
            return False
        logging.info("Saved %s to %s", key, self.kv.db_path)
        return True

    def _load(self, key: str) -> Any:
        try:
            text = self.kv.get(key)
        except sqlite3.Error:
            logging.exception("Failed to read %s from %s", key, self.kv.db_path)
            return None
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError:
            logging.exception("Stored %s is not valid JSON", key)
            return None

    def _load_list(self, key: str, model) -> list:
        data = self._load(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logging.error("Stored %s is not a list; ignoring it", key)
            return []
        try:
            return [model.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError):
            logging.exception("Failed to decode %s", key)
            return []

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def save_workouts(self, workouts: list[Workout]) -> bool:
        return self._save(WORKOUTS_KEY, [w.to_dict() for w in workouts])

    def load_workouts(self) -> list[Workout]:
        return self._load_list(WORKOUTS_KEY, Workout)

    def save_routines(self, routines: list[Routine]) -> bool:
        return self._save(ROUTINES_KEY, [r.to_dict() for r in routines])

    def load_routines(self) -> list[Routine]:
        return self._load_list(ROUTINES_KEY, Routine)

    def save_user(self, user: User) -> bool:
        return self._save(USER_KEY, user.to_dict())

    def load_user(self) -> User | None:
        data = self._load(USER_KEY)
        if data is None:
            return None
        try:
            return User.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError):
            logging.exception("Failed to decode %s", USER_KEY)
            return None

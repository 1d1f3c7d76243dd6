import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Keep Kivy from parsing pytest's command line and opening a window
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_WINDOW", "mock")
os.environ.setdefault("KIVY_UNITTEST", "1")

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tracker import settings
from tracker.catalog import default_catalog
from tracker.models import Workout, WorkoutExercise, WorkoutSet
from tracker.session_store import SessionStore
from tracker.storage import CollectionStore, KeyValueStore


class FakeEvent:
    def __init__(self, clock, callback, interval):
        self.clock = clock
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Stand-in for ``kivy.clock.Clock`` that is advanced by hand."""

    def __init__(self):
        self.events = []

    def schedule_interval(self, callback, interval):
        event = FakeEvent(self, callback, interval)
        self.events.append(event)
        return event

    @property
    def active(self):
        return [e for e in self.events if not e.cancelled]

    def tick(self, count=1):
        for _ in range(count):
            for event in self.active:
                if event.callback(event.interval) is False:
                    event.cancelled = True


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings module at a temporary file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "SETTINGS_PATH", path)
    settings.clear_cache()
    yield path
    settings.clear_cache()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def collection_store(tmp_path: Path) -> CollectionStore:
    return CollectionStore(KeyValueStore(tmp_path / "tracker.db"))


@pytest.fixture
def store(tmp_path: Path, collection_store, catalog) -> SessionStore:
    """Create an empty store backed by temporary files."""
    return SessionStore(
        storage=collection_store,
        catalog=catalog,
        recovery_base=tmp_path / "session_recovery",
    )


@pytest.fixture
def make_push_day(catalog):
    """Return a builder for a two exercise, three set "Push Day"."""

    def build(values=None, date=None, is_template=False, name="Push Day"):
        values = values or {}
        exercises = []
        for ex_idx, ex_name in enumerate(("Bench Press", "Dumbbell Press")):
            sets = []
            for order in range(1, 4):
                weight, reps, done = values.get((ex_idx, order), (None, None, False))
                sets.append(
                    WorkoutSet(order=order, weight=weight, reps=reps, is_completed=done)
                )
            exercises.append(
                WorkoutExercise(
                    exercise=catalog.get(ex_name), sets=tuple(sets), order=ex_idx + 1
                )
            )
        return Workout(
            name=name,
            exercises=tuple(exercises),
            date=date or datetime(2024, 5, 1, 18, 0),
            is_template=is_template,
        )

    return build


@pytest.fixture
def last_week(make_push_day):
    """A logged "Push Day" from a week before the test date."""
    return make_push_day(
        values={
            (0, 1): (60, 10, True),
            (0, 2): (70, 8, True),
            (1, 1): (25, 12, True),
        },
        date=datetime(2024, 5, 1, 18, 0) - timedelta(days=7),
    )

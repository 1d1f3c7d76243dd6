"""Process-wide store of workouts, routines and the current session.

The store is constructed once by the application and handed to whichever
component needs it.  It owns the canonical list of workouts and at most one
in-progress workout; everything else works on copies.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path

from . import DEFAULT_RECOVERY_BASE
from .catalog import ExerciseCatalog, default_catalog
from .models import (
    Exercise,
    FitnessGoal,
    Routine,
    User,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from .recovery import clear_recovery_state, load_recovery_state, save_recovery_state
from .storage import CollectionStore

# Fields of a stored workout that may be overwritten when a session is
# committed back over it.
MUTABLE_WORKOUT_FIELDS = ("name", "exercises", "duration", "notes", "is_template")


class SessionStore:
    """In-memory collections backed by a :class:`CollectionStore`."""

    def __init__(
        self,
        storage: CollectionStore | None = None,
        catalog: ExerciseCatalog | None = None,
        recovery_base: Path = DEFAULT_RECOVERY_BASE,
    ) -> None:
        self.storage = storage or CollectionStore()
        self.catalog = catalog if catalog is not None else default_catalog()
        self.recovery_base = Path(recovery_base)
        self.workouts: list[Workout] = []
        self.routines: list[Routine] = []
        self.user: User | None = None
        self.current_workout: Workout | None = None

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Populate the store from persistent storage.

        A sample workout is added when no workouts have been saved yet and a
        default profile is created when no user exists.
        """

        self.workouts = self.storage.load_workouts()
        if not self.workouts:
            sample = self._sample_workout()
            if sample is not None:
                self.workouts.append(sample)
        self.routines = self.storage.load_routines()
        self.user = self.storage.load_user()
        if self.user is None:
            self.user = User(
                name="Athlete",
                fitness_goals=(FitnessGoal.STRENGTH, FitnessGoal.MUSCLE_GAIN),
            )
            self.storage.save_user(self.user)
        logging.info(
            "Loaded %d workouts and %d routines", len(self.workouts), len(self.routines)
        )

    def persist(self) -> bool:
        """Write the workout list to storage."""

        return self.storage.save_workouts(self.workouts)

    def _sample_workout(self) -> Workout | None:
        bench = self.catalog.get("Bench Press")
        dumbbell = self.catalog.get("Dumbbell Press")
        if bench is None or dumbbell is None:
            return None

        def sets(*pairs):
            return tuple(
                WorkoutSet(order=pos, reps=reps, weight=weight)
                for pos, (reps, weight) in enumerate(pairs, 1)
            )

        return Workout(
            name="Push Day",
            exercises=(
                WorkoutExercise(
                    exercise=bench, sets=sets((10, 60), (8, 70), (6, 80)), order=1
                ),
                WorkoutExercise(
                    exercise=dumbbell, sets=sets((12, 25), (10, 30), (8, 35)), order=2
                ),
            ),
            date=datetime.now() - timedelta(days=1),
        )

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def get_workout(self, workout_id: str) -> Workout | None:
        index = self._index_of(workout_id)
        return self.workouts[index] if index is not None else None

    def _index_of(self, workout_id: str) -> int | None:
        for idx, workout in enumerate(self.workouts):
            if workout.id == workout_id:
                return idx
        return None

    def save_workout(self, workout: Workout) -> None:
        """Replace the workout with the same id or append ``workout``."""

        index = self._index_of(workout.id)
        if index is None:
            self.workouts.append(workout)
        else:
            self.workouts[index] = workout
        self.persist()

    def update_workout_fields(self, workout_id: str, **fields) -> bool:
        """Overwrite mutable fields of a stored workout.

        Returns ``False`` if no workout with ``workout_id`` exists.
        """

        unknown = set(fields) - set(MUTABLE_WORKOUT_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update workout fields: {sorted(unknown)}")
        index = self._index_of(workout_id)
        if index is None:
            return False
        self.workouts[index] = replace(self.workouts[index], **fields)
        self.persist()
        return True

    def delete_workout(self, workout_id: str) -> None:
        self.workouts = [w for w in self.workouts if w.id != workout_id]
        self.persist()

    def history(self) -> list[Workout]:
        """Return logged (non-template) workouts, most recent first."""

        return sorted(
            (w for w in self.workouts if not w.is_template),
            key=lambda w: w.date,
            reverse=True,
        )

    def templates(self) -> list[Workout]:
        return [w for w in self.workouts if w.is_template]

    # ------------------------------------------------------------------
    # Current workout
    # ------------------------------------------------------------------

    def start_workout(self, workout: Workout) -> None:
        self.current_workout = workout
        self.checkpoint(workout)

    def checkpoint(
        self,
        workout: Workout | None = None,
        exercise_index: int = 0,
        set_index: int = 0,
        original: Workout | None = None,
    ) -> None:
        """Write the in-progress workout to the recovery files.

        ``original`` is the workout the session started from, kept so a
        recovered session is saved back over the same entry.
        """

        if workout is not None:
            self.current_workout = workout
        if self.current_workout is None:
            return
        save_recovery_state(
            {
                "workout": self.current_workout.to_dict(),
                "exercise_index": exercise_index,
                "set_index": set_index,
                "original": original.to_dict() if original is not None else None,
            },
            self.recovery_base,
        )

    def restore_current(self) -> tuple[Workout, int, int, Workout | None] | None:
        """Return the recovered workout, pointer and original, if any."""

        state = load_recovery_state(self.recovery_base)
        if not state:
            return None
        try:
            workout = Workout.from_dict(state["workout"])
            original = state.get("original")
            if original is not None:
                original = Workout.from_dict(original)
        except (KeyError, TypeError, ValueError):
            logging.exception("Discarding unusable recovery state")
            return None
        self.current_workout = workout
        return (
            workout,
            state.get("exercise_index", 0),
            state.get("set_index", 0),
            original,
        )

    def clear_current(self) -> None:
        self.current_workout = None
        clear_recovery_state(self.recovery_base)

    def end_workout(self, now: datetime | None = None) -> Workout | None:
        """Stamp the current workout's duration and append it to history."""

        workout = self.current_workout
        if workout is None:
            return None
        now = now or datetime.now()
        workout = replace(workout, duration=(now - workout.date).total_seconds())
        self.workouts.append(workout)
        self.persist()
        self.clear_current()
        return workout

    # ------------------------------------------------------------------
    # Routines, user and exercises
    # ------------------------------------------------------------------

    def save_routine(self, routine: Routine) -> None:
        for idx, existing in enumerate(self.routines):
            if existing.id == routine.id:
                self.routines[idx] = routine
                break
        else:
            self.routines.append(routine)
        self.storage.save_routines(self.routines)

    def delete_routine(self, routine_id: str) -> None:
        self.routines = [r for r in self.routines if r.id != routine_id]
        self.storage.save_routines(self.routines)

    def replace_routine_workout(self, workout_id: str, workout: Workout) -> int:
        """Swap ``workout`` into every routine day that embeds ``workout_id``.

        Returns the number of routine days that were updated.
        """

        updated = 0
        routines: list[Routine] = []
        for routine in self.routines:
            days = []
            for day in routine.days:
                if day.workout is not None and day.workout.id == workout_id:
                    day = replace(day, workout=workout)
                    updated += 1
                days.append(day)
            routines.append(replace(routine, days=tuple(days)))
        if updated:
            self.routines = routines
            self.storage.save_routines(self.routines)
        return updated

    def save_user(self, user: User) -> None:
        self.user = user
        self.storage.save_user(user)

    def search_exercises(self, query: str) -> list[Exercise]:
        return self.catalog.search(query)

    def add_exercise(self, exercise: Exercise) -> None:
        """Add a custom exercise to the catalog."""

        self.catalog.add(replace(exercise, is_custom=True))

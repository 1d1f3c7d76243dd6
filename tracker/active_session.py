"""Controller for the workout the user is currently performing."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from . import DEFAULT_REST_DURATION, editor, settings
from .finalizer import FinalizeDecision, FinalizeOutcome, FinalizeResult, finalize
from .history import (
    PreviousPerformance,
    format_previous_performance,
    previous_performance,
)
from .initializer import begin_session
from .models import Exercise, Workout, WorkoutExercise, WorkoutSet
from .rest_timer import RestTimer
from .session_store import SessionStore


class ActiveSession:
    """Working copy of an in-progress workout plus the guided-flow pointer.

    Edits replace :attr:`workout` with a new :class:`Workout`; the store's
    canonical workouts are untouched until :meth:`finish`.  After every edit
    the working copy and pointer are checkpointed to the recovery files.

    The rest countdown belongs to the session.  Use the session as a context
    manager, or call :meth:`close`, so that the countdown never outlives it.
    """

    def __init__(
        self,
        workout: Workout,
        store: SessionStore,
        original: Workout | None = None,
        rest_duration: int | None = None,
        settings_path: Path | None = None,
        clock=None,
        on_rest_tick: Callable[[int], None] | None = None,
        on_rest_finish: Callable[[], None] | None = None,
        exercise_index: int = 0,
        set_index: int = 0,
    ) -> None:
        self.workout = workout
        self.original = original if original is not None else workout
        self.store = store
        self.exercise_index = exercise_index
        self.set_index = set_index
        if rest_duration is None:
            rest_duration = settings.get_value("default_rest_time", settings_path)
        self.rest_duration = int(rest_duration or DEFAULT_REST_DURATION)
        self.auto_start_rest = bool(
            settings.get_value("auto_start_rest_timer", settings_path)
        )
        self.show_previous = bool(
            settings.get_value("show_previous_workout_data", settings_path)
        )
        self.weight_unit = settings.get_value("weight_unit", settings_path) or "kg"
        self.timer = RestTimer(
            self.rest_duration,
            on_tick=on_rest_tick,
            on_finish=on_rest_finish,
            clock=clock,
        )
        self.closed = False
        self.store.start_workout(self.workout)
        self._checkpoint()

    @classmethod
    def begin(
        cls, source: Workout, store: SessionStore, now: datetime | None = None, **kwargs
    ) -> "ActiveSession":
        """Start a session from ``source`` using the store's history.

        ``source`` is what the finished session is reconciled against, so a
        stored workout or template is updated in place rather than copied.
        """

        workout = begin_session(source, store.history(), now=now)
        logging.info("Started workout %s (%s)", workout.name, workout.id)
        return cls(workout, store, original=source, **kwargs)

    @classmethod
    def resume(cls, store: SessionStore, **kwargs) -> "ActiveSession | None":
        """Return the session saved in the recovery files, if there is one."""

        restored = store.restore_current()
        if restored is None:
            return None
        workout, exercise_index, set_index, original = restored
        logging.info("Recovered workout %s (%s)", workout.name, workout.id)
        return cls(
            workout,
            store,
            original=original,
            exercise_index=exercise_index,
            set_index=set_index,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    @property
    def current_exercise(self) -> WorkoutExercise | None:
        if 0 <= self.exercise_index < len(self.workout.exercises):
            return self.workout.exercises[self.exercise_index]
        return None

    @property
    def current_set(self) -> WorkoutSet | None:
        exercise = self.current_exercise
        if exercise is None or not 0 <= self.set_index < len(exercise.sets):
            return None
        return exercise.sets[self.set_index]

    def select_exercise(self, index: int) -> None:
        if 0 <= index < len(self.workout.exercises):
            self.exercise_index = index
            self.set_index = 0
            self._checkpoint()

    def _advance(self) -> None:
        exercise = self.workout.exercises[self.exercise_index]
        if self.set_index + 1 < len(exercise.sets):
            self.set_index += 1
        elif self.exercise_index + 1 < len(self.workout.exercises):
            self.exercise_index += 1
            self.set_index = 0

    def _clamp_pointer(self) -> None:
        exercise = self.current_exercise
        if exercise is not None and self.set_index >= len(exercise.sets):
            self.set_index = len(exercise.sets) - 1

    def _apply(self, workout: Workout) -> None:
        self.workout = workout
        self._clamp_pointer()
        self._checkpoint()

    def _checkpoint(self) -> None:
        self.store.checkpoint(
            self.workout, self.exercise_index, self.set_index, self.original
        )

    # ------------------------------------------------------------------
    # Guided flow
    # ------------------------------------------------------------------

    def complete_current_set(self) -> None:
        """Complete the set under the pointer, start resting and move on."""

        if self.closed or self.current_set is None:
            return
        self.workout = editor.complete_set(
            self.workout, self.exercise_index, self.set_index
        )
        if self.auto_start_rest:
            self.timer.start(self.rest_duration)
        self._advance()
        self._checkpoint()

    @property
    def rest_remaining(self) -> int:
        return self.timer.remaining

    def skip_rest(self) -> None:
        self.timer.skip()

    def adjust_rest(self, seconds: int) -> None:
        self.timer.adjust(seconds)

    def previous_performance(
        self, exercise_index: int, set_index: int
    ) -> PreviousPerformance | None:
        """Return what was lifted for this set last time, if anything.

        Nothing is returned when showing previous data is switched off in the
        settings.  The workout this session was started from is skipped.
        """

        if not self.show_previous:
            return None
        if not 0 <= exercise_index < len(self.workout.exercises):
            return None
        exercise = self.workout.exercises[exercise_index]
        if not 0 <= set_index < len(exercise.sets):
            return None
        return previous_performance(
            exercise.exercise,
            exercise.sets[set_index].order,
            [w for w in self.store.history() if w.id != self.original.id],
            exclude_workout_id=self.workout.id,
        )

    def previous_performance_text(self, exercise_index: int, set_index: int) -> str:
        """Return the previous set as display text in the configured unit."""

        return format_previous_performance(
            self.previous_performance(exercise_index, set_index), self.weight_unit
        )

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def edit_set(
        self, exercise_id: str, set_index: int, weight: float | None, reps: int | None
    ) -> None:
        self._apply(editor.edit_set(self.workout, exercise_id, set_index, weight, reps))

    def toggle_set_completion(self, exercise_id: str, set_index: int) -> None:
        self._apply(editor.toggle_set_completion(self.workout, exercise_id, set_index))

    def recompute_set_completion(self, exercise_id: str, set_index: int) -> None:
        self._apply(
            editor.recompute_set_completion(self.workout, exercise_id, set_index)
        )

    def add_set(self, exercise_id: str) -> None:
        self._apply(editor.add_set(self.workout, exercise_id))

    def delete_set(self, exercise_id: str, set_index: int) -> None:
        """Remove a set; the pointer stays on the same set when it can."""

        ex_idx = self.workout.find_exercise(exercise_id)
        updated = editor.delete_set(self.workout, exercise_id, set_index)
        if (
            updated is not self.workout
            and ex_idx == self.exercise_index
            and self.set_index > set_index
        ):
            self.set_index -= 1
        self._apply(updated)

    def add_exercises(self, exercises: Iterable[Exercise]) -> None:
        self._apply(editor.add_exercises(self.workout, exercises))

    def delete_exercise(self, index: int) -> None:
        """Remove an exercise and keep the pointer on a valid exercise."""

        if not 0 <= index < len(self.workout.exercises):
            return
        if self.exercise_index >= index:
            self.exercise_index = max(0, self.exercise_index - 1)
        self.set_index = 0
        self._apply(editor.delete_exercise(self.workout, index))

    def reorder_exercises(self, index: int) -> None:
        self._apply(editor.reorder_exercises(self.workout, index))

    def set_workout_notes(self, notes: str | None) -> None:
        self._apply(editor.set_workout_notes(self.workout, notes))

    def set_exercise_notes(self, exercise_id: str, notes: str | None) -> None:
        self._apply(editor.set_exercise_notes(self.workout, exercise_id, notes))

    # ------------------------------------------------------------------
    # Ending the session
    # ------------------------------------------------------------------

    def discard(self) -> None:
        """Drop the working copy without saving anything."""

        self.timer.cancel()
        self.store.clear_current()
        self.closed = True
        logging.info("Discarded workout %s (%s)", self.workout.name, self.workout.id)

    def finish(
        self,
        decision: FinalizeDecision | None = None,
        name: str | None = None,
        now: datetime | None = None,
    ) -> FinalizeResult:
        """Stamp the duration and save the session.

        When the result asks for a decision, or the user cancelled, the
        session stays open so :meth:`finish` can be called again.  Finishing
        a closed or discarded session raises :class:`RuntimeError`.
        """

        if self.closed:
            raise RuntimeError(f"Workout session {self.workout.id} is closed")
        self.timer.cancel()
        now = now or datetime.now()
        self.workout = replace(
            self.workout, duration=(now - self.workout.date).total_seconds()
        )
        result = finalize(self.workout, self.original, self.store, decision, name)
        if result.outcome in (FinalizeOutcome.COMMITTED, FinalizeOutcome.KEPT_ORIGINAL):
            self.closed = True
        else:
            self._checkpoint()
        return result

    def close(self) -> None:
        """Stop the rest countdown.  Safe to call more than once."""

        self.timer.cancel()
        self.closed = True

    def __enter__(self) -> "ActiveSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

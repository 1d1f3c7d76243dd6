"""Edits applied to the working copy of an active workout.

Each function takes a :class:`Workout` and returns a new one; the input is
never modified.  Unknown exercise ids and out-of-range indices are ignored
and the workout is returned unchanged, as is any edit that would break a
model invariant (such as removing the last set of an exercise).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from . import DEFAULT_REPS
from .models import (
    Exercise,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    renumber_sets,
)


def _with_exercise(
    workout: Workout, index: int, exercise: WorkoutExercise
) -> Workout:
    exercises = list(workout.exercises)
    exercises[index] = exercise
    return replace(workout, exercises=tuple(exercises))


def _with_set(
    workout: Workout, ex_idx: int, set_idx: int, new_set: WorkoutSet
) -> Workout:
    exercise = workout.exercises[ex_idx]
    sets = list(exercise.sets)
    sets[set_idx] = new_set
    return _with_exercise(workout, ex_idx, replace(exercise, sets=tuple(sets)))


def _locate(
    workout: Workout, exercise_id: str, set_index: int
) -> tuple[int, WorkoutSet] | None:
    ex_idx = workout.find_exercise(exercise_id)
    if ex_idx is None:
        return None
    sets = workout.exercises[ex_idx].sets
    if not 0 <= set_index < len(sets):
        return None
    return ex_idx, sets[set_index]


def new_set(order: int) -> WorkoutSet:
    """Return a blank set pre-filled with the default reps."""

    return WorkoutSet(order=order, reps=DEFAULT_REPS, weight=None)


# ----------------------------------------------------------------------
# Set edits
# ----------------------------------------------------------------------


def edit_set(
    workout: Workout,
    exercise_id: str,
    set_index: int,
    weight: float | None,
    reps: int | None,
) -> Workout:
    """Store ``weight`` and ``reps`` for a set.

    Entering a positive weight together with positive reps marks the set as
    completed.  Other values are stored without touching the completion
    flag.  Negative values are rejected.
    """

    found = _locate(workout, exercise_id, set_index)
    if found is None:
        return workout
    if (weight is not None and weight < 0) or (reps is not None and reps < 0):
        return workout
    ex_idx, current = found
    updated = replace(current, weight=weight, reps=reps)
    if updated.has_valid_values:
        updated = replace(updated, is_completed=True)
    return _with_set(workout, ex_idx, set_index, updated)


def toggle_set_completion(workout: Workout, exercise_id: str, set_index: int) -> Workout:
    """Flip the completion flag of a set (guided flow)."""

    found = _locate(workout, exercise_id, set_index)
    if found is None:
        return workout
    ex_idx, current = found
    return _with_set(
        workout, ex_idx, set_index, replace(current, is_completed=not current.is_completed)
    )


def recompute_set_completion(
    workout: Workout, exercise_id: str, set_index: int
) -> Workout:
    """Derive the completion flag from the set's values (table flow).

    A set counts as completed only when both weight and reps are positive,
    so an empty row can never be ticked off.
    """

    found = _locate(workout, exercise_id, set_index)
    if found is None:
        return workout
    ex_idx, current = found
    return _with_set(
        workout,
        ex_idx,
        set_index,
        replace(current, is_completed=current.has_valid_values),
    )


def complete_set(workout: Workout, exercise_index: int, set_index: int) -> Workout:
    """Mark the set at the given positions as completed."""

    if not 0 <= exercise_index < len(workout.exercises):
        return workout
    sets = workout.exercises[exercise_index].sets
    if not 0 <= set_index < len(sets):
        return workout
    return _with_set(
        workout,
        exercise_index,
        set_index,
        replace(sets[set_index], is_completed=True),
    )


def add_set(workout: Workout, exercise_id: str) -> Workout:
    """Append a default set to the exercise."""

    ex_idx = workout.find_exercise(exercise_id)
    if ex_idx is None:
        return workout
    exercise = workout.exercises[ex_idx]
    sets = exercise.sets + (new_set(len(exercise.sets) + 1),)
    return _with_exercise(workout, ex_idx, replace(exercise, sets=sets))


def delete_set(workout: Workout, exercise_id: str, set_index: int) -> Workout:
    """Remove a set and renumber the rest; the last set is never removed."""

    found = _locate(workout, exercise_id, set_index)
    if found is None:
        return workout
    ex_idx, _ = found
    exercise = workout.exercises[ex_idx]
    if len(exercise.sets) <= 1:
        return workout
    remaining = exercise.sets[:set_index] + exercise.sets[set_index + 1:]
    return _with_exercise(
        workout, ex_idx, replace(exercise, sets=renumber_sets(remaining))
    )


# ----------------------------------------------------------------------
# Exercise edits
# ----------------------------------------------------------------------


def add_exercises(workout: Workout, exercises: Iterable[Exercise]) -> Workout:
    """Append one exercise with a single default set per ``exercises`` item."""

    start = len(workout.exercises)
    added = tuple(
        WorkoutExercise(exercise=ex, sets=(new_set(1),), order=start + offset)
        for offset, ex in enumerate(exercises)
    )
    if not added:
        return workout
    return replace(workout, exercises=workout.exercises + added)


def delete_exercise(workout: Workout, index: int) -> Workout:
    if not 0 <= index < len(workout.exercises):
        return workout
    exercises = workout.exercises[:index] + workout.exercises[index + 1:]
    return replace(workout, exercises=exercises)


def reorder_exercises(workout: Workout, index: int) -> Workout:
    """Swap the exercise at ``index`` with the following one."""

    if not 0 <= index < len(workout.exercises) - 1:
        return workout
    exercises = list(workout.exercises)
    first, second = exercises[index], exercises[index + 1]
    exercises[index] = replace(second, order=first.order)
    exercises[index + 1] = replace(first, order=second.order)
    return replace(workout, exercises=tuple(exercises))


# ----------------------------------------------------------------------
# Notes
# ----------------------------------------------------------------------


def set_workout_notes(workout: Workout, notes: str | None) -> Workout:
    return replace(workout, notes=notes or None)


def set_exercise_notes(workout: Workout, exercise_id: str, notes: str | None) -> Workout:
    ex_idx = workout.find_exercise(exercise_id)
    if ex_idx is None:
        return workout
    exercise = workout.exercises[ex_idx]
    return _with_exercise(workout, ex_idx, replace(exercise, notes=notes or None))

"""Creation of a fresh in-progress workout from a template or past session."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from . import DEFAULT_REPS
from .models import Workout, WorkoutExercise, WorkoutSet, new_id


def has_committed_progress(workout: Workout) -> bool:
    """Return ``True`` if any set has weight, reps or is completed."""

    return workout.has_progress


def find_previous_session(source: Workout, history: Iterable[Workout]) -> Workout | None:
    """Return the latest logged workout named like ``source`` that has data."""

    candidates = [
        w
        for w in history
        if not w.is_template
        and w.id != source.id
        and w.name == source.name
        and w.has_progress
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda w: w.date)


def _fresh_set(previous: WorkoutSet, keep_values: bool) -> WorkoutSet:
    if keep_values:
        reps = previous.reps if previous.reps is not None else DEFAULT_REPS
        weight = previous.weight
    else:
        reps, weight = DEFAULT_REPS, None
    return WorkoutSet(
        order=previous.order,
        reps=reps,
        weight=weight,
        duration=previous.duration,
        distance=previous.distance,
        rest_time=previous.rest_time,
        is_completed=False,
    )


def _fresh_exercises(
    source: Workout, keep_values: bool
) -> tuple[WorkoutExercise, ...]:
    return tuple(
        WorkoutExercise(
            exercise=ex.exercise,
            sets=tuple(_fresh_set(s, keep_values) for s in ex.sets),
            notes=ex.notes,
            order=ex.order,
        )
        for ex in source.exercises
    )


def begin_session(
    source: Workout, history: Iterable[Workout], now: datetime | None = None
) -> Workout:
    """Return a new in-progress workout based on ``source``.

    * ``source`` already has logged data: the session is resumed, keeping
      every value and completion flag.
    * Otherwise the most recent logged workout with the same name seeds the
      session with its reps and weights, all sets left uncompleted.
    * With no such workout the session is built from ``source`` with default
      reps and no weight.

    The result always has a new id and the current date.
    """

    now = now or datetime.now()

    if has_committed_progress(source):
        logging.debug("Resuming workout %s (%s)", source.name, source.id)
        return source.copy_with_new_identity(
            date=now, duration=None, is_template=False
        )

    previous = find_previous_session(source, history)
    if previous is not None:
        logging.debug(
            "Seeding %s from previous session %s", source.name, previous.id
        )
        base, keep_values = previous, True
    else:
        logging.debug("Starting %s from template defaults", source.name)
        base, keep_values = source, False

    return Workout(
        id=new_id(),
        name=base.name,
        exercises=_fresh_exercises(base, keep_values),
        date=now,
        duration=None,
        notes=base.notes,
        is_template=False,
    )


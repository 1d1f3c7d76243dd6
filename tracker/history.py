"""Lookup of previous performance for an exercise set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from . import NO_PREVIOUS_DATA
from .models import Exercise, Workout


@dataclass(frozen=True)
class PreviousPerformance:
    weight: float
    reps: int


def previous_performance(
    exercise: Exercise,
    set_order: int,
    history: Iterable[Workout],
    exclude_workout_id: str | None = None,
) -> PreviousPerformance | None:
    """Return the most recent weight and reps logged for ``exercise``.

    Exercises are matched by name because every workout embeds its own copy of
    the exercise.  Workouts are scanned newest first; within a workout the set
    with ``order == set_order`` must have positive reps to count, otherwise
    the next older workout is tried.  A missing weight is reported as ``0``
    so bodyweight sets still show up.
    """

    candidates = sorted(
        (
            w
            for w in history
            if not w.is_template
            and w.id != exclude_workout_id
            and any(ex.exercise.name == exercise.name for ex in w.exercises)
        ),
        key=lambda w: w.date,
        reverse=True,
    )
    for workout in candidates:
        for ex in workout.exercises:
            if ex.exercise.name != exercise.name:
                continue
            for s in ex.sets:
                if s.order == set_order and (s.reps or 0) > 0:
                    return PreviousPerformance(weight=s.weight or 0, reps=s.reps)
    return None


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def format_previous_performance(
    result: PreviousPerformance | None, unit: str = "kg"
) -> str:
    """Return display text such as ``"60 kg x 10"`` or the placeholder."""

    if result is None:
        return NO_PREVIOUS_DATA
    return f"{_format_number(result.weight)} {unit} x {result.reps}"

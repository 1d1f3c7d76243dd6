"""Reconciliation of a finished session with the workout it started from.

Logging weights and reps is what a session is for, so value edits are saved
without asking.  Adding or removing exercises, reordering them or changing
how many sets an exercise has is a structural change; for those the caller
must decide whether the routine should follow the session or stay as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .models import Workout
from .session_store import SessionStore


class FinalizeDecision(Enum):
    UPDATE_ROUTINE = "update_routine"
    KEEP_ORIGINAL = "keep_original"
    CANCEL = "cancel"


class FinalizeOutcome(Enum):
    COMMITTED = "committed"
    NEEDS_DECISION = "needs_decision"
    KEPT_ORIGINAL = "kept_original"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ChangeSet:
    """Structural differences between a session and its original."""

    exercise_count_delta: int = 0
    exercises_changed: bool = False
    sets_changed: bool = False

    @property
    def is_structural(self) -> bool:
        return bool(
            self.exercise_count_delta or self.exercises_changed or self.sets_changed
        )

    def describe(self) -> str:
        """Return the message shown when asking the user what to keep."""

        delta = self.exercise_count_delta
        if delta > 0:
            plural = "" if delta == 1 else "s"
            return f"You added {delta} exercise{plural} to this workout."
        if delta < 0:
            plural = "" if delta == -1 else "s"
            return f"You removed {-delta} exercise{plural} from this workout."
        if self.is_structural:
            return "You made changes to this workout (reordered exercises or changed sets)."
        return ""


@dataclass(frozen=True)
class FinalizeResult:
    outcome: FinalizeOutcome
    changes: ChangeSet
    workout: Workout | None = None


def detect_changes(current: Workout, original: Workout) -> ChangeSet:
    """Compare the structure of ``current`` against ``original``.

    Exercises are identified by their embedded catalog entry.  Per-set values
    are ignored; only set counts matter.
    """

    current_ids = [ex.exercise.id for ex in current.exercises]
    original_ids = [ex.exercise.id for ex in original.exercises]
    sets_changed = any(
        len(cur.sets) != len(orig.sets)
        for cur, orig in zip(current.exercises, original.exercises)
    )
    return ChangeSet(
        exercise_count_delta=len(current_ids) - len(original_ids),
        exercises_changed=current_ids != original_ids,
        sets_changed=sets_changed,
    )


def commit(
    current: Workout, original: Workout, store: SessionStore, name: str | None = None
) -> Workout:
    """Write ``current`` over the stored ``original`` or append it."""

    workout_name = name or current.name
    updated = store.update_workout_fields(
        original.id,
        name=workout_name,
        exercises=current.exercises,
        duration=current.duration,
        notes=current.notes,
        is_template=current.is_template,
    )
    if updated:
        logging.info("Updated workout %s (%s)", workout_name, original.id)
        return store.get_workout(original.id)
    workout = replace(current, name=workout_name)
    store.save_workout(workout)
    logging.info("Saved new workout %s (%s)", workout_name, workout.id)
    return workout


def finalize(
    current: Workout,
    original: Workout,
    store: SessionStore,
    decision: FinalizeDecision | None = None,
    name: str | None = None,
) -> FinalizeResult:
    """Save a finished session according to how it differs from ``original``.

    Without structural changes the session is committed straight away and
    ``decision`` is ignored.  With structural changes and no ``decision`` the
    result is :attr:`FinalizeOutcome.NEEDS_DECISION` and nothing is saved.
    ``name`` optionally renames the saved workout.
    """

    changes = detect_changes(current, original)
    if not changes.is_structural:
        workout = commit(current, original, store, name)
        store.clear_current()
        return FinalizeResult(FinalizeOutcome.COMMITTED, changes, workout)

    if decision is None:
        logging.info("Workout %s changed structure: %s", current.name, changes)
        return FinalizeResult(FinalizeOutcome.NEEDS_DECISION, changes)

    if decision is FinalizeDecision.UPDATE_ROUTINE:
        workout = commit(current, original, store, name)
        store.replace_routine_workout(original.id, workout)
        store.clear_current()
        return FinalizeResult(FinalizeOutcome.COMMITTED, changes, workout)

    if decision is FinalizeDecision.KEEP_ORIGINAL:
        workout = replace(original, name=name or current.name)
        store.save_workout(workout)
        store.clear_current()
        logging.info("Kept original structure of %s (%s)", workout.name, workout.id)
        return FinalizeResult(FinalizeOutcome.KEPT_ORIGINAL, changes, workout)

    logging.info("Finalizing %s cancelled", current.name)
    return FinalizeResult(FinalizeOutcome.CANCELLED, changes)

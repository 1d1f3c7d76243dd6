"""Entity model for workouts, exercises and sets.

Every entity is a frozen dataclass.  Collections are stored as tuples so a
workout handed to one component can never be changed behind the back of
another; updates are made with :func:`dataclasses.replace`, producing a new
set, a new exercise and finally a new workout.  Each entity can be converted
to and from plain ``dict`` structures for JSON storage.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Iterable


def new_id() -> str:
    """Return a fresh identifier for a model instance."""

    return str(uuid.uuid4())


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class ExerciseCategory(Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    FLEXIBILITY = "Flexibility"
    SPORTS = "Sports"
    OTHER = "Other"


class MuscleGroup(Enum):
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    FOREARMS = "Forearms"
    ABS = "Abs"
    OBLIQUES = "Obliques"
    QUADS = "Quads"
    HAMSTRINGS = "Hamstrings"
    GLUTES = "Glutes"
    CALVES = "Calves"
    FULL_BODY = "Full Body"


class Equipment(Enum):
    BARBELL = "Barbell"
    DUMBBELL = "Dumbbell"
    KETTLEBELL = "Kettlebell"
    BODYWEIGHT = "Bodyweight"
    MACHINE = "Machine"
    CABLE = "Cable"
    RESISTANCE_BAND = "Resistance Band"
    NONE = "No Equipment"


class FitnessGoal(Enum):
    WEIGHT_LOSS = "Weight Loss"
    MUSCLE_GAIN = "Muscle Gain"
    STRENGTH = "Strength"
    ENDURANCE = "Endurance"
    GENERAL_FITNESS = "General Fitness"
    COMPETITION = "Competition"


# ----------------------------------------------------------------------
# Exercises and sets
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Exercise:
    """A catalog entry.

    Workouts embed a snapshot of the exercise, so later edits to a custom
    exercise never change workouts that were already logged.
    """

    name: str
    category: ExerciseCategory = ExerciseCategory.STRENGTH
    muscle_groups: tuple[MuscleGroup, ...] = ()
    equipment: Equipment | None = None
    instructions: str | None = None
    is_custom: bool = False
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "muscle_groups", tuple(self.muscle_groups))

    @property
    def primary_muscle_group(self) -> MuscleGroup | None:
        return self.muscle_groups[0] if self.muscle_groups else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "muscle_groups": [m.value for m in self.muscle_groups],
            "equipment": self.equipment.value if self.equipment else None,
            "instructions": self.instructions,
            "is_custom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        equipment = data.get("equipment")
        return cls(
            id=data["id"],
            name=data["name"],
            category=ExerciseCategory(data.get("category", "Strength")),
            muscle_groups=tuple(MuscleGroup(m) for m in data.get("muscle_groups", [])),
            equipment=Equipment(equipment) if equipment else None,
            instructions=data.get("instructions"),
            is_custom=data.get("is_custom", False),
        )


@dataclass(frozen=True)
class WorkoutSet:
    """One planned or performed set.

    ``order`` is the 1-based position of the set within its exercise.
    """

    order: int
    reps: int | None = None
    weight: float | None = None
    duration: float | None = None
    distance: float | None = None
    rest_time: float | None = None
    is_completed: bool = False
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if self.order < 1:
            raise ValueError(f"Set order must be 1 or greater, got {self.order}")
        if self.reps is not None and self.reps < 0:
            raise ValueError("Reps cannot be negative")
        if self.weight is not None and self.weight < 0:
            raise ValueError("Weight cannot be negative")

    @property
    def has_progress(self) -> bool:
        """Return ``True`` if the set shows any logged data."""

        return (self.weight or 0) > 0 or (self.reps or 0) > 0 or self.is_completed

    @property
    def has_valid_values(self) -> bool:
        """Return ``True`` when both weight and reps are positive."""

        return (self.weight or 0) > 0 and (self.reps or 0) > 0

    @property
    def volume(self) -> float:
        if self.weight is None or self.reps is None:
            return 0.0
        return self.weight * self.reps

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order": self.order,
            "reps": self.reps,
            "weight": self.weight,
            "duration": self.duration,
            "distance": self.distance,
            "rest_time": self.rest_time,
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        return cls(
            id=data["id"],
            order=data["order"],
            reps=data.get("reps"),
            weight=data.get("weight"),
            duration=data.get("duration"),
            distance=data.get("distance"),
            rest_time=data.get("rest_time"),
            is_completed=data.get("is_completed", False),
        )


def renumber_sets(sets: Iterable[WorkoutSet]) -> tuple[WorkoutSet, ...]:
    """Return ``sets`` with ``order`` values set to ``1..count``."""

    return tuple(
        s if s.order == pos else replace(s, order=pos)
        for pos, s in enumerate(sets, 1)
    )


@dataclass(frozen=True)
class WorkoutExercise:
    """An exercise instance inside a workout."""

    exercise: Exercise
    sets: tuple[WorkoutSet, ...] = ()
    notes: str | None = None
    order: int = 0
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sets", tuple(self.sets))

    @property
    def completed_set_count(self) -> int:
        return sum(1 for s in self.sets if s.is_completed)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "exercise": self.exercise.to_dict(),
            "sets": [s.to_dict() for s in self.sets],
            "notes": self.notes,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutExercise":
        return cls(
            id=data["id"],
            exercise=Exercise.from_dict(data["exercise"]),
            sets=tuple(WorkoutSet.from_dict(s) for s in data.get("sets", [])),
            notes=data.get("notes"),
            order=data.get("order", 0),
        )


# ----------------------------------------------------------------------
# Workouts and routines
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Workout:
    """A single workout, either a template or a logged session."""

    name: str
    exercises: tuple[WorkoutExercise, ...] = ()
    date: datetime = field(default_factory=datetime.now)
    duration: float | None = None
    notes: str | None = None
    is_template: bool = False
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "exercises", tuple(self.exercises))

    @property
    def has_progress(self) -> bool:
        """Return ``True`` if any set carries weight, reps or completion."""

        return any(s.has_progress for ex in self.exercises for s in ex.sets)

    @property
    def set_count(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def completed_set_count(self) -> int:
        return sum(ex.completed_set_count for ex in self.exercises)

    def find_exercise(self, exercise_id: str) -> int | None:
        """Return the index of the exercise with ``exercise_id`` or ``None``."""

        for idx, ex in enumerate(self.exercises):
            if ex.id == exercise_id:
                return idx
        return None

    def copy_with_new_identity(self, **changes: Any) -> "Workout":
        """Return a structural copy with fresh ids for every nested entity.

        The embedded exercise snapshots keep their ids since they identify the
        catalog entry, not this workout.
        """

        exercises = tuple(
            replace(
                ex,
                id=new_id(),
                sets=tuple(replace(s, id=new_id()) for s in ex.sets),
            )
            for ex in self.exercises
        )
        return replace(self, id=new_id(), exercises=exercises, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "date": self.date.isoformat(),
            "duration": self.duration,
            "notes": self.notes,
            "is_template": self.is_template,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        return cls(
            id=data["id"],
            name=data["name"],
            exercises=tuple(
                WorkoutExercise.from_dict(ex) for ex in data.get("exercises", [])
            ),
            date=_parse_date(data["date"]),
            duration=data.get("duration"),
            notes=data.get("notes"),
            is_template=data.get("is_template", False),
        )


@dataclass(frozen=True)
class RoutineDay:
    day_number: int
    workout: Workout | None = None
    is_rest_day: bool = False

    def to_dict(self) -> dict:
        return {
            "day_number": self.day_number,
            "workout": self.workout.to_dict() if self.workout else None,
            "is_rest_day": self.is_rest_day,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RoutineDay":
        workout = data.get("workout")
        return cls(
            day_number=data["day_number"],
            workout=Workout.from_dict(workout) if workout else None,
            is_rest_day=data.get("is_rest_day", False),
        )


@dataclass(frozen=True)
class Routine:
    """A named schedule of workout and rest days."""

    name: str
    days: tuple[RoutineDay, ...] = ()
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", tuple(self.days))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "days": [d.to_dict() for d in self.days],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Routine":
        return cls(
            id=data["id"],
            name=data["name"],
            days=tuple(RoutineDay.from_dict(d) for d in data.get("days", [])),
        )


# ----------------------------------------------------------------------
# User profile
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class User:
    name: str
    email: str = ""
    weight: float | None = None
    height: float | None = None
    date_of_birth: datetime | None = None
    fitness_goals: tuple[FitnessGoal, ...] = ()
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fitness_goals", tuple(self.fitness_goals))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "weight": self.weight,
            "height": self.height,
            "date_of_birth": (
                self.date_of_birth.isoformat() if self.date_of_birth else None
            ),
            "fitness_goals": [g.value for g in self.fitness_goals],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        dob = data.get("date_of_birth")
        return cls(
            id=data["id"],
            name=data["name"],
            email=data.get("email", ""),
            weight=data.get("weight"),
            height=data.get("height"),
            date_of_birth=_parse_date(dob) if dob else None,
            fitness_goals=tuple(FitnessGoal(g) for g in data.get("fitness_goals", [])),
        )

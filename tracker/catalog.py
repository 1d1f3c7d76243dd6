"""Exercise catalog and search."""

from __future__ import annotations

from .models import Equipment, Exercise, ExerciseCategory, MuscleGroup

_S = ExerciseCategory.STRENGTH
_C = ExerciseCategory.CARDIO
_M = MuscleGroup
_E = Equipment

# (name, category, muscle groups, equipment)
_SEED = [
    # Chest
    ("Bench Press", _S, (_M.CHEST, _M.TRICEPS, _M.SHOULDERS), _E.BARBELL),
    ("Push-ups", _S, (_M.CHEST, _M.TRICEPS, _M.SHOULDERS), _E.BODYWEIGHT),
    ("Dumbbell Press", _S, (_M.CHEST, _M.TRICEPS, _M.SHOULDERS), _E.DUMBBELL),
    ("Incline Bench Press", _S, (_M.CHEST, _M.TRICEPS, _M.SHOULDERS), _E.BARBELL),
    ("Chest Fly", _S, (_M.CHEST,), _E.DUMBBELL),
    # Back
    ("Deadlift", _S, (_M.BACK, _M.GLUTES, _M.HAMSTRINGS), _E.BARBELL),
    ("Pull-ups", _S, (_M.BACK, _M.BICEPS), _E.BODYWEIGHT),
    ("Bent-over Row", _S, (_M.BACK, _M.BICEPS), _E.BARBELL),
    ("Lat Pulldown", _S, (_M.BACK, _M.BICEPS), _E.MACHINE),
    ("T-Bar Row", _S, (_M.BACK, _M.BICEPS), _E.BARBELL),
    # Legs
    ("Squat", _S, (_M.QUADS, _M.GLUTES, _M.HAMSTRINGS), _E.BARBELL),
    ("Lunges", _S, (_M.QUADS, _M.GLUTES, _M.HAMSTRINGS), _E.BODYWEIGHT),
    ("Leg Press", _S, (_M.QUADS, _M.GLUTES), _E.MACHINE),
    ("Romanian Deadlift", _S, (_M.HAMSTRINGS, _M.GLUTES), _E.BARBELL),
    ("Calf Raises", _S, (_M.CALVES,), _E.BODYWEIGHT),
    # Shoulders
    ("Overhead Press", _S, (_M.SHOULDERS, _M.TRICEPS), _E.BARBELL),
    ("Lateral Raises", _S, (_M.SHOULDERS,), _E.DUMBBELL),
    ("Front Raises", _S, (_M.SHOULDERS,), _E.DUMBBELL),
    ("Face Pulls", _S, (_M.SHOULDERS, _M.BACK), _E.CABLE),
    # Arms
    ("Bicep Curls", _S, (_M.BICEPS,), _E.DUMBBELL),
    ("Tricep Dips", _S, (_M.TRICEPS, _M.CHEST), _E.BODYWEIGHT),
    ("Hammer Curls", _S, (_M.BICEPS, _M.FOREARMS), _E.DUMBBELL),
    ("Close-grip Bench Press", _S, (_M.TRICEPS, _M.CHEST), _E.BARBELL),
    # Core
    ("Plank", _S, (_M.ABS, _M.OBLIQUES), _E.BODYWEIGHT),
    ("Crunches", _S, (_M.ABS,), _E.BODYWEIGHT),
    ("Russian Twists", _S, (_M.ABS, _M.OBLIQUES), _E.BODYWEIGHT),
    ("Mountain Climbers", _C, (_M.ABS, _M.FULL_BODY), _E.BODYWEIGHT),
    # Cardio
    ("Running", _C, (_M.FULL_BODY,), _E.NONE),
    ("Cycling", _C, (_M.QUADS, _M.CALVES), _E.NONE),
    ("Rowing", _C, (_M.FULL_BODY,), _E.MACHINE),
    ("Burpees", _C, (_M.FULL_BODY,), _E.BODYWEIGHT),
]


def default_exercises() -> list[Exercise]:
    """Return the built-in exercise list."""

    return [
        Exercise(name=name, category=cat, muscle_groups=groups, equipment=equip)
        for name, cat, groups, equip in _SEED
    ]


class ExerciseCatalog:
    """Read-mostly collection of :class:`Exercise` entries."""

    def __init__(self, exercises: list[Exercise] | None = None) -> None:
        self._exercises: list[Exercise] = list(exercises or [])

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self):
        return iter(self._exercises)

    @property
    def exercises(self) -> list[Exercise]:
        return list(self._exercises)

    def add(self, exercise: Exercise) -> None:
        self._exercises.append(exercise)

    def get(self, name: str) -> Exercise | None:
        """Return the first exercise called ``name`` (case-insensitive)."""

        wanted = name.casefold()
        for ex in self._exercises:
            if ex.name.casefold() == wanted:
                return ex
        return None

    def search(self, query: str) -> list[Exercise]:
        """Return exercises whose name or a muscle group contains ``query``.

        Matching is case-insensitive; an empty query returns everything.
        """

        needle = query.strip().casefold()
        if not needle:
            return self.exercises
        return [
            ex
            for ex in self._exercises
            if needle in ex.name.casefold()
            or any(needle in m.value.casefold() for m in ex.muscle_groups)
        ]

    def by_category(self, category: ExerciseCategory) -> list[Exercise]:
        return [ex for ex in self._exercises if ex.category is category]


def default_catalog() -> ExerciseCatalog:
    return ExerciseCatalog(default_exercises())

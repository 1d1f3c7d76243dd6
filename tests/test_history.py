from datetime import timedelta

from tracker.models import Exercise
from tracker.history import (
    PreviousPerformance,
    format_previous_performance,
    previous_performance,
)


def test_returns_latest_matching_set(make_push_day, last_week):
    bench = last_week.exercises[0].exercise
    assert previous_performance(bench, 1, [last_week]) == PreviousPerformance(60, 10)
    assert previous_performance(bench, 2, [last_week]) == PreviousPerformance(70, 8)

    newer = make_push_day(
        values={(0, 1): (62.5, 9, True)}, date=last_week.date + timedelta(days=2)
    )
    assert previous_performance(bench, 1, [last_week, newer]) == PreviousPerformance(
        62.5, 9
    )


def test_falls_back_to_older_workouts(make_push_day, last_week):
    bench = last_week.exercises[0].exercise
    # newer workout has no reps for set 2
    newer = make_push_day(
        values={(0, 1): (65, 8, True)}, date=last_week.date + timedelta(days=2)
    )
    assert previous_performance(bench, 2, [newer, last_week]) == PreviousPerformance(
        70, 8
    )


def test_excludes_current_workout_and_templates(make_push_day, last_week):
    bench = last_week.exercises[0].exercise
    template = make_push_day(
        values={(0, 1): (200, 1, False)},
        is_template=True,
        date=last_week.date + timedelta(days=5),
    )
    assert previous_performance(
        bench, 1, [last_week, template], exclude_workout_id=last_week.id
    ) is None


def test_bodyweight_set_reports_zero(make_push_day, catalog):
    workout = make_push_day(values={(1, 1): (None, 15, True)})
    result = previous_performance(catalog.get("Dumbbell Press"), 1, [workout])
    assert result == PreviousPerformance(0, 15)


def test_matches_by_name(make_push_day, catalog, last_week):
    snapshot = Exercise(name="Bench Press")
    assert snapshot.id != last_week.exercises[0].exercise.id
    assert previous_performance(snapshot, 1, [last_week]).weight == 60
    assert previous_performance(catalog.get("Squat"), 1, [last_week]) is None


def test_format_previous_performance():
    assert format_previous_performance(None) == "-"
    assert format_previous_performance(PreviousPerformance(60, 10)) == "60 kg x 10"
    assert format_previous_performance(PreviousPerformance(22.5, 8), "lbs") == "22.5 lbs x 8"

import pytest

from tracker import editor


def _orders(workout, ex_idx=0):
    return [s.order for s in workout.exercises[ex_idx].sets]


def test_edit_set_marks_completion(make_push_day):
    workout = make_push_day()
    bench = workout.exercises[0]

    edited = editor.edit_set(workout, bench.id, 0, 60, 10)
    first = edited.exercises[0].sets[0]
    assert (first.weight, first.reps, first.is_completed) == (60, 10, True)
    # input untouched
    assert workout.exercises[0].sets[0].weight is None


def test_edit_set_without_weight_leaves_completion(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id

    edited = editor.edit_set(workout, bench_id, 0, None, 10)
    assert not edited.exercises[0].sets[0].is_completed

    done = make_push_day(values={(0, 1): (60, 10, True)})
    edited = editor.edit_set(done, done.exercises[0].id, 0, 0, 10)
    assert edited.exercises[0].sets[0].is_completed
    assert edited.exercises[0].sets[0].weight == 0


def test_edit_set_rejects_negative_values(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id
    assert editor.edit_set(workout, bench_id, 0, -5, 10) == workout
    assert editor.edit_set(workout, bench_id, 0, 5, -1) == workout


def test_toggle_and_recompute_differ(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id

    toggled = editor.toggle_set_completion(workout, bench_id, 0)
    assert toggled.exercises[0].sets[0].is_completed
    toggled = editor.toggle_set_completion(toggled, bench_id, 0)
    assert not toggled.exercises[0].sets[0].is_completed

    # an empty row cannot be completed in the table flow
    marked = editor.toggle_set_completion(workout, bench_id, 0)
    recomputed = editor.recompute_set_completion(marked, bench_id, 0)
    assert not recomputed.exercises[0].sets[0].is_completed

    filled = make_push_day(values={(0, 1): (60, 10, False)})
    recomputed = editor.recompute_set_completion(filled, filled.exercises[0].id, 0)
    assert recomputed.exercises[0].sets[0].is_completed


def test_add_set_appends_default(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id

    updated = editor.add_set(workout, bench_id)
    added = updated.exercises[0].sets[-1]
    assert _orders(updated) == [1, 2, 3, 4]
    assert (added.reps, added.weight, added.is_completed) == (10, None, False)


def test_delete_set_renumbers(make_push_day):
    workout = make_push_day(values={(0, 3): (80, 6, True)})
    bench_id = workout.exercises[0].id
    last_id = workout.exercises[0].sets[2].id

    updated = editor.delete_set(workout, bench_id, 1)
    assert _orders(updated) == [1, 2]
    assert updated.exercises[0].sets[1].id == last_id
    assert updated.exercises[0].sets[1].weight == 80


def test_delete_set_keeps_last_set(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id
    workout = editor.delete_set(workout, bench_id, 0)
    workout = editor.delete_set(workout, bench_id, 0)
    assert len(workout.exercises[0].sets) == 1
    assert editor.delete_set(workout, bench_id, 0) == workout


def test_order_stays_contiguous_after_mixed_edits(make_push_day):
    workout = make_push_day()
    bench_id = workout.exercises[0].id
    for op in (
        lambda w: editor.add_set(w, bench_id),
        lambda w: editor.delete_set(w, bench_id, 0),
        lambda w: editor.add_set(w, bench_id),
        lambda w: editor.delete_set(w, bench_id, 2),
        lambda w: editor.add_set(w, bench_id),
    ):
        workout = op(workout)
        assert _orders(workout) == list(range(1, len(workout.exercises[0].sets) + 1))


def test_add_exercises(make_push_day, catalog):
    workout = make_push_day()
    updated = editor.add_exercises(
        workout, [catalog.get("Squat"), catalog.get("Plank")]
    )
    assert [ex.exercise.name for ex in updated.exercises[2:]] == ["Squat", "Plank"]
    assert [ex.order for ex in updated.exercises[2:]] == [2, 3]
    assert all(len(ex.sets) == 1 for ex in updated.exercises[2:])
    assert updated.exercises[2].sets[0].reps == 10
    assert editor.add_exercises(workout, []) == workout


def test_delete_and_reorder_exercises(make_push_day):
    workout = make_push_day()
    first, second = workout.exercises

    swapped = editor.reorder_exercises(workout, 0)
    assert [ex.id for ex in swapped.exercises] == [second.id, first.id]
    assert [ex.order for ex in swapped.exercises] == [first.order, second.order]
    assert editor.reorder_exercises(workout, 1) == workout

    removed = editor.delete_exercise(workout, 0)
    assert [ex.id for ex in removed.exercises] == [second.id]


def test_notes(make_push_day):
    workout = make_push_day()
    updated = editor.set_workout_notes(workout, "felt strong")
    assert updated.notes == "felt strong"
    assert editor.set_workout_notes(updated, "").notes is None

    bench_id = workout.exercises[0].id
    updated = editor.set_exercise_notes(workout, bench_id, "pause reps")
    assert updated.exercises[0].notes == "pause reps"


@pytest.mark.parametrize(
    "op",
    [
        lambda w: editor.edit_set(w, "missing", 0, 60, 10),
        lambda w: editor.edit_set(w, w.exercises[0].id, 9, 60, 10),
        lambda w: editor.toggle_set_completion(w, "missing", 0),
        lambda w: editor.toggle_set_completion(w, w.exercises[0].id, -1),
        lambda w: editor.recompute_set_completion(w, "missing", 0),
        lambda w: editor.complete_set(w, 5, 0),
        lambda w: editor.complete_set(w, 0, 5),
        lambda w: editor.add_set(w, "missing"),
        lambda w: editor.delete_set(w, "missing", 0),
        lambda w: editor.delete_set(w, w.exercises[0].id, 3),
        lambda w: editor.delete_exercise(w, 2),
        lambda w: editor.delete_exercise(w, -1),
        lambda w: editor.reorder_exercises(w, 5),
        lambda w: editor.reorder_exercises(w, -1),
        lambda w: editor.set_exercise_notes(w, "missing", "x"),
    ],
)
def test_invalid_targets_are_noops(make_push_day, op):
    workout = make_push_day(values={(0, 1): (60, 10, True)})
    assert op(workout) == workout

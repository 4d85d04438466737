"""Workout commands: start, status, log-set, undo, next, quick-add."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import EVENT_WORKOUT_FINISHED
from ...core.models import HistoryEntry
from ...core.session import current_exercise
from ...io.serializers import set_entry_to_dict, workout_session_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, day_at, get_tracker, handle_errors


def _print_finished(entry: HistoryEntry) -> None:
    views.console.print()
    views.print_success(f"Workout complete: {entry.day_name}")
    views.print_info(f"Total volume: {views.fmt_weight(entry.volume)}kg")


@app.command()
def start(
    day_number: Annotated[int, typer.Argument(help="Day # (see 'days')")],
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Workout date (YYYY-MM-DD, default: today)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Start a workout from a training day.

    An unfinished workout is replaced.
    """
    tracker = get_tracker(data_dir)
    previous = tracker.state.current_workout

    with handle_errors():
        day = day_at(tracker, day_number)
        workout = tracker.start(day.id, today=date)

    if previous is not None:
        views.print_warning(f"Discarded unfinished workout: {previous.day_name}")
    views.print_success(f"Started {workout.day_name}")
    views.console.print()
    views.print_workout(tracker.state.current_workout, tracker.state.history)


@app.command()
def status(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the active workout with last time's numbers for the next set.
    """
    tracker = get_tracker(data_dir)
    workout = tracker.state.current_workout

    if json_out:
        suggestion = tracker.suggest_next_set()
        print(json.dumps({
            "workout": workout_session_to_dict(workout) if workout is not None else None,
            "suggested_set": set_entry_to_dict(suggestion) if suggestion is not None else None,
        }, indent=2))
        return

    views.print_workout(workout, tracker.state.history)


@app.command("log-set")
def log_set(
    weight: Annotated[
        Optional[float],
        typer.Argument(help="Weight (default: same set last time)"),
    ] = None,
    reps: Annotated[
        Optional[int],
        typer.Argument(help="Reps (default: same set last time)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Log a set on the current exercise.

    Omitted values are taken from the same set of this exercise last time.

      strain log-set 100 5
    """
    tracker = get_tracker(data_dir)

    suggestion = tracker.suggest_next_set()
    if suggestion is not None:
        weight = suggestion.weight if weight is None else weight
        reps = suggestion.reps if reps is None else reps

    before = {l.id: (l.weight, l.reps) for l in tracker.state.best_lifts}
    with handle_errors():
        entry = tracker.log_set(weight, reps)

    exercise = current_exercise(tracker.state)
    set_number = len(exercise.sets) if exercise is not None else 0
    views.print_success(
        f"Logged set {set_number}: {views.fmt_weight(entry.weight)}kg x {entry.reps}"
    )
    for lift in tracker.state.best_lifts:
        if before.get(lift.id) != (lift.weight, lift.reps):
            views.print_info(
                f"New best lift: {lift.exercise} {views.fmt_weight(lift.weight)}kg × {lift.reps}"
            )


@app.command()
def undo(data_dir: DataDirOption = None) -> None:
    """
    Remove the last logged set of the current exercise.

    A best lift raised by the removed set is not lowered again.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        entry = tracker.undo_last_set()
    views.print_success(f"Removed set: {views.fmt_weight(entry.weight)}kg x {entry.reps}")


@app.command("next")
def next_exercise(data_dir: DataDirOption = None) -> None:
    """
    Move to the next exercise, or finish the workout after the last one.
    """
    tracker = get_tracker(data_dir)
    tracker.subscribe(EVENT_WORKOUT_FINISHED, _print_finished)

    with handle_errors():
        entry = tracker.advance()

    if entry is None:
        views.print_workout(tracker.state.current_workout, tracker.state.history)


@app.command("quick-add")
def quick_add(
    name: Annotated[str, typer.Argument(help="Exercise name")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Add an exercise to the running workout only (the day is not changed).
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        exercise = tracker.quick_add_exercise(name)

    if exercise is None:
        views.print_warning("No active workout.")
        return
    views.print_success(f"Added {exercise.name!r} to this workout")

"""Day commands: days, add-day, rename-day, delete-day and exercise editing."""

import json
from typing import Annotated, Optional

import typer

from ...core.errors import NotFoundError
from ...core.metrics import all_exercise_names
from ...core.models import Day, Exercise
from ...io.serializers import day_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, day_at, get_tracker, handle_errors

DayArg = Annotated[int, typer.Argument(help="Day # (see 'days')")]


@app.command("days")
def list_days(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    List training days and their exercises.
    """
    tracker = get_tracker(data_dir)

    if json_out:
        print(json.dumps([day_to_dict(d) for d in tracker.state.days], indent=2))
        return

    views.print_days(tracker.state.days)


@app.command("add-day")
def add_day(
    name: Annotated[str, typer.Argument(help="Day name, e.g. 'Pull Day'")],
    exercises: Annotated[
        Optional[list[str]],
        typer.Option("--exercise", "-e", help="Exercise to add (repeatable)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Create a training day.

      strain add-day "Leg Day" -e Squat -e "Romanian Deadlift"
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = tracker.add_day(name, exercises or [])
    views.print_success(f"Added day #{len(tracker.state.days)}: {day.name}")


@app.command("rename-day")
def rename_day(
    day_number: DayArg,
    name: Annotated[str, typer.Argument(help="New day name")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Rename a training day.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = day_at(tracker, day_number)
        old_name = day.name
        tracker.rename_day(day.id, name)
    views.print_success(f"Renamed {old_name!r} to {day.name!r}")


@app.command("delete-day")
def delete_day(
    day_number: DayArg,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Delete a training day. History and any running workout are kept.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = day_at(tracker, day_number)

    if not force and not views.confirm_action(f'Delete "{day.name}"?'):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    with handle_errors():
        tracker.delete_day(day.id)
    views.print_success(f"Deleted day: {day.name}")


@app.command("add-exercise")
def add_exercise(
    day_number: DayArg,
    name: Annotated[str, typer.Argument(help="Exercise name")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Add an exercise to the end of a training day.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = day_at(tracker, day_number)
        exercise = tracker.add_exercise(day.id, name)
    views.print_success(f"Added {exercise.name!r} to {day.name}")


def _exercise_at(day: Day, number: int) -> Exercise:
    if number < 1 or number > len(day.exercises):
        raise NotFoundError(f"{day.name!r} has no exercise #{number}")
    return day.exercises[number - 1]


@app.command("remove-exercise")
def remove_exercise(
    day_number: DayArg,
    exercise_number: Annotated[int, typer.Argument(help="Exercise # within the day")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Remove an exercise from a training day.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = day_at(tracker, day_number)
        exercise = _exercise_at(day, exercise_number)
        tracker.remove_exercise(day.id, exercise.id)
    views.print_success(f"Removed {exercise.name!r} from {day.name}")


@app.command("rename-exercise")
def rename_exercise(
    day_number: DayArg,
    exercise_number: Annotated[int, typer.Argument(help="Exercise # within the day")],
    name: Annotated[str, typer.Argument(help="New exercise name")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Rename an exercise in a training day.

    Best lifts follow exercise names, so a lift tracking the old name stops
    updating until it is re-tracked.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        day = day_at(tracker, day_number)
        exercise = _exercise_at(day, exercise_number)
        old_name = exercise.name
        tracker.rename_exercise(day.id, exercise.id, name)

    views.print_success(f"Renamed {old_name!r} to {exercise.name!r}")
    orphaned = old_name not in all_exercise_names(tracker.state.days)
    if orphaned and any(l.exercise == old_name for l in tracker.state.best_lifts):
        views.print_warning(
            f"Best lift for {old_name!r} no longer matches any exercise. Use 'retrack' to update it."
        )

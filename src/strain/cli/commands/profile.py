"""Profile commands: init, best lifts, theme, profile name and reset."""

import json
from typing import Annotated

import typer

from ...core.metrics import all_exercise_names
from ...io.serializers import best_lift_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, best_lift_at, get_tracker, handle_errors

LiftArg = Annotated[int, typer.Argument(help="Best lift # (see 'best-lifts')")]


@app.command()
def init(data_dir: DataDirOption = None) -> None:
    """
    Create the data directory and save the starting state.

    Existing data is left alone.
    """
    tracker = get_tracker(data_dir)
    if tracker.store.exists():
        views.print_info(f"Data already exists: {tracker.store.state_path}")
        return

    tracker.save()
    views.print_success(f"Created {tracker.store.state_path}")
    views.print_days(tracker.state.days)


@app.command("best-lifts")
def best_lifts(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show tracked best lifts.
    """
    tracker = get_tracker(data_dir)

    if json_out:
        print(json.dumps([best_lift_to_dict(lift) for lift in tracker.state.best_lifts], indent=2))
        return

    views.print_best_lifts(tracker.state.best_lifts)


@app.command()
def track(
    exercise: Annotated[str, typer.Argument(help="Exact exercise name from any day")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Start tracking the best lift for an exercise.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        lift = tracker.track_exercise(exercise)
    views.print_success(f"Tracking best lift for {lift.exercise}")


@app.command()
def retrack(
    lift_number: LiftArg,
    exercise: Annotated[str, typer.Argument(help="Exact exercise name from any day")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Point a best-lift slot at another exercise. Its record restarts at zero.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        lift = best_lift_at(tracker, lift_number)
        tracker.retrack_exercise(lift.id, exercise)
    views.print_success(f"Best lift #{lift_number} now tracks {lift.exercise}")


@app.command()
def untrack(
    lift_number: LiftArg,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Stop tracking a best lift.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        lift = best_lift_at(tracker, lift_number)

    if not force and not views.confirm_action("Remove this lift from Best Lifts?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    with handle_errors():
        tracker.untrack_exercise(lift.id)
    views.print_success(f"Stopped tracking {lift.exercise}")


@app.command()
def exercises(data_dir: DataDirOption = None) -> None:
    """
    List every exercise name that can be tracked.
    """
    tracker = get_tracker(data_dir)
    names = all_exercise_names(tracker.state.days)
    if not names:
        views.print_warning("No exercises available. Add some to your days first.")
        return
    for name in names:
        views.console.print(name)


@app.command()
def theme(
    name: Annotated[str, typer.Argument(help="Theme name, e.g. dark | blue | orange")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Choose the colour theme saved in the profile.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        tracker.set_theme(name)
    views.print_success(f"Theme set to {name}")


@app.command("profile-name")
def profile_name(
    name: Annotated[str, typer.Argument(help="Profile name")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Set the local profile name.
    """
    tracker = get_tracker(data_dir)
    with handle_errors():
        tracker.set_profile_name(name)
    views.print_success(f"Profile saved locally: {tracker.state.profile.name}")


@app.command()
def reset(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Delete ALL saved data.
    """
    tracker = get_tracker(data_dir)

    if not force and not views.confirm_action("Are you sure you want to reset ALL data?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    tracker.reset()
    views.print_success("All data removed.")

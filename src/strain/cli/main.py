"""
CLI entry point using Typer.

Provides commands for the workout tracker:
- init / days / add-day / …: manage training days
- start / status / log-set / undo / next / quick-add: run a workout
- history / volume: review completed workouts
- best-lifts / track / retrack / untrack: best-lift records
- theme / profile-name / reset: profile and data
"""

import logging
from typing import Annotated

import typer

from . import views
from .app import DataDirOption, app, get_tracker

# Register commands on the shared app
from .commands import days, profile, progress, workout  # noqa: F401


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Personal workout tracker. Run without a command to see the home screen.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if ctx.invoked_subcommand is not None:
        return  # a sub-command handles it

    ctx.invoke(home)


@app.command()
def home(data_dir: DataDirOption = None) -> None:
    """
    Show training days, best lifts and the most recent workout.
    """
    tracker = get_tracker(data_dir)
    views.console.print()
    views.console.print("[bold cyan]strain[/bold cyan] workout tracker")
    views.console.print()
    views.print_home(tracker.state)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

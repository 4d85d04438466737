"""Shared Typer app object, shared option types, and tracker utilities."""

from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Iterator, Optional

import typer

from ..core.config_loader import get_default_data_dir, load_config
from ..core.errors import NotFoundError, StrainError
from ..core.models import BestLift, Day
from ..core.tracker import Tracker
from ..io.state_store import StateStore
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Data directory (default: $STRAIN_HOME or ~/.strain)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="strain",
    help="Personal workout tracker: training days, live sessions, history and best lifts.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_tracker(data_dir: Path | None) -> Tracker:
    """Open the tracker stored in data_dir (or the default location)."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return Tracker.open(StateStore(data_dir), load_config(data_dir))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report tracker errors to the user and exit with status 1."""
    try:
        yield
    except StrainError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def day_at(tracker: Tracker, number: int) -> Day:
    """Return the day shown as #number in the days listing (1-based)."""
    days = tracker.state.days
    if number < 1 or number > len(days):
        if not days:
            raise NotFoundError("No training days yet.")
        raise NotFoundError(f"Day # must be between 1 and {len(days)}")
    return days[number - 1]


def best_lift_at(tracker: Tracker, number: int) -> BestLift:
    """Return the best lift shown as #number in the best-lifts listing (1-based)."""
    lifts = tracker.state.best_lifts
    if number < 1 or number > len(lifts):
        if not lifts:
            raise NotFoundError("No best lifts tracked.")
        raise NotFoundError(f"Best lift # must be between 1 and {len(lifts)}")
    return lifts[number - 1]

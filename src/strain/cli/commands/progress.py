"""Progress commands: history, volume."""

import json
from typing import Annotated, Optional

import typer

from ...io.serializers import history_entry_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, get_tracker


@app.command()
def history(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of workouts to show"),
    ] = None,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display completed workouts, newest first.
    """
    tracker = get_tracker(data_dir)
    entries = tracker.state.history

    if limit is not None:
        entries = entries[:limit]

    if json_out:
        print(json.dumps([history_entry_to_dict(e) for e in entries], indent=2))
        return

    views.print_history(entries)


@app.command()
def volume(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Only chart the most recent N workouts"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Chart total volume per workout over time.
    """
    tracker = get_tracker(data_dir)
    views.print_volume_chart(tracker.state.history, limit=limit)

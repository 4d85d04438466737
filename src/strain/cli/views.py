"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of days, workouts, history and best
lifts. Nothing here changes state.
"""

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import create_volume_chart
from ..core.config import MAX_BEST_LIFTS
from ..core.metrics import find_latest_exercise_data, total_sets
from ..core.models import AppState, BestLift, Day, HistoryEntry, WorkoutSession

console = Console()


def fmt_weight(weight: float) -> str:
    """100.0 → "100", 62.5 → "62.5"."""
    return f"{weight:g}"


def format_days_table(days: list[Day]) -> Table:
    """
    Create a Rich table listing training days.

    Args:
        days: Days to display

    Returns:
        Rich Table object
    """
    table = Table(title="Training Days")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Day", style="cyan")
    table.add_column("Exercises")

    for i, day in enumerate(days, 1):
        exercises = ", ".join(
            f"[dim]{j}.[/dim] {ex.name}" for j, ex in enumerate(day.exercises, 1)
        )
        table.add_row(str(i), day.name, exercises or "[dim]none[/dim]")

    return table


def print_days(days: list[Day]) -> None:
    if not days:
        console.print("[yellow]No training days yet.[/yellow]")
        return
    console.print(format_days_table(days))


def format_best_lifts_table(lifts: list[BestLift]) -> Table:
    table = Table(title=f"Best Lifts ({len(lifts)}/{MAX_BEST_LIFTS})")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Best", justify="right", style="bold")

    for i, lift in enumerate(lifts, 1):
        best = f"{fmt_weight(lift.weight)}kg × {lift.reps}" if lift.is_recorded else "-"
        table.add_row(str(i), lift.exercise, best)

    return table


def print_best_lifts(lifts: list[BestLift]) -> None:
    if not lifts:
        console.print("[yellow]No best lifts recorded[/yellow]")
        return
    console.print(format_best_lifts_table(lifts))


def print_recent_workout(history: list[HistoryEntry]) -> None:
    """Print the most recently completed workout."""
    if not history:
        console.print("[yellow]No workouts completed yet[/yellow]")
        return
    latest = history[0]
    console.print(f"[bold]{latest.day_name}[/bold]  [dim]{latest.date}[/dim]")
    console.print(f"{fmt_weight(latest.volume)}kg total volume")


def print_home(state: AppState) -> None:
    """Days, best lifts and the latest workout on one screen."""
    print_days(state.days)
    console.print()
    print_best_lifts(state.best_lifts)
    console.print()
    console.print("[bold]Recent workout[/bold]")
    print_recent_workout(state.history)
    if state.current_workout is not None:
        console.print()
        print_info(
            f"Workout in progress: {state.current_workout.day_name}. Run 'status' to continue."
        )


def _last_time_hint(history: list[HistoryEntry], name: str, set_number: int) -> str | None:
    latest = find_latest_exercise_data(history, name)
    if latest is None:
        return None
    if set_number <= len(latest.sets):
        prev = latest.sets[set_number - 1]
        return f"Last time: Set {set_number} - {fmt_weight(prev.weight)}kg x {prev.reps}"
    return f"Last time: Set {set_number} - ...kg x ..."


def print_workout(workout: WorkoutSession | None, history: list[HistoryEntry]) -> None:
    """
    Print the active workout.

    Finished exercises are dimmed, the current one is highlighted and shows
    the "last time" hint for the next set.

    Args:
        workout: Active session or None
        history: Completed workouts, newest first
    """
    if workout is None:
        console.print("[yellow]No active workout. Start one from a training day![/yellow]")
        return

    console.print(f"[bold cyan]{workout.day_name}[/bold cyan]  [dim]{workout.date}[/dim]")

    for index, ex in enumerate(workout.exercises):
        is_current = index == workout.current_exercise_index
        is_completed = index < workout.current_exercise_index

        if is_current:
            console.print(f"\n[bold green]▶ {ex.name}[/bold green]")
        elif is_completed:
            console.print(f"\n[dim]✓ {ex.name}[/dim]")
        else:
            console.print(f"\n  {ex.name}")

        if ex.sets:
            for i, s in enumerate(ex.sets, 1):
                line = f"    Set {i}: {fmt_weight(s.weight)}kg x {s.reps}"
                console.print(f"[dim]{line}[/dim]" if is_completed else line)
        else:
            console.print("    [dim]No sets logged yet[/dim]")

        if is_current:
            hint = _last_time_hint(history, ex.name, len(ex.sets) + 1)
            if hint:
                console.print(f"    [blue]{hint}[/blue]")

    console.print()
    action = "next" if not workout.is_last_exercise else "next (finishes the workout)"
    console.print(
        f"[dim]log-set WEIGHT REPS · undo · {action} · quick-add NAME[/dim]"
    )


def format_history_table(history: list[HistoryEntry]) -> Table:
    """
    Create a Rich table displaying completed workouts, newest first.

    Args:
        history: Workouts to display

    Returns:
        Rich Table object
    """
    table = Table(title="Workout History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Day", style="magenta")
    table.add_column("Sets", justify="right")
    table.add_column("Volume", justify="right", style="bold")
    table.add_column("Exercises")

    for i, entry in enumerate(history, 1):
        table.add_row(
            str(i),
            entry.date,
            entry.day_name,
            str(total_sets(entry.exercises)),
            fmt_weight(entry.volume),
            ", ".join(entry.exercise_names),
        )

    return table


def print_history(history: list[HistoryEntry]) -> None:
    if not history:
        console.print("[yellow]No workout history yet[/yellow]")
        return
    console.print(format_history_table(history))


def print_volume_chart(history: list[HistoryEntry], limit: int | None = None) -> None:
    console.print(create_volume_chart(history, limit=limit))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")

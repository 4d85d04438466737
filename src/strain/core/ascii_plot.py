"""
ASCII charts for workout volume.

Creates terminal-friendly charts of total volume per workout over time.
"""

from .metrics import volume_series
from .models import HistoryEntry

CHART_TITLE = "Total Workout Volume"


def create_volume_chart(
    history: list[HistoryEntry],
    limit: int | None = None,
    width: int = 40,
) -> str:
    """
    Chart total volume per completed workout, oldest first.

    One row per workout: the date, a bar scaled against the heaviest
    workout shown, then the volume itself.

    Args:
        history: Completed workouts (stored newest first)
        limit: Only show the most recent N workouts
        width: Bar length of the heaviest workout

    Returns:
        ASCII chart string
    """
    if not history:
        return "No workout history yet."

    points = volume_series(history)
    if limit is not None and limit > 0:
        points = points[-limit:]

    peak = max(volume for _, volume in points)
    date_width = max(len(date) for date, _ in points)

    rows = [CHART_TITLE, "─" * (date_width + width + 5)]
    for date, volume in points:
        filled = round(volume / peak * width) if peak > 0 else 0
        rows.append(f"{date:>{date_width}} │{'█' * filled} {volume:g}")

    return "\n".join(rows)

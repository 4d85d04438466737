"""
Pure derived-value functions.

Volume aggregation, "last time" lookups and the best-lift ordering. Nothing
here mutates its arguments.
"""

from typing import Iterable, Sequence

from .models import BestLift, Day, HistoryEntry, SessionExercise, SetEntry


def compute_volume(exercises: Iterable[SessionExercise]) -> float:
    """
    Calculate total training volume.

    volume = Σ over all exercises, all sets, of weight × reps

    Exercises without sets contribute nothing.

    Args:
        exercises: Session or history exercises

    Returns:
        Total volume in the implicit weight unit
    """
    return sum(s.volume for ex in exercises for s in ex.sets)


def find_latest_exercise_data(
    history: Sequence[HistoryEntry],
    exercise_name: str,
) -> SessionExercise | None:
    """
    Find the most recent performance of an exercise.

    History is stored newest-first, so the first match wins. Matching is by
    exact exercise name.

    Args:
        history: Completed workouts, newest first
        exercise_name: Exact exercise name

    Returns:
        The matching exercise record, or None if never performed
    """
    for entry in history:
        for ex in entry.exercises:
            if ex.name == exercise_name:
                return ex
    return None


def suggest_set(
    history: Sequence[HistoryEntry],
    exercise_name: str,
    set_number: int,
) -> SetEntry | None:
    """
    Suggest weight/reps for the n-th set from last time.

    Args:
        history: Completed workouts, newest first
        exercise_name: Exact exercise name
        set_number: 1-based set number about to be logged

    Returns:
        The set at the same position last time, or None when the last
        performance had fewer sets (or there was none)
    """
    if set_number < 1:
        return None
    latest = find_latest_exercise_data(history, exercise_name)
    if latest is None or set_number > len(latest.sets):
        return None
    return latest.sets[set_number - 1]


def all_exercise_names(days: Iterable[Day]) -> list[str]:
    """Unique exercise names across all days, in first-seen order."""
    # dict preserves insertion order
    names: dict[str, None] = {}
    for day in days:
        for ex in day.exercises:
            names.setdefault(ex.name, None)
    return list(names)


def is_improvement(weight: float, reps: int, record: BestLift) -> bool:
    """
    Check whether (weight, reps) beats a best-lift record.

    Strictly heavier wins outright; equal weight needs strictly more reps.

    Args:
        weight: Candidate weight
        reps: Candidate reps
        record: Current best lift

    Returns:
        True if the candidate should replace the record
    """
    if weight > record.weight:
        return True
    return weight == record.weight and reps > record.reps


def volume_series(history: Iterable[HistoryEntry]) -> list[tuple[str, float]]:
    """
    (date, volume) points sorted oldest → newest for charting.

    Sorting is stable, so workouts on the same day keep their relative
    completion order. The stored history is not touched.
    """
    # stored newest-first; reverse so ties come out in completion order
    points = [(e.date, e.volume) for e in reversed(list(history))]
    return sorted(points, key=lambda p: p[0])


def total_sets(exercises: Iterable[SessionExercise]) -> int:
    """Number of logged sets across exercises."""
    return sum(len(ex.sets) for ex in exercises)

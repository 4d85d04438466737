"""
Training day management: create, rename and delete days and their exercises.

Sessions and history keep their own copies of names, so nothing done here
reaches an in-progress or completed workout.
"""

from .errors import InvalidInputError, NotFoundError
from .models import AppState, Day, Exercise


def _clean_name(name: str | None, what: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{what} name cannot be empty")
    return cleaned


def find_day(state: AppState, day_id: str) -> Day:
    """Return the day with this id, or raise NotFoundError."""
    for day in state.days:
        if day.id == day_id:
            return day
    raise NotFoundError(f"Day not found: {day_id}")


def find_exercise(day: Day, exercise_id: str) -> Exercise:
    """Return the exercise with this id inside a day, or raise NotFoundError."""
    for ex in day.exercises:
        if ex.id == exercise_id:
            return ex
    raise NotFoundError(f"Exercise not found in {day.name!r}: {exercise_id}")


def add_day(state: AppState, name: str, exercise_names: list[str] | None = None) -> Day:
    """Append a new day, optionally with exercises."""
    day_name = _clean_name(name, "Day")
    exercises = [Exercise(name=_clean_name(n, "Exercise")) for n in exercise_names or []]
    day = Day(name=day_name, exercises=exercises)
    state.days.append(day)
    return day


def rename_day(state: AppState, day_id: str, name: str) -> Day:
    day = find_day(state, day_id)
    day.name = _clean_name(name, "Day")
    return day


def delete_day(state: AppState, day_id: str) -> Day:
    """Remove a day. An active session started from it keeps running."""
    day = find_day(state, day_id)
    state.days = [d for d in state.days if d.id != day_id]
    return day


def add_exercise(state: AppState, day_id: str, name: str) -> Exercise:
    day = find_day(state, day_id)
    exercise = Exercise(name=_clean_name(name, "Exercise"))
    day.exercises.append(exercise)
    return exercise


def remove_exercise(state: AppState, day_id: str, exercise_id: str) -> Exercise:
    day = find_day(state, day_id)
    exercise = find_exercise(day, exercise_id)
    day.exercises = [ex for ex in day.exercises if ex.id != exercise_id]
    return exercise


def rename_exercise(state: AppState, day_id: str, exercise_id: str, name: str) -> Exercise:
    """
    Rename an exercise template.

    Best lifts match by name and are left as they are, so a lift tracking
    the old name stops receiving updates.
    """
    day = find_day(state, day_id)
    exercise = find_exercise(day, exercise_id)
    exercise.name = _clean_name(name, "Exercise")
    return exercise

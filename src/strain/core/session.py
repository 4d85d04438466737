"""
Workout session state machine.

    Idle ──start──▶ Active(0) ──advance──▶ Active(1) … Active(N-1) ──advance──▶ Idle
                                                                   (history += entry)

``start`` from Active is a forced reset: the previous session is discarded
without merging. The cursor only moves forward and ``finish`` is the single
terminal transition; there is no cancel.

Each function validates its input before writing anything, so a raised
error leaves the AppState untouched. Persistence is the caller's job
(see tracker.py).
"""

import math
from datetime import datetime
from numbers import Real

from .best_lifts import update_best_lift
from .config import DATE_FORMAT
from .days import find_day
from .errors import EmptyDayError, InvalidInputError, NothingToUndoError, NotFoundError
from .metrics import compute_volume, suggest_set
from .models import AppState, HistoryEntry, SessionExercise, SetEntry, WorkoutSession


def _require_session(state: AppState) -> WorkoutSession:
    if state.current_workout is None:
        raise NotFoundError("No active workout. Start one from a training day.")
    return state.current_workout


def _validate_weight(weight: object) -> float:
    if weight is None or isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidInputError("Enter positive numbers for weight and reps.")
    value = float(weight)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError("Enter positive numbers for weight and reps.")
    return value


def _validate_reps(reps: object) -> int:
    if reps is None or isinstance(reps, bool) or not isinstance(reps, Real):
        raise InvalidInputError("Enter positive numbers for weight and reps.")
    if not math.isfinite(float(reps)) or float(reps) != int(reps):
        raise InvalidInputError(f"Reps must be a whole number, got {reps}")
    value = int(reps)
    if value <= 0:
        raise InvalidInputError("Enter positive numbers for weight and reps.")
    return value


def start(state: AppState, day_id: str, today: str | None = None) -> WorkoutSession:
    """
    Start a workout from a training day.

    The day's name and exercise names are copied, every exercise starts
    with no sets and the cursor is on the first one. Any active session is
    replaced.

    Args:
        state: Application state
        day_id: Id of the day to run
        today: Session date (YYYY-MM-DD, default: today)

    Returns:
        The new active session

    Raises:
        NotFoundError: No day with this id
        EmptyDayError: The day has no exercises
        InvalidInputError: ``today`` is not a valid YYYY-MM-DD date
    """
    day = find_day(state, day_id)
    if not day.exercises:
        raise EmptyDayError(f"{day.name!r} has no exercises!")

    try:
        session = WorkoutSession(
            date=today or datetime.now().strftime(DATE_FORMAT),
            day_id=day.id,
            day_name=day.name,
            exercises=[SessionExercise(name=ex.name) for ex in day.exercises],
            current_exercise_index=0,
        )
    except ValueError as e:
        raise InvalidInputError(str(e)) from e

    state.current_workout = session
    return session


def current_exercise(state: AppState) -> SessionExercise | None:
    """The exercise under the cursor, or None when idle."""
    if state.current_workout is None:
        return None
    return state.current_workout.current_exercise


def suggest_next_set(state: AppState) -> SetEntry | None:
    """Last time's weight/reps for the set about to be logged, if any."""
    exercise = current_exercise(state)
    if exercise is None:
        return None
    return suggest_set(state.history, exercise.name, len(exercise.sets) + 1)


def log_set(state: AppState, weight: float, reps: int) -> SetEntry:
    """
    Log a set on the current exercise and update its best lift.

    Raises:
        NotFoundError: No active session
        InvalidInputError: Weight or reps missing or not strictly positive
    """
    session = _require_session(state)
    entry = SetEntry(weight=_validate_weight(weight), reps=_validate_reps(reps))

    exercise = session.current_exercise
    exercise.sets.append(entry)
    update_best_lift(state, exercise.name, entry.weight, entry.reps)
    return entry


def undo_last_set(state: AppState) -> SetEntry:
    """
    Remove the most recent set of the current exercise.

    A best lift raised by that set keeps its value.

    Raises:
        NotFoundError: No active session
        NothingToUndoError: The current exercise has no sets
    """
    session = _require_session(state)
    exercise = session.current_exercise
    if not exercise.sets:
        raise NothingToUndoError("No sets to undo!")
    return exercise.sets.pop()


def finish(state: AppState) -> HistoryEntry:
    """
    Complete the active session.

    Builds a history entry with the session's volume and a copy of every
    exercise's sets, puts it at the front of history and clears the session.

    Raises:
        NotFoundError: No active session
    """
    session = _require_session(state)

    entry = HistoryEntry(
        id=session.id,
        date=session.date,
        day_id=session.day_id,
        day_name=session.day_name,
        volume=compute_volume(session.exercises),
        exercises=[
            SessionExercise(name=ex.name, sets=list(ex.sets)) for ex in session.exercises
        ],
    )
    state.history.insert(0, entry)
    state.current_workout = None
    return entry


def advance(state: AppState) -> HistoryEntry | None:
    """
    Move to the next exercise, finishing the workout after the last one.

    Returns:
        The new history entry if the workout finished, otherwise None

    Raises:
        NotFoundError: No active session
    """
    session = _require_session(state)
    if session.is_last_exercise:
        return finish(state)
    session.current_exercise_index += 1
    return None


def quick_add_exercise(state: AppState, name: str) -> SessionExercise | None:
    """
    Append an exercise to the active session only.

    The originating day is not changed. Does nothing when idle.

    Returns:
        The added exercise, or None if no session is active

    Raises:
        InvalidInputError: Blank name
    """
    session = state.current_workout
    if session is None:
        return None
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidInputError("Exercise name cannot be empty")
    exercise = SessionExercise(name=cleaned)
    session.exercises.append(exercise)
    return exercise

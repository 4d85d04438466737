"""
Best-lift tracking.

Up to MAX_BEST_LIFTS exercise names are tracked, each with a single current
best weight × reps. Lifts are matched to exercises by exact name; renaming an
exercise template does not rewrite a tracked name, which then no longer
receives updates until it is re-tracked.
"""

from .config import MAX_BEST_LIFTS
from .errors import (
    CapacityError,
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    UnknownExerciseError,
)
from .metrics import all_exercise_names, is_improvement
from .models import AppState, BestLift


def _lifts_by_name(state: AppState) -> dict[str, BestLift]:
    return {lift.exercise: lift for lift in state.best_lifts}


def find_best_lift(state: AppState, lift_id: str) -> BestLift:
    """Return the tracked lift with this id, or raise NotFoundError."""
    for lift in state.best_lifts:
        if lift.id == lift_id:
            return lift
    raise NotFoundError(f"Best lift not found: {lift_id}")


def _require_known_exercise(state: AppState, exercise_name: str) -> str:
    name = (exercise_name or "").strip()
    if not name:
        raise InvalidInputError("Exercise name cannot be empty")
    if name not in all_exercise_names(state.days):
        raise UnknownExerciseError(f"Exercise not found: {name!r}. Use the exact name.")
    return name


def update_best_lift(state: AppState, exercise_name: str, weight: float, reps: int) -> bool:
    """
    Raise the tracked record for an exercise if (weight, reps) beats it.

    Untracked exercises are ignored.

    Returns:
        True if the record changed
    """
    lift = _lifts_by_name(state).get(exercise_name)
    if lift is None or not is_improvement(weight, reps, lift):
        return False
    lift.weight = weight
    lift.reps = reps
    return True


def track_exercise(state: AppState, exercise_name: str) -> BestLift:
    """
    Start tracking a best lift for an exercise.

    Raises:
        CapacityError: MAX_BEST_LIFTS are already tracked
        DuplicateError: The exercise is already tracked
        UnknownExerciseError: No day contains an exercise with this name
    """
    if len(state.best_lifts) >= MAX_BEST_LIFTS:
        raise CapacityError(f"You can only track up to {MAX_BEST_LIFTS} exercises.")

    name = (exercise_name or "").strip()
    if name in _lifts_by_name(state):
        raise DuplicateError(f"Already tracking {name!r}.")

    name = _require_known_exercise(state, name)

    lift = BestLift(exercise=name, weight=0.0, reps=0)
    state.best_lifts.append(lift)
    return lift


def retrack_exercise(state: AppState, lift_id: str, exercise_name: str) -> BestLift:
    """
    Point an existing best-lift slot at a (possibly different) exercise.

    The slot's weight and reps restart from zero even when the name is
    unchanged.
    """
    lift = find_best_lift(state, lift_id)
    name = _require_known_exercise(state, exercise_name)

    other = _lifts_by_name(state).get(name)
    if other is not None and other.id != lift.id:
        raise DuplicateError(f"Already tracking {name!r}.")

    lift.exercise = name
    lift.weight = 0.0
    lift.reps = 0
    return lift


def untrack_exercise(state: AppState, lift_id: str) -> BestLift:
    """Stop tracking a best lift and return the removed record."""
    lift = find_best_lift(state, lift_id)
    state.best_lifts = [l for l in state.best_lifts if l.id != lift_id]
    return lift

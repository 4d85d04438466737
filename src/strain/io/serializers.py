"""
JSON serialization for tracker data models.

Handles conversion between dataclasses and JSON-compatible dicts. Field
names on the wire are camelCase (``dayId``, ``currentWorkout`` …), the
format the saved document has always used.
"""

import json
import math
from typing import Any

from ..core.errors import StrainError
from ..core.models import (
    AppState,
    BestLift,
    Day,
    Exercise,
    HistoryEntry,
    Profile,
    SessionExercise,
    SetEntry,
    WorkoutSession,
)


class PersistenceFormatError(StrainError):
    """Raised when a saved document cannot be turned back into an AppState."""

    pass


def _require(data: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    """
    Fetch a required key and check its JSON type.

    Raises:
        PersistenceFormatError: If data is not a dict, the key is missing,
            or the value has the wrong type
    """
    if not isinstance(data, dict):
        raise PersistenceFormatError(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise PersistenceFormatError(f"Missing field: {key!r}")
    return _check_type(data[key], key, kind)


def _check_type(value: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool) and bool not in kinds:
        raise PersistenceFormatError(f"Field {key!r} has wrong type: bool")
    if not isinstance(value, kinds):
        raise PersistenceFormatError(f"Field {key!r} has wrong type: {type(value).__name__}")
    return value


def _optional(data: dict[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    """Fetch a top-level key that older documents may omit."""
    if key not in data:
        return default
    return _check_type(data[key], key, kind)


def _number(data: Any, key: str) -> float:
    return float(_require(data, key, (int, float)))


def _integer(data: Any, key: str) -> int:
    value = _require(data, key, (int, float))
    if not math.isfinite(value) or float(value) != int(value):
        raise PersistenceFormatError(f"Field {key!r} must be a whole number, got {value}")
    return int(value)


# =============================================================================
# Days
# =============================================================================


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    return {"id": exercise.id, "name": exercise.name}


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    return Exercise(id=_require(data, "id", str), name=_require(data, "name", str))


def day_to_dict(day: Day) -> dict[str, Any]:
    return {
        "id": day.id,
        "name": day.name,
        "exercises": [exercise_to_dict(ex) for ex in day.exercises],
    }


def dict_to_day(data: dict[str, Any]) -> Day:
    return Day(
        id=_require(data, "id", str),
        name=_require(data, "name", str),
        exercises=[dict_to_exercise(ex) for ex in _require(data, "exercises", list)],
    )


# =============================================================================
# Sessions and history
# =============================================================================


def set_entry_to_dict(entry: SetEntry) -> dict[str, Any]:
    return {"weight": entry.weight, "reps": entry.reps}


def dict_to_set_entry(data: dict[str, Any]) -> SetEntry:
    return SetEntry(weight=_number(data, "weight"), reps=_integer(data, "reps"))


def session_exercise_to_dict(exercise: SessionExercise) -> dict[str, Any]:
    return {
        "name": exercise.name,
        "sets": [set_entry_to_dict(s) for s in exercise.sets],
    }


def dict_to_session_exercise(data: dict[str, Any]) -> SessionExercise:
    return SessionExercise(
        name=_require(data, "name", str),
        sets=[dict_to_set_entry(s) for s in _require(data, "sets", list)],
    )


def workout_session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    """
    Convert WorkoutSession to JSON-compatible dict.

    Args:
        session: Active session to convert

    Returns:
        Dict representation
    """
    return {
        "id": session.id,
        "date": session.date,
        "dayId": session.day_id,
        "dayName": session.day_name,
        "currentExerciseIndex": session.current_exercise_index,
        "exercises": [session_exercise_to_dict(ex) for ex in session.exercises],
    }


def dict_to_workout_session(data: dict[str, Any]) -> WorkoutSession:
    """
    Convert dict to WorkoutSession.

    Raises:
        PersistenceFormatError: If fields are missing or have the wrong type
        ValueError: If the model rejects the values (e.g. cursor out of range)
    """
    return WorkoutSession(
        id=_require(data, "id", str),
        date=_require(data, "date", str),
        day_id=_require(data, "dayId", str),
        day_name=_require(data, "dayName", str),
        current_exercise_index=_integer(data, "currentExerciseIndex"),
        exercises=[dict_to_session_exercise(ex) for ex in _require(data, "exercises", list)],
    )


def history_entry_to_dict(entry: HistoryEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "date": entry.date,
        "dayId": entry.day_id,
        "dayName": entry.day_name,
        "volume": entry.volume,
        "exercises": [session_exercise_to_dict(ex) for ex in entry.exercises],
    }


def dict_to_history_entry(data: dict[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        id=_require(data, "id", str),
        date=_require(data, "date", str),
        day_id=_require(data, "dayId", str),
        day_name=_require(data, "dayName", str),
        volume=_number(data, "volume"),
        exercises=[dict_to_session_exercise(ex) for ex in _require(data, "exercises", list)],
    )


# =============================================================================
# Best lifts and profile
# =============================================================================


def best_lift_to_dict(lift: BestLift) -> dict[str, Any]:
    return {
        "id": lift.id,
        "exercise": lift.exercise,
        "weight": lift.weight,
        "reps": lift.reps,
    }


def dict_to_best_lift(data: dict[str, Any]) -> BestLift:
    return BestLift(
        id=_require(data, "id", str),
        exercise=_require(data, "exercise", str),
        weight=_number(data, "weight"),
        reps=_integer(data, "reps"),
    )


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    return {"name": profile.name, "theme": profile.theme}


def dict_to_profile(data: dict[str, Any]) -> Profile:
    if not isinstance(data, dict):
        raise PersistenceFormatError("profile must be an object")
    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise PersistenceFormatError("profile.name must be a string or null")
    theme = data.get("theme")
    if not isinstance(theme, str) or not theme:
        return Profile(name=name)
    return Profile(name=name, theme=theme)


# =============================================================================
# Whole state
# =============================================================================


def state_to_dict(state: AppState) -> dict[str, Any]:
    """
    Convert the whole AppState to one JSON-compatible document.

    Args:
        state: Application state

    Returns:
        Dict with days, currentWorkout, bestLifts, history and profile
    """
    return {
        "days": [day_to_dict(d) for d in state.days],
        "currentWorkout": (
            workout_session_to_dict(state.current_workout)
            if state.current_workout is not None
            else None
        ),
        "bestLifts": [best_lift_to_dict(l) for l in state.best_lifts],
        "history": [history_entry_to_dict(h) for h in state.history],
        "profile": profile_to_dict(state.profile),
    }


def dict_to_state(data: Any) -> AppState:
    """
    Convert a saved document back into an AppState.

    Args:
        data: Parsed JSON document

    Returns:
        AppState instance

    Top-level keys missing from the document fall back to the empty state's
    values; keys that are present must be well-formed.

    Raises:
        PersistenceFormatError: If the document is malformed in any way
    """
    if not isinstance(data, dict):
        raise PersistenceFormatError(f"Expected an object, got {type(data).__name__}")

    try:
        current = _optional(data, "currentWorkout", (dict, type(None)), None)
        profile = _optional(data, "profile", dict, None)
        return AppState(
            days=[dict_to_day(d) for d in _optional(data, "days", list, [])],
            current_workout=dict_to_workout_session(current) if current is not None else None,
            best_lifts=[dict_to_best_lift(l) for l in _optional(data, "bestLifts", list, [])],
            history=[dict_to_history_entry(h) for h in _optional(data, "history", list, [])],
            profile=dict_to_profile(profile) if profile is not None else Profile(),
        )
    except (ValueError, TypeError, OverflowError) as e:
        raise PersistenceFormatError(f"Invalid saved state: {e}") from e


def state_to_json(state: AppState, indent: int | None = None) -> str:
    """Serialize the whole state to a JSON string."""
    return json.dumps(state_to_dict(state), indent=indent)


def json_to_state(text: str) -> AppState:
    """
    Deserialize a JSON string into an AppState.

    Raises:
        PersistenceFormatError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise PersistenceFormatError(f"Invalid JSON: {e}") from e

    return dict_to_state(data)

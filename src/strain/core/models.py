"""
Data models for strain.

All core dataclasses representing training days, workout sessions, history
and best-lift records. Every entity is owned by a single AppState; nothing is
shared by reference across states, so a state can be serialized as one value.
"""

import math
import re
import uuid
from dataclasses import dataclass, field

from .config import DEFAULT_THEME, MAX_BEST_LIFTS


def new_id() -> str:
    """Return a fresh random identifier."""
    return uuid.uuid4().hex


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    from datetime import datetime

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass
class Exercise:
    """An exercise template belonging to exactly one Day."""

    name: str
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Exercise name must be non-empty")


@dataclass
class Day:
    """
    A named, reusable list of exercises performed together.

    ``id`` never changes after creation. Sessions copy the day's name and
    exercise names at start, so later edits here are not seen by them.
    """

    name: str
    exercises: list[Exercise] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Day name must be non-empty")

    @property
    def exercise_names(self) -> list[str]:
        return [ex.name for ex in self.exercises]


@dataclass(frozen=True)
class SetEntry:
    """
    A single logged set: weight × reps.

    Immutable once logged; the only correction is removing the last one.
    """

    weight: float
    reps: int

    def __post_init__(self) -> None:
        if isinstance(self.weight, bool) or not math.isfinite(self.weight) or self.weight <= 0:
            raise ValueError(f"weight must be positive, got {self.weight!r}")
        if isinstance(self.reps, bool) or not isinstance(self.reps, int) or self.reps <= 0:
            raise ValueError(f"reps must be a positive integer, got {self.reps!r}")

    @property
    def volume(self) -> float:
        return self.weight * self.reps


@dataclass
class SessionExercise:
    """An exercise inside a session or history entry, matched by name."""

    name: str
    sets: list[SetEntry] = field(default_factory=list)


@dataclass
class WorkoutSession:
    """
    The in-progress workout.

    ``current_exercise_index`` is the cursor into ``exercises`` and stays in
    range while the session is active. Exercises before the cursor are done
    and read-only.
    """

    date: str  # ISO format: YYYY-MM-DD
    day_id: str
    day_name: str
    exercises: list[SessionExercise] = field(default_factory=list)
    current_exercise_index: int = 0
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        _validate_date(self.date)

        if not self.exercises:
            raise ValueError("A workout session needs at least one exercise")

        if not 0 <= self.current_exercise_index < len(self.exercises):
            raise ValueError(
                f"current_exercise_index {self.current_exercise_index} out of range "
                f"(0–{len(self.exercises) - 1})"
            )

    @property
    def current_exercise(self) -> SessionExercise:
        return self.exercises[self.current_exercise_index]

    @property
    def is_last_exercise(self) -> bool:
        return self.current_exercise_index == len(self.exercises) - 1


@dataclass
class HistoryEntry:
    """
    Immutable record of one completed session.

    Created once by finishing a session; ``id`` and ``date`` are the
    session's own.
    """

    id: str
    date: str  # ISO format: YYYY-MM-DD
    day_id: str
    day_name: str
    volume: float
    exercises: list[SessionExercise] = field(default_factory=list)

    def __post_init__(self) -> None:
        _validate_date(self.date)
        if not math.isfinite(self.volume) or self.volume < 0:
            raise ValueError(f"volume must be finite and non-negative, got {self.volume!r}")

    @property
    def exercise_names(self) -> list[str]:
        return [ex.name for ex in self.exercises]


@dataclass
class BestLift:
    """
    Current best weight/reps for one tracked exercise name.

    Not a log of records: improvements overwrite weight and reps in place.
    Zero weight and reps mean nothing has been recorded since tracking began.
    """

    exercise: str  # exact exercise name, not an id
    weight: float = 0.0
    reps: int = 0
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.exercise:
            raise ValueError("BestLift.exercise must be non-empty")
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(
                f"BestLift.weight must be finite and non-negative, got {self.weight!r}"
            )
        if self.reps < 0:
            raise ValueError("BestLift.reps must be non-negative")

    @property
    def is_recorded(self) -> bool:
        return self.weight > 0 and self.reps > 0


@dataclass
class Profile:
    """Local profile: display name and colour theme."""

    name: str | None = None
    theme: str = DEFAULT_THEME


@dataclass
class AppState:
    """
    Aggregate root holding everything the tracker knows.

    ``history`` is newest-first by insertion and is never re-sorted in place.
    """

    days: list[Day] = field(default_factory=list)
    current_workout: WorkoutSession | None = None
    best_lifts: list[BestLift] = field(default_factory=list)
    history: list[HistoryEntry] = field(default_factory=list)
    profile: Profile = field(default_factory=Profile)

    def __post_init__(self) -> None:
        """Validate the best-lift invariants."""
        if len(self.best_lifts) > MAX_BEST_LIFTS:
            raise ValueError(
                f"At most {MAX_BEST_LIFTS} best lifts can be tracked, got {len(self.best_lifts)}"
            )
        names = [lift.exercise for lift in self.best_lifts]
        if len(set(names)) != len(names):
            raise ValueError("Best lift exercise names must be unique")

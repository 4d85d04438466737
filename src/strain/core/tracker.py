"""
Tracker: the single owner of the AppState.

Wraps every mutating operation from session.py, days.py and best_lifts.py:
the core function validates and applies the change, then the whole state is
saved. A failed operation raises before anything is written or saved.

Listeners can subscribe to ``workout:started`` (called with the new
WorkoutSession) and ``workout:finished`` (called with the HistoryEntry).
"""

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable

from . import best_lifts, days, session
from .config import EVENT_WORKOUT_FINISHED, EVENT_WORKOUT_STARTED
from .config_loader import TrackerConfig
from .errors import InvalidInputError
from .models import (
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

if TYPE_CHECKING:
    from ..io.state_store import StateStore

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


def initialize_default_data(state: AppState, config: TrackerConfig) -> None:
    """Seed the configured default days when the state has none."""
    if state.days:
        return
    for seed in config.default_days:
        days.add_day(state, seed.name, seed.exercises)
    state.profile.theme = config.default_theme


class Tracker:
    """
    Owns one AppState and the store it is saved to.

    All access happens from one thread; each method runs to completion
    before the next is called.
    """

    def __init__(
        self,
        store: "StateStore",
        state: AppState | None = None,
        config: TrackerConfig | None = None,
    ):
        self.store = store
        self.state = state if state is not None else AppState()
        self.config = config if config is not None else TrackerConfig()
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    @classmethod
    def open(cls, store: "StateStore", config: TrackerConfig | None = None) -> "Tracker":
        """
        Load saved state, or start fresh with default data.

        Args:
            store: Where state is loaded from and saved to
            config: Resolved configuration (default days, themes)

        Returns:
            Tracker ready for use
        """
        config = config if config is not None else TrackerConfig()
        state = store.load()
        if state is None:
            logger.debug("No saved state in %s; seeding defaults", store.state_path)
            state = AppState(profile=Profile(theme=config.default_theme))
            initialize_default_data(state, config)
        return cls(store, state, config)

    # ── Events ─────────────────────────────────────────────────────────────

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def _emit(self, event: str, payload: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(payload)

    def save(self) -> None:
        self.store.save(self.state)

    # ── Session ────────────────────────────────────────────────────────────

    def start(self, day_id: str, today: str | None = None) -> WorkoutSession:
        workout = session.start(self.state, day_id, today)
        self.save()
        self._emit(EVENT_WORKOUT_STARTED, workout)
        return workout

    def log_set(self, weight: float, reps: int) -> SetEntry:
        entry = session.log_set(self.state, weight, reps)
        self.save()
        return entry

    def undo_last_set(self) -> SetEntry:
        entry = session.undo_last_set(self.state)
        self.save()
        return entry

    def advance(self) -> HistoryEntry | None:
        entry = session.advance(self.state)
        self.save()
        if entry is not None:
            self._emit(EVENT_WORKOUT_FINISHED, entry)
        return entry

    def finish(self) -> HistoryEntry:
        entry = session.finish(self.state)
        self.save()
        self._emit(EVENT_WORKOUT_FINISHED, entry)
        return entry

    def quick_add_exercise(self, name: str) -> SessionExercise | None:
        exercise = session.quick_add_exercise(self.state, name)
        if exercise is not None:
            self.save()
        return exercise

    def suggest_next_set(self) -> SetEntry | None:
        return session.suggest_next_set(self.state)

    # ── Days ───────────────────────────────────────────────────────────────

    def add_day(self, name: str, exercise_names: list[str] | None = None) -> Day:
        day = days.add_day(self.state, name, exercise_names)
        self.save()
        return day

    def rename_day(self, day_id: str, name: str) -> Day:
        day = days.rename_day(self.state, day_id, name)
        self.save()
        return day

    def delete_day(self, day_id: str) -> Day:
        day = days.delete_day(self.state, day_id)
        self.save()
        return day

    def add_exercise(self, day_id: str, name: str) -> Exercise:
        exercise = days.add_exercise(self.state, day_id, name)
        self.save()
        return exercise

    def remove_exercise(self, day_id: str, exercise_id: str) -> Exercise:
        exercise = days.remove_exercise(self.state, day_id, exercise_id)
        self.save()
        return exercise

    def rename_exercise(self, day_id: str, exercise_id: str, name: str) -> Exercise:
        exercise = days.rename_exercise(self.state, day_id, exercise_id, name)
        self.save()
        return exercise

    # ── Best lifts ─────────────────────────────────────────────────────────

    def track_exercise(self, exercise_name: str) -> BestLift:
        lift = best_lifts.track_exercise(self.state, exercise_name)
        self.save()
        return lift

    def retrack_exercise(self, lift_id: str, exercise_name: str) -> BestLift:
        lift = best_lifts.retrack_exercise(self.state, lift_id, exercise_name)
        self.save()
        return lift

    def untrack_exercise(self, lift_id: str) -> BestLift:
        lift = best_lifts.untrack_exercise(self.state, lift_id)
        self.save()
        return lift

    # ── Profile ────────────────────────────────────────────────────────────

    def set_theme(self, theme: str) -> None:
        if theme not in self.config.themes:
            raise InvalidInputError(
                f"Unknown theme {theme!r}. Choose one of: {', '.join(self.config.themes)}"
            )
        self.state.profile.theme = theme
        self.save()

    def set_profile_name(self, name: str) -> None:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInputError("Profile name cannot be empty")
        self.state.profile.name = cleaned
        self.save()

    def reset(self) -> None:
        """Delete all saved data and start again from defaults."""
        self.store.clear()
        self.state = AppState(profile=Profile(theme=self.config.default_theme))
        initialize_default_data(self.state, self.config)

"""
Tests for the persistence round-trip, the state store, the config loader
and the Tracker's save-after-every-mutation contract.
"""

import json
import tempfile
from pathlib import Path

import pytest

from strain.core.config import EVENT_WORKOUT_FINISHED, EVENT_WORKOUT_STARTED, STORAGE_KEY
from strain.core.config_loader import DaySeed, TrackerConfig, load_config
from strain.core.errors import EmptyDayError, InvalidInputError, NothingToUndoError
from strain.core.models import (
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
from strain.core.tracker import Tracker
from strain.io.serializers import (
    PersistenceFormatError,
    dict_to_state,
    json_to_state,
    state_to_dict,
    state_to_json,
)
from strain.io.state_store import StateStore


@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _deeply_nested(depth: int = 100_000) -> str:
    return '{"days": ' + "[" * depth + "]" * depth + "}"


def _full_state() -> AppState:
    push = Day(
        id="day-1",
        name="Push Day",
        exercises=[Exercise(id="ex-1", name="Bench Press"), Exercise(id="ex-2", name="Dips")],
    )
    return AppState(
        days=[push, Day(id="day-2", name="Empty")],
        current_workout=WorkoutSession(
            id="w-2",
            date="2026-03-03",
            day_id="day-1",
            day_name="Push Day",
            current_exercise_index=1,
            exercises=[
                SessionExercise(name="Bench Press", sets=[SetEntry(82.5, 5), SetEntry(80.0, 6)]),
                SessionExercise(name="Dips", sets=[]),
            ],
        ),
        best_lifts=[
            BestLift(id="bl-1", exercise="Bench Press", weight=82.5, reps=5),
            BestLift(id="bl-2", exercise="Dips", weight=0.0, reps=0),
        ],
        history=[
            HistoryEntry(
                id="w-1",
                date="2026-03-01",
                day_id="day-1",
                day_name="Push Day",
                volume=820.0,
                exercises=[
                    SessionExercise(name="Bench Press", sets=[SetEntry(80.0, 8)]),
                    SessionExercise(name="Dips", sets=[SetEntry(15.0, 12)]),
                ],
            )
        ],
        profile=Profile(name="Sam", theme="blue"),
    )


class TestSerializers:
    def test_round_trip(self):
        """Test a full state survives dict and JSON round trips."""
        state = _full_state()
        assert dict_to_state(state_to_dict(state)) == state
        assert json_to_state(state_to_json(state)) == state

    def test_round_trip_idle_state(self):
        """Test an empty state survives a round trip."""
        state = AppState()
        assert json_to_state(state_to_json(state)) == state

    def test_wire_field_names(self):
        """Test the document uses camelCase field names."""
        doc = state_to_dict(_full_state())
        assert set(doc) == {"days", "currentWorkout", "bestLifts", "history", "profile"}
        assert doc["currentWorkout"]["dayId"] == "day-1"
        assert doc["currentWorkout"]["currentExerciseIndex"] == 1
        assert doc["history"][0]["dayName"] == "Push Day"
        assert doc["bestLifts"][0] == {
            "id": "bl-1", "exercise": "Bench Press", "weight": 82.5, "reps": 5,
        }

    def test_accepts_integer_weights(self):
        """Test integer weights load as floats."""
        doc = state_to_dict(_full_state())
        doc["history"][0]["exercises"][0]["sets"][0]["weight"] = 80
        state = dict_to_state(doc)
        assert state.history[0].exercises[0].sets[0] == SetEntry(80.0, 8)

    def test_missing_top_level_keys_use_defaults(self):
        """Test absent top-level keys fall back to defaults."""
        state = dict_to_state({"days": []})
        assert state == AppState()

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "{not json",
            "[]",
            "null",
            '{"days": "nope"}',
            '{"days": [{"id": "d", "name": "D"}]}',
            '{"history": [{"id": "h", "date": "2026-13-40", "dayId": "d",'
            ' "dayName": "D", "volume": 0, "exercises": []}]}',
            '{"currentWorkout": {"id": "w", "date": "2026-03-01", "dayId": "d",'
            ' "dayName": "D", "currentExerciseIndex": 5,'
            ' "exercises": [{"name": "A", "sets": []}]}}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": 0, "reps": 0},'
            ' {"id": "b", "exercise": "A", "weight": 0, "reps": 0}]}',
            '{"history": [{"id": "h", "date": "2026-03-01", "dayId": "d", "dayName": "D",'
            ' "volume": 0, "exercises": [{"name": "A", "sets": [{"weight": 0, "reps": 5}]}]}]}',
            '{"profile": {"name": 5}}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": true, "reps": 0}]}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": NaN, "reps": 0}]}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": Infinity, "reps": 0}]}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": 100, "reps": NaN}]}',
            '{"history": [{"id": "h", "date": "2026-03-01", "dayId": "d",'
            ' "dayName": "D", "volume": NaN, "exercises": []}]}',
            '{"history": [{"id": "h", "date": "2026-03-01", "dayId": "d", "dayName": "D",'
            ' "volume": 0, "exercises": [{"name": "A", "sets": [{"weight": -Infinity,'
            ' "reps": 5}]}]}]}',
        ],
    )
    def test_malformed_documents_raise_format_error(self, text):
        """Test malformed documents raise PersistenceFormatError."""
        with pytest.raises(PersistenceFormatError):
            json_to_state(text)

    def test_deeply_nested_document_raises_format_error(self):
        """Test nesting too deep for the JSON parser is a format error."""
        with pytest.raises(PersistenceFormatError):
            json_to_state(_deeply_nested())


class TestStateStore:
    def test_missing_document_returns_none(self, temp_data_dir):
        """Test load returns None when nothing is saved."""
        store = StateStore(temp_data_dir)
        assert not store.exists()
        assert store.load() is None

    def test_save_and_load(self, temp_data_dir):
        """Test save creates the directory and load reads it back."""
        store = StateStore(temp_data_dir / "nested")
        state = _full_state()

        store.save(state)

        assert store.state_path == temp_data_dir / "nested" / f"{STORAGE_KEY}.json"
        assert store.load() == state
        assert json.loads(store.state_path.read_text())["profile"]["theme"] == "blue"

    def test_save_overwrites_whole_document(self, temp_data_dir):
        """Test save replaces the document and leaves no temp files."""
        store = StateStore(temp_data_dir)
        store.save(_full_state())
        store.save(AppState())

        assert store.load() == AppState()
        assert list(temp_data_dir.iterdir()) == [store.state_path]

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "{oops",
            '{"days": 3}',
            "[1, 2]",
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": NaN, "reps": 0}]}',
            '{"bestLifts": [{"id": "a", "exercise": "A", "weight": Infinity, "reps": 0}]}',
            _deeply_nested(),
        ],
        ids=["empty", "broken", "wrong-type", "array", "nan", "infinity", "deep"],
    )
    def test_corrupt_document_returns_none(self, temp_data_dir, content):
        """Test a corrupt document loads as None."""
        store = StateStore(temp_data_dir)
        store.state_path.write_text(content)
        assert store.load() is None

    def test_clear(self, temp_data_dir):
        """Test clear deletes the document and tolerates a second call."""
        store = StateStore(temp_data_dir)
        store.save(AppState())
        store.clear()
        assert not store.exists()
        store.clear()  # already gone


class TestConfigLoader:
    def test_bundled_defaults(self, temp_data_dir):
        """Test the bundled defaults seed Push Day."""
        config = load_config(temp_data_dir)
        assert config.default_days == [
            DaySeed(name="Push Day", exercises=["Bench Press", "Overhead Press"])
        ]
        assert config.themes == ("dark", "blue", "orange")
        assert config.default_theme == "dark"

    def test_user_override(self, temp_data_dir):
        """Test config.yaml in the data directory overrides defaults."""
        (temp_data_dir / "config.yaml").write_text(
            "default_days:\n"
            "  - name: Legs\n"
            "    exercises: [Squat]\n"
            "default_theme: orange\n"
        )
        config = load_config(temp_data_dir)
        assert config.default_days == [DaySeed(name="Legs", exercises=["Squat"])]
        assert config.default_theme == "orange"

    def test_broken_user_override_is_ignored(self, temp_data_dir):
        """Test an unparsable config.yaml is ignored."""
        (temp_data_dir / "config.yaml").write_text("default_days: [unclosed\n")
        config = load_config(temp_data_dir)
        assert config.default_days[0].name == "Push Day"


class TestTracker:
    def _config(self) -> TrackerConfig:
        return TrackerConfig(
            default_days=[DaySeed(name="Push Day", exercises=["Bench Press", "Overhead Press"])]
        )

    def test_open_seeds_defaults_without_saving(self, temp_data_dir):
        """Test a fresh tracker seeds default days without writing."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())

        assert [d.name for d in tracker.state.days] == ["Push Day"]
        assert tracker.state.days[0].exercise_names == ["Bench Press", "Overhead Press"]
        assert not store.exists()

    def test_open_treats_corrupt_document_as_absent(self, temp_data_dir):
        """Test a corrupt document opens as a fresh tracker."""
        store = StateStore(temp_data_dir)
        store.state_path.write_text("{corrupt")

        tracker = Tracker.open(store, self._config())

        assert [d.name for d in tracker.state.days] == ["Push Day"]

    def test_non_finite_best_lift_is_not_loaded(self, temp_data_dir):
        """Test a NaN record opens fresh, so the tracked slot can still improve."""
        store = StateStore(temp_data_dir)
        store.state_path.write_text(
            '{"bestLifts": [{"id": "a", "exercise": "Bench Press", "weight": NaN, "reps": 0}]}'
        )

        tracker = Tracker.open(store, self._config())
        assert tracker.state.best_lifts == []

        tracker.track_exercise("Bench Press")
        tracker.start(tracker.state.days[0].id, today="2026-03-01")
        tracker.log_set(500, 10)

        lift = store.load().best_lifts[0]
        assert (lift.weight, lift.reps) == (500, 10)

    def test_every_mutation_is_persisted(self, temp_data_dir):
        """Test every successful operation is saved."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())
        day_id = tracker.state.days[0].id

        tracker.track_exercise("Bench Press")
        assert store.load().best_lifts[0].exercise == "Bench Press"

        tracker.start(day_id, today="2026-03-01")
        assert store.load().current_workout is not None

        tracker.log_set(100, 5)
        assert store.load().current_workout.exercises[0].sets == [SetEntry(100.0, 5)]
        assert store.load().best_lifts[0].weight == 100

        tracker.undo_last_set()
        assert store.load().current_workout.exercises[0].sets == []
        assert store.load().best_lifts[0].weight == 100

        tracker.advance()
        assert store.load().current_workout.current_exercise_index == 1

        tracker.advance()
        saved = store.load()
        assert saved.current_workout is None
        assert len(saved.history) == 1
        assert saved == tracker.state

    def test_failed_operation_does_not_save(self, temp_data_dir):
        """Test failed operations leave the saved document alone."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())
        empty = tracker.add_day("Empty")
        tracker.start(tracker.state.days[0].id, today="2026-03-01")
        text = store.state_path.read_text()

        with pytest.raises(NothingToUndoError):
            tracker.undo_last_set()
        with pytest.raises(InvalidInputError):
            tracker.log_set(0, 5)
        with pytest.raises(EmptyDayError):
            tracker.start(empty.id)

        assert store.state_path.read_text() == text
        assert store.load() == tracker.state

    def test_quick_add_without_session_does_not_save(self, temp_data_dir):
        """Test an idle quick-add writes nothing."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())
        assert tracker.quick_add_exercise("Curl") is None
        assert not store.exists()

    def test_events(self, temp_data_dir):
        """Test started and finished events fire once each."""
        tracker = Tracker.open(StateStore(temp_data_dir), self._config())
        started: list = []
        finished: list = []
        tracker.subscribe(EVENT_WORKOUT_STARTED, started.append)
        tracker.subscribe(EVENT_WORKOUT_FINISHED, finished.append)

        workout = tracker.start(tracker.state.days[0].id, today="2026-03-01")
        tracker.advance()
        assert finished == []
        entry = tracker.advance()

        assert started == [workout]
        assert finished == [entry]

    def test_finish_directly_emits(self, temp_data_dir):
        """Test finish emits the finished event."""
        tracker = Tracker.open(StateStore(temp_data_dir), self._config())
        finished: list = []
        tracker.subscribe(EVENT_WORKOUT_FINISHED, finished.append)
        tracker.start(tracker.state.days[0].id, today="2026-03-01")

        entry = tracker.finish()

        assert finished == [entry]

    def test_reload_round_trip(self, temp_data_dir):
        """Test a reopened tracker sees the same state."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())
        tracker.set_profile_name("Sam")
        tracker.set_theme("orange")
        tracker.start(tracker.state.days[0].id, today="2026-03-01")
        tracker.log_set(60, 10)

        reopened = Tracker.open(store, self._config())

        assert reopened.state == tracker.state

    def test_theme_must_be_known(self, temp_data_dir):
        """Test unknown themes are rejected."""
        tracker = Tracker.open(StateStore(temp_data_dir), self._config())
        with pytest.raises(InvalidInputError):
            tracker.set_theme("neon")
        assert tracker.state.profile.theme == "dark"

    def test_reset(self, temp_data_dir):
        """Test reset deletes saved data and reseeds defaults."""
        store = StateStore(temp_data_dir)
        tracker = Tracker.open(store, self._config())
        tracker.add_day("Legs", ["Squat"])

        tracker.reset()

        assert not store.exists()
        assert [d.name for d in tracker.state.days] == ["Push Day"]

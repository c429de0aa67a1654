"""
Unit tests for the session converters (database rows <-> domain models).
"""

from datetime import datetime, timezone

import pytest

from domain.converters import (
    db_row_to_exercise_log,
    db_row_to_session,
    exercise_log_update_to_db,
)
from domain.models import SessionStatus, WorkoutMood


def _session_row(**overrides):
    row = {
        "id": "s1",
        "user_id": "u1",
        "routine_day_id": "d1",
        "started_at": "2024-01-02T09:00:00Z",
        "completed_at": None,
        "actual_duration": None,
        "rpe": None,
        "mood": None,
        "notes": None,
        "created_at": "2024-01-02T09:00:01+00:00",
    }
    row.update(overrides)
    return row


@pytest.mark.unit
class TestDbRowToSession:
    def test_basic_row(self):
        session = db_row_to_session(_session_row())

        assert session.id == "s1"
        assert session.started_at == datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)
        assert session.completed_at is None
        assert session.status == SessionStatus.IN_PROGRESS

    def test_completed_row_with_feedback(self):
        session = db_row_to_session(_session_row(
            completed_at="2024-01-02T10:00:00+00:00",
            actual_duration=60,
            rpe=8,
            mood="exhausted",
            notes="Long day",
        ))

        assert session.status == SessionStatus.COMPLETED
        assert session.mood == WorkoutMood.EXHAUSTED
        assert session.actual_duration == 60

    def test_unknown_mood_is_dropped(self):
        assert db_row_to_session(_session_row(mood="ecstatic")).mood is None

    def test_created_at_falls_back_to_started_at(self):
        session = db_row_to_session(_session_row(created_at=None))
        assert session.created_at == session.started_at

    def test_accepts_datetime_values(self):
        started = datetime(2024, 1, 2, 9, tzinfo=timezone.utc)
        session = db_row_to_session(_session_row(started_at=started, created_at=started))
        assert session.started_at == started


@pytest.mark.unit
class TestDbRowToExerciseLog:
    def test_column_names_mapped(self):
        log = db_row_to_exercise_log({
            "id": "l1",
            "session_id": "s1",
            "exercise_id": "e1",
            "set_number": 3,
            "weight_kg": 62.5,
            "reps_completed": 6,
            "rpe": 9,
            "notes": None,
            "created_at": "2024-01-02T09:10:00Z",
        })

        assert log.weight == 62.5
        assert log.reps == 6
        assert log.set_number == 3
        assert log.created_at.tzinfo is not None

    def test_optional_columns_missing(self):
        log = db_row_to_exercise_log({
            "id": "l1",
            "session_id": "s1",
            "exercise_id": "e1",
            "set_number": 1,
            "created_at": "2024-01-02T09:10:00Z",
        })

        assert log.weight is None
        assert log.reps is None
        assert log.rpe is None


@pytest.mark.unit
class TestExerciseLogUpdateToDb:
    def test_only_supplied_fields(self):
        assert exercise_log_update_to_db({"weight": 52.5}) == {"weight_kg": 52.5}

    def test_all_fields(self):
        assert exercise_log_update_to_db({
            "weight": 50, "reps": 8, "rpe": 7, "notes": "ok",
        }) == {"weight_kg": 50, "reps_completed": 8, "rpe": 7, "notes": "ok"}

    def test_unknown_fields_ignored(self):
        assert exercise_log_update_to_db({"set_number": 2}) == {}

"""
Unit tests for the session domain models.

These tests verify:
- Model validation
- Status derivation from completed_at and notes
- camelCase serialization
- Summary aggregation
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from domain.models import (
    ABANDONED_SESSION_NOTE,
    ExerciseLog,
    SessionStatus,
    WorkoutMood,
    WorkoutSession,
    WorkoutSessionWithLogs,
    summarize_session,
)

NOW = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _session(**overrides) -> WorkoutSession:
    fields = dict(
        id="s1",
        user_id="u1",
        routine_day_id="d1",
        started_at=NOW,
        created_at=NOW,
    )
    fields.update(overrides)
    return WorkoutSession(**fields)


def _log(exercise_id="e1", rpe=None, **overrides) -> ExerciseLog:
    fields = dict(
        id=f"log-{exercise_id}-{rpe}",
        session_id="s1",
        exercise_id=exercise_id,
        set_number=1,
        rpe=rpe,
        created_at=NOW,
    )
    fields.update(overrides)
    return ExerciseLog(**fields)


@pytest.mark.unit
class TestSessionStatus:
    def test_in_progress(self):
        session = _session()
        assert session.status == SessionStatus.IN_PROGRESS
        assert session.is_active is True
        assert session.is_abandoned is False

    def test_completed(self):
        session = _session(completed_at=NOW, notes="Felt strong")
        assert session.status == SessionStatus.COMPLETED
        assert session.is_active is False

    def test_abandoned_by_reserved_note(self):
        session = _session(completed_at=NOW, notes=ABANDONED_SESSION_NOTE)
        assert session.status == SessionStatus.ABANDONED
        assert session.is_abandoned is True

    def test_reserved_note_without_completion_is_in_progress(self):
        assert _session(notes=ABANDONED_SESSION_NOTE).status == SessionStatus.IN_PROGRESS


@pytest.mark.unit
class TestValidation:
    @pytest.mark.parametrize("rpe", [0, 11])
    def test_session_rpe_range(self, rpe):
        with pytest.raises(ValidationError):
            _session(rpe=rpe)

    def test_invalid_mood(self):
        with pytest.raises(ValidationError):
            _session(mood="angry")

    def test_log_set_number_positive(self):
        with pytest.raises(ValidationError):
            _log(set_number=0)

    def test_log_weight_not_negative(self):
        with pytest.raises(ValidationError):
            _log(weight=-1)

    def test_models_are_frozen(self):
        session = _session()
        with pytest.raises(ValidationError):
            session.rpe = 5


@pytest.mark.unit
class TestSerialization:
    def test_camel_case_with_status(self):
        data = _session(mood=WorkoutMood.GOOD, actual_duration=45).model_dump(
            by_alias=True, mode="json"
        )

        assert data["routineDayId"] == "d1"
        assert data["actualDuration"] == 45
        assert data["completedAt"] is None
        assert data["mood"] == "good"
        assert data["status"] == "in_progress"

    def test_populate_by_alias(self):
        session = WorkoutSession.model_validate({
            "id": "s1",
            "userId": "u1",
            "routineDayId": "d1",
            "startedAt": "2024-01-01T09:00:00Z",
            "createdAt": "2024-01-01T09:00:00Z",
        })
        assert session.routine_day_id == "d1"

    def test_session_with_logs(self):
        session = WorkoutSessionWithLogs(
            **_session().model_dump(exclude={"status"}),
            exercise_logs=[_log()],
        )
        data = session.model_dump(by_alias=True, mode="json")

        assert data["exerciseLogs"][0]["exerciseId"] == "e1"
        assert data["exerciseLogs"][0]["setNumber"] == 1


@pytest.mark.unit
class TestSummarizeSession:
    def test_aggregates(self):
        summary = summarize_session(
            _session(mood=WorkoutMood.TIRED),
            [_log("e1", rpe=6), _log("e1", rpe=8), _log("e2", rpe=10)],
        )

        assert summary.total_sets == 3
        assert summary.total_exercises == 2
        assert summary.average_rpe == 8
        assert summary.mood == WorkoutMood.TIRED

    def test_rpe_average_ignores_missing(self):
        summary = summarize_session(_session(), [_log(rpe=None), _log(rpe=7)])
        assert summary.average_rpe == 7

    def test_no_logs(self):
        summary = summarize_session(_session(), [])

        assert summary.total_sets == 0
        assert summary.total_exercises == 0
        assert summary.average_rpe is None

"""
Tests for the analytics helpers used by the session analytics repositories.
"""
import pytest
from datetime import date, datetime, timezone

from domain.models.session import ExerciseLog, WorkoutSession
from infrastructure.db.session_analytics_repository import (
    aggregate_weekly_volume,
    compute_personal_records,
    week_start,
)

pytestmark = pytest.mark.unit


def _session(session_id: str, started: datetime) -> WorkoutSession:
    return WorkoutSession(
        id=session_id,
        user_id="u1",
        routine_day_id="d1",
        started_at=started,
        created_at=started,
    )


def _log(session_id: str, weight=None, reps=None) -> ExerciseLog:
    return ExerciseLog(
        id=f"{session_id}-{weight}-{reps}",
        session_id=session_id,
        exercise_id="e1",
        set_number=1,
        weight=weight,
        reps=reps,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestWeekStart:
    @pytest.mark.parametrize("day,expected", [
        (date(2024, 1, 1), date(2024, 1, 1)),   # Monday
        (date(2024, 1, 7), date(2024, 1, 1)),   # Sunday
        (date(2024, 1, 10), date(2024, 1, 8)),
        (date(2023, 12, 31), date(2023, 12, 25)),
    ])
    def test_monday_of_week(self, day, expected):
        assert week_start(day) == expected


class TestPersonalRecords:
    def test_records_can_come_from_different_sets(self):
        records = compute_personal_records("e1", [
            _log("s", weight=100, reps=3),
            _log("s", weight=60, reps=12),
            _log("s", weight=80, reps=8),
        ])

        assert records.exercise_id == "e1"
        assert records.max_weight == 100
        assert records.max_reps == 12
        assert records.max_volume == 720

    def test_volume_needs_weight_and_reps(self):
        records = compute_personal_records("e1", [
            _log("s", weight=120),
            _log("s", reps=20),
        ])

        assert records.max_weight == 120
        assert records.max_reps == 20
        assert records.max_volume is None

    def test_no_logs(self):
        records = compute_personal_records("e1", [])
        assert (records.max_weight, records.max_reps, records.max_volume) == (None, None, None)


class TestAggregateWeeklyVolume:
    def test_buckets_oldest_first_including_empty_weeks(self):
        weeks = aggregate_weekly_volume([], [], weeks=3, today=date(2024, 1, 10))

        assert [w.week_start for w in weeks] == [
            date(2023, 12, 25), date(2024, 1, 1), date(2024, 1, 8),
        ]
        assert all(w.total_sets == 0 and w.sessions_count == 0 for w in weeks)

    def test_totals_per_week(self):
        early = _session("a", datetime(2024, 1, 2, 9, tzinfo=timezone.utc))
        late = _session("b", datetime(2024, 1, 8, 9, tzinfo=timezone.utc))
        empty = _session("c", datetime(2024, 1, 9, 9, tzinfo=timezone.utc))
        logs = [
            _log("a", weight=100, reps=5),
            _log("a", reps=10),
            _log("b", weight=50, reps=10),
        ]

        weeks = aggregate_weekly_volume([early, late, empty], logs, weeks=2, today=date(2024, 1, 10))

        first, second = weeks
        assert (first.total_sets, first.total_reps, first.total_volume, first.sessions_count) == \
            (2, 15, 500, 1)
        assert (second.total_sets, second.total_reps, second.total_volume, second.sessions_count) == \
            (1, 10, 500, 2)

    def test_sessions_outside_window_ignored(self):
        old = _session("old", datetime(2023, 11, 1, tzinfo=timezone.utc))

        weeks = aggregate_weekly_volume(
            [old], [_log("old", weight=10, reps=10)], weeks=1, today=date(2024, 1, 10)
        )

        assert weeks[0].total_sets == 0
        assert weeks[0].sessions_count == 0

    def test_logs_without_known_session_ignored(self):
        weeks = aggregate_weekly_volume(
            [], [_log("ghost", weight=10, reps=10)], weeks=1, today=date(2024, 1, 10)
        )
        assert weeks[0].total_volume == 0

    def test_window_length(self):
        assert len(aggregate_weekly_volume([], [], weeks=12, today=date(2024, 6, 1))) == 12

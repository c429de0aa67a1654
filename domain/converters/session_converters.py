"""
Converters: Database rows <-> session domain models.

Database schema (workout_sessions table):
- id: UUID
- user_id: Owner (auth user id)
- routine_day_id: UUID of the routine day being performed
- started_at, completed_at: Timestamps (completed_at NULL while active)
- actual_duration: Minutes
- rpe: 1-10
- mood: great | good | neutral | tired | exhausted
- notes: Free text (abandoned sessions carry a reserved note)
- created_at: Timestamp

Database schema (exercise_logs table):
- id: UUID
- session_id: Parent session (ON DELETE CASCADE)
- exercise_id: UUID of the exercise definition
- set_number: Caller-assigned set index
- weight_kg, reps_completed, rpe, notes
- created_at: Timestamp
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.models.session import ExerciseLog, WorkoutMood, WorkoutSession


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _parse_mood(value: Any) -> Optional[WorkoutMood]:
    if not value:
        return None
    try:
        return WorkoutMood(value)
    except ValueError:
        return None


def db_row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """
    Convert a workout_sessions row to a WorkoutSession.

    created_at falls back to started_at for rows written before the column
    had a default.
    """
    started_at = _parse_datetime(row.get("started_at"))
    return WorkoutSession(
        id=row["id"],
        user_id=row["user_id"],
        routine_day_id=row["routine_day_id"],
        started_at=started_at,
        completed_at=_parse_datetime(row.get("completed_at")),
        actual_duration=row.get("actual_duration"),
        rpe=row.get("rpe"),
        mood=_parse_mood(row.get("mood")),
        notes=row.get("notes"),
        created_at=_parse_datetime(row.get("created_at")) or started_at,
    )


def db_row_to_exercise_log(row: Dict[str, Any]) -> ExerciseLog:
    """Convert an exercise_logs row to an ExerciseLog."""
    return ExerciseLog(
        id=row["id"],
        session_id=row["session_id"],
        exercise_id=row["exercise_id"],
        set_number=row["set_number"],
        weight=row.get("weight_kg"),
        reps=row.get("reps_completed"),
        rpe=row.get("rpe"),
        notes=row.get("notes"),
        created_at=_parse_datetime(row.get("created_at")) or datetime.now(timezone.utc),
    )


# Domain field name -> exercise_logs column
EXERCISE_LOG_COLUMNS = {
    "weight": "weight_kg",
    "reps": "reps_completed",
    "rpe": "rpe",
    "notes": "notes",
}


def exercise_log_update_to_db(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a partial log update onto exercise_logs columns.

    Only keys present in ``fields`` are emitted, so omitted fields are left
    untouched by the UPDATE.
    """
    return {
        EXERCISE_LOG_COLUMNS[key]: value
        for key, value in fields.items()
        if key in EXERCISE_LOG_COLUMNS
    }

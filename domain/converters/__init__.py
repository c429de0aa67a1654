"""
Domain converters between Supabase rows and session models.

- db_row_to_session: workout_sessions row -> WorkoutSession
- db_row_to_exercise_log: exercise_logs row -> ExerciseLog
- exercise_log_update_to_db: partial log update -> exercise_logs columns

All converters are pure functions with no side effects.
"""

from domain.converters.session_converters import (
    db_row_to_exercise_log,
    db_row_to_session,
    exercise_log_update_to_db,
)

__all__ = [
    "db_row_to_session",
    "db_row_to_exercise_log",
    "exercise_log_update_to_db",
]

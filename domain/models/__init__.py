"""
Domain models for the Workout Session API.

These models represent the core tracking concepts:
- WorkoutSession: One execution of a routine day by a user
- ExerciseLog: A single performed set inside a session
- WorkoutSessionWithLogs: A session with its logs, oldest first
- SessionSummary: Per-session aggregates for history views

Usage:
    >>> from datetime import datetime
    >>> from domain.models import WorkoutSession, SessionStatus

    >>> now = datetime(2024, 1, 1, 9, 0)
    >>> session = WorkoutSession(
    ...     id="s1", user_id="u1", routine_day_id="d1", started_at=now, created_at=now
    ... )
    >>> session.status
    <SessionStatus.IN_PROGRESS: 'in_progress'>

    >>> # Serialize with camelCase keys
    >>> payload = session.model_dump(by_alias=True, mode="json")
"""

from domain.models.session import (
    ABANDONED_SESSION_NOTE,
    RPE_MAX,
    RPE_MIN,
    ExerciseLog,
    SessionStatus,
    SessionSummary,
    WorkoutMood,
    WorkoutSession,
    WorkoutSessionWithLogs,
    summarize_session,
)

__all__ = [
    # Entities
    "WorkoutSession",
    "WorkoutSessionWithLogs",
    "ExerciseLog",
    "SessionSummary",
    # Enums
    "SessionStatus",
    "WorkoutMood",
    # Constants and helpers
    "ABANDONED_SESSION_NOTE",
    "RPE_MIN",
    "RPE_MAX",
    "summarize_session",
]

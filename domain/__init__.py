"""
Domain layer for the Workout Session API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseLog,
    SessionStatus,
    SessionSummary,
    WorkoutMood,
    WorkoutSession,
    WorkoutSessionWithLogs,
)

__all__ = [
    "ExerciseLog",
    "SessionStatus",
    "SessionSummary",
    "WorkoutMood",
    "WorkoutSession",
    "WorkoutSessionWithLogs",
]

"""
Repository Interfaces (Ports) for the Workout Session API.

This package defines abstract interfaces that decouple use cases from
infrastructure (Supabase). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutSessionRepository

    class SessionService:
        def __init__(self, session_repo: WorkoutSessionRepository):
            self.session_repo = session_repo
"""

# Session lifecycle and logging
from application.ports.session_repository import (
    ErrorCode,
    RepositoryResult,
    WorkoutSessionRepository,
    SessionCompletionData,
    ExerciseLogData,
    ExerciseLogUpdateData,
    FindSessionsOptions,
)

# Progress analytics
from application.ports.session_analytics_repository import (
    SessionAnalyticsRepository,
    PersonalRecords,
    WeeklyVolume,
)

__all__ = [
    # Results
    "ErrorCode",
    "RepositoryResult",
    # Sessions
    "WorkoutSessionRepository",
    "SessionCompletionData",
    "ExerciseLogData",
    "ExerciseLogUpdateData",
    "FindSessionsOptions",
    # Analytics
    "SessionAnalyticsRepository",
    "PersonalRecords",
    "WeeklyVolume",
]

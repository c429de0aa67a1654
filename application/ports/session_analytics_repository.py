"""
Session Analytics Repository Interface (Port).

Read-only progress queries across a user's logged sets: per-exercise history,
personal records and weekly training volume. Kept apart from
WorkoutSessionRepository so views that only need analytics do not depend on
the lifecycle operations.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Protocol

from application.ports.session_repository import RepositoryResult
from domain.models.session import ExerciseLog


@dataclass
class PersonalRecords:
    """Best single-set values for an exercise."""
    exercise_id: str
    max_weight: Optional[float] = None  # kg
    max_reps: Optional[int] = None
    max_volume: Optional[float] = None  # weight * reps of one set


@dataclass
class WeeklyVolume:
    """Training volume for one ISO week (Monday start)."""
    week_start: date
    total_sets: int = 0
    total_reps: int = 0
    total_volume: float = 0.0
    sessions_count: int = 0


class SessionAnalyticsRepository(Protocol):
    """Abstract interface for progress analytics over exercise logs."""

    def get_exercise_history(
        self,
        user_id: str,
        exercise_id: str,
        limit: int = 20,
    ) -> RepositoryResult[List[ExerciseLog]]:
        """
        Get the user's logs for one exercise, newest first.

        Args:
            user_id: Owner of the sessions the logs belong to
            exercise_id: Exercise definition ID
            limit: Maximum logs to return
        """
        ...

    def get_personal_records(
        self,
        user_id: str,
        exercise_id: str,
    ) -> RepositoryResult[PersonalRecords]:
        """Get max weight, max reps and max single-set volume for an exercise."""
        ...

    def get_weekly_volume(
        self,
        user_id: str,
        weeks: int = 4,
    ) -> RepositoryResult[List[WeeklyVolume]]:
        """
        Get weekly volume for the last ``weeks`` weeks, oldest first.

        Weeks without activity are included with zero totals.
        """
        ...

"""
Workout Session Repository Interface (Port).

This module defines the abstract interface for workout session persistence:
the session lifecycle (start, complete, abandon), exercise set logging, and
the read queries used by history and dashboard views.

Every operation returns a RepositoryResult instead of raising. Expected
failures carry an ErrorCode so callers can map them to transport statuses.
"""
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Protocol, TypeVar

from domain.models.session import (
    ExerciseLog,
    SessionStatus,
    SessionSummary,
    WorkoutMood,
    WorkoutSession,
    WorkoutSessionWithLogs,
)

T = TypeVar("T")

# Logs of a completed or abandoned session can still be corrected or deleted.
# When False, log update and delete on a closed session fail with CONFLICT.
LOG_EDITS_AFTER_COMPLETION_ALLOWED = True


class ErrorCode(str, Enum):
    """Failure taxonomy shared by repositories and use cases."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STORE_ERROR = "STORE_ERROR"


@dataclass
class RepositoryResult(Generic[T]):
    """Tagged success/failure outcome of a repository operation."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "RepositoryResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: ErrorCode) -> "RepositoryResult[T]":
        return cls(success=False, error=error, error_code=error_code)


@dataclass
class SessionCompletionData:
    """Optional feedback recorded when a session is completed."""
    rpe: Optional[int] = None
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = None
    actual_duration: Optional[int] = None  # minutes


@dataclass
class ExerciseLogData:
    """A single performed set. Weight is in kilograms."""
    exercise_id: str
    set_number: int
    weight: Optional[float] = None
    reps: Optional[int] = None
    rpe: Optional[int] = None
    notes: Optional[str] = None


@dataclass
class ExerciseLogUpdateData:
    """Partial update for an existing log. None means "leave unchanged"."""
    weight: Optional[float] = None
    reps: Optional[int] = None
    rpe: Optional[int] = None
    notes: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        """Return only the supplied fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def is_empty(self) -> bool:
        return not self.to_fields()


@dataclass
class FindSessionsOptions:
    """Filters and pagination for listing a user's sessions."""
    limit: Optional[int] = None
    offset: Optional[int] = None
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    status: Optional[SessionStatus] = None


class WorkoutSessionRepository(Protocol):
    """
    Abstract interface for workout session persistence.

    Implementations enforce the session invariants:
    - at most one active (not completed) session per user
    - completed sessions accept no new exercise logs
    - completion and abandonment happen at most once
    """

    # -------------------------------------------------------------------------
    # Session Lifecycle
    # -------------------------------------------------------------------------

    def start_session(
        self,
        user_id: str,
        routine_day_id: str,
    ) -> RepositoryResult[str]:
        """
        Start a new workout session for a user.

        Args:
            user_id: Authenticated user ID
            routine_day_id: Routine day being performed (must belong to user)

        Returns:
            Result with the new session ID. Fails with UNAUTHORIZED when the
            caller is not the authenticated user, NOT_FOUND when the routine
            day does not exist, FORBIDDEN when it belongs to another user and
            CONFLICT when the user already has an active session.
        """
        ...

    def complete_session(
        self,
        session_id: str,
        data: SessionCompletionData,
    ) -> RepositoryResult[None]:
        """
        Mark a session as completed with optional feedback.

        Guarded update: a session that is already completed is left as is
        and the call still succeeds.
        """
        ...

    def abandon_session(self, session_id: str) -> RepositoryResult[None]:
        """
        Mark a session as abandoned (user quit before finishing).

        Same guarded update as complete_session. The notes are overwritten
        with the reserved abandon note.
        """
        ...

    # -------------------------------------------------------------------------
    # Exercise Logging
    # -------------------------------------------------------------------------

    def log_exercise_set(
        self,
        session_id: str,
        data: ExerciseLogData,
    ) -> RepositoryResult[str]:
        """
        Log a single exercise set in an active session.

        Returns:
            Result with the new log ID. Fails with NOT_FOUND when the session
            does not exist and CONFLICT when it is already completed.
        """
        ...

    def update_exercise_log(
        self,
        log_id: str,
        data: ExerciseLogUpdateData,
    ) -> RepositoryResult[None]:
        """Partially update weight, reps, RPE or notes of a log."""
        ...

    def delete_exercise_log(self, log_id: str) -> RepositoryResult[None]:
        """Delete a log entry (corrections)."""
        ...

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_session_by_id(
        self,
        session_id: str,
    ) -> RepositoryResult[Optional[WorkoutSession]]:
        """Get a session, or a successful result with None when absent."""
        ...

    def get_session_with_logs(
        self,
        session_id: str,
    ) -> RepositoryResult[Optional[WorkoutSessionWithLogs]]:
        """Get a session with its logs ordered by creation time."""
        ...

    def get_sessions_by_user(
        self,
        user_id: str,
        options: Optional[FindSessionsOptions] = None,
    ) -> RepositoryResult[List[WorkoutSession]]:
        """
        List a user's sessions, newest first.

        The status filter supports in_progress and completed. Abandoned
        sessions are stored as completed and are returned by the completed
        filter; an abandoned filter is ignored.
        """
        ...

    def get_exercise_logs(
        self,
        session_id: str,
    ) -> RepositoryResult[List[ExerciseLog]]:
        """Get all logs of a session ordered by creation time."""
        ...

    def get_session_summaries(
        self,
        user_id: str,
        limit: int = 10,
    ) -> RepositoryResult[List[SessionSummary]]:
        """Get aggregate summaries for the user's most recent sessions."""
        ...

    def get_active_session(
        self,
        user_id: str,
    ) -> RepositoryResult[Optional[WorkoutSession]]:
        """Get the user's in-progress session, or None."""
        ...

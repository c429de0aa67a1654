"""
Track Session Use Case.

Orchestrates the session tracking endpoints. The repository does not reject
cross-user reads by session ID, so every operation on an existing session
first loads it here and checks that it belongs to the caller:

    session missing            -> NOT_FOUND
    session owned by another   -> FORBIDDEN
    session already closed     -> CONFLICT (complete, abandon, log set; log
                                  edits only when LOG_EDITS_AFTER_COMPLETION_ALLOWED
                                  is False)
"""
from dataclasses import dataclass
from typing import Any, Optional
import logging

from application.ports.session_repository import (
    LOG_EDITS_AFTER_COMPLETION_ALLOWED,
    ErrorCode,
    ExerciseLogData,
    ExerciseLogUpdateData,
    FindSessionsOptions,
    RepositoryResult,
    SessionCompletionData,
    WorkoutSessionRepository,
)
from domain.models.session import WorkoutSession, WorkoutSessionWithLogs

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = "Session not found"
SESSION_FORBIDDEN = "You do not have access to this session"
SESSION_ALREADY_COMPLETED = "Session is already completed"
LOG_NOT_FOUND = "Exercise log not found in this session"
EMPTY_LOG_UPDATE = "No fields provided to update"


@dataclass
class TrackSessionResult:
    """Result of a session tracking operation."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @classmethod
    def from_repository(cls, result: RepositoryResult) -> "TrackSessionResult":
        return cls(
            success=result.success,
            data=result.data,
            error=result.error,
            error_code=result.error_code,
        )


def _failure(error: str, error_code: ErrorCode) -> TrackSessionResult:
    return TrackSessionResult(success=False, error=error, error_code=error_code)


class TrackSessionUseCase:
    """
    Use case for the workout session lifecycle.

    Wraps a WorkoutSessionRepository with the per-request authorization and
    state checks the HTTP layer needs.
    """

    def __init__(self, session_repo: WorkoutSessionRepository):
        """
        Initialize with required dependencies.

        Args:
            session_repo: Repository for session persistence
        """
        self._session_repo = session_repo

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load_owned_session(
        self,
        session_id: str,
        user_id: str,
    ) -> TrackSessionResult:
        """Load a session and verify the caller owns it."""
        result = self._session_repo.get_session_by_id(session_id)
        if not result.success:
            logger.error(f"Error fetching session {session_id}: {result.error}")
            return TrackSessionResult.from_repository(result)

        session: Optional[WorkoutSession] = result.data
        if session is None:
            return _failure(SESSION_NOT_FOUND, ErrorCode.NOT_FOUND)
        if session.user_id != user_id:
            logger.warning(f"User {user_id} attempted to access session {session_id}")
            return _failure(SESSION_FORBIDDEN, ErrorCode.FORBIDDEN)

        return TrackSessionResult(success=True, data=session)

    def _load_open_session(self, session_id: str, user_id: str) -> TrackSessionResult:
        """Load an owned session and require it to still be active."""
        owned = self._load_owned_session(session_id, user_id)
        if not owned.success:
            return owned
        if not owned.data.is_active:
            return _failure(SESSION_ALREADY_COMPLETED, ErrorCode.CONFLICT)
        return owned

    def _load_owned_log(
        self,
        session_id: str,
        log_id: str,
        user_id: str,
    ) -> TrackSessionResult:
        """Verify the session is the caller's and the log belongs to it."""
        owned = self._load_owned_session(session_id, user_id)
        if not owned.success:
            return owned

        logs_result = self._session_repo.get_exercise_logs(session_id)
        if not logs_result.success:
            logger.error(f"Error fetching logs for session {session_id}: {logs_result.error}")
            return TrackSessionResult.from_repository(logs_result)

        if not any(log.id == log_id for log in logs_result.data):
            return _failure(LOG_NOT_FOUND, ErrorCode.NOT_FOUND)

        if not LOG_EDITS_AFTER_COMPLETION_ALLOWED and not owned.data.is_active:
            return _failure(SESSION_ALREADY_COMPLETED, ErrorCode.CONFLICT)

        return owned

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_session(self, user_id: str, routine_day_id: str) -> TrackSessionResult:
        """Start a session on a routine day. Data is the new session ID."""
        result = self._session_repo.start_session(user_id, routine_day_id)
        if not result.success and result.error_code == ErrorCode.STORE_ERROR:
            logger.error(f"Error starting session for {user_id}: {result.error}")
        return TrackSessionResult.from_repository(result)

    def complete_session(
        self,
        session_id: str,
        user_id: str,
        data: SessionCompletionData,
    ) -> TrackSessionResult:
        """Complete an owned, active session."""
        checked = self._load_open_session(session_id, user_id)
        if not checked.success:
            return checked
        return TrackSessionResult.from_repository(
            self._session_repo.complete_session(session_id, data)
        )

    def abandon_session(self, session_id: str, user_id: str) -> TrackSessionResult:
        """Abandon an owned, active session."""
        checked = self._load_open_session(session_id, user_id)
        if not checked.success:
            return checked
        return TrackSessionResult.from_repository(
            self._session_repo.abandon_session(session_id)
        )

    # -------------------------------------------------------------------------
    # Exercise logs
    # -------------------------------------------------------------------------

    def log_exercise_set(
        self,
        session_id: str,
        user_id: str,
        data: ExerciseLogData,
    ) -> TrackSessionResult:
        """Log a set in an owned, active session. Data is the new log ID."""
        checked = self._load_open_session(session_id, user_id)
        if not checked.success:
            if checked.error_code == ErrorCode.CONFLICT:
                checked.error = "Cannot log exercises to a completed session"
            return checked
        return TrackSessionResult.from_repository(
            self._session_repo.log_exercise_set(session_id, data)
        )

    def update_exercise_log(
        self,
        session_id: str,
        log_id: str,
        user_id: str,
        data: ExerciseLogUpdateData,
    ) -> TrackSessionResult:
        """Correct a log. Allowed on completed sessions."""
        if data.is_empty():
            return _failure(EMPTY_LOG_UPDATE, ErrorCode.VALIDATION_ERROR)

        checked = self._load_owned_log(session_id, log_id, user_id)
        if not checked.success:
            return checked
        return TrackSessionResult.from_repository(
            self._session_repo.update_exercise_log(log_id, data)
        )

    def delete_exercise_log(
        self,
        session_id: str,
        log_id: str,
        user_id: str,
    ) -> TrackSessionResult:
        """Delete a log. Allowed on completed sessions."""
        checked = self._load_owned_log(session_id, log_id, user_id)
        if not checked.success:
            return checked
        return TrackSessionResult.from_repository(
            self._session_repo.delete_exercise_log(log_id)
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_session_detail(self, session_id: str, user_id: str) -> TrackSessionResult:
        """Get an owned session with its logs."""
        result = self._session_repo.get_session_with_logs(session_id)
        if not result.success:
            logger.error(f"Error fetching session {session_id}: {result.error}")
            return TrackSessionResult.from_repository(result)

        session: Optional[WorkoutSessionWithLogs] = result.data
        if session is None:
            return _failure(SESSION_NOT_FOUND, ErrorCode.NOT_FOUND)
        if session.user_id != user_id:
            return _failure(SESSION_FORBIDDEN, ErrorCode.FORBIDDEN)

        return TrackSessionResult(success=True, data=session)

    def list_exercise_logs(self, session_id: str, user_id: str) -> TrackSessionResult:
        """Get the logs of an owned session."""
        owned = self._load_owned_session(session_id, user_id)
        if not owned.success:
            return owned

        result = self._session_repo.get_exercise_logs(session_id)
        if not result.success:
            logger.error(f"Error fetching logs for session {session_id}: {result.error}")
        return TrackSessionResult.from_repository(result)

    def list_sessions(
        self,
        user_id: str,
        options: Optional[FindSessionsOptions] = None,
    ) -> TrackSessionResult:
        """List the caller's sessions."""
        result = self._session_repo.get_sessions_by_user(user_id, options)
        if not result.success:
            logger.error(f"Error listing sessions for {user_id}: {result.error}")
        return TrackSessionResult.from_repository(result)

    def get_active_session(self, user_id: str) -> TrackSessionResult:
        """Get the caller's in-progress session (data is None when there is none)."""
        result = self._session_repo.get_active_session(user_id)
        if not result.success:
            logger.error(f"Error fetching active session for {user_id}: {result.error}")
        return TrackSessionResult.from_repository(result)

    def get_session_summaries(self, user_id: str, limit: int = 10) -> TrackSessionResult:
        """Aggregated summaries of the caller's most recent sessions."""
        result = self._session_repo.get_session_summaries(user_id, limit)
        if not result.success:
            logger.error(f"Error fetching session summaries for {user_id}: {result.error}")
        return TrackSessionResult.from_repository(result)

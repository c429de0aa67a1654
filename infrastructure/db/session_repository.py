"""
Supabase Workout Session Repository Implementation.

This module implements the WorkoutSessionRepository protocol using Supabase
as the backend. Sessions live in workout_sessions, performed sets in
exercise_logs. Row-level security on both tables restricts access to the
owning user; the checks here are the first line of defense.
"""
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from application.ports.session_repository import (
    ErrorCode,
    ExerciseLogData,
    ExerciseLogUpdateData,
    FindSessionsOptions,
    RepositoryResult,
    SessionCompletionData,
)
from domain.converters.session_converters import (
    db_row_to_exercise_log,
    db_row_to_session,
    exercise_log_update_to_db,
)
from domain.models.session import (
    ABANDONED_SESSION_NOTE,
    ExerciseLog,
    SessionStatus,
    SessionSummary,
    WorkoutSession,
    WorkoutSessionWithLogs,
    summarize_session,
)

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "workout_sessions"
LOGS_TABLE = "exercise_logs"
ROUTINE_DAYS_TABLE = "routine_days"

DEFAULT_PAGE_SIZE = 10

ACTIVE_SESSION_CONFLICT = "User already has an active session. Complete or abandon it first."
COMPLETED_SESSION_CONFLICT = "Cannot log exercises to a completed session"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_unique_violation(error: Exception) -> bool:
    """True when the store rejected a write on a unique index (SQLSTATE 23505)."""
    error_msg = str(error)
    return "23505" in error_msg or "duplicate key" in error_msg.lower()


def _routine_owner(row: Dict[str, Any]) -> Optional[str]:
    """Extract the owning user from a routine_days row joined to routines."""
    routine = row.get("routines")
    if isinstance(routine, list):
        routine = routine[0] if routine else None
    if not routine:
        return None
    return routine.get("user_id")


class SupabaseWorkoutSessionRepository:
    """
    Supabase implementation of WorkoutSessionRepository.

    The repository is bound to the identity that made the request. start_session
    compares it with the user_id argument instead of trusting the input.
    """

    def __init__(self, client: Client, current_user_id: Optional[str] = None):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
            current_user_id: Authenticated user ID for this request, or None
        """
        self._client = client
        self._current_user_id = current_user_id

    # =========================================================================
    # Session Lifecycle
    # =========================================================================

    def start_session(
        self,
        user_id: str,
        routine_day_id: str,
    ) -> RepositoryResult[str]:
        """Start a new session after checking identity, ownership and exclusivity."""
        if not self._current_user_id or self._current_user_id != user_id:
            return RepositoryResult.fail(
                "Unauthorized: User must be authenticated",
                ErrorCode.UNAUTHORIZED,
            )

        try:
            day_result = self._client.table(ROUTINE_DAYS_TABLE) \
                .select("id, routine_id, routines!inner(user_id)") \
                .eq("id", routine_day_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to load routine day: {e}", ErrorCode.STORE_ERROR
            )

        if not day_result.data:
            return RepositoryResult.fail("Routine day not found", ErrorCode.NOT_FOUND)

        if _routine_owner(day_result.data[0]) != user_id:
            return RepositoryResult.fail(
                "Unauthorized: Routine day does not belong to user",
                ErrorCode.FORBIDDEN,
            )

        active = self.get_active_session(user_id)
        if not active.success:
            return RepositoryResult.fail(active.error, active.error_code)
        if active.data is not None:
            return RepositoryResult.fail(ACTIVE_SESSION_CONFLICT, ErrorCode.CONFLICT)

        record = {
            "user_id": user_id,
            "routine_day_id": routine_day_id,
            "started_at": _now_iso(),
        }

        try:
            result = self._client.table(SESSIONS_TABLE).insert(record).execute()
        except Exception as e:
            # A concurrent start lost the race on the one-active-session index
            if _is_unique_violation(e):
                return RepositoryResult.fail(ACTIVE_SESSION_CONFLICT, ErrorCode.CONFLICT)
            return RepositoryResult.fail(
                f"Failed to start session: {e}", ErrorCode.STORE_ERROR
            )

        if not result.data:
            return RepositoryResult.fail(
                "Start session returned no ID", ErrorCode.STORE_ERROR
            )

        session_id = result.data[0]["id"]
        logger.info(f"Workout session {session_id} started for user {user_id}")
        return RepositoryResult.ok(session_id)

    def complete_session(
        self,
        session_id: str,
        data: SessionCompletionData,
    ) -> RepositoryResult[None]:
        """Complete a session; no-op when it is already completed."""
        update = {
            "completed_at": _now_iso(),
            "rpe": data.rpe,
            "mood": data.mood.value if data.mood is not None else None,
            "notes": data.notes,
            "actual_duration": data.actual_duration,
        }
        return self._close_session(session_id, update, "complete")

    def abandon_session(self, session_id: str) -> RepositoryResult[None]:
        """Abandon a session; no-op when it is already completed."""
        update = {
            "completed_at": _now_iso(),
            "notes": ABANDONED_SESSION_NOTE,
        }
        return self._close_session(session_id, update, "abandon")

    def _close_session(
        self,
        session_id: str,
        update: Dict[str, Any],
        action: str,
    ) -> RepositoryResult[None]:
        """
        Guarded update shared by complete and abandon.

        The completed_at IS NULL predicate makes the UPDATE affect zero rows
        once the session is closed, which is reported as success.
        """
        try:
            result = self._client.table(SESSIONS_TABLE) \
                .update(update) \
                .eq("id", session_id) \
                .is_("completed_at", "null") \
                .execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to {action} session: {e}", ErrorCode.STORE_ERROR
            )

        if result.data:
            logger.info(f"Workout session {session_id}: {action} applied")
        return RepositoryResult.ok(None)

    # =========================================================================
    # Exercise Logging
    # =========================================================================

    def log_exercise_set(
        self,
        session_id: str,
        data: ExerciseLogData,
    ) -> RepositoryResult[str]:
        """Insert a log after checking the session exists and is active."""
        try:
            session_result = self._client.table(SESSIONS_TABLE) \
                .select("id, completed_at") \
                .eq("id", session_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to load session: {e}", ErrorCode.STORE_ERROR
            )

        if not session_result.data:
            return RepositoryResult.fail("Session not found", ErrorCode.NOT_FOUND)

        if session_result.data[0].get("completed_at"):
            return RepositoryResult.fail(COMPLETED_SESSION_CONFLICT, ErrorCode.CONFLICT)

        record = {
            "session_id": session_id,
            "exercise_id": data.exercise_id,
            "set_number": data.set_number,
            "weight_kg": data.weight,
            "reps_completed": data.reps,
            "rpe": data.rpe,
            "notes": data.notes,
        }

        try:
            result = self._client.table(LOGS_TABLE).insert(record).execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to log exercise set: {e}", ErrorCode.STORE_ERROR
            )

        if not result.data:
            return RepositoryResult.fail(
                "Log exercise set returned no ID", ErrorCode.STORE_ERROR
            )

        return RepositoryResult.ok(result.data[0]["id"])

    # Corrections stay possible after a session is completed
    # (LOG_EDITS_AFTER_COMPLETION_ALLOWED): update and delete do not re-check
    # session state or ownership here. Callers verify that the log belongs to
    # a session owned by the requester and apply the completion policy.

    def update_exercise_log(
        self,
        log_id: str,
        data: ExerciseLogUpdateData,
    ) -> RepositoryResult[None]:
        """Update only the supplied fields of a log."""
        update = exercise_log_update_to_db(data.to_fields())
        if not update:
            return RepositoryResult.ok(None)

        try:
            self._client.table(LOGS_TABLE) \
                .update(update) \
                .eq("id", log_id) \
                .execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to update exercise log: {e}", ErrorCode.STORE_ERROR
            )

        return RepositoryResult.ok(None)

    def delete_exercise_log(self, log_id: str) -> RepositoryResult[None]:
        """Hard delete a log."""
        try:
            self._client.table(LOGS_TABLE).delete().eq("id", log_id).execute()
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to delete exercise log: {e}", ErrorCode.STORE_ERROR
            )

        return RepositoryResult.ok(None)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_session_by_id(
        self,
        session_id: str,
    ) -> RepositoryResult[Optional[WorkoutSession]]:
        """Get a session, None when not found."""
        try:
            result = self._client.table(SESSIONS_TABLE) \
                .select("*") \
                .eq("id", session_id) \
                .limit(1) \
                .execute()

            if not result.data:
                return RepositoryResult.ok(None)

            return RepositoryResult.ok(db_row_to_session(result.data[0]))
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch session: {e}", ErrorCode.STORE_ERROR
            )

    def get_session_with_logs(
        self,
        session_id: str,
    ) -> RepositoryResult[Optional[WorkoutSessionWithLogs]]:
        """Get a session and its logs, None when the session is not found."""
        session_result = self.get_session_by_id(session_id)
        if not session_result.success or session_result.data is None:
            return session_result

        logs_result = self.get_exercise_logs(session_id)
        if not logs_result.success:
            return RepositoryResult.fail(logs_result.error, logs_result.error_code)

        session = session_result.data
        return RepositoryResult.ok(
            WorkoutSessionWithLogs(
                **session.model_dump(exclude={"status"}),
                exercise_logs=logs_result.data,
            )
        )

    def get_sessions_by_user(
        self,
        user_id: str,
        options: Optional[FindSessionsOptions] = None,
    ) -> RepositoryResult[List[WorkoutSession]]:
        """List sessions newest first with status, date and page filters."""
        options = options or FindSessionsOptions()

        try:
            query = self._client.table(SESSIONS_TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .order("started_at", desc=True)

            if options.status == SessionStatus.IN_PROGRESS:
                query = query.is_("completed_at", "null")
            elif options.status == SessionStatus.COMPLETED:
                query = query.not_.is_("completed_at", "null")
            # ABANDONED is only visible through the notes; no store filter

            if options.from_date:
                query = query.gte("started_at", options.from_date.isoformat())
            if options.to_date:
                query = query.lte("started_at", options.to_date.isoformat())

            if options.offset:
                page_size = options.limit or DEFAULT_PAGE_SIZE
                query = query.range(options.offset, options.offset + page_size - 1)
            elif options.limit:
                query = query.limit(options.limit)

            result = query.execute()
            sessions = [db_row_to_session(row) for row in result.data or []]
            return RepositoryResult.ok(sessions)
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch sessions: {e}", ErrorCode.STORE_ERROR
            )

    def get_exercise_logs(
        self,
        session_id: str,
    ) -> RepositoryResult[List[ExerciseLog]]:
        """Get a session's logs, oldest first."""
        try:
            result = self._client.table(LOGS_TABLE) \
                .select("*") \
                .eq("session_id", session_id) \
                .order("created_at", desc=False) \
                .execute()

            logs = [db_row_to_exercise_log(row) for row in result.data or []]
            return RepositoryResult.ok(logs)
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch exercise logs: {e}", ErrorCode.STORE_ERROR
            )

    def get_session_summaries(
        self,
        user_id: str,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> RepositoryResult[List[SessionSummary]]:
        """Summaries of the most recent sessions, aggregated in memory."""
        try:
            sessions_result = self._client.table(SESSIONS_TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .order("started_at", desc=True) \
                .limit(limit) \
                .execute()

            sessions = [db_row_to_session(row) for row in sessions_result.data or []]
            if not sessions:
                return RepositoryResult.ok([])

            logs_result = self._client.table(LOGS_TABLE) \
                .select("*") \
                .in_("session_id", [s.id for s in sessions]) \
                .execute()

            logs_by_session: Dict[str, List[ExerciseLog]] = defaultdict(list)
            for row in logs_result.data or []:
                log = db_row_to_exercise_log(row)
                logs_by_session[log.session_id].append(log)

            summaries = [
                summarize_session(session, logs_by_session.get(session.id, []))
                for session in sessions
            ]
            return RepositoryResult.ok(summaries)
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch session summaries: {e}", ErrorCode.STORE_ERROR
            )

    def get_active_session(
        self,
        user_id: str,
    ) -> RepositoryResult[Optional[WorkoutSession]]:
        """Most recent session without completed_at, None if there is none."""
        try:
            result = self._client.table(SESSIONS_TABLE) \
                .select("*") \
                .eq("user_id", user_id) \
                .is_("completed_at", "null") \
                .order("started_at", desc=True) \
                .limit(1) \
                .execute()

            if not result.data:
                return RepositoryResult.ok(None)

            return RepositoryResult.ok(db_row_to_session(result.data[0]))
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch active session: {e}", ErrorCode.STORE_ERROR
            )

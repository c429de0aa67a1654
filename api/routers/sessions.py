"""
Sessions router for workout session tracking.

This router contains endpoints for:
- /sessions - Start a session / list the user's sessions
- /sessions/summaries - Aggregated summaries of recent sessions
- /sessions/active - The user's in-progress session
- /sessions/{session_id} - Detail, complete (PATCH), abandon (DELETE)
- /sessions/{session_id}/logs - Log a set / list logs
- /sessions/{session_id}/logs/{log_id} - Correct or delete a log

IMPORTANT: /sessions/summaries and /sessions/active are registered BEFORE
/sessions/{session_id} so the literal paths are not parsed as session IDs.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, get_settings, get_track_session_use_case
from api.responses import error_response
from api.schemas.sessions import (
    MAX_PAGE_SIZE,
    CompleteSessionRequest,
    LogExerciseSetRequest,
    StartSessionRequest,
    UpdateExerciseLogRequest,
)
from application.ports.session_repository import FindSessionsOptions
from application.use_cases.track_session import TrackSessionUseCase
from backend.settings import Settings
from domain.models.session import SessionStatus

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Sessions"],
)


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.post("/sessions", status_code=201)
def start_session_endpoint(
    request: StartSessionRequest,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """
    Start a workout session on one of the user's routine days.

    Fails with 409 when the user already has an active session.

    Returns:
        Success status and the new session ID
    """
    result = use_case.start_session(user_id, str(request.routine_day_id))
    if not result.success:
        return error_response(result.error, result.error_code)

    logger.info(f"User {user_id} started session {result.data}")
    return {"success": True, "sessionId": result.data}


@router.get("/sessions")
def list_sessions_endpoint(
    status: Optional[SessionStatus] = Query(None, description="in_progress or completed"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
    settings: Settings = Depends(get_settings),
):
    """
    List the user's sessions, newest first.

    Args:
        status: Filter by in_progress or completed (abandoned counts as completed)
        limit: Page size (defaults to the configured page size)
        offset: Number of sessions to skip
        from_date: Only sessions started at or after this time
        to_date: Only sessions started at or before this time

    Returns:
        Sessions and their count
    """
    options = FindSessionsOptions(
        limit=limit or settings.default_page_size,
        offset=offset,
        from_date=from_date,
        to_date=to_date,
        status=status,
    )
    result = use_case.list_sessions(user_id, options)
    if not result.success:
        return error_response(result.error, result.error_code)

    sessions = [_dump(session) for session in result.data]
    return {"success": True, "sessions": sessions, "count": len(sessions)}


@router.get("/sessions/summaries")
def list_session_summaries_endpoint(
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """Get set, exercise and RPE aggregates for the user's recent sessions."""
    result = use_case.get_session_summaries(user_id, limit)
    if not result.success:
        return error_response(result.error, result.error_code)

    summaries = [_dump(summary) for summary in result.data]
    return {"success": True, "summaries": summaries, "count": len(summaries)}


@router.get("/sessions/active")
def get_active_session_endpoint(
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """
    Get the user's in-progress session, if any.

    Returns:
        ``active`` flag and the session (null when there is none)
    """
    result = use_case.get_active_session(user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    session = result.data
    return {
        "success": True,
        "active": session is not None,
        "session": _dump(session) if session is not None else None,
    }


# =============================================================================
# Single Session Endpoints
# =============================================================================


@router.get("/sessions/{session_id}")
def get_session_endpoint(
    session_id: UUID,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """Get a session with its exercise logs."""
    result = use_case.get_session_detail(str(session_id), user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "session": _dump(result.data)}


@router.patch("/sessions/{session_id}")
def complete_session_endpoint(
    session_id: UUID,
    request: CompleteSessionRequest,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """
    Complete an active session with optional RPE, mood, notes and duration.

    Returns 409 if the session is already completed or abandoned.
    """
    result = use_case.complete_session(
        str(session_id), user_id, request.to_completion_data()
    )
    if not result.success:
        return error_response(result.error, result.error_code)

    logger.info(f"User {user_id} completed session {session_id}")
    return {"success": True, "message": "Session completed"}


@router.delete("/sessions/{session_id}")
def abandon_session_endpoint(
    session_id: UUID,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """
    Abandon an active session.

    The session is kept and marked as abandoned, not deleted.
    """
    result = use_case.abandon_session(str(session_id), user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    logger.info(f"User {user_id} abandoned session {session_id}")
    return {"success": True, "message": "Session abandoned"}


# =============================================================================
# Exercise Log Endpoints
# =============================================================================


@router.post("/sessions/{session_id}/logs", status_code=201)
def log_exercise_set_endpoint(
    session_id: UUID,
    request: LogExerciseSetRequest,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """Log a performed set in an active session."""
    result = use_case.log_exercise_set(str(session_id), user_id, request.to_log_data())
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "logId": result.data}


@router.get("/sessions/{session_id}/logs")
def list_exercise_logs_endpoint(
    session_id: UUID,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """Get a session's logs, oldest first."""
    result = use_case.list_exercise_logs(str(session_id), user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    logs = [_dump(log) for log in result.data]
    return {"success": True, "logs": logs, "count": len(logs)}


@router.patch("/sessions/{session_id}/logs/{log_id}")
def update_exercise_log_endpoint(
    session_id: UUID,
    log_id: UUID,
    request: UpdateExerciseLogRequest,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """
    Correct weight, reps, RPE or notes of a log.

    Only the supplied fields change. An empty body is rejected with 400.
    """
    result = use_case.update_exercise_log(
        str(session_id), str(log_id), user_id, request.to_update_data()
    )
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "message": "Exercise log updated"}


@router.delete("/sessions/{session_id}/logs/{log_id}")
def delete_exercise_log_endpoint(
    session_id: UUID,
    log_id: UUID,
    user_id: str = Depends(get_current_user),
    use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
):
    """Delete a log from a session."""
    result = use_case.delete_exercise_log(str(session_id), str(log_id), user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "message": "Exercise log deleted"}

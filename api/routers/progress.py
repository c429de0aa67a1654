"""
Progress router for training analytics.

This router contains endpoints for:
- /progress - Overview across all of the user's sessions
- /progress/exercises/{exercise_id}/history - Logged sets for one exercise
- /progress/exercises/{exercise_id}/records - Personal records for one exercise
- /progress/volume/weekly - Weekly training volume
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.deps import (
    get_current_user,
    get_session_analytics_repo,
    get_user_progress_use_case,
)
from api.responses import error_response
from application.ports import (
    PersonalRecords,
    SessionAnalyticsRepository,
    WeeklyVolume,
)
from application.use_cases.get_user_progress import (
    GetUserProgressUseCase,
    UserProgress,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/progress",
    tags=["Progress"],
)

MAX_HISTORY_LIMIT = 100
MAX_WEEKS = 52


# =============================================================================
# Serialization
# =============================================================================


def _progress_to_json(progress: UserProgress) -> dict:
    last = progress.last_session
    return {
        "totalSessions": progress.total_sessions,
        "completedSessions": progress.completed_sessions,
        "abandonedSessions": progress.abandoned_sessions,
        "inProgressSessions": progress.in_progress_sessions,
        "averageRpe": progress.average_rpe,
        "averageDuration": progress.average_duration,
        "lastSession": last.model_dump(by_alias=True, mode="json") if last else None,
        "moodDistribution": progress.mood_distribution,
    }


def _records_to_json(records: PersonalRecords) -> dict:
    return {
        "exerciseId": records.exercise_id,
        "maxWeight": records.max_weight,
        "maxReps": records.max_reps,
        "maxVolume": records.max_volume,
    }


def _week_to_json(week: WeeklyVolume) -> dict:
    return {
        "weekStart": week.week_start.isoformat(),
        "totalSets": week.total_sets,
        "totalReps": week.total_reps,
        "totalVolume": week.total_volume,
        "sessionsCount": week.sessions_count,
    }


# =============================================================================
# Endpoints
# =============================================================================


@router.get("")
def get_progress_endpoint(
    user_id: str = Depends(get_current_user),
    use_case: GetUserProgressUseCase = Depends(get_user_progress_use_case),
):
    """
    Get the user's progress overview.

    Returns:
        Session counts by status, average RPE and duration of completed
        sessions, the most recent session and mood distribution
    """
    result = use_case.execute(user_id)
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "progress": _progress_to_json(result.progress)}


@router.get("/exercises/{exercise_id}/history")
def get_exercise_history_endpoint(
    exercise_id: UUID,
    limit: int = Query(20, ge=1, le=MAX_HISTORY_LIMIT),
    user_id: str = Depends(get_current_user),
    analytics_repo: SessionAnalyticsRepository = Depends(get_session_analytics_repo),
):
    """Get the user's logged sets for an exercise, newest first."""
    result = analytics_repo.get_exercise_history(user_id, str(exercise_id), limit)
    if not result.success:
        return error_response(result.error, result.error_code)

    logs = [log.model_dump(by_alias=True, mode="json") for log in result.data]
    return {"success": True, "logs": logs, "count": len(logs)}


@router.get("/exercises/{exercise_id}/records")
def get_personal_records_endpoint(
    exercise_id: UUID,
    user_id: str = Depends(get_current_user),
    analytics_repo: SessionAnalyticsRepository = Depends(get_session_analytics_repo),
):
    """Get max weight, max reps and max single-set volume for an exercise."""
    result = analytics_repo.get_personal_records(user_id, str(exercise_id))
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "records": _records_to_json(result.data)}


@router.get("/volume/weekly")
def get_weekly_volume_endpoint(
    weeks: int = Query(4, ge=1, le=MAX_WEEKS),
    user_id: str = Depends(get_current_user),
    analytics_repo: SessionAnalyticsRepository = Depends(get_session_analytics_repo),
):
    """Get weekly sets, reps, volume and session count, oldest week first."""
    result = analytics_repo.get_weekly_volume(user_id, weeks)
    if not result.success:
        return error_response(result.error, result.error_code)

    return {"success": True, "weeks": [_week_to_json(w) for w in result.data]}

"""
Get User Progress Use Case.

Builds the dashboard progress overview from a user's full session history.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from application.ports.session_repository import (
    ErrorCode,
    FindSessionsOptions,
    RepositoryResult,
    WorkoutSessionRepository,
)
from domain.models.session import SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)

HISTORY_PAGE_SIZE = 500


@dataclass
class UserProgress:
    """Aggregate statistics across all of a user's sessions."""
    total_sessions: int = 0
    completed_sessions: int = 0
    abandoned_sessions: int = 0
    in_progress_sessions: int = 0
    average_rpe: Optional[float] = None
    average_duration: Optional[float] = None  # minutes
    last_session: Optional[WorkoutSession] = None
    mood_distribution: Dict[str, int] = field(default_factory=dict)


@dataclass
class GetUserProgressResult:
    """Result of the progress overview query."""
    success: bool
    progress: Optional[UserProgress] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def build_user_progress(sessions: List[WorkoutSession]) -> UserProgress:
    """
    Aggregate sessions into a progress overview.

    Abandoned sessions count as abandoned only, not as completed. Averages
    consider completed (not abandoned) sessions with a value recorded.
    ``sessions`` is expected newest first.
    """
    progress = UserProgress(total_sessions=len(sessions))
    if not sessions:
        return progress

    status_counts = Counter(session.status for session in sessions)
    progress.completed_sessions = status_counts[SessionStatus.COMPLETED]
    progress.abandoned_sessions = status_counts[SessionStatus.ABANDONED]
    progress.in_progress_sessions = status_counts[SessionStatus.IN_PROGRESS]

    finished = [s for s in sessions if s.status == SessionStatus.COMPLETED]
    progress.average_rpe = _mean([s.rpe for s in finished if s.rpe is not None])
    progress.average_duration = _mean(
        [s.actual_duration for s in finished if s.actual_duration is not None]
    )

    progress.last_session = max(sessions, key=lambda s: s.started_at)
    progress.mood_distribution = dict(
        Counter(s.mood.value for s in sessions if s.mood is not None)
    )
    return progress


class GetUserProgressUseCase:
    """
    Use case for the user progress overview.

    The history is read in pages of HISTORY_PAGE_SIZE. PostgREST caps a
    single response at its max-rows setting (1000 by default), so one
    unbounded query would silently drop older sessions from the totals.
    """

    def __init__(self, session_repo: WorkoutSessionRepository):
        self._session_repo = session_repo

    def _load_history(self, user_id: str) -> RepositoryResult[List[WorkoutSession]]:
        sessions: List[WorkoutSession] = []
        offset = 0
        while True:
            result = self._session_repo.get_sessions_by_user(
                user_id,
                FindSessionsOptions(limit=HISTORY_PAGE_SIZE, offset=offset),
            )
            if not result.success:
                return result

            page = result.data or []
            sessions.extend(page)
            if len(page) < HISTORY_PAGE_SIZE:
                return RepositoryResult.ok(sessions)
            offset += HISTORY_PAGE_SIZE

    def execute(self, user_id: str) -> GetUserProgressResult:
        result = self._load_history(user_id)
        if not result.success:
            logger.error(f"Error building progress for {user_id}: {result.error}")
            return GetUserProgressResult(
                success=False,
                error=result.error,
                error_code=result.error_code,
            )

        return GetUserProgressResult(
            success=True,
            progress=build_user_progress(result.data or []),
        )

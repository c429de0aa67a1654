"""
Supabase Session Analytics Repository Implementation.

Implements the SessionAnalyticsRepository protocol. Logs are scoped to the
user through an inner join on workout_sessions, so only sets from the user's
own sessions are aggregated. Aggregation happens in memory after the fetch.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Set
import logging

from supabase import Client

from application.ports.session_analytics_repository import (
    PersonalRecords,
    WeeklyVolume,
)
from application.ports.session_repository import ErrorCode, RepositoryResult
from domain.converters.session_converters import (
    db_row_to_exercise_log,
    db_row_to_session,
)
from domain.models.session import ExerciseLog, WorkoutSession

logger = logging.getLogger(__name__)


# ============================================================================
# Helper Functions (stateless utilities)
# ============================================================================

def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def compute_personal_records(
    exercise_id: str,
    logs: List[ExerciseLog],
) -> PersonalRecords:
    """Best single-set weight, reps and volume across ``logs``."""
    records = PersonalRecords(exercise_id=exercise_id)

    for log in logs:
        if log.weight is not None and (records.max_weight is None or log.weight > records.max_weight):
            records.max_weight = log.weight
        if log.reps is not None and (records.max_reps is None or log.reps > records.max_reps):
            records.max_reps = log.reps
        if log.weight is not None and log.reps is not None:
            volume = log.weight * log.reps
            if records.max_volume is None or volume > records.max_volume:
                records.max_volume = volume

    return records


def aggregate_weekly_volume(
    sessions: List[WorkoutSession],
    logs: List[ExerciseLog],
    *,
    weeks: int,
    today: date,
) -> List[WeeklyVolume]:
    """
    Bucket sessions and their logs into ISO weeks.

    Returns ``weeks`` buckets ending with the week containing ``today``,
    oldest first. Sessions outside that window are ignored.
    """
    current = week_start(today)
    buckets: Dict[date, WeeklyVolume] = {}
    for i in range(weeks - 1, -1, -1):
        start = current - timedelta(weeks=i)
        buckets[start] = WeeklyVolume(week_start=start)

    session_week: Dict[str, date] = {}
    sessions_per_week: Dict[date, Set[str]] = defaultdict(set)
    for session in sessions:
        start = week_start(session.started_at.date())
        if start in buckets:
            session_week[session.id] = start
            sessions_per_week[start].add(session.id)

    for log in logs:
        start = session_week.get(log.session_id)
        if start is None:
            continue
        bucket = buckets[start]
        bucket.total_sets += 1
        if log.reps is not None:
            bucket.total_reps += log.reps
        if log.weight is not None and log.reps is not None:
            bucket.total_volume += log.weight * log.reps

    for start, session_ids in sessions_per_week.items():
        buckets[start].sessions_count = len(session_ids)

    return list(buckets.values())


# ============================================================================
# Repository Implementation
# ============================================================================

class SupabaseSessionAnalyticsRepository:
    """
    Supabase implementation of SessionAnalyticsRepository.

    Reads exercise_logs joined to workout_sessions for ownership and dates.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def _fetch_exercise_logs(
        self,
        user_id: str,
        exercise_id: str,
        limit: Optional[int] = None,
    ) -> List[ExerciseLog]:
        query = self._client.table("exercise_logs") \
            .select("*, workout_sessions!inner(user_id)") \
            .eq("workout_sessions.user_id", user_id) \
            .eq("exercise_id", exercise_id) \
            .order("created_at", desc=True)
        if limit:
            query = query.limit(limit)
        result = query.execute()
        return [db_row_to_exercise_log(row) for row in result.data or []]

    def get_exercise_history(
        self,
        user_id: str,
        exercise_id: str,
        limit: int = 20,
    ) -> RepositoryResult[List[ExerciseLog]]:
        """Get the user's logs for one exercise, newest first."""
        try:
            return RepositoryResult.ok(self._fetch_exercise_logs(user_id, exercise_id, limit))
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch exercise history: {e}", ErrorCode.STORE_ERROR
            )

    def get_personal_records(
        self,
        user_id: str,
        exercise_id: str,
    ) -> RepositoryResult[PersonalRecords]:
        """Compute personal records from the full history of one exercise."""
        try:
            logs = self._fetch_exercise_logs(user_id, exercise_id)
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch personal records: {e}", ErrorCode.STORE_ERROR
            )
        return RepositoryResult.ok(compute_personal_records(exercise_id, logs))

    def get_weekly_volume(
        self,
        user_id: str,
        weeks: int = 4,
    ) -> RepositoryResult[List[WeeklyVolume]]:
        """Weekly sets, reps, volume and session count for the last N weeks."""
        today = datetime.now(timezone.utc).date()
        window_start = week_start(today) - timedelta(weeks=weeks - 1)

        try:
            sessions_result = self._client.table("workout_sessions") \
                .select("*") \
                .eq("user_id", user_id) \
                .gte("started_at", window_start.isoformat()) \
                .execute()
            sessions = [db_row_to_session(row) for row in sessions_result.data or []]

            logs: List[ExerciseLog] = []
            if sessions:
                logs_result = self._client.table("exercise_logs") \
                    .select("*") \
                    .in_("session_id", [s.id for s in sessions]) \
                    .execute()
                logs = [db_row_to_exercise_log(row) for row in logs_result.data or []]
        except Exception as e:
            return RepositoryResult.fail(
                f"Failed to fetch weekly volume: {e}", ErrorCode.STORE_ERROR
            )

        return RepositoryResult.ok(
            aggregate_weekly_volume(sessions, logs, weeks=weeks, today=today)
        )

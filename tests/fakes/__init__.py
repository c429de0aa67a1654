"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- The session fake enforces the same lifecycle invariants
- Supports seeding with test data and reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutSessionRepository, create_session_repo

    # Direct instantiation
    repo = FakeWorkoutSessionRepository(current_user_id="user1")
    repo.seed_routine_day("day-1", user_id="user1")

    # Factory function with pre-populated history
    repo = create_session_repo(user_id="user1", num_completed=3, with_active=True)
"""
from datetime import timedelta
from typing import Optional
import uuid

from application.ports.session_repository import (
    ExerciseLogData,
    SessionCompletionData,
)
from domain.models.session import WorkoutMood
from tests.fakes.session_repository import FakeWorkoutSessionRepository
from tests.fakes.session_analytics_repository import FakeSessionAnalyticsRepository

# Identities used across tests (UUIDs, like Supabase auth user ids)
TEST_USER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"


# =============================================================================
# Factory Functions
# =============================================================================


def create_session_repo(
    *,
    user_id: str = "test_user",
    routine_day_id: Optional[str] = None,
    num_completed: int = 0,
    sets_per_session: int = 3,
    with_active: bool = False,
) -> FakeWorkoutSessionRepository:
    """
    Create a FakeWorkoutSessionRepository with an optional session history.

    Completed sessions are created through the repository itself, so they
    satisfy the same invariants as sessions created by the API.

    Args:
        user_id: Authenticated user the repository is bound to
        routine_day_id: Routine day to train (generated when omitted)
        num_completed: Number of completed sessions to create
        sets_per_session: Sets logged in each completed session
        with_active: Leave one additional session in progress

    Returns:
        Pre-populated FakeWorkoutSessionRepository
    """
    repo = FakeWorkoutSessionRepository(current_user_id=user_id)
    routine_day_id = repo.seed_routine_day(routine_day_id or str(uuid.uuid4()), user_id)
    exercise_id = str(uuid.uuid4())

    for i in range(num_completed):
        session_id = repo.start_session(user_id, routine_day_id).data
        for set_number in range(1, sets_per_session + 1):
            repo.log_exercise_set(session_id, ExerciseLogData(
                exercise_id=exercise_id,
                set_number=set_number,
                weight=50.0 + i * 2.5,
                reps=8,
                rpe=7,
            ))
        repo.complete_session(session_id, SessionCompletionData(
            rpe=7,
            mood=WorkoutMood.GOOD,
            actual_duration=45,
        ))
        # Space sessions a day apart
        repo.advance_clock(timedelta(days=1))

    if with_active:
        repo.start_session(user_id, routine_day_id)

    return repo


__all__ = [
    # Fakes
    "FakeWorkoutSessionRepository",
    "FakeSessionAnalyticsRepository",
    # Factories
    "create_session_repo",
    # Identities
    "TEST_USER_ID",
    "OTHER_USER_ID",
]

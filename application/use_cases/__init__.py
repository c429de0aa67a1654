"""
Application Use Cases for the Workout Session API.

Use cases are the entry points for business operations. Repositories are
injected via constructors for testability, and every use case returns a
result dataclass instead of raising.

Usage:
    from application.use_cases import TrackSessionUseCase, GetUserProgressUseCase

    track = TrackSessionUseCase(session_repo=session_repo)
    result = track.start_session(user_id="user-123", routine_day_id=day_id)
    if result.success:
        session_id = result.data

    progress = GetUserProgressUseCase(session_repo=session_repo).execute("user-123")
"""

from application.use_cases.track_session import (
    TrackSessionResult,
    TrackSessionUseCase,
)
from application.use_cases.get_user_progress import (
    GetUserProgressResult,
    GetUserProgressUseCase,
    UserProgress,
    build_user_progress,
)

__all__ = [
    # TrackSession
    "TrackSessionUseCase",
    "TrackSessionResult",
    # GetUserProgress
    "GetUserProgressUseCase",
    "GetUserProgressResult",
    "UserProgress",
    "build_user_progress",
]

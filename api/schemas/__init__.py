"""
Pydantic schemas for API requests.

Organized by feature/domain:
- sessions: Session lifecycle and exercise log request bodies
"""

from api.schemas.sessions import (
    CompleteSessionRequest,
    LogExerciseSetRequest,
    StartSessionRequest,
    UpdateExerciseLogRequest,
)

__all__ = [
    "StartSessionRequest",
    "CompleteSessionRequest",
    "LogExerciseSetRequest",
    "UpdateExerciseLogRequest",
]

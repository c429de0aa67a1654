"""
Workout session domain models.

A WorkoutSession is one training attempt against a routine day. Each set the
user performs during the session is recorded as an ExerciseLog.

Session status is not stored. It is derived from ``completed_at`` and the
notes field:

- ``completed_at`` is None            -> in_progress
- notes equal ABANDONED_SESSION_NOTE  -> abandoned
- anything else                       -> completed

Models serialize with camelCase aliases (``model_dump(by_alias=True)``) so the
HTTP layer can return them directly.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


# Reserved note written by abandon_session. Existing rows use this exact text.
ABANDONED_SESSION_NOTE = "[Sesión abandonada]"

RPE_MIN = 1
RPE_MAX = 10

# Rate of Perceived Exertion, 1 (very light) to 10 (maximum effort).
RPE = Annotated[int, Field(ge=RPE_MIN, le=RPE_MAX)]


class WorkoutMood(str, Enum):
    """How the user felt during the session."""

    GREAT = "great"
    GOOD = "good"
    NEUTRAL = "neutral"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


class SessionStatus(str, Enum):
    """Derived lifecycle state of a session."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class _DomainModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class WorkoutSession(_DomainModel):
    """
    A single training session performed by a user.

    Examples:
        >>> now = datetime(2024, 1, 1, 9, 0)
        >>> session = WorkoutSession(
        ...     id="0f8b...",
        ...     user_id="user-1",
        ...     routine_day_id="day-1",
        ...     started_at=now,
        ...     created_at=now,
        ... )
        >>> session.status
        <SessionStatus.IN_PROGRESS: 'in_progress'>
    """

    id: str
    user_id: str
    routine_day_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = Field(
        default=None, description="Actual duration in minutes"
    )
    rpe: Optional[RPE] = None
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = None
    created_at: datetime

    @property
    def is_active(self) -> bool:
        """True while the session has no completion timestamp."""
        return self.completed_at is None

    @property
    def is_abandoned(self) -> bool:
        return self.completed_at is not None and self.notes == ABANDONED_SESSION_NOTE

    @computed_field
    @property
    def status(self) -> SessionStatus:
        if self.completed_at is None:
            return SessionStatus.IN_PROGRESS
        if self.notes == ABANDONED_SESSION_NOTE:
            return SessionStatus.ABANDONED
        return SessionStatus.COMPLETED


class ExerciseLog(_DomainModel):
    """One performed set within a session. Weight is in kilograms."""

    id: str
    session_id: str
    exercise_id: str
    set_number: int = Field(..., gt=0)
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, gt=0)
    rpe: Optional[RPE] = None
    notes: Optional[str] = None
    created_at: datetime


class WorkoutSessionWithLogs(WorkoutSession):
    """A session together with its logs ordered by creation time."""

    exercise_logs: List[ExerciseLog] = Field(default_factory=list)


class SessionSummary(_DomainModel):
    """Aggregated view of a session for lists and dashboards."""

    id: str
    routine_day_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_sets: int = 0
    total_exercises: int = 0
    average_rpe: Optional[float] = None
    mood: Optional[WorkoutMood] = None


def summarize_session(
    session: WorkoutSession,
    logs: List[ExerciseLog],
) -> SessionSummary:
    """Build a SessionSummary from a session and the logs that belong to it."""
    rpe_values = [log.rpe for log in logs if log.rpe is not None]
    average_rpe = sum(rpe_values) / len(rpe_values) if rpe_values else None

    return SessionSummary(
        id=session.id,
        routine_day_id=session.routine_day_id,
        started_at=session.started_at,
        completed_at=session.completed_at,
        total_sets=len(logs),
        total_exercises=len({log.exercise_id for log in logs}),
        average_rpe=average_rpe,
        mood=session.mood,
    )

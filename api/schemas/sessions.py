"""
Session Schemas for the workout tracking API.

Request bodies for the session and exercise log endpoints. JSON keys are
camelCase; models accept snake_case as well so tests can construct them
directly.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from application.ports.session_repository import (
    ExerciseLogData,
    ExerciseLogUpdateData,
    SessionCompletionData,
)
from domain.models.session import RPE_MAX, RPE_MIN, WorkoutMood

MAX_WEIGHT_KG = 1000
MAX_REPS = 1000
MAX_LOG_NOTES = 200
MAX_SESSION_NOTES = 500
MAX_DURATION_MINUTES = 300
MAX_PAGE_SIZE = 100


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StartSessionRequest(_CamelModel):
    """Request body for POST /sessions."""
    routine_day_id: UUID = Field(
        ...,
        description="Routine day being performed",
    )


class CompleteSessionRequest(_CamelModel):
    """Request body for PATCH /sessions/{session_id}. All fields optional."""
    rpe: Optional[int] = Field(default=None, ge=RPE_MIN, le=RPE_MAX)
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_SESSION_NOTES)
    actual_duration: Optional[int] = Field(
        default=None,
        ge=1,
        le=MAX_DURATION_MINUTES,
        description="Session duration in minutes",
    )

    def to_completion_data(self) -> SessionCompletionData:
        return SessionCompletionData(
            rpe=self.rpe,
            mood=self.mood,
            notes=self.notes,
            actual_duration=self.actual_duration,
        )


class LogExerciseSetRequest(_CamelModel):
    """Request body for POST /sessions/{session_id}/logs."""
    exercise_id: UUID
    set_number: int = Field(..., gt=0)
    weight: Optional[float] = Field(
        default=None,
        ge=0,
        le=MAX_WEIGHT_KG,
        description="Weight in kilograms",
    )
    reps: Optional[int] = Field(default=None, ge=1, le=MAX_REPS)
    rpe: Optional[int] = Field(default=None, ge=RPE_MIN, le=RPE_MAX)
    notes: Optional[str] = Field(default=None, max_length=MAX_LOG_NOTES)

    def to_log_data(self) -> ExerciseLogData:
        return ExerciseLogData(
            exercise_id=str(self.exercise_id),
            set_number=self.set_number,
            weight=self.weight,
            reps=self.reps,
            rpe=self.rpe,
            notes=self.notes,
        )


class UpdateExerciseLogRequest(_CamelModel):
    """
    Request body for PATCH /sessions/{session_id}/logs/{log_id}.

    Unknown fields are rejected so that typos do not silently become no-ops.
    An empty body passes validation and is rejected by the use case.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    weight: Optional[float] = Field(default=None, ge=0, le=MAX_WEIGHT_KG)
    reps: Optional[int] = Field(default=None, ge=1, le=MAX_REPS)
    rpe: Optional[int] = Field(default=None, ge=RPE_MIN, le=RPE_MAX)
    notes: Optional[str] = Field(default=None, max_length=MAX_LOG_NOTES)

    def to_update_data(self) -> ExerciseLogUpdateData:
        return ExerciseLogUpdateData(
            weight=self.weight,
            reps=self.reps,
            rpe=self.rpe,
            notes=self.notes,
        )

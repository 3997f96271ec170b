"""Pydantic schemas for macro and micro goal CRUD.

Validation here is the boundary that keeps malformed records (negative
hours, completion above 100) away from the completion calculator.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from goalboard.domain.goals import GoalType


class MacroGoalCreate(BaseModel):
    """Request to create a macro goal."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    type: GoalType = GoalType.PERCENTAGE
    total_hours: float | None = Field(None, gt=0, description="Target hours (hours goals only)")
    icon: str = Field("", max_length=64)

    @model_validator(mode="after")
    def check_total_hours(self) -> "MacroGoalCreate":
        if self.type == GoalType.HOURS and self.total_hours is None:
            raise ValueError("total_hours is required for hours goals")
        if self.type == GoalType.PERCENTAGE:
            self.total_hours = None
        return self


class MacroGoalUpdate(BaseModel):
    """Partial update. Only fields that are set are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    type: GoalType | None = None
    total_hours: float | None = Field(None, gt=0)
    icon: str | None = Field(None, max_length=64)


class MacroGoalResponse(BaseModel):
    id: str = Field(..., description="Macro goal UUID")
    name: str
    description: str
    type: GoalType
    total_hours: float | None
    icon: str
    created_at: datetime
    completion: float = Field(0, description="Current completion percentage (may exceed 100 for hours goals)")
    micro_goal_count: int = 0


class MicroGoalCreate(BaseModel):
    """Request to create a micro goal under an existing macro goal."""

    macro_goal_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    completion: float = Field(0, ge=0, le=100)
    hours: float = Field(0, ge=0)


class MicroGoalUpdate(BaseModel):
    """Partial update. Only fields that are set are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    completion: float | None = Field(None, ge=0, le=100)
    hours: float | None = Field(None, ge=0)


class MicroGoalResponse(BaseModel):
    id: str = Field(..., description="Micro goal UUID")
    macro_goal_id: str
    name: str
    completion: float
    hours: float
    created_at: datetime

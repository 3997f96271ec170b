"""Pydantic schemas for dashboard API responses.

Dashboard aggregates overall completion, status charts, badges and streaks.
"""

from datetime import date

from pydantic import BaseModel, Field


class RankResponse(BaseModel):
    title: str = Field(..., description="Rank title (Awakening, Novice Warrior, ...)")
    icon: str
    quote: str = Field(..., description="Motivational quote for the rank")


class StatusBreakdown(BaseModel):
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0


class TypeBreakdown(BaseModel):
    percentage: int = 0
    hours: int = 0


class MicroGoalStats(BaseModel):
    total: int = 0
    completed: int = 0
    average_completion: int = Field(0, description="Mean micro goal completion, rounded")


class GoalProgressRow(BaseModel):
    """One bar in the goal progress chart."""

    id: str
    name: str
    icon: str
    completion: int = Field(..., description="Rounded completion percentage")


class GoalSummary(BaseModel):
    id: str
    name: str
    type: str
    icon: str
    completion: float
    status: str = Field(..., description="completed, in_progress or not_started")
    micro_goal_count: int


class BadgeResponse(BaseModel):
    id: str
    name: str
    icon: str
    description: str
    requirement: str
    unlocked: bool


class BadgesSummary(BaseModel):
    unlocked_count: int
    total_count: int
    achievement_percent: int
    next_badge: BadgeResponse | None = None
    badges: list[BadgeResponse] = Field(default_factory=list)


class StreakResponse(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_updated: date | None = None


class DashboardResponse(BaseModel):
    """Full dashboard response payload.

    All list fields default to empty arrays (never null).
    """

    overall_completion: float = Field(..., description="Unweighted mean of macro goal completions")
    rank: RankResponse
    total_goals: int
    status_breakdown: StatusBreakdown
    type_breakdown: TypeBreakdown
    micro_goal_stats: MicroGoalStats
    goal_progress: list[GoalProgressRow] = Field(default_factory=list)
    goals: list[GoalSummary] = Field(default_factory=list)
    badges: BadgesSummary
    streak: StreakResponse


class MicroGoalProgress(BaseModel):
    id: str
    name: str
    completion: float
    hours: float
    progress: float = Field(..., description="Progress of this task toward the parent's target")
    is_complete: bool


class MilestoneResponse(BaseModel):
    target: int
    achieved: bool
    achieved_on: date | None = None


class ProgressPoint(BaseModel):
    recorded_on: date
    value: float


class GoalProgressResponse(BaseModel):
    """Per-goal progress tracker view."""

    id: str
    name: str
    type: str
    total_hours: float | None
    completion: float
    status: str
    micro_goals: list[MicroGoalProgress] = Field(default_factory=list)
    milestones: list[MilestoneResponse] = Field(default_factory=list)
    streak: StreakResponse
    history: list[ProgressPoint] = Field(default_factory=list)

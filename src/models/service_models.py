"""Pydantic models for service layer return types.

These models are the engine's outbound contract: plain result records that the
display layer renders without further computation.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.goal import FiniteGoal, RecurringGoal


class StreakResult(BaseModel):
    """Current and longest run of consecutive completed periods."""

    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: datetime | None = None


class CompletionStats(BaseModel):
    """Expected-vs-actual completion statistics for a window."""

    total_completions: int
    completion_rate: float = Field(..., ge=0, le=100)
    period_start: datetime
    period_end: datetime


class FiniteProgress(BaseModel):
    """Progress of a finite goal toward its total target."""

    completed: int
    target: int
    percentage: int = Field(..., ge=0, le=100)
    days_elapsed: int
    days_remaining: int
    total_days: int
    is_complete: bool
    is_overdue: bool


class HeatmapDay(BaseModel):
    """One calendar day of heatmap data."""

    date: str
    completion_count: int
    total_units: int
    intensity: int = Field(..., ge=0, le=4)
    is_binary_complete: bool | None = None


class GoalHighlight(BaseModel):
    """A single goal singled out on the statistics screen."""

    goal_id: str | None = None
    goal_name: str = ""
    value: float = 0


class StatisticsSummary(BaseModel):
    """Cross-goal highlights."""

    best_streak: GoalHighlight
    most_completed: GoalHighlight
    closest_to_completion: GoalHighlight


class OverallStats(BaseModel):
    """Goal and completion counts across the whole tracker."""

    total_goals: int
    active_goals: int
    recurring_goals: int
    finite_goals: int
    total_completions_today: int
    total_completions_this_week: int
    total_completions_this_month: int
    total_completions_all_time: int


class GoalProgress(BaseModel):
    """Everything the goal detail view shows about one goal."""

    goal: RecurringGoal | FiniteGoal
    streak: StreakResult | None = None
    finite_progress: FiniteProgress | None = None
    current_period: CompletionStats

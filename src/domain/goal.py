"""Goal domain models and enums."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GoalType(StrEnum):
    """Whether a goal resets every period or counts toward a fixed total."""

    RECURRING = "recurring"
    FINITE = "finite"


class Recurrence(StrEnum):
    """Period a recurring goal's target is evaluated against."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class TimeUnit(StrEnum):
    """Unit of a custom recurrence."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class CustomTimeRange(BaseModel):
    """Custom recurrence length, e.g. every 3 days or every 2 weeks."""

    value: int = Field(..., ge=1, description="Number of units per period")
    unit: TimeUnit = Field(..., description="Unit of the period length")


class _GoalBase(BaseModel):
    """Fields shared by recurring and finite goals."""

    id: str = Field(..., description="Unique goal ID from storage")
    name: str = Field(default="", description="Goal name (e.g., 'Read 20 pages')")
    recurrence: Recurrence = Field(default=Recurrence.DAILY, description="Period of the goal's target")
    custom_time_range: CustomTimeRange | None = Field(
        default=None,
        description="Period length when recurrence is custom",
    )
    target_count: int = Field(
        default=1,
        description="Completions required per period (recurring) or in total (finite)",
    )
    start_date: datetime = Field(..., description="No progress is accounted before this instant")
    is_archived: bool = Field(default=False, description="Archived goals are excluded from overviews")

    model_config = ConfigDict(frozen=True)


class RecurringGoal(_GoalBase):
    """Goal whose target resets every period."""

    goal_type: Literal["recurring"] = "recurring"
    end_date: datetime | None = Field(default=None, description="Optional last day the goal is tracked")


class FiniteGoal(_GoalBase):
    """Goal with a fixed total target and a deadline."""

    goal_type: Literal["finite"] = "finite"
    end_date: datetime = Field(..., description="Deadline for reaching the target")


Goal = Annotated[RecurringGoal | FiniteGoal, Field(discriminator="goal_type")]

_goal_adapter: TypeAdapter[RecurringGoal | FiniteGoal] = TypeAdapter(Goal)


def parse_goal(record: dict[str, Any]) -> RecurringGoal | FiniteGoal:
    """Build a goal from a storage record.

    Records written before goal types existed have no ``goal_type`` and are
    treated as recurring. A flat ``custom_time_range_value``/``custom_time_range_unit``
    pair is folded into ``custom_time_range``.

    Raises:
        pydantic.ValidationError: If the record does not describe a valid goal
    """
    data = dict(record)
    if not data.get("goal_type"):
        data["goal_type"] = GoalType.RECURRING.value

    value = data.pop("custom_time_range_value", None)
    unit = data.pop("custom_time_range_unit", None)
    if data.get("custom_time_range") is None and value and unit:
        data["custom_time_range"] = {"value": value, "unit": unit}

    return _goal_adapter.validate_python(data)

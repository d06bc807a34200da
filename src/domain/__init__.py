"""Domain models and DTOs."""

from src.domain.goal import (
    CustomTimeRange,
    FiniteGoal,
    Goal,
    GoalType,
    Recurrence,
    RecurringGoal,
    TimeUnit,
    parse_goal,
)
from src.domain.log import Completion, LogEntry, completion_instant


__all__ = [
    "Completion",
    "CustomTimeRange",
    "FiniteGoal",
    "Goal",
    "GoalType",
    "LogEntry",
    "Recurrence",
    "RecurringGoal",
    "TimeUnit",
    "completion_instant",
    "parse_goal",
]

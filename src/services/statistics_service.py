"""Statistics summary across all goals.

This module provides functions for:
- Picking highlight goals (best streak, most completed, closest to completion)
- Counting goals and completions for the overview screen

Both work on goals and log entries already fetched by the caller.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import assert_never

from src.core.date_utils import end_of_day, local_date, now_local, start_of_month, start_of_week, to_local
from src.core.logging import span
from src.domain.goal import FiniteGoal, RecurringGoal
from src.domain.log import LogEntry
from src.models.service_models import GoalHighlight, OverallStats, StatisticsSummary
from src.services.completion_service import calculate_finite_progress
from src.services.streak_service import calculate_streak


logger = logging.getLogger(__name__)


def calculate_highlights(
    goals: Sequence[RecurringGoal | FiniteGoal],
    logs_by_goal: Mapping[str, Sequence[LogEntry]],
    now: datetime | None = None,
) -> StatisticsSummary:
    """Single out the goals worth celebrating.

    Args:
        goals: Goals to consider
        logs_by_goal: Log entries keyed by goal ID (missing keys mean no logs)
        now: Reference instant (default: current local time)

    Returns:
        StatisticsSummary; a highlight with no qualifying goal has an empty name and value 0.
        Ties keep the goal seen first.
    """
    with span("statistics_service.calculate_highlights"):
        best_streak = GoalHighlight()
        most_completed = GoalHighlight()
        closest = GoalHighlight()

        for goal in goals:
            logs = logs_by_goal.get(goal.id, ())

            match goal:
                case RecurringGoal():
                    streak = calculate_streak(goal, logs, now)
                    if streak.longest_streak > best_streak.value:
                        best_streak = GoalHighlight(goal_id=goal.id, goal_name=goal.name, value=streak.longest_streak)
                case FiniteGoal():
                    progress = calculate_finite_progress(goal, logs, now)
                    if not progress.is_complete and progress.percentage > closest.value:
                        closest = GoalHighlight(goal_id=goal.id, goal_name=goal.name, value=progress.percentage)
                case _:
                    assert_never(goal)

            if len(logs) > most_completed.value:
                most_completed = GoalHighlight(goal_id=goal.id, goal_name=goal.name, value=len(logs))

        logger.info("Calculated highlights for %d goals", len(goals))
        return StatisticsSummary(
            best_streak=best_streak,
            most_completed=most_completed,
            closest_to_completion=closest,
        )


def calculate_overall_stats(
    goals: Sequence[RecurringGoal | FiniteGoal],
    logs: Sequence[LogEntry],
    now: datetime | None = None,
) -> OverallStats:
    """Count goals by kind and completions by recency.

    Archived goals only count toward ``total_goals``. Completions this week and
    this month run from the start of the current (Sunday-anchored) week or
    calendar month through the end of today.
    """
    with span("statistics_service.calculate_overall_stats"):
        reference = to_local(now) if now is not None else now_local()
        today = local_date(reference)
        live_goals = [goal for goal in goals if not goal.is_archived]

        active_goals = sum(
            1
            for goal in live_goals
            if local_date(goal.start_date) <= today and (goal.end_date is None or local_date(goal.end_date) >= today)
        )

        completed = [to_local(entry.completed_at) for entry in logs]
        week_start = start_of_week(reference)
        month_start = start_of_month(reference)
        today_end = end_of_day(reference)

        return OverallStats(
            total_goals=len(goals),
            active_goals=active_goals,
            recurring_goals=sum(1 for goal in live_goals if isinstance(goal, RecurringGoal)),
            finite_goals=sum(1 for goal in live_goals if isinstance(goal, FiniteGoal)),
            total_completions_today=sum(1 for instant in completed if instant.date() == today),
            total_completions_this_week=sum(1 for instant in completed if week_start <= instant <= today_end),
            total_completions_this_month=sum(1 for instant in completed if month_start <= instant <= today_end),
            total_completions_all_time=len(completed),
        )

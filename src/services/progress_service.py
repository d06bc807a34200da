"""Progress queries that feed stored goals and logs through the engine.

Every function receives its ``GoalStore`` explicitly; nothing here holds a
storage handle of its own. Records are validated into domain models first:
a goal requested by ID that fails validation raises, while malformed records
in list results are logged and skipped.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime
from typing import Any, assert_never

from pydantic import ValidationError

from src.core.date_utils import Instant, end_of_day, start_of_day
from src.core.logging import log_with_goal_context, span
from src.core.store import GoalStore
from src.domain.goal import FiniteGoal, RecurringGoal, parse_goal
from src.domain.log import LogEntry
from src.models.service_models import GoalProgress, HeatmapDay, OverallStats, StatisticsSummary
from src.services.completion_service import calculate_current_period_completion, calculate_finite_progress
from src.services.heatmap_service import heatmap_multi, heatmap_single
from src.services.statistics_service import calculate_highlights, calculate_overall_stats
from src.services.streak_service import calculate_streak


logger = logging.getLogger(__name__)


async def get_goal_progress(*, store: GoalStore, goal_id: str, now: datetime | None = None) -> GoalProgress:
    """Get streak or finite progress plus current-period stats for one goal.

    Raises:
        KeyError: If the goal does not exist
        ValidationError: If the stored goal record is malformed
    """
    with span("progress_service.get_goal_progress"):
        goal = parse_goal(await store.get_goal(goal_id))
        logs = _parse_log_entries(await store.list_log_entries(goal_id=goal_id))
        current_period = calculate_current_period_completion(goal, logs, now)

        match goal:
            case RecurringGoal():
                return GoalProgress(
                    goal=goal,
                    streak=calculate_streak(goal, logs, now),
                    current_period=current_period,
                )
            case FiniteGoal():
                return GoalProgress(
                    goal=goal,
                    finite_progress=calculate_finite_progress(goal, logs, now),
                    current_period=current_period,
                )
            case _:
                assert_never(goal)


async def get_goal_heatmap(
    *,
    store: GoalStore,
    goal_id: str,
    range_start: Instant,
    range_end: Instant,
) -> list[HeatmapDay]:
    """Binary heatmap for one goal's detail view."""
    with span("progress_service.get_goal_heatmap"):
        records = await store.list_log_entries(
            goal_id=goal_id,
            start=start_of_day(range_start),
            end=end_of_day(range_end),
        )
        return heatmap_single(goal_id, _parse_log_entries(records), range_start, range_end)


async def get_overview_heatmap(
    *,
    store: GoalStore,
    range_start: Instant,
    range_end: Instant,
    goal_ids: Sequence[str] | None = None,
) -> list[HeatmapDay]:
    """Intensity heatmap across all non-archived goals, or the given subset."""
    with span("progress_service.get_overview_heatmap"):
        goals = _parse_goals(await store.list_goals())
        if goal_ids is not None:
            wanted = set(goal_ids)
            goals = [goal for goal in goals if goal.id in wanted]

        records = await store.list_log_entries(start=start_of_day(range_start), end=end_of_day(range_end))
        return heatmap_multi(goals, _parse_log_entries(records), range_start, range_end)


async def get_statistics(*, store: GoalStore, now: datetime | None = None) -> StatisticsSummary:
    """Highlights across all non-archived goals."""
    with span("progress_service.get_statistics"):
        goals = _parse_goals(await store.list_goals())
        logs_by_goal: defaultdict[str, list[LogEntry]] = defaultdict(list)
        for entry in _parse_log_entries(await store.list_log_entries()):
            logs_by_goal[entry.goal_id].append(entry)

        return calculate_highlights(goals, logs_by_goal, now)


async def get_overall_stats(*, store: GoalStore, now: datetime | None = None) -> OverallStats:
    """Goal and completion counts, archived goals included in the total."""
    with span("progress_service.get_overall_stats"):
        goals = _parse_goals(await store.list_goals(include_archived=True))
        logs = _parse_log_entries(await store.list_log_entries())
        return calculate_overall_stats(goals, logs, now)


def _parse_goals(records: list[dict[str, Any]]) -> list[RecurringGoal | FiniteGoal]:
    goals = []
    for record in records:
        try:
            goals.append(parse_goal(record))
        except ValidationError as e:
            log_with_goal_context(logger, "warning", f"Skipping malformed goal record: {e}", goal_id=record.get("id"))
    return goals


def _parse_log_entries(records: list[dict[str, Any]]) -> list[LogEntry]:
    entries = []
    for record in records:
        try:
            entries.append(LogEntry(**record))
        except ValidationError as e:
            log_with_goal_context(
                logger,
                "warning",
                f"Skipping malformed log entry: {e}",
                goal_id=record.get("goal_id"),
                log_id=record.get("id"),
            )
    return entries

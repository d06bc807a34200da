"""Calendar heatmap aggregation.

Buckets completions by local calendar day. The single-goal view is binary
(completed or not); the multi-goal view grades each day 0-4 by the share of
active goals that were completed.
"""

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from src.core.config import constants
from src.core.date_utils import Instant, day_key, each_day, local_date
from src.core.logging import span
from src.domain.goal import FiniteGoal, RecurringGoal
from src.domain.log import Completion, LogEntry, completion_instant
from src.models.service_models import HeatmapDay


logger = logging.getLogger(__name__)


def intensity_for(completed: int, total: int) -> int:
    """Bucket a completed/total share into a 0-4 intensity level.

    0% -> 0, up to 25% -> 1, up to 50% -> 2, up to 75% -> 3, above 75% -> 4.
    """
    if total <= 0 or completed <= 0:
        return 0
    percentage = completed / total * 100
    if percentage <= constants.HEATMAP_BUCKET_LOW:
        return 1
    if percentage <= constants.HEATMAP_BUCKET_MEDIUM:
        return 2
    if percentage <= constants.HEATMAP_BUCKET_HIGH:
        return 3
    return constants.HEATMAP_MAX_INTENSITY


def heatmap_single(
    goal_id: str,
    completions: Iterable[Completion],
    range_start: Instant,
    range_end: Instant,
) -> list[HeatmapDay]:
    """Binary heatmap for one goal, one entry per day in the inclusive range.

    Log entries belonging to other goals are ignored; bare timestamps are
    assumed to belong to ``goal_id``.
    """
    with span("heatmap_service.heatmap_single"):
        counts: Counter[str] = Counter()
        for completion in completions:
            if isinstance(completion, LogEntry) and completion.goal_id != goal_id:
                continue
            counts[day_key(completion_instant(completion))] += 1

        days = []
        for day in each_day(range_start, range_end):
            key = day_key(day)
            count = counts.get(key, 0)
            is_complete = count > 0
            days.append(
                HeatmapDay(
                    date=key,
                    completion_count=count,
                    total_units=1,
                    intensity=constants.HEATMAP_MAX_INTENSITY if is_complete else 0,
                    is_binary_complete=is_complete,
                )
            )

        logger.debug("Built single-goal heatmap for %s: %d days", goal_id, len(days))
        return days


def heatmap_multi(
    goals: Sequence[RecurringGoal | FiniteGoal],
    completions: Iterable[LogEntry],
    range_start: Instant,
    range_end: Instant,
) -> list[HeatmapDay]:
    """Intensity heatmap across goals, one entry per day in the inclusive range.

    Args:
        goals: Goals to aggregate; archived goals are left out entirely
        completions: Log entries for those goals (others are ignored)
        range_start: First day (inclusive)
        range_end: Last day (inclusive)

    Returns:
        HeatmapDay per day where ``total_units`` is the number of goals active
        that day and ``completion_count`` the number of distinct goals completed
        that day; completions logged outside a goal's active span are ignored,
        so ``completion_count`` never exceeds ``total_units``
    """
    with span("heatmap_service.heatmap_multi"):
        active_goals = [goal for goal in goals if not goal.is_archived]
        spans = {
            goal.id: (local_date(goal.start_date), local_date(goal.end_date) if goal.end_date is not None else None)
            for goal in active_goals
        }

        completed_goals_by_day: defaultdict[str, set[str]] = defaultdict(set)
        for entry in completions:
            if entry.goal_id in spans and _within(local_date(entry.completed_at), *spans[entry.goal_id]):
                completed_goals_by_day[day_key(entry.completed_at)].add(entry.goal_id)

        days = []
        for day in each_day(range_start, range_end):
            key = day_key(day)
            total_units = sum(1 for start, end in spans.values() if _within(day, start, end))
            completion_count = len(completed_goals_by_day.get(key, ()))
            days.append(
                HeatmapDay(
                    date=key,
                    completion_count=completion_count,
                    total_units=total_units,
                    intensity=intensity_for(completion_count, total_units),
                )
            )

        logger.debug("Built multi-goal heatmap over %d goals: %d days", len(active_goals), len(days))
        return days


def _within(day: date, start: date, end: date | None) -> bool:
    return start <= day and (end is None or day <= end)

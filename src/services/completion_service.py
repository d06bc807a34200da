"""Completion rate and finite goal progress calculations.

Recurring completion rate compares the number of distinct days with a
completion against the completions the goal expects over a window
(target per period times the number of periods the window overlaps). The
window is first clipped to the goal's own active span at day granularity.

Finite progress counts every log entry toward the total target; several
completions on the same day all count.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from src.core.config import constants
from src.core.date_utils import (
    Instant,
    day_key,
    days_between,
    end_of_day,
    now_local,
    start_of_day,
    to_local,
)
from src.core.logging import span
from src.domain.goal import FiniteGoal, Recurrence, RecurringGoal
from src.domain.log import Completion, completion_instant
from src.models.service_models import CompletionStats, FiniteProgress
from src.services.period_service import period_end, period_length_days, period_start


logger = logging.getLogger(__name__)


def calculate_completion_stats(
    goal: RecurringGoal | FiniteGoal,
    completions: Iterable[Completion],
    window_start: Instant,
    window_end: Instant,
) -> CompletionStats:
    """Calculate completion statistics for a goal over a window.

    Args:
        goal: Goal definition
        completions: Completion log entries or timestamps, in any order
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)

    Returns:
        CompletionStats reporting the requested window bounds. A window that does
        not overlap the goal's active span yields zero stats.
    """
    with span("completion_service.calculate_completion_stats"):
        start = start_of_day(window_start)
        end = end_of_day(window_end)

        effective_start = max(start, start_of_day(goal.start_date))
        effective_end = min(end, end_of_day(goal.end_date)) if goal.end_date is not None else end

        if effective_start > effective_end:
            logger.debug("Window %s..%s is outside goal %s active span", day_key(start), day_key(end), goal.id)
            return CompletionStats(total_completions=0, completion_rate=0.0, period_start=start, period_end=end)

        completed_days = {
            day_key(instant)
            for instant in (to_local(completion_instant(c)) for c in completions)
            if effective_start <= instant <= effective_end
        }
        total_completions = len(completed_days)
        expected = goal.target_count * _periods_in_window(goal, effective_start, effective_end)

        completion_rate = 0.0
        if expected > 0:
            completion_rate = min(
                float(constants.MAX_PERCENTAGE),
                round(total_completions / expected * 100, constants.COMPLETION_RATE_DECIMALS),
            )

        return CompletionStats(
            total_completions=total_completions,
            completion_rate=completion_rate,
            period_start=start,
            period_end=end,
        )


def calculate_current_period_completion(
    goal: RecurringGoal | FiniteGoal,
    completions: Iterable[Completion],
    now: datetime | None = None,
) -> CompletionStats:
    """Completion statistics for the period that contains ``now``."""
    reference = to_local(now) if now is not None else now_local()
    return calculate_completion_stats(
        goal,
        completions,
        period_start(goal, reference),
        period_end(goal, reference),
    )


def calculate_finite_progress(
    goal: RecurringGoal | FiniteGoal,
    completions: Iterable[Completion],
    now: datetime | None = None,
) -> FiniteProgress:
    """Calculate progress toward a goal's total target and deadline.

    Args:
        goal: Goal definition; ``end_date`` is the deadline when present
        completions: Completion log entries or timestamps
        now: Reference instant (default: current local time)

    Returns:
        FiniteProgress with percentage clamped to 0-100
    """
    with span("completion_service.calculate_finite_progress"):
        reference = to_local(now) if now is not None else now_local()
        completed = sum(1 for _ in completions)
        target = goal.target_count

        percentage = 0
        if target > 0:
            percentage = min(constants.MAX_PERCENTAGE, round(completed / target * 100))

        deadline = goal.end_date
        total_days = days_between(deadline if deadline is not None else reference, goal.start_date) + 1
        days_elapsed = max(0, days_between(reference, goal.start_date) + 1)
        days_remaining = max(0, days_between(deadline, reference)) if deadline is not None else 0

        is_complete = completed >= target
        is_overdue = not is_complete and deadline is not None and reference > to_local(deadline)

        return FiniteProgress(
            completed=completed,
            target=target,
            percentage=percentage,
            days_elapsed=days_elapsed,
            days_remaining=days_remaining,
            total_days=total_days,
            is_complete=is_complete,
            is_overdue=is_overdue,
        )


def _periods_in_window(goal: RecurringGoal | FiniteGoal, start: datetime, end: datetime) -> int:
    """Number of periods a clipped window overlaps, counting partial periods."""
    total_days = days_between(end, start) + 1

    match goal.recurrence:
        case Recurrence.WEEKLY:
            return math.ceil(total_days / constants.DAYS_PER_WEEK)
        case Recurrence.MONTHLY:
            return _months_in_window(start, end)
        case Recurrence.CUSTOM:
            return math.ceil(total_days / period_length_days(goal))
        case _:
            return total_days


def _months_in_window(start: datetime, end: datetime) -> int:
    """Whole months between start and end plus a trailing partial month.

    The partial month is only added when the end day-of-month has reached the
    start day-of-month, so Jan 15 - Feb 10 counts as one month.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return months + (1 if end.day >= start.day else 0)

"""Streak calculation for goals.

A streak is the number of consecutive periods, ending at or immediately before
now, that each contain at least one completion. Completions are reduced to the
set of periods they fall into, so logging twice in one period counts once.

Key rules:
- The current period not being logged yet is not a break; the walk then starts
  from the previous period. Two consecutive missed periods end the streak.
- Periods that start before the goal's first period are never counted.
- Consecutive periods are detected with the resolver's backward step rather
  than raw date subtraction, since weeks and months vary in length.
- Finite goals have no streaks; only the last completion date is reported.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import assert_never

from src.core.date_utils import day_key, local_date, now_local, to_local
from src.core.logging import span
from src.domain.goal import FiniteGoal, RecurringGoal
from src.domain.log import Completion, completion_instant
from src.models.service_models import StreakResult
from src.services.period_service import period_start, previous_period_start


logger = logging.getLogger(__name__)


def calculate_streak(
    goal: RecurringGoal | FiniteGoal,
    completions: Iterable[Completion],
    now: datetime | None = None,
) -> StreakResult:
    """Calculate current and longest streak for a goal.

    Args:
        goal: Goal definition
        completions: Completion log entries or timestamps, in any order
        now: Reference instant (default: current local time)

    Returns:
        StreakResult, all zeros when there are no completions
    """
    with span("streak_service.calculate_streak"):
        reference = to_local(now) if now is not None else now_local()
        instants = [to_local(completion_instant(c)) for c in completions]
        last_completed = max(instants, default=None)

        match goal:
            case FiniteGoal():
                return StreakResult(last_completed_date=last_completed)
            case RecurringGoal():
                periods = _completed_periods(goal, instants)
                current = _current_streak(goal, periods, reference)
                longest = max(_longest_streak(goal, periods), current)
                logger.debug(
                    "Streak for goal %s: current=%d longest=%d over %d periods",
                    goal.id,
                    current,
                    longest,
                    len(periods),
                )
                return StreakResult(
                    current_streak=current,
                    longest_streak=longest,
                    last_completed_date=last_completed,
                )
            case _:
                assert_never(goal)


def _completed_periods(goal: RecurringGoal, instants: list[datetime]) -> dict[str, datetime]:
    """Map period-start key to period start for every period with a completion."""
    first_period = period_start(goal, goal.start_date)
    periods: dict[str, datetime] = {}
    for instant in instants:
        start = period_start(goal, instant)
        if start < first_period:
            continue
        periods[day_key(start)] = start
    return periods


def _current_streak(goal: RecurringGoal, periods: dict[str, datetime], now: datetime) -> int:
    if not periods or local_date(goal.start_date) > local_date(now):
        return 0

    first_period = period_start(goal, goal.start_date)
    cursor = period_start(goal, now)
    if day_key(cursor) not in periods:
        # Current period not logged yet
        cursor = previous_period_start(goal, cursor)

    streak = 0
    while cursor >= first_period and day_key(cursor) in periods:
        streak += 1
        cursor = previous_period_start(goal, cursor)
    return streak


def _longest_streak(goal: RecurringGoal, periods: dict[str, datetime]) -> int:
    longest = 0
    run = 0
    previous: datetime | None = None

    for start in sorted(periods.values(), reverse=True):
        if previous is not None and day_key(start) == day_key(previous_period_start(goal, previous)):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = start

    return longest

"""Period resolution for recurring goals.

A period is the span of calendar time a recurring goal's target is evaluated
against. Daily, weekly and monthly periods follow the calendar (weeks start on
Sunday). Custom periods are fixed-length blocks anchored at the goal's start
day; a custom "month" is an approximate 30-day block, not a calendar month.

``period_start`` and ``previous_period_start`` use the same step, so walking
backward from any period start visits contiguous, non-overlapping periods.
"""

from datetime import datetime, timedelta

from src.core.config import constants
from src.core.date_utils import (
    Instant,
    add_days,
    add_months,
    add_weeks,
    days_between,
    end_of_day,
    end_of_month,
    end_of_week,
    start_of_day,
    start_of_month,
    start_of_week,
)
from src.domain.goal import FiniteGoal, Recurrence, RecurringGoal, TimeUnit


_UNIT_DAYS = {
    TimeUnit.DAYS: 1,
    TimeUnit.WEEKS: constants.DAYS_PER_WEEK,
    TimeUnit.MONTHS: constants.APPROX_DAYS_PER_MONTH,
}


def period_length_days(goal: RecurringGoal | FiniteGoal) -> int:
    """Length in days of one custom period.

    Goals without a custom range (or not using custom recurrence) fall back to
    a one-day period.
    """
    custom = goal.custom_time_range
    if goal.recurrence != Recurrence.CUSTOM or custom is None:
        return 1
    return custom.value * _UNIT_DAYS[custom.unit]


def period_start(goal: RecurringGoal | FiniteGoal, instant: Instant) -> datetime:
    """Start of the period that contains ``instant``."""
    match goal.recurrence:
        case Recurrence.WEEKLY:
            return start_of_week(instant)
        case Recurrence.MONTHLY:
            return start_of_month(instant)
        case Recurrence.CUSTOM if goal.custom_time_range is not None:
            anchor = start_of_day(goal.start_date)
            length = period_length_days(goal)
            period_index = days_between(instant, anchor) // length
            return add_days(anchor, period_index * length)
        case _:
            return start_of_day(instant)


def previous_period_start(goal: RecurringGoal | FiniteGoal, start: datetime) -> datetime:
    """Start of the period immediately before the one beginning at ``start``."""
    match goal.recurrence:
        case Recurrence.WEEKLY:
            return add_weeks(start, -1)
        case Recurrence.MONTHLY:
            return add_months(start, -1)
        case Recurrence.CUSTOM:
            return add_days(start, -period_length_days(goal))
        case _:
            return add_days(start, -1)


def period_end(goal: RecurringGoal | FiniteGoal, instant: Instant) -> datetime:
    """Last instant of the period that contains ``instant``."""
    match goal.recurrence:
        case Recurrence.WEEKLY:
            return end_of_week(instant)
        case Recurrence.MONTHLY:
            return end_of_month(instant)
        case Recurrence.CUSTOM if goal.custom_time_range is not None:
            next_start = add_days(period_start(goal, instant), period_length_days(goal))
            return next_start - timedelta(microseconds=1)
        case _:
            return end_of_day(instant)

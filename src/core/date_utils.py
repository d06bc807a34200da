"""Local calendar-day date arithmetic.

Every helper works on naive local datetimes. ``to_local`` is the single point
where time zones are considered: aware timestamps are converted into the
configured local zone and stripped, naive timestamps are taken as local
already, and plain dates mean local midnight.
"""

from calendar import monthrange
from datetime import UTC, date, datetime, time, timedelta

from src.core.config import constants, settings


Instant = datetime | date


def to_local(instant: Instant) -> datetime:
    """Normalize an instant to a naive datetime on the local calendar."""
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant
        return instant.astimezone(settings.tzinfo).replace(tzinfo=None)
    return datetime.combine(instant, time.min)


def now_local() -> datetime:
    """Current time on the local calendar."""
    return to_local(datetime.now(UTC))


def local_date(instant: Instant) -> date:
    """Local calendar day an instant falls on."""
    return to_local(instant).date()


def day_key(instant: Instant) -> str:
    """Canonical YYYY-MM-DD bucket key for the local calendar day of an instant."""
    return local_date(instant).strftime(constants.DAY_KEY_FORMAT)


def start_of_day(instant: Instant) -> datetime:
    """Get start of day (00:00:00.000000)."""
    return datetime.combine(local_date(instant), time.min)


def end_of_day(instant: Instant) -> datetime:
    """Get end of day (23:59:59.999999)."""
    return datetime.combine(local_date(instant), time.max)


def start_of_week(instant: Instant) -> datetime:
    """Get start of week (Sunday 00:00)."""
    day = start_of_day(instant)
    days_since_week_start = (day.weekday() - constants.WEEK_START_DAY) % constants.DAYS_PER_WEEK
    return day - timedelta(days=days_since_week_start)


def end_of_week(instant: Instant) -> datetime:
    """Get end of week (Saturday 23:59:59.999999)."""
    return end_of_day(start_of_week(instant) + timedelta(days=constants.DAYS_PER_WEEK - 1))


def start_of_month(instant: Instant) -> datetime:
    """Get start of month."""
    return start_of_day(instant).replace(day=1)


def end_of_month(instant: Instant) -> datetime:
    """Get end of month."""
    first = start_of_month(instant)
    last_day = monthrange(first.year, first.month)[1]
    return end_of_day(first.replace(day=last_day))


def add_days(instant: Instant, days: int) -> datetime:
    """Add (or subtract, when negative) whole days."""
    return to_local(instant) + timedelta(days=days)


def add_weeks(instant: Instant, weeks: int) -> datetime:
    """Add (or subtract, when negative) whole weeks."""
    return add_days(instant, weeks * constants.DAYS_PER_WEEK)


def add_months(instant: Instant, months: int) -> datetime:
    """Add calendar months, clamping the day to the length of the target month.

    Jan 31 + 1 month is Feb 28 (or 29), matching how calendar apps step months.
    """
    local = to_local(instant)
    month_index = local.year * 12 + (local.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(local.day, monthrange(year, month)[1])
    return local.replace(year=year, month=month, day=day)


def days_between(a: Instant, b: Instant) -> int:
    """Calendar-day difference ``a - b`` (negative when a is earlier)."""
    return (local_date(a) - local_date(b)).days


def each_day(start: Instant, end: Instant) -> list[date]:
    """All local calendar days from start to end inclusive, ascending.

    Returns an empty list when start falls on a later day than end.
    """
    first = local_date(start)
    total = (local_date(end) - first).days + 1
    return [first + timedelta(days=offset) for offset in range(max(0, total))]

"""Pytest configuration and fixtures for unit tests."""

from datetime import datetime

import pytest

from src.domain.goal import CustomTimeRange, FiniteGoal, Recurrence, RecurringGoal, TimeUnit
from tests.unit.mocks import InMemoryGoalStore


@pytest.fixture
def in_memory_store():
    """Provides a fresh InMemoryGoalStore for each test."""
    return InMemoryGoalStore()


@pytest.fixture
def daily_goal():
    """Daily goal started on 2024-01-01."""
    return RecurringGoal(id="daily", name="Meditate", start_date=datetime(2024, 1, 1))


@pytest.fixture
def weekly_goal():
    """Weekly goal, three times a week, started on Monday 2024-01-01."""
    return RecurringGoal(
        id="weekly",
        name="Gym",
        recurrence=Recurrence.WEEKLY,
        target_count=3,
        start_date=datetime(2024, 1, 1),
    )


@pytest.fixture
def monthly_goal():
    """Monthly goal started on 2024-01-01."""
    return RecurringGoal(
        id="monthly",
        name="Call parents",
        recurrence=Recurrence.MONTHLY,
        start_date=datetime(2024, 1, 1),
    )


@pytest.fixture
def every_three_days_goal():
    """Custom goal repeating every 3 days from 2024-01-01."""
    return RecurringGoal(
        id="every-3-days",
        name="Water plants",
        recurrence=Recurrence.CUSTOM,
        custom_time_range=CustomTimeRange(value=3, unit=TimeUnit.DAYS),
        start_date=datetime(2024, 1, 1),
    )


@pytest.fixture
def finite_goal():
    """Finite goal: 10 completions between 2024-01-01 and 2024-01-31."""
    return FiniteGoal(
        id="finite",
        name="Read 10 books",
        target_count=10,
        start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 1, 31),
    )

"""Unit tests for progress_service module."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.services import progress_service


@pytest.fixture
def seeded_store(in_memory_store):
    """Store with a daily goal, a finite goal, an archived goal and their logs."""
    in_memory_store.add_goal(
        id="daily",
        name="Meditate",
        goal_type="recurring",
        recurrence="daily",
        target_count=1,
        start_date="2024-01-01T00:00:00",
    )
    in_memory_store.add_goal(
        id="finite",
        name="Read 5 books",
        goal_type="finite",
        recurrence="daily",
        target_count=5,
        start_date="2024-01-01T00:00:00",
        end_date="2024-01-31T00:00:00",
    )
    in_memory_store.add_goal(
        id="archived",
        name="Old habit",
        recurrence="daily",
        start_date="2023-01-01T00:00:00",
        is_archived=True,
    )
    for day in (1, 2, 3):
        in_memory_store.add_log("daily", f"2024-01-0{day}T08:00:00")
    in_memory_store.add_log("finite", "2024-01-02T21:00:00")
    in_memory_store.add_log("finite", "2024-01-03T21:00:00")
    in_memory_store.add_log("archived", "2024-01-02T10:00:00")
    return in_memory_store


@pytest.mark.unit
class TestGetGoalProgress:
    """Tests for get_goal_progress."""

    async def test_recurring_goal_gets_streak(self, seeded_store):
        """Recurring goals report streaks and no finite progress."""
        result = await progress_service.get_goal_progress(
            store=seeded_store, goal_id="daily", now=datetime(2024, 1, 3, 12)
        )

        assert result.goal.id == "daily"
        assert result.streak is not None
        assert result.streak.current_streak == 3
        assert result.finite_progress is None
        assert result.current_period.total_completions == 1
        assert result.current_period.completion_rate == 100.0

    async def test_finite_goal_gets_progress(self, seeded_store):
        """Finite goals report progress and no streak."""
        result = await progress_service.get_goal_progress(
            store=seeded_store, goal_id="finite", now=datetime(2024, 1, 10)
        )

        assert result.streak is None
        assert result.finite_progress is not None
        assert result.finite_progress.completed == 2
        assert result.finite_progress.percentage == 40

    async def test_missing_goal_raises_key_error(self, seeded_store):
        """Unknown goal IDs surface the store's KeyError."""
        with pytest.raises(KeyError):
            await progress_service.get_goal_progress(store=seeded_store, goal_id="nope")

    async def test_malformed_goal_raises_validation_error(self, in_memory_store):
        """A requested goal that fails validation is not silently skipped."""
        in_memory_store.add_goal(id="bad", goal_type="finite", start_date="2024-01-01T00:00:00")

        with pytest.raises(ValidationError):
            await progress_service.get_goal_progress(store=in_memory_store, goal_id="bad")

    async def test_malformed_logs_are_skipped(self, seeded_store, caplog):
        """Log records that fail validation are logged and ignored."""
        seeded_store.add_log("daily", "not a timestamp")

        result = await progress_service.get_goal_progress(
            store=seeded_store, goal_id="daily", now=datetime(2024, 1, 3, 12)
        )

        assert result.streak.current_streak == 3
        assert "Skipping malformed log entry" in caplog.text


@pytest.mark.unit
class TestHeatmaps:
    """Tests for heatmap queries."""

    async def test_goal_heatmap(self, seeded_store):
        """Single goal heatmap marks logged days."""
        days = await progress_service.get_goal_heatmap(
            store=seeded_store,
            goal_id="daily",
            range_start=datetime(2024, 1, 1),
            range_end=datetime(2024, 1, 5),
        )

        assert [day.is_binary_complete for day in days] == [True, True, True, False, False]

    async def test_overview_heatmap_excludes_archived_goals(self, seeded_store):
        """Archived goals and their logs are left out of the overview."""
        days = await progress_service.get_overview_heatmap(
            store=seeded_store,
            range_start=datetime(2024, 1, 1),
            range_end=datetime(2024, 1, 3),
        )

        assert [day.total_units for day in days] == [2, 2, 2]
        assert [day.completion_count for day in days] == [1, 2, 2]
        assert [day.intensity for day in days] == [2, 4, 4]

    async def test_overview_heatmap_goal_subset(self, seeded_store):
        """goal_ids restricts the overview to those goals."""
        days = await progress_service.get_overview_heatmap(
            store=seeded_store,
            range_start=datetime(2024, 1, 2),
            range_end=datetime(2024, 1, 2),
            goal_ids=["finite"],
        )

        assert days[0].total_units == 1
        assert days[0].intensity == 4


@pytest.mark.unit
class TestStatistics:
    """Tests for statistics queries."""

    async def test_get_statistics(self, seeded_store):
        """Highlights are computed from stored goals and logs."""
        summary = await progress_service.get_statistics(store=seeded_store, now=datetime(2024, 1, 3, 12))

        assert summary.best_streak.goal_id == "daily"
        assert summary.best_streak.value == 3
        assert summary.most_completed.goal_id == "daily"
        assert summary.closest_to_completion.goal_id == "finite"

    async def test_get_overall_stats_includes_archived_in_total(self, seeded_store):
        """Archived goals count toward the total only."""
        stats = await progress_service.get_overall_stats(store=seeded_store, now=datetime(2024, 1, 3, 22))

        assert stats.total_goals == 3
        assert stats.active_goals == 2
        assert stats.total_completions_today == 2
        assert stats.total_completions_all_time == 6

    async def test_malformed_goal_records_are_skipped(self, seeded_store, caplog):
        """List queries skip goals that fail validation."""
        seeded_store.add_goal(id="broken", goal_type="finite", start_date="2024-01-01T00:00:00")

        stats = await progress_service.get_overall_stats(store=seeded_store, now=datetime(2024, 1, 3, 22))

        assert stats.total_goals == 3
        assert "Skipping malformed goal record" in caplog.text

"""Storage port consumed by the calling layer.

The progress engine never talks to storage. Services that need goals and log
entries receive an object satisfying ``GoalStore`` and pass plain records on.
"""

from datetime import datetime
from typing import Any, Protocol


class GoalStore(Protocol):
    """Read access to goals and their log entries."""

    async def get_goal(self, goal_id: str) -> dict[str, Any]:
        """Return one goal record.

        Raises:
            KeyError: If the goal does not exist
        """
        ...

    async def list_goals(self, *, include_archived: bool = False) -> list[dict[str, Any]]:
        """Return goal records, archived ones only when requested."""
        ...

    async def list_log_entries(
        self,
        *,
        goal_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Return log entry records, optionally for one goal and a completed_at range (inclusive)."""
        ...

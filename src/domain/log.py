"""Log entry domain model for goal completions."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.core.date_utils import Instant


class LogEntry(BaseModel):
    """A single completion of a goal."""

    id: str = Field(..., description="Unique log ID from storage")
    goal_id: str = Field(..., description="ID of the goal this completion counts toward")
    completed_at: datetime = Field(..., description="When the goal was actually completed")
    logged_at: datetime | None = Field(default=None, description="When the user logged it")
    notes: str | None = Field(default=None, description="Free-form notes about the completion")

    model_config = ConfigDict(frozen=True)


Completion = LogEntry | Instant


def completion_instant(completion: Completion) -> datetime | date:
    """Timestamp a completion was recorded at, for log entries or bare instants."""
    if isinstance(completion, LogEntry):
        return completion.completed_at
    return completion

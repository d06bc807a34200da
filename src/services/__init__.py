from src.services import (
    completion_service,
    heatmap_service,
    period_service,
    progress_service,
    statistics_service,
    streak_service,
)


__all__ = [
    "completion_service",
    "heatmap_service",
    "period_service",
    "progress_service",
    "statistics_service",
    "streak_service",
]

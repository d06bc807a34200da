"""Configuration management for the habit progress engine."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HABIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    service_name: str = Field(default="habit-progress", description="Service name reported to Logfire")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")
    log_level: str = Field(default="INFO", description="Root log level")

    # Calendar Configuration
    timezone: str | None = Field(
        default=None,
        description="IANA zone used to bucket aware timestamps into local days (system local time if unset)",
    )

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo | None:
        """Configured local zone, or None for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


# Application Constants
class Constants:
    """Engine-wide constants."""

    # Calendar
    DAYS_PER_WEEK: int = 7
    APPROX_DAYS_PER_MONTH: int = 30  # Custom "months" are fixed 30-day blocks
    WEEK_START_DAY: int = 6  # Sunday (0=Monday, 6=Sunday)
    DAY_KEY_FORMAT: str = "%Y-%m-%d"

    # Heatmap intensity buckets (percent of active goals completed)
    HEATMAP_MAX_INTENSITY: int = 4
    HEATMAP_BUCKET_LOW: int = 25
    HEATMAP_BUCKET_MEDIUM: int = 50
    HEATMAP_BUCKET_HIGH: int = 75

    # Percentages
    MAX_PERCENTAGE: int = 100
    COMPLETION_RATE_DECIMALS: int = 1


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()

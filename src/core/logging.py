"""Logging and observability configuration using Pydantic Logfire.

All modules use Python's standard logging library (logging.getLogger(__name__)),
and Logfire captures and enriches these logs once configured.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Message", goal_id="123", operation="streak")
"""

import logging

import logfire

from src.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Traces are only shipped when a token is configured; otherwise spans stay local.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name=settings.service_name,
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(level=settings.log_level.upper(), handlers=[logfire.LogfireLoggingHandler()])

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("streak_service.calculate_streak"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (goal_id, operation, etc.)

    Usage:
        log_with_context(logger, "info", "Streak calculated", goal_id="123", current_streak=4)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)


def log_with_goal_context(
    logger: logging.Logger,
    level: str,
    message: str,
    goal_id: str | None = None,
    **extra: object,
) -> None:
    """Log a message with goal context.

    Usage:
        log_with_goal_context(logger, "warning", "Skipping malformed log", goal_id="123", log_id="9")
    """
    context = {"goal_id": goal_id, **extra} if goal_id else extra
    log_with_context(logger, level, message, **context)

"""Pytest configuration and shared fixtures."""

import logging

import logfire
import pytest


logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logfire_for_tests():
    """Keep Logfire spans local so tests never ship telemetry."""
    logfire.configure(send_to_logfire=False, console=False)
    logger.debug("Logfire configured for tests")

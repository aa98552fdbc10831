"""
Pytest configuration and fixtures for all tests.

Configures structured logging for every test so that module loggers and
LoggingService helpers can be used freely.

License: MIT
"""

import pytest

from litweave_core.logging_service import LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reconfigure LoggingService before each test."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    LoggingService.reset()

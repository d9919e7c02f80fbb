"""
Pytest configuration and fixtures for all tests.

Every test starts with DEBUG-level JSON logging so engine debug events
are rendered (and any rendering error surfaces).

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

from propdoc_core.logging_service import LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Give each test a freshly configured LoggingService."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    LoggingService.reset()

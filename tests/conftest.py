"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from fixtures import NotRedacted, Redacted, RedactedChild
from schema_redactor.config import Settings
from schema_redactor.redactor import PlanRegistry


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="Schema Redactor (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def registry(test_settings: Settings) -> PlanRegistry:
    """Fresh plan registry per test (no plans shared between tests)."""
    return PlanRegistry(settings=test_settings)


@pytest.fixture
def redacted_message() -> Redacted:
    return Redacted(a="a", b="b", c="c")


@pytest.fixture
def not_redacted_message() -> NotRedacted:
    return NotRedacted(a="a", b="b")


@pytest.fixture
def redacted_child_message(
    redacted_message: Redacted,
    not_redacted_message: NotRedacted,
) -> RedactedChild:
    return RedactedChild(a="a", b=redacted_message, c=not_redacted_message)

"""Fixtures for infrastructure.logging tests."""

import pytest
from unittest.mock import Mock

from infrastructure.configuration import Settings


@pytest.fixture
def mock_settings():
    """Settings double exposing only what configure_logging reads."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "DEBUG"
    settings.PREFIX = "dev-"
    settings.GIT_SHA = "Unknown"
    settings.is_production = False
    return settings

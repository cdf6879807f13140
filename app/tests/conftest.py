"""Shared test configuration.

Ensures the application package root is on sys.path so importing
application modules (e.g. ``infrastructure.resilience``) works during
pytest collection regardless of the invocation directory.
"""

import sys
from pathlib import Path

project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402
import structlog  # noqa: E402


@pytest.fixture(autouse=True)
def clear_logging_context():
    """Prevent structlog context variables leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()

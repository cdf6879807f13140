"""Fixtures for infrastructure resilience tests.

Level: Component-level fixtures for the request orchestrator
"""

import pytest
from unittest.mock import AsyncMock

from infrastructure.resilience.retry import RetryController, RetryPolicy
from infrastructure.resilience.service import RequestOrchestrator


@pytest.fixture
def retry_policy_factory():
    """Factory for creating RetryPolicy instances."""

    def _factory(
        max_attempts: int = 3,
        base_delay_ms: float = 1000,
        max_delay_ms: float = 60000,
        enabled: bool = True,
    ) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=max_attempts,
            base_delay_ms=base_delay_ms,
            max_delay_ms=max_delay_ms,
            enabled=enabled,
        )

    return _factory


@pytest.fixture
def fake_sleep():
    """Sleep double that returns immediately and records requested waits (seconds)."""
    return AsyncMock(return_value=None)


@pytest.fixture
def retry_controller(fake_sleep):
    """RetryController that never waits and adds no jitter."""
    return RetryController(sleep=fake_sleep, rand=lambda: 0.0)


@pytest.fixture
def orchestrator_factory(retry_controller, retry_policy_factory):
    """Factory for RequestOrchestrator instances with an instant-sleep controller."""

    def _factory(
        api_key: str = "sk-test",
        max_queue_capacity: int = 100,
        max_history_size: int = 50,
        **policy_overrides,
    ) -> RequestOrchestrator:
        return RequestOrchestrator(
            api_key=api_key,
            retry_policy=retry_policy_factory(**policy_overrides),
            max_queue_capacity=max_queue_capacity,
            max_history_size=max_history_size,
            controller=retry_controller,
        )

    return _factory

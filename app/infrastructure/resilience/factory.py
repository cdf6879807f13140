"""Factory for building request orchestrators from configuration."""

from typing import TYPE_CHECKING, Optional

import structlog
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.controller import RetryController
from infrastructure.resilience.service import RequestOrchestrator

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


def create_request_orchestrator(
    settings: Optional["Settings"] = None,
    api_key: Optional[str] = None,
    controller: Optional[RetryController] = None,
) -> RequestOrchestrator:
    """Build a RequestOrchestrator from the RETRY_*, QUEUE_* and OPENAI_* settings.

    Every call returns a new, independently owned orchestrator.

    Args:
        settings: Optional Settings instance. If None, uses get_settings().
        api_key: Optional API key override. If None, uses settings.openai.OPENAI_API_KEY.
        controller: Optional RetryController (e.g. with a custom sleep).

    Returns:
        Configured RequestOrchestrator

    Raises:
        ValueError: If the configured retry policy or capacities are invalid

    Examples:
        >>> orchestrator = create_request_orchestrator()
        >>> orchestrator = create_request_orchestrator(api_key="sk-test")
    """
    if settings is None:
        from infrastructure.services.providers import get_settings

        settings = get_settings()

    policy = RetryPolicy.from_settings(settings.retry)
    key = api_key if api_key is not None else settings.openai.OPENAI_API_KEY

    orchestrator = RequestOrchestrator(
        api_key=key,
        retry_policy=policy,
        max_queue_capacity=settings.queue.max_capacity,
        max_history_size=settings.queue.max_history_size,
        controller=controller,
    )

    logger.info(
        "request_orchestrator_created",
        configured=orchestrator.is_configured(),
        max_queue_capacity=settings.queue.max_capacity,
        **policy.as_dict(),
    )
    return orchestrator

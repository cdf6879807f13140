"""Retry system for outbound API requests.

Architecture:
- RetryPolicy: Immutable retry configuration (attempts, delays, enabled)
- AttemptContext: Per-execution attempt counter
- backoff: Exponential backoff with jitter and Retry-After parsing
- RetryController: Drives one operation through classified retries

Usage:
    from infrastructure.resilience.retry import RetryController, RetryPolicy

    controller = RetryController()
    policy = RetryPolicy(max_attempts=3, base_delay_ms=1000)

    result = await controller.execute(call_chat_api, policy, "chat completion")
"""

from infrastructure.resilience.retry.backoff import (
    capped_delay,
    compute_backoff_delay,
    parse_retry_after,
    resolve_retry_delay,
    retry_after_from_response,
)
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.controller import RetryController
from infrastructure.resilience.retry.models import AttemptContext

__all__ = [
    # Configuration
    "RetryPolicy",
    # Models
    "AttemptContext",
    # Backoff
    "capped_delay",
    "compute_backoff_delay",
    "resolve_retry_delay",
    "parse_retry_after",
    "retry_after_from_response",
    # Controller
    "RetryController",
]

"""Retry policy configuration.

This module defines the immutable policy that drives the retry controller.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from infrastructure.configuration import RetrySettings


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior of a single request.

    A policy is set once when an orchestrator is built and never changes
    afterwards.

    Attributes:
        max_attempts: Maximum attempts per request, the first call included
        base_delay_ms: Base delay for exponential backoff (first retry)
        max_delay_ms: Cap for the exponential term
        enabled: When False every request is attempted exactly once

    Example:
        # Default policy
        policy = RetryPolicy()

        # Aggressive policy for a time-critical request path
        policy = RetryPolicy(max_attempts=5, base_delay_ms=250, max_delay_ms=5000)
    """

    max_attempts: int = 3
    base_delay_ms: float = 1000
    max_delay_ms: float = 60000
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms <= 0:
            raise ValueError("base_delay_ms must be greater than 0")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")

    @property
    def retries_allowed(self) -> bool:
        """True if a failed attempt may ever be followed by another one."""
        return self.enabled and self.max_attempts > 1

    @classmethod
    def from_settings(cls, retry_settings: "RetrySettings") -> "RetryPolicy":
        """Build a policy from the RETRY_* settings section."""
        return cls(
            max_attempts=retry_settings.max_attempts,
            base_delay_ms=retry_settings.base_delay_ms,
            max_delay_ms=retry_settings.max_delay_ms,
            enabled=retry_settings.enabled,
        )

    def as_dict(self) -> dict:
        return {
            "max_attempts": self.max_attempts,
            "base_delay_ms": self.base_delay_ms,
            "max_delay_ms": self.max_delay_ms,
            "enabled": self.enabled,
        }

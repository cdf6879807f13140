"""Per-execution retry state."""

from dataclasses import dataclass

from infrastructure.resilience.retry.config import RetryPolicy


@dataclass
class AttemptContext:
    """Ephemeral state of one retry controller invocation.

    Fields:
        label: Human-readable request label used in logs
        policy: RetryPolicy in force for this execution
        attempt: Current attempt number, starting at 1
    """

    label: str
    policy: RetryPolicy
    attempt: int = 1

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt >= self.policy.max_attempts

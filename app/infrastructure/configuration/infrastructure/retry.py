"""Retry policy infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Retry policy configuration for outbound API requests.

    Environment Variables:
        RETRY_ENABLED: Enable automatic retry with exponential backoff (default: True)
        RETRY_MAX_ATTEMPTS: Maximum attempts per request, first call included (default: 3)
        RETRY_BASE_DELAY_MS: Base exponential backoff delay in ms (default: 1000)
        RETRY_MAX_DELAY_MS: Maximum backoff delay in ms (default: 60000)

    Exponential Backoff:
        Delay calculation: min(base_delay * (2 ^ (attempt - 1)), max_delay)
        plus up to 25% random jitter.

        Example with defaults (base=1000ms, max=60000ms):
            After attempt 1: 1000ms - 1250ms
            After attempt 2: 2000ms - 2500ms
            After attempt 3: 4000ms - 5000ms

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.retry.enabled:
            max_attempts = settings.retry.max_attempts
        ```
    """

    enabled: bool = Field(
        default=True,
        alias="RETRY_ENABLED",
        description="Enable automatic retry for failed requests",
    )
    max_attempts: int = Field(
        default=3,
        alias="RETRY_MAX_ATTEMPTS",
        description="Maximum attempts per request, including the first one",
    )
    base_delay_ms: float = Field(
        default=1000,
        alias="RETRY_BASE_DELAY_MS",
        description="Base delay for exponential backoff (milliseconds)",
    )
    max_delay_ms: float = Field(
        default=60000,
        alias="RETRY_MAX_DELAY_MS",
        description="Maximum delay for exponential backoff (milliseconds)",
    )

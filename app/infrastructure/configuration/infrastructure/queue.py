"""Request queue infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class QueueSettings(InfrastructureSettings):
    """Request queue and diagnostics history configuration.

    Environment Variables:
        QUEUE_MAX_CAPACITY: Maximum outstanding requests, in-flight included (default: 100)
        QUEUE_MAX_HISTORY_SIZE: Maximum settled requests kept for diagnostics (default: 50)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        capacity = settings.queue.max_capacity
        ```
    """

    max_capacity: int = Field(
        default=100,
        alias="QUEUE_MAX_CAPACITY",
        description="Maximum number of outstanding requests (waiting + in-flight)",
    )
    max_history_size: int = Field(
        default=50,
        alias="QUEUE_MAX_HISTORY_SIZE",
        description="Maximum number of history entries kept for diagnostics",
    )

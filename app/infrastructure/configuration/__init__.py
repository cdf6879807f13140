"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the request
orchestrator using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    RetrySettings: Retry policy settings class (for testing)
    QueueSettings: Queue settings class (for testing)
    OpenAISettings: Upstream credentials settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    retry_enabled = settings.retry.enabled
    capacity = settings.queue.max_capacity

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure import QueueSettings, RetrySettings
from infrastructure.configuration.integrations import OpenAISettings

__all__ = [
    "Settings",
    "settings",
    "RetrySettings",
    "QueueSettings",
    "OpenAISettings",
]

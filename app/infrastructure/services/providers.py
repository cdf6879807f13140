"""
Factory functions for application-scoped providers.

Provides the settings singleton shared by every infrastructure package.
"""

from functools import lru_cache

from infrastructure.configuration import Settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Orchestrators themselves are not cached here: each service builds and
    owns its own through create_request_orchestrator().

        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()

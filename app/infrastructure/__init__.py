"""Infrastructure modules for the session assistant request orchestrator.

Centralized infrastructure components:
- configuration: Settings management (settings, RetrySettings, QueueSettings)
- logging: Structured logging (configure_logging, get_logger)
- operations: Request errors, operation results and error classification
- resilience: Retry controller, request queue and RequestOrchestrator
- services: Application-scoped providers (get_settings)
"""

# Configuration
from infrastructure.configuration import settings

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

# Providers
from infrastructure.services import get_settings

__all__ = [
    # Configuration
    "settings",
    # Operations
    "OperationResult",
    "OperationStatus",
    # Providers
    "get_settings",
]

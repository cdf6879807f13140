"""Resilience patterns for outbound API requests.

This module contains the request orchestrator and its building blocks:
classification-driven retry with exponential backoff, a bounded priority
queue, a single-in-flight processor and a diagnostics history.
"""

from infrastructure.resilience.history import (
    HistoryEntry,
    HistoryOutcome,
    OperationHistory,
)
from infrastructure.resilience.queue import (
    CapacityExceededError,
    OperationCancelledError,
    OperationQueue,
    ProcessorState,
    QueueError,
    QueuedOperation,
    QueueProcessor,
)
from infrastructure.resilience.retry import (
    AttemptContext,
    RetryController,
    RetryPolicy,
)
from infrastructure.resilience.service import RequestOrchestrator
from infrastructure.resilience.factory import create_request_orchestrator

__all__ = [
    # Orchestrator
    "RequestOrchestrator",
    "create_request_orchestrator",
    # History
    "HistoryEntry",
    "HistoryOutcome",
    "OperationHistory",
    # Queue
    "QueuedOperation",
    "OperationQueue",
    "QueueProcessor",
    "ProcessorState",
    "QueueError",
    "CapacityExceededError",
    "OperationCancelledError",
    # Retry System
    "RetryPolicy",
    "AttemptContext",
    "RetryController",
]

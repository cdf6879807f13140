"""Bounded priority queue of outbound requests.

Architecture:
- QueuedOperation: A pending request and the handle its submitter awaits
- OperationQueue: Priority/sequence ordered queue with a capacity bound
- QueueProcessor: Single-in-flight drain loop over the retry controller
- CapacityExceededError / OperationCancelledError: queue failures
"""

from infrastructure.resilience.queue.errors import (
    CapacityExceededError,
    OperationCancelledError,
    QueueError,
)
from infrastructure.resilience.queue.models import QueuedOperation
from infrastructure.resilience.queue.priority_queue import OperationQueue
from infrastructure.resilience.queue.processor import ProcessorState, QueueProcessor

__all__ = [
    # Models
    "QueuedOperation",
    # Queue
    "OperationQueue",
    # Processor
    "QueueProcessor",
    "ProcessorState",
    # Errors
    "QueueError",
    "CapacityExceededError",
    "OperationCancelledError",
]

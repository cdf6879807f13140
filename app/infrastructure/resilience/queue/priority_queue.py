"""Bounded priority queue of pending requests.

Ordering is strictly by priority (descending) and, within a priority, by
submission sequence (ascending). Capacity counts the waiting requests plus
the single request currently executing.

The queue is mutated only from the event loop thread, by the orchestrator's
submit/cancel entry points and by the processor. None of its methods
suspend, so each call is atomic with respect to the others.
"""

import heapq
import itertools
from typing import List, Optional

import structlog
from infrastructure.resilience.queue.errors import (
    CapacityExceededError,
    OperationCancelledError,
)
from infrastructure.resilience.queue.models import QueuedOperation

logger = structlog.get_logger()

DEFAULT_MAX_CAPACITY = 100


class OperationQueue:
    """Heap-backed priority queue with an in-flight slot.

    Attributes:
        max_capacity: Maximum outstanding requests (waiting + in-flight)
    """

    def __init__(self, max_capacity: int = DEFAULT_MAX_CAPACITY) -> None:
        if max_capacity < 1:
            raise ValueError("max_capacity must be at least 1")
        self.max_capacity = max_capacity
        self._heap: List[QueuedOperation] = []
        self._in_flight: Optional[QueuedOperation] = None
        self._sequence = itertools.count()

    def __len__(self) -> int:
        """Number of waiting requests (the in-flight one excluded)."""
        return len(self._heap)

    @property
    def in_flight(self) -> Optional[QueuedOperation]:
        return self._in_flight

    @property
    def outstanding_count(self) -> int:
        """Waiting requests plus the in-flight one."""
        return len(self._heap) + (1 if self._in_flight is not None else 0)

    @property
    def is_full(self) -> bool:
        return self.outstanding_count >= self.max_capacity

    def next_sequence(self) -> int:
        """Allocate the next submission sequence number."""
        return next(self._sequence)

    def enqueue(self, item: QueuedOperation) -> None:
        """Add a request to the queue.

        Raises:
            CapacityExceededError: If the queue is full; nothing is changed
        """
        if self.is_full:
            raise CapacityExceededError(self.max_capacity, self.outstanding_count)
        heapq.heappush(self._heap, item)
        logger.debug(
            "request_enqueued",
            label=item.label,
            priority=item.priority,
            sequence=item.sequence,
            waiting=len(self._heap),
        )

    def dequeue_next(self) -> Optional[QueuedOperation]:
        """Pop the next request and move it to the in-flight slot.

        Returns:
            The next request, or None when nothing is waiting
        """
        if not self._heap:
            return None
        item = heapq.heappop(self._heap)
        self._in_flight = item
        return item

    def release(self, item: QueuedOperation) -> None:
        """Free the in-flight slot once its request has settled."""
        if self._in_flight is item:
            self._in_flight = None

    def cancel_all(self) -> int:
        """Reject every waiting request with OperationCancelledError.

        The in-flight request is left to finish on its own. Calling this on
        an empty queue does nothing.

        Returns:
            Number of requests cancelled
        """
        if not self._heap:
            return 0

        cancelled, self._heap = self._heap, []
        for item in sorted(cancelled):
            item.reject(OperationCancelledError(item.label))

        logger.info("queued_requests_cancelled", count=len(cancelled))
        return len(cancelled)

    def snapshot(self) -> List[str]:
        """Labels of waiting requests in the order they will run."""
        return [item.label for item in sorted(self._heap)]

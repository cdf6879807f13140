"""Request orchestrator service.

Public entry point of the resilience layer: owns the retry policy, the
bounded request queue, the single-in-flight processor and the diagnostics
history. Each orchestrator is constructed explicitly and owned by whichever
service submits work through it; there is no shared module-level instance.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

import structlog
from infrastructure.resilience.history import (
    DEFAULT_MAX_HISTORY_SIZE,
    HistoryEntry,
    HistoryOutcome,
    OperationHistory,
)
from infrastructure.resilience.queue.models import QueuedOperation
from infrastructure.resilience.queue.priority_queue import (
    DEFAULT_MAX_CAPACITY,
    OperationQueue,
)
from infrastructure.resilience.queue.processor import QueueProcessor
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.controller import RetryController
from infrastructure.resilience.retry.models import AttemptContext

logger = structlog.get_logger()

Operation = Callable[[], Awaitable[Any]]
Listener = Callable[[HistoryEntry], Any]

DEFAULT_LABEL = "API request"


class RequestOrchestrator:
    """Queue-backed, retrying gateway for outbound API requests.

    This service:
    - Serialises every request through one in-flight slot
    - Runs urgent (higher priority) requests ahead of a routine backlog
    - Retries transient failures with exponential backoff and jitter
    - Records settled requests in a bounded history and notifies listeners

    Usage:
        orchestrator = RequestOrchestrator(
            api_key=settings.openai.OPENAI_API_KEY,
            retry_policy=RetryPolicy(max_attempts=3),
            max_queue_capacity=100,
        )

        # Routine request
        future = orchestrator.submit(lambda: client.transcribe(chunk), "transcription")

        # Urgent request, runs before the waiting backlog
        image = await orchestrator.submit(
            lambda: client.generate_image(prompt), "image", priority=10
        )

        # Session teardown
        await orchestrator.aclose()
    """

    def __init__(
        self,
        api_key: Optional[str] = "",
        retry_policy: Optional[RetryPolicy] = None,
        max_queue_capacity: int = DEFAULT_MAX_CAPACITY,
        max_history_size: int = DEFAULT_MAX_HISTORY_SIZE,
        controller: Optional[RetryController] = None,
    ):
        """Initialize the orchestrator.

        Args:
            api_key: Upstream API key; only its presence is checked here.
            retry_policy: RetryPolicy for every request. Defaults to RetryPolicy().
            max_queue_capacity: Maximum outstanding requests, in-flight included.
            max_history_size: Maximum history entries kept.
            controller: Optional pre-built RetryController (custom sleep/jitter).
        """
        self._api_key = api_key or ""
        self._retry_policy = retry_policy or RetryPolicy()
        self._controller = controller or RetryController()
        self._queue = OperationQueue(max_capacity=max_queue_capacity)
        self._history = OperationHistory(max_size=max_history_size)
        self._listeners: List[Listener] = []
        self._processor = QueueProcessor(
            self._queue,
            self._controller,
            self._retry_policy,
            on_settled=self._on_settled,
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    @property
    def max_queue_capacity(self) -> int:
        return self._queue.max_capacity

    @property
    def max_history_size(self) -> int:
        return self._history.max_size

    # Credentials

    @property
    def api_key(self) -> str:
        return self._api_key

    def set_api_key(self, api_key: Optional[str]) -> None:
        """Replace the upstream API key (e.g. after a settings change)."""
        self._api_key = api_key or ""

    def is_configured(self) -> bool:
        """True if a non-blank API key is present."""
        return bool(self._api_key.strip())

    # Queue operations

    def submit(
        self,
        operation: Operation,
        label: str = DEFAULT_LABEL,
        priority: int = 0,
    ) -> asyncio.Future:
        """Queue a request and return the handle its result will arrive on.

        Must be called from within the running event loop.

        Args:
            operation: Zero-argument callable returning an awaitable
            label: Human-readable label for diagnostics
            priority: Higher runs first; equal priorities run in submission order

        Returns:
            Future resolved with the request's result, or failed with its
            final error or OperationCancelledError

        Raises:
            CapacityExceededError: If the queue is full; nothing is queued
        """
        future = asyncio.get_running_loop().create_future()
        item = QueuedOperation(
            operation=operation,
            label=label,
            future=future,
            sequence=self._queue.next_sequence(),
            priority=priority,
        )

        try:
            self._queue.enqueue(item)
        except Exception as e:
            logger.warning(
                "request_rejected",
                label=label,
                priority=priority,
                error=str(e),
            )
            raise

        self._processor.notify()
        return future

    def cancel_all(self) -> int:
        """Drop every waiting request; the in-flight one finishes normally.

        There is no way to cancel one specific queued request. Cancelling a
        returned future only makes the processor skip that request if it has
        not started yet.

        Returns:
            Number of requests cancelled
        """
        return self._queue.cancel_all()

    def pending_count(self) -> int:
        """Number of requests waiting to start."""
        return len(self._queue)

    def outstanding_count(self) -> int:
        """Number of requests waiting or executing."""
        return self._queue.outstanding_count

    def pending_labels(self) -> List[str]:
        """Labels of waiting requests in execution order."""
        return self._queue.snapshot()

    async def join(self) -> None:
        """Wait until the processor has drained the queue."""
        await self._processor.join()

    async def aclose(self) -> None:
        """Cancel the backlog and wait for the in-flight request to settle."""
        cancelled = self.cancel_all()
        await self.join()
        logger.info("request_orchestrator_closed", cancelled=cancelled)

    async def execute_with_retry(
        self, operation: Operation, label: str = DEFAULT_LABEL
    ) -> Any:
        """Run a request with this orchestrator's retry policy, bypassing the queue.

        The result is not recorded in history.
        """
        return await self._controller.execute(operation, self._retry_policy, label)

    # History and observers

    def get_history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """Settled requests, oldest first, optionally only the last ``limit``."""
        return self._history.entries(limit)

    def clear_history(self) -> None:
        self._history.clear()

    def add_listener(self, listener: Listener) -> None:
        """Register a callback receiving the HistoryEntry of each executed request."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _on_settled(
        self,
        item: QueuedOperation,
        context: AttemptContext,
        error: Optional[BaseException],
    ) -> None:
        entry = HistoryEntry(
            label=item.label,
            outcome=HistoryOutcome.FAILURE if error is not None else HistoryOutcome.SUCCESS,
            attempts=context.attempt,
            error=str(error) if error is not None else None,
        )
        self._history.append(entry)
        self._notify_listeners(entry)

    def _notify_listeners(self, entry: HistoryEntry) -> None:
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception as e:
                listener_name = getattr(listener, "__name__", "unknown")
                logger.error(
                    "request_listener_failed",
                    listener=listener_name,
                    label=entry.label,
                    error=str(e),
                )

    # Diagnostics

    def get_stats(self) -> Dict[str, Any]:
        """Short service statistics."""
        in_flight = self._queue.in_flight
        return {
            "configured": self.is_configured(),
            "history_size": len(self._history),
            "pending": self.pending_count(),
            "in_flight": in_flight.label if in_flight is not None else None,
        }

    def diagnostics(self) -> Dict[str, Any]:
        """Current configuration and runtime state.

        The API key itself is never included, only whether one is set.
        """
        return {
            "configured": self.is_configured(),
            "retry_policy": self._retry_policy.as_dict(),
            "max_queue_capacity": self._queue.max_capacity,
            "max_history_size": self._history.max_size,
            "pending": self.pending_count(),
            "outstanding": self.outstanding_count(),
            "processor_state": self._processor.state.value,
            "history_size": len(self._history),
        }

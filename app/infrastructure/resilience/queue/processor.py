"""Single-concurrency queue processor.

The processor drains the request queue one request at a time. It has two
states:

- IDLE: no request in flight and no drain task alive
- RUNNING: one drain task executing requests through the retry controller

``notify()`` moves IDLE -> RUNNING when work is waiting. The drain task
returns to IDLE as soon as it finds the queue empty, with no suspension
point between the empty check and the state change, so a submission can
never be lost or dispatched twice.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

import structlog
from infrastructure.resilience.queue.errors import OperationCancelledError
from infrastructure.resilience.queue.models import QueuedOperation
from infrastructure.resilience.queue.priority_queue import OperationQueue
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.controller import RetryController
from infrastructure.resilience.retry.models import AttemptContext

logger = structlog.get_logger()

SettlementCallback = Callable[
    [QueuedOperation, AttemptContext, Optional[BaseException]], None
]


class ProcessorState(Enum):
    """Queue processor states."""

    IDLE = "idle"
    RUNNING = "running"


class QueueProcessor:
    """Drains an OperationQueue with at most one request in flight.

    Attributes:
        queue: OperationQueue to drain
        controller: RetryController executing each request
        policy: RetryPolicy applied to every request
        on_settled: Optional callback invoked after each executed request
    """

    def __init__(
        self,
        queue: OperationQueue,
        controller: RetryController,
        policy: RetryPolicy,
        on_settled: Optional[SettlementCallback] = None,
    ) -> None:
        self.queue = queue
        self.controller = controller
        self.policy = policy
        self.on_settled = on_settled
        self._state = ProcessorState.IDLE
        self._task: Optional[asyncio.Task] = None
        self.log = logger.bind(component="queue_processor")

    @property
    def state(self) -> ProcessorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ProcessorState.RUNNING

    def notify(self) -> None:
        """Start draining if idle and work is waiting.

        Must be called from within the running event loop.
        """
        if self._state is ProcessorState.RUNNING or len(self.queue) == 0:
            return
        self._state = ProcessorState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._drain())
        self.log.debug("queue_processor_started", waiting=len(self.queue))

    async def join(self) -> None:
        """Wait until the current drain, if any, has finished."""
        task = self._task
        if task is None or task.done():
            return
        await asyncio.shield(task)

    async def _drain(self) -> None:
        try:
            while True:
                item = self.queue.dequeue_next()
                if item is None:
                    return
                await self._execute(item)
        except BaseException:
            # Event loop shutdown or interpreter exit: nothing else will ever run the backlog
            self.queue.cancel_all()
            raise
        finally:
            self._state = ProcessorState.IDLE
            self._task = None
            self.log.debug("queue_processor_idle")

    async def _execute(self, item: QueuedOperation) -> None:
        if item.is_settled:
            # The submitter stopped awaiting its handle before the request started
            self.log.info("request_skipped_handle_settled", label=item.label)
            self.queue.release(item)
            return

        context = AttemptContext(label=item.label, policy=self.policy)
        error: Optional[BaseException] = None

        self.log.info(
            "request_started",
            label=item.label,
            priority=item.priority,
            waiting=len(self.queue),
        )

        try:
            result = await self.controller.run(item.operation, context)
        except Exception as e:
            error = e
            item.reject(e)
        except BaseException as e:
            # Cancellation or interpreter exit: the request can never finish
            interrupted = OperationCancelledError(item.label)
            interrupted.__cause__ = e
            item.reject(interrupted)
            self.queue.release(item)
            raise
        else:
            item.resolve(result)

        self.queue.release(item)
        self.log.info(
            "request_settled",
            label=item.label,
            outcome="failure" if error is not None else "success",
            attempts=context.attempt,
        )
        self._report(item, context, error)

    def _report(
        self,
        item: QueuedOperation,
        context: AttemptContext,
        error: Optional[BaseException],
    ) -> None:
        if self.on_settled is None:
            return
        try:
            self.on_settled(item, context, error)
        except Exception as e:
            self.log.error(
                "settlement_callback_failed",
                label=item.label,
                error=str(e),
            )

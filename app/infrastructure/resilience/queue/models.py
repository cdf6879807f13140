"""Queued request model."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable


@dataclass(eq=False)
class QueuedOperation:
    """One pending request awaiting execution.

    Owned by the queue while waiting, then by the processor while it runs.

    Fields:
        operation: Zero-argument callable returning an awaitable
        label: Human-readable label for diagnostics
        future: Deferred-result handle the submitter awaits
        sequence: Monotonic submission number (tie-break, lower runs first)
        priority: Higher runs first
        enqueued_at: Submission time
    """

    operation: Callable[[], Awaitable[Any]]
    label: str
    future: asyncio.Future
    sequence: int
    priority: int = 0
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def sort_key(self) -> tuple[int, int]:
        """Heap key: priority descending, then submission order."""
        return (-self.priority, self.sequence)

    def __lt__(self, other: "QueuedOperation") -> bool:
        return self.sort_key < other.sort_key

    @property
    def is_settled(self) -> bool:
        return self.future.done()

    def resolve(self, value: Any) -> bool:
        """Deliver a result to the submitter.

        Returns:
            False if the handle was already settled
        """
        if self.future.done():
            return False
        self.future.set_result(value)
        return True

    def reject(self, error: BaseException) -> bool:
        """Deliver a failure to the submitter.

        Returns:
            False if the handle was already settled
        """
        if self.future.done():
            return False
        self.future.set_exception(error)
        return True

"""Queue exceptions.

Exceptions raised synchronously by the request queue (capacity) or delivered
through a request's handle (cancellation).
"""


class QueueError(Exception):
    """Base exception for request queue errors."""


class CapacityExceededError(QueueError):
    """The queue, in-flight slot included, is full.

    Raised synchronously by submit; the request never enters the queue.

    Args:
        capacity: Configured maximum of outstanding requests
        outstanding: Requests waiting or executing at the time of the call
    """

    def __init__(self, capacity: int, outstanding: int):
        self.capacity = capacity
        self.outstanding = outstanding
        super().__init__(
            f"Request queue is full ({outstanding}/{capacity} outstanding requests)"
        )


class OperationCancelledError(QueueError):
    """A queued request was dropped before it started executing.

    The ``cancelled`` marker lets callers tell "never ran" apart from
    "ran and failed".
    """

    cancelled = True

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Request '{label}' was cancelled before execution")

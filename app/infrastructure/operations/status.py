"""Operation status enumeration.

Status codes used to classify the outcome of upstream requests for
retry decisions and caller-facing error reporting.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, rate limit, server fault)
        PERMANENT_ERROR: Non-retryable error (client error, unknown failure)
        UNAUTHORIZED: Credentials rejected by the upstream API
        NOT_FOUND: Resource not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"

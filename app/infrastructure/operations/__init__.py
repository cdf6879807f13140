"""Operation result types, request errors and classifiers.

This module contains the standardized result types for upstream requests,
the request exception hierarchy, and the error classifier that drives retry
decisions.
"""

from infrastructure.operations.classifiers import (
    classify_request_error,
    is_retryable_error,
)
from infrastructure.operations.errors import (
    HttpStatusError,
    NetworkError,
    RequestError,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "RequestError",
    "HttpStatusError",
    "NetworkError",
    "classify_request_error",
    "is_retryable_error",
]

"""Error classifiers for upstream request failures.

Converts failures raised by wrapped API operations into retry decisions and
standardized OperationResult objects. Classification is duck-typed: any
exception exposing ``status`` (or ``status_code``) and/or
``is_network_error`` is understood, so transport-specific exceptions need no
adapter.

Key Functions:
- is_retryable_error(): failure -> bool, the retry verdict
- classify_request_error(): failure -> OperationResult with a user-facing message

Usage:
    from infrastructure.operations.classifiers import classify_request_error

    try:
        text = await transcribe(audio)
    except Exception as exc:
        result = classify_request_error(exc)
        notify_user(result.message)
"""

from typing import Any, Optional

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def get_error_status(error: Any) -> Optional[int]:
    """Extract an HTTP-like status code from a failure, if it carries one.

    Args:
        error: Exception or error-like object

    Returns:
        The status code, or None when absent or not an integer
    """
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
    return None


def is_network_failure(error: Any) -> bool:
    """True if the failure is tagged as a transport/network error."""
    return getattr(error, "is_network_error", False) is True


def is_retryable_error(error: Any) -> bool:
    """Decide whether a failed request should be attempted again.

    Policy:
    - Network/transport failure (no response reached us) -> retry
    - 429 Too Many Requests -> retry
    - 5xx server fault -> retry
    - Any other status -> no retry
    - Unknown shape -> no retry, surfaced immediately

    Args:
        error: Exception raised by the wrapped operation

    Returns:
        True if the failure is transient
    """
    if is_network_failure(error):
        return True

    status = get_error_status(error)
    if status is None:
        return False
    if status == 429:
        return True
    return 500 <= status < 600


def classify_request_error(exc: Any) -> OperationResult:
    """Classify a failed request into an OperationResult.

    Status Code Mapping:
    - network failure: TRANSIENT_ERROR (NETWORK_ERROR, or TIMEOUT)
    - 400: PERMANENT_ERROR (BAD_REQUEST)
    - 401: UNAUTHORIZED (INVALID_API_KEY)
    - 404: NOT_FOUND
    - 413: PERMANENT_ERROR (FILE_TOO_LARGE)
    - 429: TRANSIENT_ERROR (RATE_LIMITED) with retry_after when the header is usable
    - 504: TRANSIENT_ERROR (TIMEOUT)
    - other 5xx: TRANSIENT_ERROR (SERVER_ERROR)
    - other status: PERMANENT_ERROR (HTTP_ERROR)
    - unknown: PERMANENT_ERROR (UNKNOWN_ERROR)

    The resulting ``is_retryable`` always agrees with is_retryable_error().

    Args:
        exc: Exception raised by the wrapped operation

    Returns:
        OperationResult with status, message, error_code and retry_after
    """
    if is_network_failure(exc):
        if getattr(exc, "code", None) == "timeout":
            return OperationResult.transient_error(
                "The request timed out. Please try again.",
                error_code="TIMEOUT",
            )
        return OperationResult.transient_error(
            "Network error. Check your connection and try again.",
            error_code="NETWORK_ERROR",
        )

    status = get_error_status(exc)
    detail = getattr(exc, "message", None) or str(exc)

    if status is None:
        return OperationResult.permanent_error(
            f"Unexpected error: {type(exc).__name__}: {detail}",
            error_code="UNKNOWN_ERROR",
        )

    if status == 429:
        # Avoid a circular import: the retry package imports this module
        from infrastructure.resilience.retry.backoff import retry_after_from_response

        retry_after: Optional[int] = None
        delay_ms = retry_after_from_response(getattr(exc, "response", None))
        if delay_ms is not None:
            retry_after = int(round(delay_ms / 1000))

        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            "Rate limit reached. Requests will be retried shortly.",
            error_code="RATE_LIMITED",
            retry_after=retry_after,
        )

    if status == 401:
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "Invalid API key. Check the configured credentials.",
            error_code="INVALID_API_KEY",
        )

    if status == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            "Requested resource not found",
            error_code="NOT_FOUND",
        )

    if status == 413:
        return OperationResult.permanent_error(
            "The uploaded file is too large.",
            error_code="FILE_TOO_LARGE",
        )

    if status == 400:
        return OperationResult.permanent_error(
            f"Bad request: {detail}",
            error_code="BAD_REQUEST",
        )

    if status == 504:
        return OperationResult.transient_error(
            "The request timed out. Please try again.",
            error_code="TIMEOUT",
        )

    if 500 <= status < 600:
        return OperationResult.transient_error(
            f"Upstream server error ({status})",
            error_code="SERVER_ERROR",
        )

    return OperationResult.permanent_error(
        f"Request failed ({status}): {detail}",
        error_code="HTTP_ERROR",
    )

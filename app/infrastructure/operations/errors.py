"""Request error types raised by wrapped API operations.

Wrapped operations signal failures by raising these exceptions (or any
exception exposing the same attributes). The classifier only reads the
attributes, so third-party exceptions carrying ``status`` or
``is_network_error`` are classified the same way.

Attributes read by the classifier:
    status: HTTP-like status code, None when the server was never reached
    is_network_error: True when the failure happened in transport
    response: Optional response-like object used for the Retry-After lookup
"""

import asyncio
from typing import Any, Optional


class RequestError(Exception):
    """Base exception for failed upstream requests.

    Args:
        message: Human-readable description of the failure
        status: HTTP-like status code, if a response was received
        is_network_error: True if no response reached the client
        response: Optional response-like object (headers lookup)
        code: Optional machine error code
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        is_network_error: bool = False,
        response: Any = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.is_network_error = is_network_error
        self.response = response
        self.code = code


class HttpStatusError(RequestError):
    """The upstream API answered with an error status.

    Example:
        >>> if response.status_code >= 400:
        ...     raise HttpStatusError(response.status_code, response.text, response=response)
    """

    def __init__(
        self,
        status: int,
        message: str = "",
        response: Any = None,
        code: Optional[str] = None,
    ):
        super().__init__(
            message or f"HTTP {status}",
            status=status,
            response=response,
            code=code,
        )


class NetworkError(RequestError):
    """The request never produced a response (DNS, connection, timeout)."""

    def __init__(self, message: str, code: str = "network_error"):
        super().__init__(message, status=None, is_network_error=True, code=code)

    @property
    def is_timeout(self) -> bool:
        return self.code == "timeout"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "NetworkError":
        """Wrap a transport exception, telling timeouts apart from other failures.

        Args:
            exc: Exception raised by the transport layer

        Returns:
            NetworkError with code "timeout" or "network_error"
        """
        is_timeout = isinstance(exc, (TimeoutError, asyncio.TimeoutError)) or (
            "timeout" in str(exc).lower()
        )
        if is_timeout:
            return cls(f"Request timed out: {exc}", code="timeout")
        return cls(f"Network error: {type(exc).__name__}: {exc}")

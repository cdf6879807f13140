"""Factory functions for request orchestrator test data."""

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from infrastructure.operations.errors import HttpStatusError, NetworkError


def make_response(headers: Optional[Dict[str, str]] = None) -> SimpleNamespace:
    """Create a response-like object exposing a ``headers`` mapping.

    Args:
        headers: Header mapping (e.g. {"Retry-After": "5"})

    Returns:
        Object with a ``headers`` dict
    """
    return SimpleNamespace(headers=dict(headers or {}))


def make_http_error(
    status: int,
    retry_after: Optional[str] = None,
    message: str = "",
) -> HttpStatusError:
    """Create an HttpStatusError, optionally carrying a Retry-After header."""
    response = None
    if retry_after is not None:
        response = make_response({"Retry-After": retry_after})
    return HttpStatusError(status, message, response=response)


def make_network_error(timeout: bool = False) -> NetworkError:
    """Create a NetworkError (connection failure or timeout)."""
    if timeout:
        return NetworkError("Request timed out", code="timeout")
    return NetworkError("Connection reset by peer")


class FlakyOperation:
    """Async operation failing with each queued error before succeeding.

    Attributes:
        calls: Number of invocations so far
    """

    def __init__(self, errors: List[BaseException], result: Any = "ok"):
        self._errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return self.result


class BlockingOperation:
    """Async operation that runs until released.

    Attributes:
        started: Set once the operation has begun executing
        calls: Number of invocations so far
    """

    def __init__(self, result: Any = "blocked-result", error: Optional[BaseException] = None):
        self.result = result
        self.error = error
        self.started = asyncio.Event()
        self._release = asyncio.Event()
        self.calls = 0

    def release(self) -> None:
        self._release.set()

    async def __call__(self) -> Any:
        self.calls += 1
        self.started.set()
        await self._release.wait()
        if self.error is not None:
            raise self.error
        return self.result


class RecordingOperation:
    """Async operation that appends its name to a shared execution log."""

    def __init__(self, name: str, log: List[str], result: Any = None):
        self.name = name
        self.log = log
        self.result = result if result is not None else name

    async def __call__(self) -> Any:
        self.log.append(self.name)
        return self.result

"""Backoff delay calculation and Retry-After parsing.

All delays are expressed in milliseconds. The functions here are pure: the
random source and the current time are injectable so callers and tests can
pin them.

Exponential backoff:
    capped = min(base_delay * 2 ^ (attempt - 1), max_delay)
    delay  = capped + uniform(0, capped * 0.25)

A server-directed delay (Retry-After) replaces the computed value entirely,
without jitter.
"""

import random
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Optional

from infrastructure.resilience.retry.config import RetryPolicy

JITTER_RATIO = 0.25
RETRY_AFTER_HEADER = "Retry-After"

_DELTA_SECONDS = re.compile(r"\d+", re.ASCII)


def capped_delay(attempt: int, base_delay_ms: float, max_delay_ms: float) -> float:
    """Exponential delay for the attempt that just failed, before jitter.

    Args:
        attempt: 1-indexed number of the failed attempt
        base_delay_ms: Delay after the first failure
        max_delay_ms: Upper bound for the exponential term

    Returns:
        min(base_delay_ms * 2 ^ (attempt - 1), max_delay_ms)
    """
    if attempt < 1:
        raise ValueError("attempt must be at least 1")
    exponential = base_delay_ms * (2 ** (attempt - 1))
    return min(exponential, max_delay_ms)


def compute_backoff_delay(
    attempt: int,
    base_delay_ms: float,
    max_delay_ms: float,
    rand: Callable[[], float] = random.random,
) -> float:
    """Exponential backoff with up to 25% additive jitter.

    The result lies in [capped, capped * 1.25].
    """
    capped = capped_delay(attempt, base_delay_ms, max_delay_ms)
    jitter = rand() * capped * JITTER_RATIO  # noqa: S311
    return capped + jitter


def resolve_retry_delay(
    attempt: int,
    policy: RetryPolicy,
    server_delay_ms: Optional[float] = None,
    rand: Callable[[], float] = random.random,
) -> float:
    """Wait before the next attempt, honouring a server-directed delay.

    Args:
        attempt: 1-indexed number of the failed attempt
        policy: RetryPolicy in force
        server_delay_ms: Delay requested by the upstream service, if any
        rand: Random source in [0, 1)

    Returns:
        server_delay_ms when present and non-negative, else the jittered backoff
    """
    if server_delay_ms is not None and server_delay_ms >= 0:
        return float(server_delay_ms)
    return compute_backoff_delay(
        attempt, policy.base_delay_ms, policy.max_delay_ms, rand=rand
    )


def _seconds_to_ms(seconds: int) -> Optional[float]:
    try:
        return float(seconds * 1000)
    except OverflowError:
        return None


def parse_retry_after(value: Any, now: Optional[datetime] = None) -> Optional[float]:
    """Interpret a Retry-After header value as a delay in milliseconds.

    Accepted forms:
    - non-negative integer number of seconds ("5" -> 5000.0)
    - HTTP-date; the delay is date - now, and a date already passed
      yields None

    Args:
        value: Raw header value
        now: Current time (defaults to datetime.now(timezone.utc))

    Returns:
        Delay in milliseconds, or None when there is no usable override
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return _seconds_to_ms(value) if value >= 0 else None

    text = str(value).strip()
    if not text:
        return None

    if _DELTA_SECONDS.fullmatch(text):
        try:
            seconds = int(text)
        except ValueError:
            # Longer than the interpreter's int-string digit limit
            return None
        return _seconds_to_ms(seconds)

    try:
        retry_at = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None
    if retry_at is None:
        return None

    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    delay_ms = (retry_at - now).total_seconds() * 1000
    if delay_ms <= 0:
        return None
    return delay_ms


def _lookup_header(headers: Any, name: str) -> Any:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return value


def retry_after_from_response(
    response: Any, now: Optional[datetime] = None
) -> Optional[float]:
    """Read the Retry-After header of a response-like object.

    Supports objects exposing a ``headers`` mapping (requests, httpx,
    aiohttp) as well as objects with a direct ``get`` lookup
    (httplib2-style responses).

    Args:
        response: Response-like object, or None
        now: Current time passed to parse_retry_after

    Returns:
        Delay in milliseconds, or None when absent or unusable
    """
    if response is None:
        return None

    headers = getattr(response, "headers", None)
    if headers is not None and hasattr(headers, "get"):
        value = _lookup_header(headers, RETRY_AFTER_HEADER)
    elif hasattr(response, "get"):
        value = _lookup_header(response, RETRY_AFTER_HEADER)
    else:
        return None

    return parse_retry_after(value, now=now)

"""Session context binding for structured logging.

Binds session-scoped metadata (correlation id, session id, request label)
so it flows through every log entry emitted while the context is active,
including entries emitted by the queue processor and retry controller.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(session_id="session-42", label="transcription"):
        logger.info("request_submitted")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    session_id: Optional[str] = None,
    label: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind session-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique identifier. Auto-generated if not provided.
        session_id: Identifier of the recording session (if available).
        label: Human-readable request label (e.g. "transcription").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.

    Example:
        with bind_request_context(session_id=session.id):
            future = orchestrator.submit(transcribe, label="transcription")
            text = await future
    """
    context: dict[str, Any] = {}

    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if session_id is not None:
        context["session_id"] = session_id

    if label is not None:
        context["label"] = label

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context.

    Args:
        correlation_id: The correlation ID to set.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Clear all bound context from the logging context.

    Should be called at session teardown to prevent context leakage
    between sessions.
    """
    structlog.contextvars.clear_contextvars()

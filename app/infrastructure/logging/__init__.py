"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the request orchestrator using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance bound to a component name
    - bind_request_context(): Context manager for session-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - set_correlation_id(): Set correlation ID in context
    - clear_request_context(): Clear all bound context

Processors:
    - build_processors(): Full structlog chain used by configure_logging()
    - redact_credentials(): Hide API keys and bearer tokens
    - truncate_error_text(): Shorten upstream error bodies
    - add_deployment_info(): Stamp app name, git SHA and environment

Example:
    from infrastructure.logging import (
        configure_logging,
        get_logger,
        bind_request_context,
    )

    # At application startup
    configure_logging()

    logger = get_logger(__name__)

    # Around a recording session
    with bind_request_context(session_id="session-42"):
        logger.info("session_started")
"""

from infrastructure.logging.setup import (
    build_processors,
    configure_logging,
    get_logger,
)

from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
    set_correlation_id,
    clear_request_context,
)

from infrastructure.logging.formatters import (
    SENSITIVE_KEYS,
    add_deployment_info,
    orchestrator_processors,
    redact_credentials,
    truncate_error_text,
)

__all__ = [
    # Setup
    "configure_logging",
    "build_processors",
    "get_logger",
    # Context
    "bind_request_context",
    "get_correlation_id",
    "set_correlation_id",
    "clear_request_context",
    # Processors
    "add_deployment_info",
    "orchestrator_processors",
    "redact_credentials",
    "truncate_error_text",
    "SENSITIVE_KEYS",
]

"""Structlog configuration and logger setup.

This module provides the core logging configuration for the orchestrator.
It configures structlog with processors for debugging context, proper
exception formatting, and environment-aware rendering.

Usage:
    from infrastructure.logging import configure_logging, get_logger

    # Configure logging at app startup
    configure_logging()

    # Get a logger for your module
    logger = get_logger(__name__)
    logger.info("event_name", key="value")

Dependencies:
    - infrastructure.configuration.Settings
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import orchestrator_processors

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    extra_processors: Optional[Sequence[Callable[..., Any]]] = None,
) -> BoundLogger:
    """Configure structured logging.

    Configures structlog with:
    - Context variable merging for correlation IDs
    - File/line/function context
    - Exception formatting with stack traces
    - Test environment detection for log suppression

    Args:
        settings: Optional Settings instance. Defaults to the configuration
            singleton when omitted.
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
            Defaults to settings.LOG_LEVEL if not provided.
        is_production: Optional override for production mode. Defaults to
            settings.is_production. Controls JSON vs console output.
        extra_processors: Optional processors run after credential redaction
            and before rendering.

    Returns:
        Configured logger instance
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)

        # Minimal processors: logs are never emitted because the root
        # logger level is CRITICAL + 1
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if settings is None:
        from infrastructure.configuration import settings as default_settings

        settings = default_settings

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = build_processors(settings, prod_mode, extra_processors)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger instance, optionally bound to a component name.

    Args:
        name: Optional logger name (typically __name__ in calling module)

    Returns:
        Logger instance with context

    Example:
        logger = get_logger(__name__)
        logger.info("request_enqueued", label="transcription")
    """
    logger = structlog.stdlib.get_logger()
    if name:
        parts = name.split(".")
        return logger.bind(component=parts[-1], module_path=name)
    return logger


def build_processors(
    settings: "Settings",
    is_production: bool,
    extra_processors: Optional[Sequence[Callable[..., Any]]] = None,
) -> List[Callable[..., Any]]:
    """Assemble the structlog processor chain.

    Credentials are redacted and error text truncated before any extra
    processor or renderer sees the entry. The renderer is always last:
    JSON in production, console otherwise.
    """
    processors: List[Callable[..., Any]] = [
        # Add context variables (correlation IDs, session info, etc)
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    processors.extend(orchestrator_processors(settings))
    processors.extend(extra_processors or ())

    if is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors

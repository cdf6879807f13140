"""Structlog processors applied to every orchestrator log entry.

Retry and settlement events carry ``error=str(exc)`` for upstream failures.
Those strings can echo request headers or whole response bodies, so entries
are scrubbed of credentials and oversized values before rendering.

Usage:
    from infrastructure.logging.formatters import orchestrator_processors

    processors = orchestrator_processors(settings)
"""

import re
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

Processor = Callable[[Any, str, dict[str, Any]], dict[str, Any]]

APP_NAME = "request-orchestrator"
REDACTED = "***REDACTED***"

# Key fragments whose values never reach the logs
SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "authorization",
        "password",
        "secret",
        "token",
        "credential",
    }
)

# Credentials embedded in free text (error messages, echoed headers)
SECRET_VALUE_PATTERNS = (
    re.compile(r"\bsk-[A-Za-z0-9_\-]{8,}"),
    re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._\-]+"),
)

# Fields that hold upstream error text
ERROR_FIELDS = ("error", "detail", "body")


def add_deployment_info(
    app_name: str = APP_NAME,
    git_sha: str = "Unknown",
    environment: str = "production",
) -> Processor:
    """Create a processor stamping entries with app, build and environment."""

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("app_name", app_name)
        event_dict.setdefault("git_sha", git_sha)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def _scrub_text(value: str, mask_value: str) -> str:
    for pattern in SECRET_VALUE_PATTERNS:
        value = pattern.sub(mask_value, value)
    return value


def redact_credentials(
    mask_value: str = REDACTED,
    extra_keys: Optional[Iterable[str]] = None,
) -> Processor:
    """Create a processor that hides API keys and tokens.

    A value is replaced entirely when its key contains a sensitive fragment
    (case-insensitive). Every other string value has API-key and bearer
    token substrings replaced in place.

    Args:
        mask_value: Replacement text.
        extra_keys: Additional key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    keys = SENSITIVE_KEYS | frozenset(k.lower() for k in (extra_keys or ()))

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in event_dict.items():
            if value is None:
                continue
            if any(fragment in key.lower() for fragment in keys):
                event_dict[key] = mask_value
            elif isinstance(value, str):
                event_dict[key] = _scrub_text(value, mask_value)
        return event_dict

    return processor


def truncate_error_text(
    max_length: int = 500,
    fields: Iterable[str] = ERROR_FIELDS,
) -> Processor:
    """Create a processor that shortens upstream error text.

    Only the named fields are touched; labels and event names are kept
    intact.
    """
    targets = tuple(fields)

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key in targets:
            value = event_dict.get(key)
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = f"{value[:max_length]}...[{len(value)} chars]"
        return event_dict

    return processor


def orchestrator_processors(settings: "Settings") -> List[Processor]:
    """Processors inserted ahead of the renderer by configure_logging."""
    environment = settings.PREFIX.rstrip("-_") if settings.PREFIX else "production"
    return [
        add_deployment_info(git_sha=settings.GIT_SHA, environment=environment),
        redact_credentials(),
        truncate_error_text(),
    ]

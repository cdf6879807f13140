"""Test data factories for deterministic test data generation."""

from tests.factories.resilience import (
    BlockingOperation,
    FlakyOperation,
    RecordingOperation,
    make_http_error,
    make_network_error,
    make_response,
)

__all__ = [
    "BlockingOperation",
    "FlakyOperation",
    "RecordingOperation",
    "make_http_error",
    "make_network_error",
    "make_response",
]

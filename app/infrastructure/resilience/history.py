"""Bounded history of settled requests for diagnostics."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, List, Optional

DEFAULT_MAX_HISTORY_SIZE = 50


class HistoryOutcome(Enum):
    """Outcome of an executed request.

    Values:
        SUCCESS: The request returned a result
        FAILURE: The request failed after its last attempt
    """

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class HistoryEntry:
    """Record of one executed request.

    Fields:
        label: Human-readable request label
        outcome: HistoryOutcome
        attempts: Number of attempts made
        error: Failure description, None on success
        timestamp: Settlement time
    """

    label: str
    outcome: HistoryOutcome
    attempts: int
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict:
        return {
            "label": self.label,
            "outcome": self.outcome.value,
            "attempts": self.attempts,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }


class OperationHistory:
    """Append-only history that evicts its oldest entries past max_size."""

    def __init__(self, max_size: int = DEFAULT_MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: Deque[HistoryEntry] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def entries(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        """Return entries oldest first.

        Args:
            limit: When positive, only the most recent ``limit`` entries

        Returns:
            A copy of the stored entries
        """
        entries = list(self._entries)
        if limit is not None and limit > 0:
            return entries[-limit:]
        return entries

    def clear(self) -> None:
        self._entries.clear()

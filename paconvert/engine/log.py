"""Per-conversion audit trail."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator

logger = logging.getLogger("paconvert.engine")


@dataclass(frozen=True)
class LogEntry:
    """One conversion step.

    Attributes:
        timestamp: Local time the step was recorded.
        message: Human-readable description of the step.
    """

    timestamp: datetime
    message: str

    def format(self, timestamps: bool = True) -> str:
        """Render as ``[HH:MM:SS] message``."""
        if not timestamps:
            return self.message
        return f"[{self.timestamp:%H:%M:%S}] {self.message}"


class ConversionLog:
    """Append-only list of LogEntry, one instance per conversion.

    Entries are mirrored to the ``paconvert.engine`` logger at DEBUG.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._entries: list[LogEntry] = []

    def record(self, message: str) -> LogEntry:
        entry = LogEntry(timestamp=self._clock(), message=message)
        self._entries.append(entry)
        logger.debug(message)
        return entry

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self._entries]

    def format(self, timestamps: bool = True) -> str:
        """All entries, one per line."""
        return "\n".join(entry.format(timestamps) for entry in self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["LogEntry", "ConversionLog"]

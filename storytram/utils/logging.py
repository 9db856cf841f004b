"""
Generation event log.

Every engine event is written to Python logging and kept in a bounded
in-memory buffer. Entries carry the attempt number and the validator
check that failed, so the service can report which checks keep tripping
and which stories were emitted without passing validation.
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, List, Optional

from storytram.config import config

LEVELS = ("debug", "info", "warning", "error")


@dataclass
class LogEntry:
    """One engine event."""
    level: str
    message: str
    source: str
    attempt: Optional[int] = None
    failed_check: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level,
            "message": self.message,
            "source": self.source,
            "attempt": self.attempt,
            "failed_check": self.failed_check,
            "details": self.details,
        }


class LogBuffer:
    """Thread-safe ring of the most recent engine events."""

    def __init__(self, max_size: int = 1000):
        self._entries: Deque[LogEntry] = deque(maxlen=max_size)
        self._lock = Lock()

    def add(self, entry: LogEntry):
        with self._lock:
            self._entries.append(entry)

    def _snapshot(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    def get_recent(
        self,
        limit: int = 100,
        level: Optional[str] = None,
        source: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Most recent entries first, optionally filtered."""
        entries = [
            e for e in reversed(self._snapshot())
            if (level is None or e.level == level) and (source is None or e.source == source)
        ]
        return [e.to_dict() for e in entries[:limit]]

    def get_warnings(self, limit: int = 50) -> List[Dict[str, Any]]:
        """Soft-failed stories and rejected requests, most recent first."""
        return self.get_recent(limit=limit, level="warning")

    def get_stats(self) -> Dict[str, Any]:
        """
        Counts over the buffered window.

        `failed_checks` tallies validator failures by check name across
        every attempt, not only the emitted ones.
        """
        entries = self._snapshot()
        return {
            "total": len(entries),
            "by_level": dict(Counter(e.level for e in entries)),
            "failed_checks": dict(Counter(e.failed_check for e in entries if e.failed_check and e.level == "info")),
            "soft_failed": sum(1 for e in entries if e.level == "warning" and e.failed_check),
        }

    def clear(self):
        with self._lock:
            self._entries.clear()


_log_buffer = LogBuffer(max_size=config.LOG_BUFFER_SIZE)


def get_log_buffer() -> LogBuffer:
    return _log_buffer


class EngineLogger:
    """Writes each event to `storytram.<source>` and to the shared buffer."""

    def __init__(self, source: str, buffer: Optional[LogBuffer] = None):
        self.source = source
        self._buffer = buffer or _log_buffer
        self._logger = logging.getLogger(f"storytram.{source}")

    def _log(
        self,
        level: str,
        message: str,
        attempt: Optional[int] = None,
        failed_check: Optional[str] = None,
        **details
    ):
        self._buffer.add(LogEntry(level, message, self.source, attempt, failed_check, details))

        tags = []
        if attempt is not None:
            tags.append(f"attempt={attempt}")
        if failed_check:
            tags.append(f"check={failed_check}")
        tags.extend(f"{k}={v}" for k, v in details.items())
        suffix = f" | {' '.join(tags)}" if tags else ""
        self._logger.log(getattr(logging, level.upper()), f"{message}{suffix}")

    def debug(self, message: str, **kwargs):
        self._log("debug", message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log("info", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log("warning", message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log("error", message, **kwargs)


def configure_logging(level: Optional[str] = None):
    """Install a root handler for the web service and CLI entry points."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


engine_logger = EngineLogger("story_engine")
validator_logger = EngineLogger("story_validator")
api_logger = EngineLogger("api")

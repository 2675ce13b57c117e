"""Diagnostics log buffer.

Captures recent records of the ``overlay`` logger hierarchy into a ring
buffer so a preferences/diagnostics surface can show them, and mirrors the
``debug-logging`` preference onto the logger level (INFO when off, DEBUG
when on).

Design goals:
 - No dependency on any UI toolkit
 - Capacity-bound ring buffer with O(1) append
 - Filtering by exact level name or logger name substring
 - Optional per-record listener callback
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Deque, List, Optional

__all__ = [
    "LogEntry",
    "LoggingService",
]

ROOT_LOGGER = "overlay"


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(
        self,
        capacity: int = 500,
        listener: Optional[Callable[[LogEntry], None]] = None,
    ) -> None:
        self._capacity = capacity
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._listener = listener
        self._logger: Optional[logging.Logger] = None
        self._debug = False

    # Lifecycle --------------------------------------------------------
    def attach(self, logger_name: str = ROOT_LOGGER) -> None:
        if self._logger is not None:
            return
        logger = logging.getLogger(logger_name)
        logger.addHandler(self._handler)
        self._logger = logger
        self._apply_level()

    def detach(self) -> None:
        if self._logger is None:
            return
        self._logger.removeHandler(self._handler)
        self._logger = None

    # Level ------------------------------------------------------------
    @property
    def debug_logging(self) -> bool:
        return self._debug

    @debug_logging.setter
    def debug_logging(self, enabled: bool) -> None:
        self._debug = bool(enabled)
        self._apply_level()

    def _apply_level(self) -> None:
        if self._logger is not None:
            self._logger.setLevel(logging.DEBUG if self._debug else logging.INFO)

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        if self._listener is not None:
            self._listener(entry)

    # Query ------------------------------------------------------------
    def recent(
        self,
        limit: Optional[int] = None,
        *,
        level: str | None = None,
        name_contains: str | None = None,
    ) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        out = [
            e
            for e in data
            if (not level or e.level == level)
            and (not name_contains or name_contains in e.name)
        ]
        return out[-limit:] if limit is not None else out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

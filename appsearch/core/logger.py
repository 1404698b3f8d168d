"""Structured logging: console plus an optional JSON-lines search event log."""

import json
import logging
import os
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from appsearch.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return "<0.1s"
    return "0s"


def _preview(text: str, max_len: int = 80) -> str:
    """One-line preview of a query for console output."""
    s = (text or "").strip().replace("\n", " ")
    return s[:max_len] + "..." if len(s) > max_len else s


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "query": "\033[38;5;81m",  # cyan for query text
        "done_ok": "\033[38;5;78m",  # green for match counts
        "duration": "\033[38;5;221m",  # yellow for durations
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class SearchLogger:
    def __init__(self, event_log_enabled: bool | None = None):
        if event_log_enabled is None:
            event_log_enabled = config.event_log_enabled
        self._file_lock = threading.Lock()
        self._log_file_handle = None
        self.log_file = config.logs_dir / "search.log"
        if event_log_enabled:
            config.logs_dir.mkdir(parents=True, exist_ok=True)
            self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("appsearch")
        self.console.setLevel(getattr(logging, config.log_level, logging.INFO))
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(asctime)s │ %(message)s", datefmt="%H:%M:%S")
            )
            self.console.addHandler(handler)

    def log_event(self, event: LogEvent) -> None:
        if self._log_file_handle is None:
            return
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def search_submitted(self, query: str):
        event = LogEvent(
            event_type="SEARCH_SUBMITTED",
            timestamp=self._timestamp(),
            data={"query": query[:200]},
        )
        self.log_event(event)
        self.console.debug(f"Search: {_c('query')}{_preview(query)}{_reset()}")

    def search_completed(
        self,
        query: str,
        match_count: int,
        emitted_count: int,
        duration_seconds: float,
    ):
        event = LogEvent(
            event_type="SEARCH_COMPLETED",
            timestamp=self._timestamp(),
            data={
                "query": query[:200],
                "matches": match_count,
                "emitted": emitted_count,
                "duration_seconds": round(duration_seconds, 4),
            },
        )
        self.log_event(event)
        dur = _format_duration(duration_seconds)
        self.console.debug(
            f"Search {_c('query')}{_preview(query)}{_reset()}  "
            f"{_c('done_ok')}{match_count} matches{_reset()}  "
            f"{emitted_count} rows  in {_c('duration')}{dur}{_reset()}"
        )

    def catalog_updated(self, operation: str, size: int):
        event = LogEvent(
            event_type="CATALOG_UPDATED",
            timestamp=self._timestamp(),
            data={"operation": operation, "size": size},
        )
        self.log_event(event)
        self.console.debug(f"Catalog {operation}: {size} items")

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"Error: {message}", *args, **log_kwargs)

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.warning(message, *args, **log_kwargs)

    def exception(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)
        self.console.exception(message, *args, **kwargs)

    def close(self) -> None:
        with self._file_lock:
            if self._log_file_handle is not None:
                self._log_file_handle.close()
                self._log_file_handle = None


logger = SearchLogger()

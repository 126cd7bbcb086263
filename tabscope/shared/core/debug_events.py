"""Structured debug event log.

Events are kept in a bounded in-memory history and, once a log path is
configured and logging is enabled, appended to that file as JSON lines.
"""

from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

MAX_DEBUG_EVENTS = 500


@dataclass(frozen=True)
class DebugEvent:
    """A single recorded event."""

    ts: float
    category: str
    name: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def iso(self) -> str:
        return datetime.fromtimestamp(self.ts).isoformat(timespec="milliseconds")

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.iso,
            "category": self.category,
            "name": self.name,
            "data": self.data,
        }


_history: deque[DebugEvent] = deque(maxlen=MAX_DEBUG_EVENTS)
_enabled: bool = False
_log_path: Path | None = None


def configure_debug_events(*, enabled: bool, log_path: Path | None = None) -> None:
    """Enable or disable file logging and set the log path."""
    global _enabled, _log_path
    _enabled = bool(enabled)
    if log_path is not None:
        _log_path = log_path


def debug_events_enabled() -> bool:
    return _enabled


def debug_log_path() -> Path | None:
    return _log_path


def emit_debug_event(name: str, /, *, category: str = "app", **data: Any) -> DebugEvent:
    """Record an event; write it to the log file when logging is enabled."""
    event = DebugEvent(ts=time.time(), category=category, name=name, data=dict(data))
    _history.append(event)
    if _enabled and _log_path is not None:
        _write_event(_log_path, event)
    return event


def get_debug_events(limit: int | None = None) -> list[DebugEvent]:
    """Recorded events, oldest first."""
    events = list(_history)
    if limit is not None:
        events = events[-limit:]
    return events


def clear_debug_events() -> None:
    _history.clear()
    if _log_path is not None and _log_path.exists():
        try:
            with _log_path.open("w", encoding="utf-8"):
                pass
        except OSError:
            pass


def format_debug_data(data: dict[str, Any]) -> str:
    """Render event data as ``key=value`` pairs."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            rendered = value if len(value) <= 80 else value[:77] + "..."
        else:
            rendered = json.dumps(value, default=str)
        parts.append(f"{key}={rendered}")
    return " ".join(parts)


def _write_event(path: Path, event: DebugEvent) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(event.to_dict(), default=str) + "\n")
    except OSError:
        # The log is best-effort; a read-only disk must not stop the viewer.
        pass

"""Debug event logging command handlers."""

from __future__ import annotations

import polars as pl

from tabscope.shared.app.protocols import SessionProtocol
from tabscope.shared.core.debug_events import (
    clear_debug_events,
    configure_debug_events,
    debug_events_enabled,
    debug_log_path,
    format_debug_data,
    get_debug_events,
)

DEBUG_TABLE_COLUMNS = ["Time", "Category", "Event", "Details"]


def _set_debug_enabled(session: SessionProtocol, enabled: bool) -> None:
    configure_debug_events(enabled=enabled, log_path=session.runtime.debug_log_path)
    path = debug_log_path()
    suffix = f" (log: {path})" if path else ""
    state = "enabled" if enabled else "disabled"
    session.notify(f"Debug logging {state}{suffix}")


def _show_debug_status(session: SessionProtocol) -> None:
    count = len(get_debug_events())
    path = debug_log_path()
    suffix = f" (log: {path})" if path else ""
    state = "enabled" if debug_events_enabled() else "disabled"
    session.notify(f"Debug logging {state}, events={count}{suffix}")


def debug_events_frame(limit: int | None = None) -> pl.DataFrame:
    rows = [(event.iso, event.category, event.name, format_debug_data(event.data)) for event in get_debug_events(limit)]
    return pl.DataFrame(rows, schema={name: pl.String for name in DEBUG_TABLE_COLUMNS}, orient="row")


def _show_debug_events(session: SessionProtocol) -> None:
    frame = debug_events_frame()
    if frame.is_empty():
        session.notify("No debug events recorded")
        return
    session.add_table("debug events", frame, register=False)
    path = debug_log_path()
    if path and debug_events_enabled():
        session.notify(f"Debug log: {path}")


def _clear_debug_events(session: SessionProtocol) -> None:
    clear_debug_events()
    session.notify("Debug log cleared")


class DebugCommandMixin:
    def action_debug(self: SessionProtocol, value: str = "") -> None:
        if value == "on":
            _set_debug_enabled(self, True)
        elif value == "off":
            _set_debug_enabled(self, False)
        elif value == "list":
            _show_debug_events(self)
        elif value == "clear":
            _clear_debug_events(self)
        else:
            _show_debug_status(self)

"""Actions that replace a tab's table with a query result."""

from __future__ import annotations

import polars as pl

from tabscope.domains.query.app.commands import filter_sql, order_sql, select_sql
from tabscope.domains.query.app.engine import CURRENT_TABLE
from tabscope.shared.app.protocols import SessionProtocol
from tabscope.shared.core.debug_events import emit_debug_event


def _run(session: SessionProtocol, sql: str) -> pl.DataFrame:
    """Execute ``sql`` with the active table registered as ``_``."""
    tab = session.tabs.active
    if tab is not None:
        session.engine.register(CURRENT_TABLE, tab.frame)
    return session.engine.execute(sql)


def _replace(session: SessionProtocol, sql: str) -> None:
    frame = _run(session, sql)
    tab = session.tabs.active
    if tab is None:
        session.add_table("query", frame, register=False)
        return
    tab.search = None
    tab.dismiss_modal()
    tab.set_frame(frame)
    emit_debug_event("table.replace", category="table", tab=tab.name, rows=frame.height)


def _short_name(sql: str, limit: int = 24) -> str:
    name = " ".join(sql.split())
    return name if len(name) <= limit else name[: limit - 3] + "..."


class QueryMixin:
    """SQL over the active table through the query engine."""

    def action_sql_query(self: SessionProtocol, sql: str) -> None:
        _replace(self, sql)

    def action_tab_new_query(self: SessionProtocol, sql: str) -> None:
        self.add_table(_short_name(sql), _run(self, sql), register=False)

    def action_table_select(self: SessionProtocol, columns: str) -> None:
        self.require_tab()
        _replace(self, select_sql(columns))

    def action_table_filter(self: SessionProtocol, predicate: str) -> None:
        self.require_tab()
        _replace(self, filter_sql(predicate))

    def action_table_order(self: SessionProtocol, expression: str) -> None:
        self.require_tab()
        _replace(self, order_sql(expression))

    def action_table_reset(self: SessionProtocol) -> None:
        tab = self.require_tab()
        tab.search = None
        tab.dismiss_modal()
        tab.reset()

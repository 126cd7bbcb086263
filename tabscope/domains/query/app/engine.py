"""DuckDB-backed query engine over registered polars tables."""

from __future__ import annotations

import duckdb
import polars as pl

from tabscope.core.errors import EngineError
from tabscope.shared.core.debug_events import emit_debug_event

CURRENT_TABLE = "_"


class QueryEngine:
    """An in-memory DuckDB connection with named polars tables."""

    def __init__(self) -> None:
        self._con = duckdb.connect(":memory:")
        self._tables: dict[str, pl.DataFrame] = {}

    def register(self, name: str, df: pl.DataFrame) -> None:
        self._con.register(name, df)
        self._tables[name] = df

    def unregister(self, name: str) -> None:
        if self._tables.pop(name, None) is not None:
            self._con.unregister(name)

    def tables(self) -> dict[str, pl.DataFrame]:
        """Registered tables by name, excluding the current-table alias."""
        return {name: df for name, df in self._tables.items() if name != CURRENT_TABLE}

    def get(self, name: str) -> pl.DataFrame | None:
        return self._tables.get(name)

    def execute(self, sql: str) -> pl.DataFrame:
        emit_debug_event("query.execute", category="query", sql=sql)
        try:
            relation = self._con.sql(sql)
        except duckdb.Error as exc:
            emit_debug_event("query.error", category="query", sql=sql, error=str(exc))
            raise EngineError(str(exc)) from exc
        if relation is None:
            # Statements without a result set (CREATE, SET, ...)
            return pl.DataFrame()
        try:
            result = relation.pl()
        except duckdb.Error as exc:
            emit_debug_event("query.error", category="query", sql=sql, error=str(exc))
            raise EngineError(str(exc)) from exc
        emit_debug_event("query.result", category="query", rows=result.height, columns=result.width)
        return result

    def close(self) -> None:
        self._con.close()

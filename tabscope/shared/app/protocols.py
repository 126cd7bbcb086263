"""Protocols describing the session surface used by action mixins."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import polars as pl

    from tabscope.core.actions import Action
    from tabscope.domains.query.app.commands import CommandRegistry
    from tabscope.domains.query.app.engine import QueryEngine
    from tabscope.domains.query.app.palette import PaletteState
    from tabscope.domains.query.store.history import HistoryRing
    from tabscope.domains.schema.app.schema_view import SchemaView
    from tabscope.domains.tabular.app.tabs import TabState
    from tabscope.domains.tabular.app.tabular import Tabular
    from tabscope.shared.app.runtime import RuntimeConfig


class SessionStateProtocol(Protocol):
    runtime: RuntimeConfig
    tabs: TabState
    engine: QueryEngine
    registry: CommandRegistry
    history: HistoryRing
    palette: PaletteState | None
    error: str | None
    schema: SchemaView | None
    side_panel: int | None
    quit_requested: bool
    status: str


class SessionProtocol(SessionStateProtocol, Protocol):
    def invoke(self, action: Action) -> None:
        ...

    def apply(self, action: Action) -> None:
        ...

    def notify(self, message: str, severity: str = "information") -> None:
        ...

    def add_table(self, name: str, frame: pl.DataFrame, *, register: bool = True) -> Tabular:
        ...

    def require_tab(self) -> Tabular:
        ...

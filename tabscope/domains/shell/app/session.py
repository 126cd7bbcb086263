"""The interactive session: all mutable viewer state and its event step."""

from __future__ import annotations

import polars as pl

from tabscope.core.actions import Action
from tabscope.core.binding_contexts import Context, get_binding_context
from tabscope.core.errors import CommandNotFoundError, TabscopeError
from tabscope.core.input_context import InputContext
from tabscope.core.key_router import KeyResolver
from tabscope.core.keymap import KeyEvent
from tabscope.domains.plot.app.plot_actions import PlotMixin
from tabscope.domains.query.app.commands import CommandRegistry
from tabscope.domains.query.app.engine import QueryEngine
from tabscope.domains.query.app.palette import PaletteState
from tabscope.domains.query.app.palette_actions import PaletteMixin
from tabscope.domains.query.app.query_actions import QueryMixin
from tabscope.domains.query.store.history import HistoryRing, HistoryStore
from tabscope.domains.schema.app.schema_view import SchemaMixin, SchemaView
from tabscope.domains.search.app.search_actions import SearchMixin
from tabscope.domains.shell.app.commands import DebugCommandMixin
from tabscope.domains.tabular.app.navigation import TableNavigationMixin
from tabscope.domains.tabular.app.tab_actions import TabsMixin
from tabscope.domains.tabular.app.tabs import TabState
from tabscope.domains.tabular.app.tabular import Tabular
from tabscope.shared.app.runtime import RuntimeConfig
from tabscope.shared.core.debug_events import emit_debug_event


class Session(
    TableNavigationMixin,
    TabsMixin,
    SearchMixin,
    PaletteMixin,
    QueryMixin,
    SchemaMixin,
    PlotMixin,
    DebugCommandMixin,
):
    """Owner of tabs, palette, error and history.

    Keys enter through :meth:`handle_key`; the resolved action runs through
    :meth:`invoke`, which turns any :class:`TabscopeError` into the pending
    error shown to the user.
    """

    def __init__(
        self,
        runtime: RuntimeConfig | None = None,
        *,
        resolver: KeyResolver | None = None,
        registry: CommandRegistry | None = None,
        engine: QueryEngine | None = None,
    ) -> None:
        self.runtime = runtime or RuntimeConfig.from_env()
        self.resolver = resolver or KeyResolver()
        self.registry = registry or CommandRegistry()
        self.engine = engine or QueryEngine()
        self.tabs = TabState()
        self.palette: PaletteState | None = None
        self.error: str | None = None
        self.schema: SchemaView | None = None
        self.side_panel: int | None = None
        self.quit_requested = False
        self.status = ""
        self.status_severity = "information"

        self._history_store: HistoryStore | None = None
        if self.runtime.persist_history and self.runtime.history_path is not None:
            self._history_store = HistoryStore(self.runtime.history_path)
            self.history = self._history_store.load(self.runtime.history_size)
        else:
            self.history = HistoryRing(self.runtime.history_size)

    # State snapshot

    def input_context(self) -> InputContext:
        tab = self.tabs.active
        return InputContext(
            error_pending=self.error is not None,
            palette_open=self.palette is not None,
            schema_active=self.schema is not None,
            side_panel_open=self.side_panel is not None,
            has_tab=tab is not None,
            modal=tab.modal if tab is not None else "none",
        )

    def context(self) -> Context:
        return get_binding_context(self.input_context())

    # Event step

    def handle_key(self, event: KeyEvent) -> Action:
        """Resolve one key press and run its action to completion."""
        action = self.resolver.resolve_input(self.input_context(), event)
        self.invoke(action)
        return action

    def invoke(self, action: Action) -> None:
        """Run an action; recoverable errors become the pending error."""
        try:
            self.apply(action)
        except TabscopeError as exc:
            self.error = str(exc)
            emit_debug_event(
                "action.error",
                category="error",
                action=str(action),
                kind=type(exc).__name__,
                error=str(exc),
            )

    def apply(self, action: Action) -> None:
        if action.is_noop:
            return
        handler = getattr(self, f"action_{action.name}", None)
        if handler is None:
            emit_debug_event("action.unhandled", category="action", action=str(action))
            return
        emit_debug_event("action.invoke", category="action", action=str(action))
        handler(*action.args)

    # Helpers used by the action mixins

    def require_tab(self) -> Tabular:
        tab = self.tabs.active
        if tab is None:
            raise CommandNotFoundError("No table loaded")
        return tab

    def add_table(self, name: str, frame: pl.DataFrame, *, register: bool = True) -> Tabular:
        """Open ``frame`` in a new active tab."""
        if register:
            self.engine.register(name, frame)
        tab = Tabular(name=name, frame=frame)
        self.tabs.add(tab)
        emit_debug_event("tab.add", category="table", tab=name, rows=frame.height, columns=frame.width)
        return tab

    def notify(self, message: str, severity: str = "information") -> None:
        self.status = message
        self.status_severity = severity
        emit_debug_event("notify", category="ui", message=message, severity=severity)

    def close(self) -> None:
        """Persist history and release the engine."""
        if self._history_store is not None:
            self._history_store.save(self.history)
        self.engine.close()

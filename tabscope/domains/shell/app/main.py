"""Main Textual application for tabscope."""

from __future__ import annotations

from typing import Any, ClassVar

from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.events import Key

from tabscope.core.keymap import KeyEvent
from tabscope.domains.shell.app.session import Session
from tabscope.domains.tabular.app.tabular import PLOT_MODALS
from tabscope.shared.app.runtime import RuntimeConfig
from tabscope.shared.ui.widgets import (
    ErrorBar,
    InfoView,
    KeyHintBar,
    PaletteBar,
    PlotView,
    SchemaPanel,
    SearchBar,
    SessionWidget,
    SheetView,
    SidePanel,
    StatusBar,
    TableView,
    TabBar,
)

TICK_SECONDS = 0.5


class TabscopeApp(App):
    """Terminal front end: draws the session and feeds it key presses."""

    TITLE = "tabscope"
    CSS_PATH = "main.css"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS: ClassVar[list[Any]] = []

    def __init__(self, session: Session | None = None, *, runtime: RuntimeConfig | None = None):
        super().__init__()
        self.session = session or Session(runtime or RuntimeConfig.from_env())

    def compose(self) -> ComposeResult:
        session = self.session
        yield TabBar(session, id="tab-bar")
        with Horizontal(id="body"):
            yield TableView(session, id="table-view")
            yield SheetView(session, id="sheet-view")
            yield InfoView(session, id="info-view")
            yield PlotView(session, id="plot-view")
            yield SchemaPanel(session, id="schema-panel")
            yield SidePanel(session, id="side-panel")
        yield SearchBar(session, id="search-bar")
        yield PaletteBar(session, id="palette-bar")
        yield ErrorBar(session, id="error-bar")
        yield StatusBar(session, id="status-bar")
        yield KeyHintBar(session, id="hint-bar")

    def on_mount(self) -> None:
        self.set_interval(TICK_SECONDS, self._tick)
        self.refresh_views()

    def _tick(self) -> None:
        self.refresh_views()

    def on_key(self, event: Key) -> None:
        """Route key presses through the session's key resolver."""
        self.session.handle_key(KeyEvent.from_textual(event.key, event.character))
        event.prevent_default()
        event.stop()
        if self.session.quit_requested:
            self.exit()
            return
        self.refresh_views()

    def refresh_views(self) -> None:
        session = self.session
        tab = session.tabs.active
        modal = tab.modal if tab is not None else "none"
        full_screen = session.schema is not None
        visible = {
            "table-view": not full_screen and modal in ("none", "search"),
            "sheet-view": not full_screen and modal == "sheet",
            "info-view": not full_screen and modal == "info",
            "plot-view": not full_screen and modal in PLOT_MODALS,
            "schema-panel": full_screen,
            "side-panel": session.side_panel is not None,
            "search-bar": modal == "search",
            "palette-bar": session.palette is not None,
            "error-bar": session.error is not None,
        }
        for widget in self.query(SessionWidget):
            if widget.id in visible:
                widget.display = visible[widget.id]
            widget.refresh(layout=True)

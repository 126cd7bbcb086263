"""Tab lifecycle and the tab side panel."""

from __future__ import annotations

from tabscope.core.errors import ModeError
from tabscope.shared.app.protocols import SessionProtocol


def _restart(session: SessionProtocol) -> None:
    """A tab that becomes active starts at its first row."""
    tab = session.tabs.active
    if tab is not None:
        tab.set_frame(tab.frame)


class TabsMixin:
    """Switching, closing and picking tabs."""

    def action_tab_next(self: SessionProtocol) -> None:
        self.tabs.next()
        _restart(self)

    def action_tab_prev(self: SessionProtocol) -> None:
        self.tabs.prev()
        _restart(self)

    def action_tab_remove_or_quit(self: SessionProtocol) -> None:
        if len(self.tabs) <= 1:
            self.quit_requested = True
            return
        closed = self.tabs.remove()
        # A file table stays queryable while any tab still shows it.
        if closed is not None and closed.name in self.engine.tables() and closed.name not in self.tabs.names():
            self.engine.unregister(closed.name)
        _restart(self)

    def action_quit(self: SessionProtocol) -> None:
        self.quit_requested = True

    def action_side_panel_show(self: SessionProtocol) -> None:
        if not len(self.tabs):
            raise ModeError("No tabs open")
        self.side_panel = self.tabs.index

    def action_side_panel_up(self: SessionProtocol) -> None:
        if self.side_panel is None:
            raise ModeError("Tab panel is not open")
        self.side_panel = max(self.side_panel - 1, 0)

    def action_side_panel_down(self: SessionProtocol) -> None:
        if self.side_panel is None:
            raise ModeError("Tab panel is not open")
        self.side_panel = min(self.side_panel + 1, len(self.tabs) - 1)

    def action_side_panel_select(self: SessionProtocol) -> None:
        if self.side_panel is None:
            raise ModeError("Tab panel is not open")
        self.tabs.select(self.side_panel)
        self.side_panel = None
        _restart(self)

    def action_side_panel_dismiss(self: SessionProtocol) -> None:
        self.side_panel = None

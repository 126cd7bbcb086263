"""One open table: its data, viewport and modal state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import polars as pl

from tabscope.core.errors import ModeError
from tabscope.domains.search.app.search import SearchState
from tabscope.domains.tabular.domain.scroll import Scroll
from tabscope.domains.tabular.domain.viewport import Viewport

if TYPE_CHECKING:
    from tabscope.domains.plot.app.plot import Plot

MODALS = ("none", "search", "sheet", "info")
PLOT_MODALS = ("scatter", "histogram")


@dataclass
class Tabular:
    """A tab.

    ``original`` is the table as loaded; ``reset`` returns to it. ``modal`` is
    one of ``MODALS`` or, while ``plot`` is set, one of ``PLOT_MODALS``; it
    feeds key context classification. ``expanded`` shows cells at full width.
    """

    name: str
    frame: pl.DataFrame
    original: pl.DataFrame | None = None
    viewport: Viewport = field(default_factory=Viewport)
    modal: str = "none"
    sheet_scroll: Scroll = field(default_factory=Scroll)
    info_scroll: Scroll = field(default_factory=Scroll)
    search: SearchState | None = None
    plot: Plot | None = None
    expanded: bool = False

    def __post_init__(self) -> None:
        if self.original is None:
            self.original = self.frame
        self.viewport.reset(self.frame.height, self.frame.width)

    def set_frame(self, frame: pl.DataFrame) -> None:
        """Replace the displayed table; the selection starts over at row 0."""
        self.frame = frame
        self.viewport.reset(frame.height, frame.width)
        self.sheet_scroll.reset()

    def reset(self) -> None:
        if self.original is None:
            raise ModeError(f"{self.name} has no table to reset to")
        self.set_frame(self.original)

    def move(self, step: Callable[[Viewport], Any]) -> None:
        """Apply a selection change; a new row gets a fresh sheet scroll."""
        before = self.viewport.selected
        step(self.viewport)
        if self.viewport.selected != before:
            self.sheet_scroll.reset()

    @property
    def columns(self) -> list[str]:
        return self.frame.columns

    def current_row(self) -> tuple[object, ...] | None:
        if self.frame.height == 0:
            return None
        return self.frame.row(self.viewport.selected)

    # Modals

    def show_modal(self, modal: str) -> None:
        if modal not in MODALS:
            raise ModeError(f"Unknown view: {modal}")
        if modal == "sheet":
            self.sheet_scroll.reset()
        elif modal == "info":
            self.info_scroll.reset()
        self.modal = modal

    def show_plot(self, plot: Plot) -> None:
        self.plot = plot
        self.modal = plot.kind

    def dismiss_modal(self) -> None:
        self.modal = "none"
        self.plot = None

    def toggle_expansion(self) -> None:
        self.expanded = not self.expanded

    def require_modal(self, modal: str) -> None:
        if self.modal != modal:
            raise ModeError(f"Not in {modal} view")

    # Search

    def start_search(self) -> SearchState:
        self.search = SearchState(original=self.frame)
        self.show_modal("search")
        return self.search

    def refresh_search(self) -> None:
        if self.search is None:
            raise ModeError("Not searching")
        self.set_frame(self.search.result())

    def commit_search(self) -> None:
        self.require_modal("search")
        self.search = None
        self.dismiss_modal()

    def rollback_search(self) -> None:
        self.require_modal("search")
        if self.search is not None:
            self.set_frame(self.search.original)
        self.search = None
        self.dismiss_modal()

"""Keybinding contexts and their classification from the input context."""

from __future__ import annotations

from enum import Enum

from tabscope.core.input_context import InputContext


class Context(str, Enum):
    """Interaction modes; each one owns a keybinding table."""

    EMPTY = "empty"
    TABLE = "table"
    SHEET = "sheet"
    COMMAND = "command"
    ERROR = "error"
    SEARCH = "search"
    SCHEMA = "schema"
    TAB_SIDE_PANEL = "tab_side_panel"
    DATA_FRAME_INFO = "data_frame_info"
    SCATTER_PLOT = "scatter_plot"
    HISTOGRAM_PLOT = "histogram_plot"

    def parent(self) -> Context | None:
        if self is Context.EMPTY:
            return None
        return _PARENTS.get(self, Context.EMPTY)

    def chain(self) -> list[Context]:
        """This context followed by its ancestors up to the root."""
        chain: list[Context] = []
        current: Context | None = self
        while current is not None:
            chain.append(current)
            current = current.parent()
        return chain


_PARENTS: dict[Context, Context] = {
    Context.SHEET: Context.TABLE,
    Context.SEARCH: Context.TABLE,
}

_MODAL_CONTEXTS: dict[str, Context] = {
    "none": Context.TABLE,
    "search": Context.SEARCH,
    "sheet": Context.SHEET,
    "info": Context.DATA_FRAME_INFO,
    "scatter": Context.SCATTER_PLOT,
    "histogram": Context.HISTOGRAM_PLOT,
}


def get_binding_context(ctx: InputContext) -> Context:
    """Determine which keybinding context is active.

    An error always wins, then the palette, then full-screen views, then the
    active tab's modal.
    """
    if ctx.error_pending:
        return Context.ERROR
    if ctx.palette_open:
        return Context.COMMAND
    if ctx.schema_active:
        return Context.SCHEMA
    if ctx.side_panel_open:
        return Context.TAB_SIDE_PANEL
    if ctx.has_tab:
        return _MODAL_CONTEXTS.get(ctx.modal, Context.TABLE)
    return Context.EMPTY

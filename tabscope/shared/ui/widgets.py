"""Widgets that draw session state.

Each widget reads the session on render; the app refreshes them after every
key press. The table view writes its page size back into the viewport and
the sheet and info views re-clamp their scroll against the wrapped content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text
from textual.widget import Widget

from tabscope.core.keymap import format_key
from tabscope.domains.plot.app.plot import render_plot
from tabscope.domains.schema.app.schema_view import selected_table_schema
from tabscope.domains.schema.app.table_schema import TableSchema
from tabscope.domains.tabular.domain.sheet import format_value, sheet_lines

if TYPE_CHECKING:
    from tabscope.domains.shell.app.session import Session

MAX_CELL_WIDTH = 40
PALETTE_SUGGESTIONS = 5


def _cell(value: object, limit: int | None = MAX_CELL_WIDTH) -> str:
    text = format_value(value).replace("\n", " ")
    if limit is not None and len(text) > limit:
        return text[: limit - 1] + "…"
    return text


def _input_line(prefix: str, value: str, cursor: int) -> Text:
    text = Text(prefix)
    text.append(value[:cursor])
    under = value[cursor : cursor + 1] or " "
    text.append(under, style="reverse")
    text.append(value[cursor + 1 :])
    return text


class SessionWidget(Widget):
    """Base for widgets bound to a session."""

    def __init__(self, session: Session, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session


class TabBar(SessionWidget):
    def render(self) -> RenderableType:
        text = Text()
        for i, name in enumerate(self.session.tabs.names()):
            style = "bold reverse" if i == self.session.tabs.index else "dim"
            text.append(f" {name} ", style=style)
            text.append(" ")
        return text


class TableView(SessionWidget):
    """The rows of the active tab that fit on screen."""

    def render(self) -> RenderableType:
        tab = self.session.tabs.active
        if tab is None:
            return Text("No table loaded. Press : to run a command.", style="dim")
        viewport = tab.viewport
        # One line goes to the header row.
        viewport.set_page_size(max(self.size.height - 1, 1))
        offset, count = viewport.visible_window()
        columns = tab.columns[viewport.column_offset :]
        limit = None if tab.expanded else MAX_CELL_WIDTH

        table = Table(box=None, expand=False, show_edge=False, pad_edge=False, header_style="bold")
        for name in columns:
            table.add_column(name, no_wrap=True, overflow="ellipsis")
        if columns and count:
            window = tab.frame.slice(offset, count).select(columns)
            for i, row in enumerate(window.iter_rows()):
                style = "reverse" if offset + i == viewport.selected else None
                table.add_row(*(_cell(value, limit) for value in row), style=style)
        return table


class SheetView(SessionWidget):
    """The selected record, one column per block."""

    def render(self) -> RenderableType:
        tab = self.session.tabs.active
        row = tab.current_row() if tab is not None else None
        if tab is None or row is None:
            return Text("")
        width = max(self.size.width - 2, 1)
        height = self.size.height
        lines = sheet_lines(tab.columns, row, width)
        tab.sheet_scroll.adjust(len(lines), height)
        start = tab.sheet_scroll.line_offset
        out = Text()
        for kind, line in lines[start : start + height]:
            style = "bold underline" if kind == "header" else None
            out.append(line + "\n", style=style)
        return out


def schema_table(schema: TableSchema) -> Table:
    table = Table(box=None, header_style="bold")
    for name in ("Column", "Type", "Estimated Size", "Null Count", "Min", "Max"):
        table.add_column(name, no_wrap=True, overflow="ellipsis")
    for info in schema.columns:
        table.add_row(
            info.name,
            info.dtype,
            str(info.estimated_size),
            str(info.null_count),
            "" if info.min is None else _cell(info.min),
            "" if info.max is None else _cell(info.max),
        )
    return table


class InfoView(SessionWidget):
    """Column summary of the active tab."""

    def render(self) -> RenderableType:
        tab = self.session.tabs.active
        if tab is None:
            return Text("")
        schema = TableSchema.from_frame(tab.frame)
        visible = max(self.size.height - 2, 1)
        tab.info_scroll.adjust(len(schema.columns), visible)
        start = tab.info_scroll.line_offset
        window = TableSchema(columns=schema.columns[start : start + visible], height=schema.height)
        title = Text(f"{tab.name}: {schema.height} rows x {len(schema)} columns", style="bold")
        return Group(title, schema_table(window))


class PlotView(SessionWidget):
    """The active tab's scatter or histogram plot."""

    def render(self) -> RenderableType:
        tab = self.session.tabs.active
        if tab is None or tab.plot is None:
            return Text("")
        return Text.from_ansi(render_plot(tab.plot, self.size.width, self.size.height))


class SchemaPanel(SessionWidget):
    """Registered tables and the columns of the highlighted one."""

    def render(self) -> RenderableType:
        view = self.session.schema
        if view is None:
            return Text("")
        names = Text()
        for i, name in enumerate(view.names):
            names.append(f"{name}\n", style="reverse" if i == view.selected else None)
        if not view.names:
            names.append("No tables registered", style="dim")
        schema = selected_table_schema(self.session)
        parts: list[RenderableType] = [Text("Tables", style="bold"), names]
        if schema is not None:
            parts.append(schema_table(schema))
        return Group(*parts)


class SidePanel(SessionWidget):
    def render(self) -> RenderableType:
        text = Text("Tabs\n", style="bold")
        for i, name in enumerate(self.session.tabs.names()):
            text.append(f"{i + 1}. {name}\n", style="reverse" if i == self.session.side_panel else None)
        return text


class PaletteBar(SessionWidget):
    """Command line plus the history suggestions matching it."""

    def render(self) -> RenderableType:
        palette = self.session.palette
        if palette is None:
            return Text("")
        parts: list[RenderableType] = [_input_line(":", palette.text, palette.input.cursor)]
        for i, suggestion in enumerate(palette.suggestions()[:PALETTE_SUGGESTIONS]):
            parts.append(Text(f"  {suggestion}", style="reverse" if i == palette.selected else "dim"))
        return Group(*parts)


class SearchBar(SessionWidget):
    def render(self) -> RenderableType:
        tab = self.session.tabs.active
        if tab is None or tab.search is None:
            return Text("")
        return _input_line("/", tab.search.query, tab.search.input.cursor)


class ErrorBar(SessionWidget):
    def render(self) -> RenderableType:
        if self.session.error is None:
            return Text("")
        text = Text("Error: ", style="bold")
        text.append(self.session.error)
        key = self.session.resolver.keymap.action("dismiss_error_and_show_palette") or "colon"
        text.append(f"  ({format_key(key)} for commands, any key to dismiss)", style="dim")
        return text


class StatusBar(SessionWidget):
    def render(self) -> RenderableType:
        session = self.session
        text = Text(f" {session.context().value.upper()} ", style="bold reverse")
        tab = session.tabs.active
        if tab is not None:
            total = tab.frame.height
            position = tab.viewport.selected + 1 if total else 0
            text.append(f" {tab.name}  {position}/{total} ")
        if session.status:
            style = "yellow" if session.status_severity == "warning" else None
            text.append(f" {session.status}", style=style)
        return text


class KeyHintBar(SessionWidget):
    """Keys available in the current context."""

    def render(self) -> RenderableType:
        text = Text()
        for hint in self.session.resolver.keymap.display_bindings(self.session.context()):
            text.append(f" {hint.key}", style="bold")
            text.append(f" {hint.label} ", style="dim")
        return text

"""Search bar actions."""

from __future__ import annotations

from collections.abc import Callable

from tabscope.core.errors import ModeError
from tabscope.shared.app.protocols import SessionProtocol
from tabscope.shared.core.text_input import TextInput


def _edit(session: SessionProtocol, change: Callable[[TextInput], None]) -> None:
    tab = session.require_tab()
    if tab.search is None:
        raise ModeError("Not searching")
    before = tab.search.query
    change(tab.search.input)
    if tab.search.query != before:
        tab.refresh_search()


class SearchMixin:
    """Incremental row search; rows are filtered as the query is typed."""

    def action_search_show(self: SessionProtocol) -> None:
        self.require_tab().start_search()

    def action_search_insert(self: SessionProtocol, text: str) -> None:
        _edit(self, lambda field: field.insert(text))

    def action_search_delete_prev(self: SessionProtocol) -> None:
        _edit(self, TextInput.delete_prev)

    def action_search_delete_next(self: SessionProtocol) -> None:
        _edit(self, TextInput.delete_next)

    def action_search_goto_prev(self: SessionProtocol) -> None:
        _edit(self, TextInput.goto_prev)

    def action_search_goto_next(self: SessionProtocol) -> None:
        _edit(self, TextInput.goto_next)

    def action_search_goto_start(self: SessionProtocol) -> None:
        _edit(self, TextInput.goto_start)

    def action_search_goto_end(self: SessionProtocol) -> None:
        _edit(self, TextInput.goto_end)

    def action_search_commit(self: SessionProtocol) -> None:
        self.require_tab().commit_search()

    def action_search_rollback(self: SessionProtocol) -> None:
        self.require_tab().rollback_search()

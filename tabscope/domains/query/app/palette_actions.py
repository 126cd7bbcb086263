"""Command palette actions."""

from __future__ import annotations

from collections.abc import Callable

from tabscope.core.actions import Action
from tabscope.core.errors import ModeError
from tabscope.domains.query.app.palette import PaletteState
from tabscope.shared.app.protocols import SessionProtocol
from tabscope.shared.core.debug_events import emit_debug_event
from tabscope.shared.core.text_input import TextInput


def _require_palette(session: SessionProtocol) -> PaletteState:
    if session.palette is None:
        raise ModeError("Command palette is not open")
    return session.palette


def _edit(session: SessionProtocol, change: Callable[[TextInput], None]) -> None:
    palette = _require_palette(session)
    change(palette.input)
    palette.edited()


class PaletteMixin:
    """Open, edit and commit the command palette."""

    def action_palette_show(self: SessionProtocol, text: str = "") -> None:
        self.palette = PaletteState.open(text, self.history.recent(self.runtime.suggestion_limit))

    def action_palette_insert(self: SessionProtocol, text: str) -> None:
        _edit(self, lambda field: field.insert(text))

    def action_palette_delete_prev(self: SessionProtocol) -> None:
        _edit(self, TextInput.delete_prev)

    def action_palette_delete_next(self: SessionProtocol) -> None:
        _edit(self, TextInput.delete_next)

    def action_palette_goto_prev(self: SessionProtocol) -> None:
        _require_palette(self).input.goto_prev()

    def action_palette_goto_next(self: SessionProtocol) -> None:
        _require_palette(self).input.goto_next()

    def action_palette_goto_start(self: SessionProtocol) -> None:
        _require_palette(self).input.goto_start()

    def action_palette_goto_end(self: SessionProtocol) -> None:
        _require_palette(self).input.goto_end()

    def action_palette_select_next(self: SessionProtocol) -> None:
        _require_palette(self).select_next()

    def action_palette_select_previous(self: SessionProtocol) -> None:
        _require_palette(self).select_previous()

    def action_palette_insert_selected_or_commit(self: SessionProtocol) -> None:
        if _require_palette(self).insert_selected():
            return
        self.apply(Action("palette_commit"))

    def action_palette_deselect_or_dismiss(self: SessionProtocol) -> None:
        if not _require_palette(self).deselect():
            self.palette = None

    def action_palette_commit(self: SessionProtocol) -> None:
        """Close the palette and run its text.

        The text enters the history once it parsed; a failing run still
        counts as dispatched.
        """
        text = _require_palette(self).text.strip()
        self.palette = None
        if not text:
            return
        action = self.registry.dispatch(text)
        self.history.push(text)
        emit_debug_event("palette.commit", category="command", text=text)
        self.apply(action)

    def action_dismiss_error(self: SessionProtocol) -> None:
        self.error = None

    def action_dismiss_error_and_show_palette(self: SessionProtocol) -> None:
        self.error = None
        self.apply(Action.of("palette_show", ""))

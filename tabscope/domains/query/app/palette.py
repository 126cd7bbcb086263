"""Command palette: a text buffer plus history suggestions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from tabscope.domains.search.app.fuzzy import filter_suggestions
from tabscope.shared.core.text_input import TextInput


@dataclass
class PaletteState:
    """Open palette.

    ``selected`` indexes into the suggestions computed from ``history`` for
    the current buffer; any edit clears it.
    """

    history: Sequence[str] = ()
    input: TextInput = field(default_factory=TextInput)
    selected: int | None = None

    @classmethod
    def open(cls, text: str, history: Sequence[str]) -> PaletteState:
        palette = cls(history=tuple(history))
        palette.input.set(text)
        return palette

    @property
    def text(self) -> str:
        return self.input.value

    def suggestions(self) -> list[str]:
        return filter_suggestions(self.input.value, self.history)

    def edited(self) -> None:
        self.selected = None

    def select_next(self) -> None:
        count = len(self.suggestions())
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected + 1, count - 1)

    def select_previous(self) -> None:
        if self.selected is None or self.selected == 0:
            self.selected = None
        else:
            self.selected -= 1

    def selected_text(self) -> str | None:
        if self.selected is None:
            return None
        suggestions = self.suggestions()
        if self.selected >= len(suggestions):
            return None
        return suggestions[self.selected]

    def insert_selected(self) -> bool:
        """Copy the selected suggestion into the buffer; False without one."""
        text = self.selected_text()
        if text is None:
            return False
        self.input.set(text)
        self.selected = None
        return True

    def deselect(self) -> bool:
        if self.selected is None:
            return False
        self.selected = None
        return True

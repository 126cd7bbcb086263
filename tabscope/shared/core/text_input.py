"""Single-line text buffer with a cursor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextInput:
    value: str = ""
    cursor: int = 0

    def set(self, value: str) -> None:
        """Replace the buffer and put the cursor at its end."""
        self.value = value
        self.cursor = len(value)

    def insert(self, text: str) -> None:
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def delete_prev(self) -> None:
        if self.cursor > 0:
            self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
            self.cursor -= 1

    def delete_next(self) -> None:
        if self.cursor < len(self.value):
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]

    def goto_prev(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def goto_next(self) -> None:
        self.cursor = min(self.cursor + 1, len(self.value))

    def goto_start(self) -> None:
        self.cursor = 0

    def goto_end(self) -> None:
        self.cursor = len(self.value)

    def clear(self) -> None:
        self.set("")

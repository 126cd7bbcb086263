"""Clamped one-dimensional line offset for scrolled views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Scroll:
    """Line offset into content that is reflowed on every render.

    ``total_lines`` depends on the render width, so the renderer calls
    :meth:`adjust` each frame and the offset is re-clamped there.
    """

    line_offset: int = 0
    total_lines: int = 0
    viewport_height: int = 0

    @property
    def max_offset(self) -> int:
        return max(0, self.total_lines - self.viewport_height)

    def adjust(self, total_lines: int, viewport_height: int) -> None:
        self.total_lines = max(0, total_lines)
        self.viewport_height = max(0, viewport_height)
        self.line_offset = min(self.line_offset, self.max_offset)

    def up(self) -> None:
        self.line_offset = max(0, self.line_offset - 1)

    def down(self) -> None:
        self.line_offset = min(self.line_offset + 1, self.max_offset)

    def reset(self) -> None:
        self.line_offset = 0

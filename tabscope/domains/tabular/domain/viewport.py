"""Selection cursor and visible row window over a table."""

from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass
class Viewport:
    """Selected row plus the window of rows currently on screen.

    Invariants after every operation:

    * ``selected < total_rows``, or ``selected == 0`` for an empty table.
    * ``offset <= selected <= offset + visible_rows - 1`` when
      ``visible_rows > 0``.

    ``visible_rows`` is the page size of the last render; page movements use
    it so they follow terminal resizes.
    """

    total_rows: int = 0
    selected: int = 0
    offset: int = 0
    visible_rows: int = 0
    column_offset: int = 0
    total_columns: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    # Selection

    def select(self, index: int) -> None:
        if self.total_rows <= 0:
            self.selected = 0
        else:
            self.selected = min(max(index, 0), self.total_rows - 1)
        self._adjust_offset()

    def select_up(self, n: int = 1) -> None:
        self.select(self.selected - max(n, 0))

    def select_down(self, n: int = 1) -> None:
        self.select(self.selected + max(n, 0))

    def select_relative(self, n: int) -> None:
        if n < 0:
            self.select_up(-n)
        else:
            self.select_down(n)

    def select_first(self) -> None:
        self.select(0)

    def select_last(self) -> None:
        self.select(self.total_rows - 1)

    def select_random(self) -> None:
        if self.total_rows > 0:
            self.select(self.rng.randrange(self.total_rows))

    # Pages

    @property
    def half_page(self) -> int:
        return max(self.visible_rows // 2, 1)

    @property
    def full_page(self) -> int:
        return max(self.visible_rows, 1)

    def set_page_size(self, rows: int) -> None:
        self.visible_rows = max(rows, 0)
        self._adjust_offset()

    def visible_window(self) -> tuple[int, int]:
        """``(offset, count)`` of the rows to draw."""
        count = max(0, min(self.visible_rows, self.total_rows - self.offset))
        return self.offset, count

    # Columns

    def scroll_left(self) -> None:
        self.column_offset = max(self.column_offset - 1, 0)

    def scroll_right(self) -> None:
        self.column_offset = min(self.column_offset + 1, max(self.total_columns - 1, 0))

    def scroll_start(self) -> None:
        self.column_offset = 0

    def scroll_end(self) -> None:
        self.column_offset = max(self.total_columns - 1, 0)

    # Dataset

    def reset(self, total_rows: int, total_columns: int = 0) -> None:
        """Start over on a replaced dataset."""
        self.total_rows = max(total_rows, 0)
        self.total_columns = max(total_columns, 0)
        self.selected = 0
        self.offset = 0
        self.column_offset = 0

    def _adjust_offset(self) -> None:
        if self.visible_rows <= 0:
            self.offset = min(self.offset, self.selected)
            return
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + self.visible_rows:
            self.offset = self.selected - self.visible_rows + 1

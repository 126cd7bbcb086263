"""Ordered collection of open tabs with an active index."""

from __future__ import annotations

from tabscope.domains.tabular.app.tabular import Tabular


class TabState:
    def __init__(self) -> None:
        self._tabs: list[Tabular] = []
        self.index = 0

    def __len__(self) -> int:
        return len(self._tabs)

    def __iter__(self):
        return iter(self._tabs)

    @property
    def active(self) -> Tabular | None:
        if not self._tabs:
            return None
        return self._tabs[self.index]

    def add(self, tab: Tabular) -> int:
        """Append a tab and make it active."""
        self._tabs.append(tab)
        self.index = len(self._tabs) - 1
        return self.index

    def remove(self, index: int | None = None) -> Tabular | None:
        if not self._tabs:
            return None
        idx = self.index if index is None else index
        tab = self._tabs.pop(idx)
        self.index = min(self.index, max(len(self._tabs) - 1, 0))
        return tab

    def select(self, index: int) -> None:
        if self._tabs:
            self.index = min(max(index, 0), len(self._tabs) - 1)

    def next(self) -> None:
        if self._tabs:
            self.index = (self.index + 1) % len(self._tabs)

    def prev(self) -> None:
        if self._tabs:
            self.index = (self.index - 1) % len(self._tabs)

    def names(self) -> list[str]:
        return [tab.name for tab in self._tabs]

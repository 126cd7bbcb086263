"""Bounded command history with JSON persistence."""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from tabscope.shared.app.runtime import DEFAULT_HISTORY_SIZE
from tabscope.shared.core.debug_events import emit_debug_event


class HistoryRing:
    """Committed command lines, oldest evicted first.

    Iteration yields the most recent entry first.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE, entries: list[str] | None = None) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: deque[str] = deque(entries or (), maxlen=capacity)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return reversed(self._entries)

    def push(self, text: str) -> None:
        self._entries.append(text)

    def recent(self, limit: int | None = None) -> list[str]:
        items = list(self)
        return items if limit is None else items[:limit]

    def to_list(self) -> list[str]:
        """Entries oldest first, as stored on disk."""
        return list(self._entries)


class HistoryStore:
    """Loads and saves a :class:`HistoryRing` as a JSON list."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self, capacity: int = DEFAULT_HISTORY_SIZE) -> HistoryRing:
        if not self.path.exists():
            return HistoryRing(capacity)
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            emit_debug_event("history.load_failed", category="history", path=str(self.path), error=str(exc))
            return HistoryRing(capacity)
        if not isinstance(data, list):
            return HistoryRing(capacity)
        return HistoryRing(capacity, [str(item) for item in data])

    def save(self, history: HistoryRing) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(history.to_list(), f, indent=2)
        except OSError as exc:
            emit_debug_event("history.save_failed", category="history", path=str(self.path), error=str(exc))

"""Record (sheet) layout: one block per column, wrapped to the render width."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

# Only used for measuring; wrapping never writes to it.
_MEASURE = Console(width=80, color_system=None, legacy_windows=False)


def format_value(value: object) -> str:
    if value is None:
        return "null"
    return str(value)


def wrap_value(text: str, width: int) -> list[str]:
    """Word-wrap ``text`` to ``width`` terminal cells, folding long words."""
    if width <= 0:
        return [text]
    wrapped = Text(text).wrap(_MEASURE, width, justify="default", overflow="fold")
    return [line.plain for line in wrapped] or [""]


def sheet_lines(columns: Sequence[str], values: Sequence[object], width: int) -> list[tuple[str, str]]:
    """Lines of a record as ``(kind, text)`` pairs.

    ``kind`` is ``"header"``, ``"value"`` or ``"blank"``. Every column gives a
    header line, its wrapped value lines and a separator line.
    """
    lines: list[tuple[str, str]] = []
    for name, value in zip(columns, values):
        lines.append(("header", name))
        lines.extend(("value", line) for line in wrap_value(format_value(value), width))
        lines.append(("blank", ""))
    return lines


def sheet_line_count(columns: Sequence[str], values: Sequence[object], width: int) -> int:
    return len(sheet_lines(columns, values, width))

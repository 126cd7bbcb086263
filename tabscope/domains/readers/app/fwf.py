"""Fixed-width text tables.

Column boundaries are either given explicitly (``"3,4,5"``) or inferred from
the character positions that hold whitespace on every line.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import reduce

import polars as pl

from tabscope.core.errors import ReaderError


def parse_widths(text: str) -> list[int]:
    """Parse a comma separated width list such as ``"3,4,5"``."""
    widths: list[int] = []
    for part in text.split(","):
        part = part.strip()
        try:
            width = int(part)
        except ValueError:
            raise ReaderError(f"Invalid column width: {part!r}") from None
        if width < 0:
            raise ReaderError(f"Invalid column width: {part!r}")
        widths.append(width)
    return widths


def _shape(line: str) -> tuple[int, set[int]]:
    return len(line), {i for i, char in enumerate(line) if char.isspace()}


def shared_whitespace(lines: Iterable[str]) -> list[int]:
    """Positions blank on every non-blank line, plus the longest length.

    The length is appended as the end sentinel. Empty input gives ``[]``.
    """
    shapes = [_shape(line) for line in lines if line.strip()]
    if not shapes:
        return []
    length, spaces = reduce(lambda a, b: (max(a[0], b[0]), a[1] & b[1]), shapes)
    return sorted(spaces | {length})


def widths_from_positions(positions: Sequence[int]) -> list[int]:
    """Turn sorted separator positions into column widths.

    A run of adjacent positions is one separator; a column ends at the last
    position of a run that is followed by a gap.
    """
    widths: list[int] = []
    start = 0
    for i, pos in enumerate(positions):
        if i + 1 < len(positions):
            if positions[i + 1] - pos > 1:
                widths.append(pos - start)
                start = pos + 1
        else:
            widths.append(pos - start)
    return widths


def infer_widths(lines: Iterable[str]) -> list[int]:
    return widths_from_positions(shared_whitespace(lines))


def split_line(line: str, widths: Sequence[int], separator_length: int = 1, flexible_width: bool = True) -> list[str]:
    fields: list[str] = []
    pos = 0
    last = len(widths) - 1
    for i, width in enumerate(widths):
        if i == last and flexible_width:
            fields.append(line[pos:].strip())
        else:
            fields.append(line[pos : pos + width].strip())
        pos += width + separator_length
    return fields


def parse_fwf(
    lines: Sequence[str],
    widths: Sequence[int] | None = None,
    *,
    has_header: bool = True,
    separator_length: int = 1,
    flexible_width: bool = True,
) -> pl.DataFrame:
    """Build a string table from fixed-width lines."""
    lines = [line for line in lines if line.strip()]
    if widths is None:
        widths = infer_widths(lines)
    if not widths:
        return pl.DataFrame()

    rows = [split_line(line, widths, separator_length, flexible_width) for line in lines]
    if has_header and rows:
        header, rows = rows[0], rows[1:]
    else:
        header = [f"column_{i + 1}" for i in range(len(widths))]
    header = _dedupe(header)

    data = {name: [row[i] for row in rows] for i, name in enumerate(header)}
    return pl.DataFrame(data, schema={name: pl.String for name in header})


def _dedupe(names: Sequence[str]) -> list[str]:
    used: set[str] = set()
    out: list[str] = []
    for i, base in enumerate(names):
        base = base or f"column_{i + 1}"
        name, n = base, 0
        while name in used:
            n += 1
            name = f"{base}_{n}"
        used.add(name)
        out.append(name)
    return out

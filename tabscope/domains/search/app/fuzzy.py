"""Ordered-subsequence fuzzy matching."""

from __future__ import annotations

from collections.abc import Iterable


def matches(candidate: str | None, query: str) -> bool:
    """True when every character of ``query`` appears in ``candidate`` in order.

    Case-insensitive. The empty query matches everything, including nulls.
    """
    if not query:
        return True
    if candidate is None:
        return False
    needle = query.casefold()
    i = 0
    for char in candidate.casefold():
        if char == needle[i]:
            i += 1
            if i == len(needle):
                return True
    return False


def filter_suggestions(query: str, candidates: Iterable[str], limit: int | None = None) -> list[str]:
    """Candidates matching ``query``, in their input order."""
    out: list[str] = []
    for candidate in candidates:
        if limit is not None and len(out) >= limit:
            break
        if matches(candidate, query):
            out.append(candidate)
    return out

"""Incremental fuzzy search over the rows of a table."""

from __future__ import annotations

from dataclasses import dataclass, field

import polars as pl

from tabscope.domains.search.app.fuzzy import matches
from tabscope.domains.tabular.domain.sheet import format_value
from tabscope.shared.core.text_input import TextInput


def row_mask(df: pl.DataFrame, query: str) -> list[bool]:
    """One flag per row: does any cell's display text match ``query``."""
    if not query:
        return [True] * df.height
    return [
        any(value is not None and matches(format_value(value), query) for value in row)
        for row in df.iter_rows()
    ]


def search_rows(df: pl.DataFrame, query: str) -> pl.DataFrame:
    if not query:
        return df
    return df.filter(pl.Series("mask", row_mask(df, query), dtype=pl.Boolean))


@dataclass
class SearchState:
    """The search bar of one tab.

    ``original`` is the table the search started from; rolling back restores
    it and committing keeps the filtered rows.
    """

    original: pl.DataFrame
    input: TextInput = field(default_factory=TextInput)

    @property
    def query(self) -> str:
        return self.input.value

    def result(self) -> pl.DataFrame:
        return search_rows(self.original, self.query)

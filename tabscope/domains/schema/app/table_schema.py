"""Per-column summaries for the info view and the schema view."""

from __future__ import annotations

from dataclasses import dataclass

import polars as pl


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    dtype: str
    estimated_size: int
    null_count: int
    min: object = None
    max: object = None


def _bound(series: pl.Series, which: str) -> object:
    try:
        return series.min() if which == "min" else series.max()
    except (pl.exceptions.PolarsError, TypeError):
        return None


@dataclass(frozen=True)
class TableSchema:
    columns: tuple[ColumnInfo, ...]
    height: int = 0

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> TableSchema:
        infos = []
        for series in df.get_columns():
            infos.append(
                ColumnInfo(
                    name=series.name,
                    dtype=str(series.dtype),
                    estimated_size=int(series.estimated_size()),
                    null_count=series.null_count(),
                    min=_bound(series, "min"),
                    max=_bound(series, "max"),
                )
            )
        return cls(columns=tuple(infos), height=df.height)

    def __len__(self) -> int:
        return len(self.columns)

    def names(self) -> list[str]:
        return [column.name for column in self.columns]


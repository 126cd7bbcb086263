"""Scatter and histogram plots of a table, drawn with plotext."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

import plotext as plt
import polars as pl

from tabscope.core.errors import PlotError

DEFAULT_BUCKETS = 20


@dataclass(frozen=True)
class ScatterPlot:
    """Points of two numeric columns, one series per group."""

    kind: ClassVar[str] = "scatter"

    x_label: str
    y_label: str
    groups: tuple[tuple[str, tuple[float, ...], tuple[float, ...]], ...]


@dataclass(frozen=True)
class HistogramPlot:
    """Counts per bucket of one column."""

    kind: ClassVar[str] = "histogram"

    column: str
    labels: tuple[str, ...]
    counts: tuple[int, ...]


Plot = Union[ScatterPlot, HistogramPlot]


def _column(frame: pl.DataFrame, name: str) -> pl.Series:
    if name not in frame.columns:
        raise PlotError(f"No column named {name!r}")
    return frame.get_column(name)


def _numeric(series: pl.Series) -> pl.Series:
    if not series.dtype.is_numeric():
        raise PlotError(f"Column {series.name!r} is not numeric ({series.dtype})")
    return series.cast(pl.Float64)


def scatter_plot(frame: pl.DataFrame, x: str, y: str, group: str | None = None) -> ScatterPlot:
    """Pair ``x`` and ``y`` row by row; rows missing either value are skipped."""
    data = pl.DataFrame({"x": _numeric(_column(frame, x)), "y": _numeric(_column(frame, y))})
    if group is None:
        data = data.with_columns(pl.lit("").alias("group"))
    else:
        labels = _column(frame, group)
        try:
            labels = labels.cast(pl.String)
        except pl.exceptions.PolarsError as exc:
            raise PlotError(f"Column {group!r} cannot be used as a group: {exc}") from exc
        data = data.with_columns(labels.fill_null("null").alias("group"))
    data = data.drop_nulls(["x", "y"])

    groups = []
    for (name,), part in data.group_by("group", maintain_order=True):
        groups.append((str(name), tuple(part["x"].to_list()), tuple(part["y"].to_list())))
    return ScatterPlot(x_label=x, y_label=y, groups=tuple(groups))


def histogram_plot(frame: pl.DataFrame, column: str, buckets: int = DEFAULT_BUCKETS) -> HistogramPlot:
    """Equal-width buckets for numbers, the most frequent values otherwise."""
    if buckets < 1:
        raise PlotError("A histogram needs at least one bucket")
    series = _column(frame, column).drop_nulls()

    if not series.dtype.is_numeric():
        try:
            top = series.cast(pl.String).value_counts(sort=True).head(buckets)
        except pl.exceptions.PolarsError as exc:
            raise PlotError(f"Column {column!r} cannot be counted: {exc}") from exc
        rows = top.rows()
        return HistogramPlot(
            column=column,
            labels=tuple(str(value) for value, _ in rows),
            counts=tuple(int(count) for _, count in rows),
        )

    values = series.cast(pl.Float64)
    values = values.filter(values.is_finite())
    if values.is_empty():
        return HistogramPlot(column=column, labels=(), counts=())
    low, high = values.min(), values.max()
    width = (high - low) / buckets or 1.0
    index = ((values - low) / width).floor().cast(pl.Int64).clip(0, buckets - 1)
    counts = [0] * buckets
    for bucket, count in index.value_counts().rows():
        counts[bucket] = int(count)
    labels = tuple(f"{low + i * width:.4g}" for i in range(buckets))
    return HistogramPlot(column=column, labels=labels, counts=tuple(counts))


def render_plot(plot: Plot, width: int, height: int) -> str:
    """Draw ``plot`` into a ``width`` x ``height`` block of ANSI text."""
    plt.clf()
    plt.theme("clear")
    plt.plotsize(max(width, 10), max(height, 5))
    if isinstance(plot, ScatterPlot):
        plt.title(f"{plot.y_label} by {plot.x_label}")
        plt.xlabel(plot.x_label)
        plt.ylabel(plot.y_label)
        for name, xs, ys in plot.groups:
            if name:
                plt.scatter(list(xs), list(ys), label=name)
            else:
                plt.scatter(list(xs), list(ys))
    else:
        plt.title(f"Histogram of {plot.column}")
        if plot.counts:
            plt.bar(list(plot.labels), list(plot.counts))
    return plt.build()

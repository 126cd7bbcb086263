"""Tests for scatter and histogram plot data."""

from __future__ import annotations

import polars as pl
import pytest

from tabscope.core.errors import PlotError
from tabscope.domains.plot.app.plot import HistogramPlot, ScatterPlot, histogram_plot, render_plot, scatter_plot


@pytest.fixture
def frame() -> pl.DataFrame:
    return pl.DataFrame(
        {
            "x": [1, 2, 3, None],
            "y": [1.5, 2.5, 3.5, 4.5],
            "kind": ["a", "b", "a", "b"],
            "word": ["p", "q", "p", None],
        }
    )


class TestScatter:
    def test_single_series_skips_missing_points(self, frame):
        plot = scatter_plot(frame, "x", "y")
        assert plot.kind == "scatter"
        assert plot.groups == (("", (1.0, 2.0, 3.0), (1.5, 2.5, 3.5)),)

    def test_groups_keep_first_seen_order(self, frame):
        plot = scatter_plot(frame, "x", "y", "kind")
        assert [name for name, _, _ in plot.groups] == ["a", "b"]
        assert plot.groups[0][1] == (1.0, 3.0)

    def test_text_axis_is_rejected(self, frame):
        with pytest.raises(PlotError, match="not numeric"):
            scatter_plot(frame, "word", "y")

    def test_unknown_column(self, frame):
        with pytest.raises(PlotError, match="missing"):
            scatter_plot(frame, "x", "missing")


class TestHistogram:
    def test_numeric_buckets_cover_every_value(self):
        plot = histogram_plot(pl.DataFrame({"n": list(range(10))}), "n", buckets=5)
        assert plot.kind == "histogram"
        assert plot.counts == (2, 2, 2, 2, 2)
        assert plot.labels[0] == "0"

    def test_constant_column_lands_in_first_bucket(self):
        plot = histogram_plot(pl.DataFrame({"n": [7, 7, 7]}), "n", buckets=3)
        assert plot.counts == (3, 0, 0)

    def test_text_counts_most_frequent_values(self, frame):
        plot = histogram_plot(frame, "word", buckets=1)
        assert plot == HistogramPlot(column="word", labels=("p",), counts=(2,))

    def test_empty_numeric_column(self):
        plot = histogram_plot(pl.DataFrame({"n": [None, None]}, schema={"n": pl.Float64}), "n")
        assert plot.counts == ()

    def test_buckets_must_be_positive(self, frame):
        with pytest.raises(PlotError):
            histogram_plot(frame, "x", buckets=0)


@pytest.mark.parametrize(
    "plot",
    [
        ScatterPlot(x_label="x", y_label="y", groups=(("", (1.0, 2.0), (3.0, 4.0)),)),
        HistogramPlot(column="n", labels=("0", "5"), counts=(3, 1)),
        HistogramPlot(column="n", labels=(), counts=()),
    ],
)
def test_render_produces_text(plot):
    assert render_plot(plot, width=60, height=15).strip()

"""Actions that open plots of the active table."""

from __future__ import annotations

from tabscope.domains.plot.app.plot import DEFAULT_BUCKETS, histogram_plot, scatter_plot
from tabscope.shared.app.protocols import SessionProtocol


class PlotMixin:
    def action_plot_scatter(self: SessionProtocol, x: str, y: str, group: str | None = None) -> None:
        tab = self.require_tab()
        tab.show_plot(scatter_plot(tab.frame, x, y, group))

    def action_plot_histogram(self: SessionProtocol, column: str, buckets: int = DEFAULT_BUCKETS) -> None:
        tab = self.require_tab()
        tab.show_plot(histogram_plot(tab.frame, column, buckets))

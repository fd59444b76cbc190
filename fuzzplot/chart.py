from __future__ import annotations

import logging
from typing import Sequence

import matplotlib.pyplot as plt

from fuzzplot.config import ChartConfig, Terminal, XScale, column_index
from fuzzplot.series import DataSeries, load
from fuzzplot.util import save_figure

log = logging.getLogger(__name__)


def build_figure(config: ChartConfig, series_list: Sequence[DataSeries]):
    """
    Draw every series as a polyline, in order (later ones on top).

    Empty series are skipped so they get neither a line nor a legend entry.
    On a log x axis, points with x <= 0 are dropped.
    """
    fig, ax = plt.subplots(figsize=config.figsize, dpi=config.dpi)

    for z, s in enumerate(series_list):
        x, y = s.x, s.y
        if config.x_scale is XScale.LOG:
            keep = x > 0
            if not keep.all():
                log.debug("%s: dropped %d point(s) with x <= 0 on log axis", s.name, int((~keep).sum()))
                x, y = x[keep], y[keep]
        if len(x) == 0:
            log.debug("%s: nothing to draw", s.name)
            continue
        ax.plot(x, y, linestyle="-", label=s.name, zorder=2 + z)

    if config.x_scale is XScale.LOG:
        ax.set_xscale("log")
        ax.grid(True, which="both", axis="x", linewidth=0.5, alpha=0.5)
    ax.set_xlabel(config.xlabel)
    ax.set_ylabel(config.ylabel)
    if config.title:
        ax.set_title(config.title)

    loc = config.legend.loc
    if loc is not None and ax.get_legend_handles_labels()[0]:
        ax.legend(loc=loc)
    return fig


def emit(fig, config: ChartConfig):
    if config.terminal is Terminal.INTERACTIVE:
        plt.show()
        plt.close(fig)
        return
    if not config.output:
        plt.close(fig)
        raise ValueError(f"terminal {config.terminal.value} needs an output path")
    save_figure(fig, config.output, dpi=config.dpi)
    log.info("wrote %s", config.output)


def render(config: ChartConfig, series_list: Sequence[DataSeries]) -> None:
    emit(build_figure(config, series_list), config)


class Chart:
    """A config plus the ordered series drawn with it."""

    def __init__(self, config: ChartConfig, series: Sequence[DataSeries] = ()):
        self.config = config
        self.series = tuple(series)

    @classmethod
    def from_files(cls, config: ChartConfig, files,
                   x_column=column_index("fuzz_cases"), y_column=column_index("coverage")):
        return cls(config, [load(p, x_column, y_column) for p in files])

    def figure(self):
        return build_figure(self.config, self.series)

    def render(self) -> None:
        render(self.config, self.series)

    def save(self, path, dpi=None):
        """Write the chart to ``path`` regardless of the configured terminal."""
        save_figure(self.figure(), path, dpi=dpi or self.config.dpi)
        return path

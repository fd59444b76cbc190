from fuzzplot.config import ChartConfig, LegendPosition, Terminal, XScale, FUZZ_STATS_COLUMNS
from fuzzplot.series import DataSeries, load
from fuzzplot.chart import Chart, build_figure, render
from fuzzplot.directives import DirectiveError, PlotSpec, parse_script, load_script

__version__ = "0.1.0"

__all__ = [
    "Chart",
    "ChartConfig",
    "DataSeries",
    "DirectiveError",
    "FUZZ_STATS_COLUMNS",
    "LegendPosition",
    "PlotSpec",
    "Terminal",
    "XScale",
    "build_figure",
    "load",
    "load_script",
    "parse_script",
    "render",
]

#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys

from fuzzplot.chart import Chart
from fuzzplot.config import (
    FUZZ_STATS_COLUMNS,
    FUZZ_STATS_DEFAULTS,
    ChartConfig,
    Terminal,
    XScale,
    column_index,
    legend_position,
    parse_size,
)
from fuzzplot.directives import DirectiveError, PlotSpec, load_script
from fuzzplot.report import write_report

log = logging.getLogger(__name__)

DEFAULT_INPUT = "fuzz_stats.txt"
EXTENSIONS = {".png": Terminal.PNG, ".svg": Terminal.SVG, ".pdf": Terminal.PDF}


def build_parser():
    ap = argparse.ArgumentParser(
        prog="fuzzplot",
        description="Overlay columns of whitespace-separated stats files as line series.",
    )
    ap.add_argument("files", nargs="*", help=f"input files (default: {DEFAULT_INPUT} unless --script)")
    ap.add_argument("--script", help="plotting directive script (set/plot lines)")
    ap.add_argument("-x", "--xcol", default="fuzz_cases",
                    help="x column, 1-based or one of: " + ", ".join(FUZZ_STATS_COLUMNS))
    ap.add_argument("-y", "--ycol", default="coverage", help="y column, 1-based or a column name")
    ap.add_argument("--xlabel")
    ap.add_argument("--ylabel")
    ap.add_argument("--title")
    ap.add_argument("--logx", dest="x_scale", action="store_const", const=XScale.LOG)
    ap.add_argument("--linx", dest="x_scale", action="store_const", const=XScale.LINEAR)
    ap.add_argument("--samples", type=int, help="resolution hint (no effect on line plots)")
    ap.add_argument("--key", help="legend position: top-left, top-right, bottom-left, bottom-right, bottom, none")
    ap.add_argument("--terminal", help="interactive, png, svg, pdf (gnuplot names like wxt or pngcairo work too)")
    ap.add_argument("--size", help="W,H in pixels")
    ap.add_argument("--dpi", type=int)
    ap.add_argument("-o", "--output", help="output file for png/svg/pdf terminals")
    ap.add_argument("--report", help="also write a PDF report with the chart")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    return ap


def setup_logging(verbose):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def apply_overrides(config: ChartConfig, args) -> ChartConfig:
    changes = {}
    for name in ("xlabel", "ylabel", "title", "x_scale", "samples", "dpi", "output"):
        v = getattr(args, name)
        if v is not None:
            changes[name] = v
    if args.key is not None:
        changes["legend"] = legend_position(args.key)
    if args.size is not None:
        changes["width"], changes["height"] = parse_size(args.size)
    if args.terminal is not None:
        changes["terminal"] = Terminal.from_name(args.terminal)
    config = config.with_changes(**changes)

    if args.terminal is None and args.output and not config.terminal.is_file:
        ext = os.path.splitext(args.output)[1].lower()
        if ext not in EXTENSIONS:
            raise ValueError(f"cannot tell the terminal from {args.output!r}; pass --terminal")
        config = config.with_changes(terminal=EXTENSIONS[ext])
    if config.terminal.is_file and not config.output:
        config = config.with_changes(output=f"fuzz_stats.{config.terminal.value}")
    return config


def plot_specs(args, script_plots):
    specs = list(script_plots)
    files = args.files
    if not files and not args.script:
        files = [DEFAULT_INPUT]
    x, y = column_index(args.xcol), column_index(args.ycol)
    specs += [PlotSpec(f, x, y) for f in files]
    return specs


def report_image(config: ChartConfig, report_path):
    if config.terminal is Terminal.PNG:
        return config.output
    return os.path.splitext(report_path)[0] + ".png"


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.script:
            config, script_plots = load_script(args.script)
        else:
            config, script_plots = ChartConfig(**FUZZ_STATS_DEFAULTS), []
        config = apply_overrides(config, args)
        specs = plot_specs(args, script_plots)
        chart = Chart(config, [s.load() for s in specs])
    except (FileNotFoundError, DirectiveError, ValueError) as e:
        print(f"fuzzplot: {e}", file=sys.stderr)
        return 1

    for s in chart.series:
        if len(s) == 0:
            log.warning("%s: no plottable rows", s.source)

    chart.render()
    if config.terminal.is_file:
        print("Wrote", config.output)

    if args.report:
        image = report_image(config, args.report)
        if image != config.output:
            chart.save(image)
        write_report(args.report, chart, image)
        print("Wrote", args.report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Reader for the small plotting-directive dialect used to chart fuzz stats logs:

    set terminal wxt size 1280,720
    set xlabel 'Fuzz cases'
    set ylabel 'Coverage'
    set logscale x
    set samples 1000000
    set key bottom
    plot 'run1.txt' u 2:3 w l, 'run2.txt' u 2:3 w l

Only the options above (plus title, output and unset) are understood.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

from fuzzplot.config import ChartConfig, LegendPosition, Terminal, XScale, legend_position
from fuzzplot.series import DataSeries, load
from fuzzplot.util import to_float

log = logging.getLogger(__name__)


class DirectiveError(ValueError):
    def __init__(self, message, line=None):
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


@dataclass(frozen=True)
class PlotSpec:
    path: str
    x_column: int  # 0-based
    y_column: int  # 0-based
    style: str = "lines"
    title: Optional[str] = None

    def load(self) -> DataSeries:
        return load(self.path, self.x_column, self.y_column, label=self.title)


class Token(NamedTuple):
    text: str
    quoted: bool = False


_TOKEN = re.compile(r"""'([^']*)'|"([^"]*)"|([,;])|(\#.*)|([^\s,;'"#]+)""")

_LINE_STYLES = {"l", "lines", "line"}


def tokenize(line, lineno=None):
    out, pos = [], 0
    for m in _TOKEN.finditer(line):
        if line[pos:m.start()].strip():
            raise DirectiveError(f"unexpected {line[pos:m.start()].strip()!r}", lineno)
        pos = m.end()
        sq, dq, punct, comment, word = m.groups()
        if comment is not None:
            break
        if sq is not None or dq is not None:
            out.append(Token(sq if sq is not None else dq, True))
        else:
            out.append(Token(punct or word))
    else:
        if line[pos:].strip():
            raise DirectiveError(f"unterminated quote in {line[pos:].strip()!r}", lineno)
    return out


def split_on(tokens, sep):
    parts, cur = [], []
    for t in tokens:
        if not t.quoted and t.text == sep:
            parts.append(cur)
            cur = []
        else:
            cur.append(t)
    parts.append(cur)
    return parts


def _matches(word, full, shortest):
    """gnuplot-style abbreviation: ``word`` is a prefix of ``full`` at least ``shortest`` long."""
    return len(word) >= shortest and full.startswith(word)


def _text(tokens, lineno, what):
    if len(tokens) != 1:
        raise DirectiveError(f"expected one {what}", lineno)
    return tokens[0].text


class _Script:
    def __init__(self, base_dir=None):
        self.base_dir = base_dir
        self.settings = {}
        self.plots = []

    def resolve(self, path):
        if self.base_dir and not os.path.isabs(path):
            return os.path.join(self.base_dir, path)
        return path

    def statement(self, tokens, lineno):
        if not tokens:
            return
        head = tokens[0].text.lower()
        rest = tokens[1:]
        if head == "set":
            self.set_option(rest, lineno)
        elif head == "unset":
            self.unset_option(rest, lineno)
        elif _matches(head, "plot", 1):
            self.plot(rest, lineno)
        elif head in ("pause", "reset", "replot"):
            log.debug("line %s: ignoring %r", lineno, head)
        else:
            raise DirectiveError(f"unknown command {tokens[0].text!r}", lineno)

    def set_option(self, tokens, lineno):
        if not tokens:
            raise DirectiveError("set what?", lineno)
        opt = tokens[0].text.lower()
        args = tokens[1:]
        s = self.settings
        if _matches(opt, "terminal", 4):
            self.terminal(args, lineno)
        elif _matches(opt, "output", 1):
            s["output"] = self.resolve(_text(args, lineno, "output path"))
        elif _matches(opt, "xlabel", 2):
            s["xlabel"] = _text(args, lineno, "label")
        elif _matches(opt, "ylabel", 2):
            s["ylabel"] = _text(args, lineno, "label")
        elif _matches(opt, "title", 3):
            s["title"] = _text(args, lineno, "title")
        elif _matches(opt, "logscale", 3):
            axes = args[0].text.lower() if args else "xy"
            if "x" in axes:
                s["x_scale"] = XScale.LOG
            if axes.replace("x", ""):
                log.warning("line %s: only the x axis can be logarithmic, ignoring %r", lineno, axes)
        elif _matches(opt, "samples", 3):
            # first value only; a second one applies to surface plots
            n = to_float(args[0].text) if args else None
            if n is None or n < 1:
                raise DirectiveError("samples needs a positive number", lineno)
            s["samples"] = int(n)
        elif opt == "key":
            words = " ".join(t.text for t in args) or "top right"
            try:
                s["legend"] = legend_position(words)
            except ValueError as e:
                raise DirectiveError(str(e), lineno) from e
        else:
            log.warning("line %s: ignoring unsupported option 'set %s'", lineno, tokens[0].text)

    def unset_option(self, tokens, lineno):
        opt = tokens[0].text.lower() if tokens else ""
        if opt == "key":
            self.settings["legend"] = LegendPosition.NONE
        elif _matches(opt, "logscale", 3):
            axes = tokens[1].text.lower() if len(tokens) > 1 else "x"
            if "x" in axes:
                self.settings["x_scale"] = XScale.LINEAR
        elif _matches(opt, "title", 3):
            self.settings["title"] = ""
        else:
            log.warning("line %s: ignoring unsupported option 'unset %s'", lineno, opt)

    def terminal(self, args, lineno):
        if not args:
            raise DirectiveError("set terminal needs a name", lineno)
        try:
            self.settings["terminal"] = Terminal.from_name(args[0].text)
        except ValueError as e:
            raise DirectiveError(str(e), lineno) from e
        rest = [t.text for t in args[1:]]
        if "size" in rest:
            i = rest.index("size")
            # size W,H arrives as W , H
            size = "".join(rest[i + 1:i + 4])
            try:
                w, h = (int(float(v)) for v in size.split(","))
            except ValueError as e:
                raise DirectiveError(f"bad terminal size {size!r}", lineno) from e
            if w <= 0 or h <= 0:
                raise DirectiveError(f"bad terminal size {size!r}", lineno)
            self.settings["width"], self.settings["height"] = w, h
            del rest[i:i + 4]
        if rest:
            log.debug("line %s: ignoring terminal options %s", lineno, rest)

    def plot(self, tokens, lineno):
        prev = None
        for entry in split_on(tokens, ","):
            if not entry:
                raise DirectiveError("empty plot element", lineno)
            spec = self.plot_element(entry, prev, lineno)
            self.plots.append(spec)
            prev = spec.path

    def plot_element(self, entry, prev, lineno):
        src = entry[0]
        if not src.quoted:
            raise DirectiveError(f"expected a quoted file name, got {src.text!r}", lineno)
        if src.text == "":
            if prev is None:
                raise DirectiveError("'' with no previous file", lineno)
            path = prev
        else:
            path = self.resolve(src.text)

        using, style, title = "1:2", "lines", None
        i = 1
        while i < len(entry):
            word = entry[i].text.lower()
            arg = entry[i + 1] if i + 1 < len(entry) else None
            if _matches(word, "using", 1):
                if arg is None:
                    raise DirectiveError("using needs X:Y", lineno)
                using, i = arg.text, i + 2
            elif _matches(word, "with", 1):
                if arg is None:
                    raise DirectiveError("with needs a style", lineno)
                style, i = arg.text.lower(), i + 2
            elif _matches(word, "title", 1):
                if arg is None:
                    raise DirectiveError("title needs a string", lineno)
                title, i = arg.text, i + 2
            elif _matches(word, "notitle", 3):
                title, i = "", i + 1
            else:
                raise DirectiveError(f"unexpected {entry[i].text!r} in plot", lineno)

        if style not in _LINE_STYLES:
            raise DirectiveError(f"unsupported style {style!r}, only lines", lineno)
        cols = using.split(":")
        if len(cols) != 2 or not all(c.isdigit() and int(c) > 0 for c in cols):
            raise DirectiveError(f"using must be two column numbers, got {using!r}", lineno)
        x, y = (int(c) - 1 for c in cols)
        return PlotSpec(path, x, y, "lines", title)


def logical_lines(text):
    """
    Yields ``(lineno, line)`` with backslash-continued lines joined; ``lineno`` is where the line starts.
    """
    start, parts = None, []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if start is None:
            start = lineno
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            parts.append(stripped[:-1])
            continue
        parts.append(line)
        yield start, " ".join(parts)
        start, parts = None, []
    if parts:
        yield start, " ".join(parts)


def parse_script(text, base_dir=None):
    """
    Returns ``(ChartConfig, [PlotSpec, ...])``. Relative file names resolve against ``base_dir``.
    """
    script = _Script(base_dir)
    for lineno, line in logical_lines(text):
        for stmt in split_on(tokenize(line, lineno), ";"):
            script.statement(stmt, lineno)
    config = ChartConfig(**script.settings)
    log.debug("script: %s, %d plot element(s)", config, len(script.plots))
    return config, script.plots


def load_script(path):
    with open(path, "r") as f:
        text = f.read()
    return parse_script(text, base_dir=os.path.dirname(os.path.abspath(path)))

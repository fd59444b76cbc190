from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# fuzz_stats.txt: uptime, fuzz cases, coverage, inputs, crashes, unique crashes
FUZZ_STATS_COLUMNS = ["uptime", "fuzz_cases", "coverage", "inputs", "crashes", "unique_crashes"]


class XScale(str, Enum):
    LINEAR = "linear"
    LOG = "log"


class LegendPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM = "bottom"
    NONE = "none"

    @property
    def loc(self) -> Optional[str]:
        """matplotlib legend ``loc`` for this position, None when hidden."""
        return _LEGEND_LOC[self]


_LEGEND_LOC = {
    LegendPosition.TOP_LEFT: "upper left",
    LegendPosition.TOP_RIGHT: "upper right",
    LegendPosition.BOTTOM_LEFT: "lower left",
    LegendPosition.BOTTOM_RIGHT: "lower right",
    LegendPosition.BOTTOM: "lower center",
    LegendPosition.NONE: None,
}


class Terminal(str, Enum):
    INTERACTIVE = "interactive"
    PNG = "png"
    SVG = "svg"
    PDF = "pdf"

    @property
    def is_file(self) -> bool:
        return self is not Terminal.INTERACTIVE

    @classmethod
    def from_name(cls, name: str) -> "Terminal":
        key = name.strip().lower()
        if key in TERMINAL_ALIASES:
            return TERMINAL_ALIASES[key]
        raise ValueError(f"unknown terminal {name!r}")


TERMINAL_ALIASES = {
    "interactive": Terminal.INTERACTIVE,
    "wxt": Terminal.INTERACTIVE,
    "qt": Terminal.INTERACTIVE,
    "x11": Terminal.INTERACTIVE,
    "windows": Terminal.INTERACTIVE,
    "aqua": Terminal.INTERACTIVE,
    "png": Terminal.PNG,
    "pngcairo": Terminal.PNG,
    "svg": Terminal.SVG,
    "pdf": Terminal.PDF,
    "pdfcairo": Terminal.PDF,
}


def legend_position(name: str) -> LegendPosition:
    """
    Accepts the enum values ("bottom-left") as well as space separated
    directive words ("bottom left", "left bottom", "top", "right").
    """
    words = name.replace("-", " ").lower().split()
    if not words:
        raise ValueError("empty legend position")
    if words in (["none"], ["off"]):
        return LegendPosition.NONE
    if any(w not in ("top", "bottom", "left", "right") for w in words):
        raise ValueError(f"unknown legend position {name!r}")
    vert = "bottom" if "bottom" in words else "top"
    if "left" in words:
        horiz = "left"
    elif "right" in words:
        horiz = "right"
    elif vert == "bottom":
        return LegendPosition.BOTTOM
    else:
        horiz = "right"
    return LegendPosition(f"{vert}-{horiz}")


def parse_size(text: str) -> tuple[int, int]:
    parts = text.replace("x", ",").split(",")
    if len(parts) != 2:
        raise ValueError(f"size must be W,H: {text!r}")
    w, h = (int(float(p)) for p in parts)
    if w <= 0 or h <= 0:
        raise ValueError(f"size must be positive: {text!r}")
    return w, h


def column_index(spec) -> int:
    """
    1-based column number or fuzz stats column name -> 0-based index.
    """
    s = str(spec).strip()
    if s in FUZZ_STATS_COLUMNS:
        return FUZZ_STATS_COLUMNS.index(s)
    n = int(s)
    if n < 1:
        raise ValueError(f"columns are numbered from 1: {spec!r}")
    return n - 1


@dataclass(frozen=True)
class ChartConfig:
    terminal: Terminal = Terminal.INTERACTIVE
    width: int = 1280
    height: int = 720
    xlabel: str = ""
    ylabel: str = ""
    title: str = ""
    x_scale: XScale = XScale.LINEAR
    samples: Optional[int] = None  # resolution hint; line plots ignore it
    legend: LegendPosition = LegendPosition.TOP_RIGHT
    output: Optional[str] = None
    dpi: int = 100

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("chart size must be positive")
        if self.dpi <= 0:
            raise ValueError("dpi must be positive")

    @property
    def figsize(self) -> tuple[float, float]:
        return self.width / self.dpi, self.height / self.dpi

    def with_changes(self, **changes) -> "ChartConfig":
        return replace(self, **changes)


# coverage vs fuzz cases, as plotted from fuzz_stats.txt
FUZZ_STATS_DEFAULTS = dict(
    xlabel="Fuzz cases",
    ylabel="Coverage",
    x_scale=XScale.LOG,
    legend=LegendPosition.BOTTOM,
)

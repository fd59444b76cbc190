from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd

from fuzzplot.util import numeric

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DataSeries:
    """
    Points of one input file, in file row order.
    """
    source: str
    x: np.ndarray = field(default_factory=lambda: np.empty(0))
    y: np.ndarray = field(default_factory=lambda: np.empty(0))
    label: Optional[str] = None

    def __len__(self):
        return len(self.x)

    def __eq__(self, other):
        if not isinstance(other, DataSeries):
            return NotImplemented
        return (
            self.source == other.source
            and self.label == other.label
            and np.array_equal(self.x, other.x)
            and np.array_equal(self.y, other.y)
        )

    __hash__ = None

    @property
    def name(self) -> str:
        return self.label if self.label is not None else self.source

    @property
    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist()))

    def with_label(self, label: Optional[str]) -> "DataSeries":
        return DataSeries(self.source, self.x, self.y, label)


def read_rows(path) -> pd.DataFrame:
    """
    One row per non-empty, non-comment line; ragged lines are padded with None.
    Returned frame keeps the 1-based file line number as its index.
    Any path that cannot be read (missing, a directory, no permission) raises FileNotFoundError.
    """
    tokens, lines = [], []
    try:
        with open(path, "r", errors="replace") as f:
            for i, line in enumerate(f, start=1):
                s = line.strip()
                if not s or s.startswith("#"):
                    continue
                tokens.append(s.split())
                lines.append(i)
    except FileNotFoundError:
        raise
    except OSError as e:
        raise FileNotFoundError(e.errno, e.strerror, path) from e
    return pd.DataFrame(tokens, index=pd.Index(lines, name="line"))


def load(path, x_column: int, y_column: int, label: Optional[str] = None) -> DataSeries:
    if x_column < 0 or y_column < 0:
        raise ValueError(f"column indices are 0-based and non-negative: {x_column}, {y_column}")
    path = os.fspath(path)
    rows = read_rows(path)

    if rows.empty:
        log.debug("%s: no data rows", path)
        return DataSeries(path, label=label)

    def col(i):
        if i in rows.columns:
            return numeric(rows[i])
        return pd.Series(np.nan, index=rows.index)

    x, y = col(x_column), col(y_column)
    ok = x.notna() & y.notna()
    if not ok.all():
        bad = rows.index[~ok].tolist()
        log.debug("%s: skipped %d malformed row(s), lines %s", path, len(bad), bad[:20])

    series = DataSeries(
        path,
        x[ok].to_numpy(dtype=float),
        y[ok].to_numpy(dtype=float),
        label,
    )
    log.info("%s: %d point(s) from columns %d:%d", path, len(series), x_column + 1, y_column + 1)
    return series

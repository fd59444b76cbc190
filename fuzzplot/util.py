import os

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def to_float(x):
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return v if np.isfinite(v) else None


def numeric(col: pd.Series) -> pd.Series:
    """
    Coerce a column of tokens to floats; anything unparseable or non-finite becomes NaN.
    """
    v = pd.to_numeric(col, errors="coerce")
    return v.where(np.isfinite(v))


def ensure_parent(path):
    d = os.path.dirname(os.fspath(path))
    if d:
        os.makedirs(d, exist_ok=True)


def save_figure(fig, path, dpi=None):
    ensure_parent(path)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)

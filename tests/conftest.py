import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def write_file(tmp_path):
    def _write(name, text):
        p = tmp_path / name
        p.write_text(text)
        return p
    return _write


@pytest.fixture
def stats_runs(write_file):
    """Four fuzz_stats.txt-style logs with increasing fuzz cases and coverage."""
    paths = []
    for run in range(4):
        lines = []
        for t in range(1, 11):
            cases = 10 ** (t / 2) * (run + 1)
            cov = 100 * t + 10 * run
            lines.append(f"{t:12d} {int(cases):7d} {cov:8d} {t:5d} {0:6d} {0:6d}")
        paths.append(write_file(f"run{run}.txt", "\n".join(lines) + "\n"))
    return paths

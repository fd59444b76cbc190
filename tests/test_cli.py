import os

import matplotlib.pyplot as plt
import pytest

from fuzzplot import cli


def test_default_chart_to_png(tmp_path, stats_runs, capsys):
    out = tmp_path / "cov.png"
    rc = cli.main([*map(str, stats_runs), "-o", str(out)])
    assert rc == 0
    assert out.exists()
    assert f"Wrote {out}" in capsys.readouterr().out


def test_missing_file_exit_status(tmp_path, stats_runs, capsys):
    out = tmp_path / "cov.png"
    rc = cli.main([str(stats_runs[0]), str(tmp_path / "missing.txt"), "-o", str(out)])
    assert rc == 1
    assert not out.exists()
    assert "missing.txt" in capsys.readouterr().err


def test_default_input_is_fuzz_stats(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "fuzz_stats.txt").write_text("1 10 100 1 0 0\n2 20 150 1 0 0\n")
    assert cli.main(["--terminal", "png"]) == 0
    assert (tmp_path / "fuzz_stats.png").exists()


def test_overrides_reach_config(stats_runs):
    args = cli.build_parser().parse_args([
        str(stats_runs[0]), "--linx", "--key", "top-left", "--size", "640,480",
        "--xlabel", "Uptime", "-x", "uptime", "-y", "crashes", "--terminal", "svg",
    ])
    config = cli.apply_overrides(cli.ChartConfig(**cli.FUZZ_STATS_DEFAULTS), args)
    assert config.x_scale is cli.XScale.LINEAR
    assert config.legend.value == "top-left"
    assert (config.width, config.height) == (640, 480)
    assert config.xlabel == "Uptime"
    assert config.ylabel == "Coverage"
    assert config.output == "fuzz_stats.svg"
    specs = cli.plot_specs(args, [])
    assert (specs[0].x_column, specs[0].y_column) == (0, 4)


def test_terminal_inferred_from_output():
    args = cli.build_parser().parse_args(["-o", "chart.pdf"])
    config = cli.apply_overrides(cli.ChartConfig(), args)
    assert config.terminal is cli.Terminal.PDF


def test_unknown_output_extension(tmp_path, stats_runs, capsys):
    rc = cli.main([str(stats_runs[0]), "-o", str(tmp_path / "chart.bmp")])
    assert rc == 1
    assert "--terminal" in capsys.readouterr().err


def test_script_with_extra_files(tmp_path, stats_runs):
    script = tmp_path / "cov.plt"
    script.write_text(
        "set terminal png size 800,600\n"
        "set output 'from_script.png'\n"
        "set logscale x\n"
        f"plot '{stats_runs[0].name}' u 2:3 w l\n"
    )
    rc = cli.main(["--script", str(script), str(stats_runs[1])])
    assert rc == 0
    assert (tmp_path / "from_script.png").exists()


def test_bad_script(tmp_path, capsys):
    script = tmp_path / "bad.plt"
    script.write_text("plot 'a' u 2:3 w points\n")
    assert cli.main(["--script", str(script)]) == 1
    assert "line 1" in capsys.readouterr().err


def test_interactive(monkeypatch, stats_runs):
    shown = []
    monkeypatch.setattr(plt, "show", lambda: shown.append(True))
    assert cli.main([str(p) for p in stats_runs]) == 0
    assert shown == [True]


def test_report(tmp_path, stats_runs):
    out = tmp_path / "cov.png"
    report = tmp_path / "report.pdf"
    assert cli.main([*map(str, stats_runs), "-o", str(out), "--report", str(report)]) == 0
    assert report.read_bytes().startswith(b"%PDF")


def test_report_with_svg_output_saves_png(tmp_path, stats_runs):
    report = tmp_path / "r" / "report.pdf"
    rc = cli.main([str(stats_runs[0]), "-o", str(tmp_path / "c.svg"), "--report", str(report)])
    assert rc == 0
    assert os.path.exists(tmp_path / "r" / "report.png")
    assert report.exists()


def test_directory_input_exit_status(tmp_path, capsys):
    rc = cli.main([str(tmp_path), "-o", str(tmp_path / "cov.png")])
    assert rc == 1
    assert not (tmp_path / "cov.png").exists()
    assert str(tmp_path) in capsys.readouterr().err

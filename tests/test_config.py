import pytest

from fuzzplot.config import (
    ChartConfig,
    LegendPosition,
    Terminal,
    column_index,
    legend_position,
    parse_size,
)


@pytest.mark.parametrize("name,term", [
    ("wxt", Terminal.INTERACTIVE),
    ("QT", Terminal.INTERACTIVE),
    ("pngcairo", Terminal.PNG),
    ("svg", Terminal.SVG),
    ("pdfcairo", Terminal.PDF),
])
def test_terminal_names(name, term):
    assert Terminal.from_name(name) is term


def test_unknown_terminal():
    with pytest.raises(ValueError):
        Terminal.from_name("dumb")


@pytest.mark.parametrize("name,pos", [
    ("bottom-left", LegendPosition.BOTTOM_LEFT),
    ("bottom", LegendPosition.BOTTOM),
    ("right", LegendPosition.TOP_RIGHT),
    ("left", LegendPosition.TOP_LEFT),
    ("none", LegendPosition.NONE),
])
def test_legend_position(name, pos):
    assert legend_position(name) is pos


def test_legend_loc_mapping():
    assert LegendPosition.BOTTOM.loc == "lower center"
    assert LegendPosition.NONE.loc is None


def test_parse_size():
    assert parse_size("1280,720") == (1280, 720)
    assert parse_size("800x600") == (800, 600)
    with pytest.raises(ValueError):
        parse_size("800")
    with pytest.raises(ValueError):
        parse_size("-1,5")


def test_column_index():
    assert column_index("2") == 1
    assert column_index(3) == 2
    assert column_index("coverage") == 2
    assert column_index("fuzz_cases") == 1
    with pytest.raises(ValueError):
        column_index("0")
    with pytest.raises(ValueError):
        column_index("speed")


def test_config_validation():
    with pytest.raises(ValueError):
        ChartConfig(width=0)
    with pytest.raises(ValueError):
        ChartConfig(dpi=0)


def test_figsize_and_changes():
    c = ChartConfig(width=1000, height=500, dpi=100)
    assert c.figsize == (10.0, 5.0)
    d = c.with_changes(xlabel="x")
    assert d.xlabel == "x" and c.xlabel == ""

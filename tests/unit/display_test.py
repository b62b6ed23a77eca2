from levelwise.display import axis_config, bar_config, estimate_label_width_px, legend_order
from levelwise.factor import from_labels


def _seq():
    return from_labels(["b", "b", "c", None], levels=["a", "b", "c"])


def test_axis_config_shows_empty_by_default():
    cfg = axis_config(_seq())
    assert cfg["levels"] == ["a", "b", "c"]
    assert cfg["counts"] == [0, 2, 1]
    assert cfg["empty_levels"] == ["a"]
    assert cfg["missing_count"] == 1
    assert cfg["show_empty"] is True


def test_axis_config_hides_empty():
    """Hiding is a renderer decision; the catalog is untouched."""
    seq = _seq()
    cfg = axis_config(seq, show_empty=False)
    assert cfg["levels"] == ["b", "c"]
    assert cfg["counts"] == [2, 1]
    assert cfg["empty_levels"] == ["a"]
    assert seq.catalog == ["a", "b", "c"]


def test_legend_order():
    assert legend_order(_seq()) == ["a", "b", "c"]
    assert legend_order(_seq(), reverse=True) == ["c", "b", "a"]


def test_bar_config_vertical():
    cfg = bar_config(_seq())
    assert cfg["chart_type"] == "bar"
    assert cfg["orientation"] == "vertical"
    assert cfg["axis_order"] == ["a", "b", "c"]
    assert "label_width_px" not in cfg


def test_bar_config_horizontal_reverses_axis():
    cfg = bar_config(_seq(), show_empty=False, horizontal=True)
    assert cfg["orientation"] == "horizontal"
    assert cfg["axis_order"] == ["c", "b"]
    assert cfg["label_width_px"] >= 30


def test_label_width_bounds():
    assert estimate_label_width_px([]) == 30
    assert estimate_label_width_px(["x" * 500]) == 240
    assert estimate_label_width_px(["Protestant"]) == 10 * 7 + 16

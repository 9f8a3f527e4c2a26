from __future__ import annotations

from pathlib import Path

import pytest

from barseries import BarDefaults, BarSeries, BarSeriesError, load_defaults, render_chart

ROOT = Path(__file__).resolve().parents[1]
DEFAULTS_YAML = ROOT / "config" / "bar_defaults.v1.yaml"


def test_shipped_defaults_match_builtin() -> None:
    assert load_defaults(DEFAULTS_YAML) == BarDefaults()
    assert load_defaults(None) == BarDefaults()


def test_partial_yaml_overrides(tmp_path: Path) -> None:
    path = tmp_path / "defaults.yaml"
    path.write_text("label:\n  fill: '#111111'\nbar:\n  fill: '#222222'\n")
    defaults = load_defaults(path)
    assert defaults.label_fill == "#111111"
    assert defaults.bar_fill == "#222222"
    assert defaults.label_offset == 5

    series = BarSeries(
        data=[{"x": 0, "y": 0, "width": 1, "height": 1, "value": 1}],
        label=True,
        is_animation_active=False,
    )
    result = render_chart("bar", [series], defaults=defaults)
    assert result.series[0].labels[0]["fill"] == "#111111"
    assert result.series[0].bars[0]["fill"] == "#222222"


def test_empty_yaml_uses_builtin(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_defaults(path) == BarDefaults()


@pytest.mark.parametrize(
    "content",
    ["- a\n- b\n", "label: [1, 2]\n", "label:\n  offset: five\n", "label: {fill: [unclosed\n"],
)
def test_invalid_yaml_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(BarSeriesError) as exc_info:
        load_defaults(path)
    assert exc_info.value.code == "E1120_DEFAULTS_INVALID"

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from barseries import BarSeries, render_chart

DATA = [
    {"x": 10, "y": 50, "width": 20, "height": 50, "value": 100, "label": "test1"},
    {"x": 50, "y": 50, "width": 20, "height": 50, "value": 200, "label": "test2"},
    {"x": 90, "y": 50, "width": 20, "height": 50, "value": 300, "label": "test3"},
    {"x": 130, "y": 50, "width": 20, "height": 50, "value": 400, "label": "test4"},
    {"x": 170, "y": 50, "width": 20, "height": 50, "value": 500, "label": "test5"},
]

HOST_CHARTS = ["composed", "bar"]
NON_HOST_CHARTS = ["area", "line", "scatter", "pie", "radar", "radial_bar", "funnel"]


def _nodes(result, *tokens: str) -> list[ET.Element]:
    root = result.builder.root.get_xml()
    found = []
    for node in root.iter():
        classes = set((node.get("class") or "").split())
        if all(token in classes for token in tokens):
            found.append(node)
    return found


@pytest.mark.parametrize("chart_type", HOST_CHARTS)
@pytest.mark.parametrize("layout", ["horizontal", "vertical"])
def test_renders_one_rectangle_per_item(chart_type: str, layout: str) -> None:
    series = BarSeries(data=DATA, layout=layout, is_animation_active=False)
    result = render_chart(chart_type, [series])
    assert len(_nodes(result, "recharts-bar-rectangle")) == len(DATA)
    assert len(result.series[0].geometries) == len(DATA)


@pytest.mark.parametrize("chart_type", HOST_CHARTS)
def test_empty_data_renders_nothing(chart_type: str) -> None:
    for label in (True, False, {"fill": "red"}, lambda props, extra: None):
        for background in (None, True, {"fill": "#000"}):
            series = BarSeries(data=[], label=label, background=background, is_animation_active=False)
            result = render_chart(chart_type, [series])
            assert _nodes(result, "recharts-bar-rectangle") == []
            assert _nodes(result, "recharts-bar-background-rectangle") == []
            assert _nodes(result, "recharts-label") == []
            assert result.series[0].geometries == []


def test_bar_rectangles_use_item_geometry() -> None:
    series = BarSeries(data=DATA[:1], fill="#ff0000", radius=3, is_animation_active=False)
    result = render_chart("bar", [series])
    (rect,) = _nodes(result, "recharts-bar-rectangle")
    assert rect.tag == "rect"
    assert rect.get("x") == "10"
    assert rect.get("y") == "50"
    assert rect.get("width") == "20"
    assert rect.get("height") == "50"
    assert rect.get("fill") == "#ff0000"
    assert rect.get("rx") == "3"


@pytest.mark.parametrize("chart_type", NON_HOST_CHARTS + ["AreaChart", "treemap", "gantt"])
def test_unsupported_parent_renders_nothing(chart_type: str) -> None:
    series = BarSeries(
        data=DATA,
        layout="horizontal",
        label=True,
        background=True,
        is_animation_active=False,
    )
    result = render_chart(chart_type, [series], legend=True)
    assert _nodes(result, "recharts-bar-rectangle") == []
    assert _nodes(result, "recharts-bar-background-rectangle") == []
    assert _nodes(result, "recharts-label") == []
    assert _nodes(result, "recharts-legend-item-text") == []
    assert result.series[0].admitted is False
    assert result.series[0].geometries == []


def test_chart_type_names_are_normalized() -> None:
    series = BarSeries(data=DATA, is_animation_active=False)
    for chart_type in ("BarChart", "ComposedChart", "composed_chart"):
        result = render_chart(chart_type, [series])
        assert len(_nodes(result, "recharts-bar-rectangle")) == len(DATA)


def test_malformed_items_are_skipped() -> None:
    data = DATA[:2] + [{"x": "a", "y": 50, "width": 20, "height": 50, "value": 1}, "oops"]
    series = BarSeries(data=data, label=True, background=True, is_animation_active=False)
    result = render_chart("bar", [series])
    assert len(result.series[0].geometries) == 4
    assert len(_nodes(result, "recharts-bar-rectangle")) == 2
    assert len(_nodes(result, "recharts-bar-background-rectangle")) == 2
    assert len(_nodes(result, "recharts-label")) == 2


def test_multiple_series_render_independently() -> None:
    first = BarSeries(data=DATA, data_key="value", name="first", is_animation_active=False)
    second = BarSeries(data=DATA[:2], data_key="value", name="second", is_animation_active=False)
    result = render_chart("composed", [first, second], legend=True)
    assert len(_nodes(result, "recharts-bar-rectangle")) == len(DATA) + 2
    assert [entry.value for entry in result.registry.entries] == ["first", "second"]


def test_summary_is_serialisable() -> None:
    series = BarSeries(data=DATA[:2], label=True, is_animation_active=False)
    summary = render_chart("bar", [series]).summary()
    assert summary["chart_type"] == "bar"
    assert summary["series"][0]["bars"] == 2
    assert summary["series"][0]["labels"] == 2
    assert summary["series"][0]["geometries"][0] == {"x": 10.0, "y": 50.0, "width": 20.0, "height": 50.0}
    assert summary["legend"] == [
        {"value": "value", "type": "rect", "color": "#8884d8", "data_key": "value"}
    ]

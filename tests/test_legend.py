from __future__ import annotations

import xml.etree.ElementTree as ET

import numpy as np
import pytest

from barseries import BarSeries, LegendRegistry, legend_descriptor, render_chart
from barseries.legend import symbol_points
from barseries.types import LEGEND_TYPES

DATA = [
    {"x": 10, "y": 50, "width": 20, "height": 50, "value": 100, "label": "test1"},
    {"x": 50, "y": 50, "width": 20, "height": 50, "value": 200, "label": "test2"},
]


def _legend_texts(result) -> list[ET.Element]:
    root = result.builder.root.get_xml()
    return [
        node
        for node in root.iter()
        if "recharts-legend-item-text" in (node.get("class") or "").split()
    ]


@pytest.mark.parametrize("chart_type", ["bar", "composed"])
@pytest.mark.parametrize("legend_type", LEGEND_TYPES)
def test_every_legend_type_registers_one_entry(chart_type: str, legend_type: str) -> None:
    series = BarSeries(data=DATA, legend_type=legend_type)
    result = render_chart(chart_type, [series], legend=True)
    texts = _legend_texts(result)
    assert len(texts) == 1
    assert texts[0].text == "value"
    assert len(result.registry) == 1
    assert result.registry.entries[0].type == legend_type


@pytest.mark.parametrize("chart_type", ["bar", "composed"])
def test_legend_type_none_registers_nothing(chart_type: str) -> None:
    series = BarSeries(data=DATA, legend_type="none")
    result = render_chart(chart_type, [series], legend=True)
    assert _legend_texts(result) == []
    assert len(result.registry) == 0


def test_descriptor_uses_name_then_data_key() -> None:
    named = legend_descriptor("star", "Revenue", "value", "#123456")
    assert named is not None
    assert (named.value, named.type, named.color, named.data_key) == ("Revenue", "star", "#123456", "value")
    unnamed = legend_descriptor("circle", None, "uv", "#000")
    assert unnamed is not None
    assert unnamed.value == "uv"
    assert legend_descriptor("none", "Revenue", "value", "#000") is None


def test_unknown_legend_type_falls_back_to_rect() -> None:
    payload = legend_descriptor("hexagon", None, "value", "#000")
    assert payload is not None
    assert payload.type == "rect"


def test_registry_keeps_one_entry_per_series() -> None:
    series = BarSeries(data=DATA)
    registry = LegendRegistry()
    payload = legend_descriptor("rect", None, "value", "#000")
    registry.register(series, payload)
    registry.register(series, payload)
    registry.register(series, None)
    assert len(registry) == 1


def test_legend_icon_shapes() -> None:
    series = BarSeries(data=DATA, legend_type="star", fill="#ff0000")
    result = render_chart("bar", [series], legend=True)
    root = result.builder.root.get_xml()
    icons = [node for node in root.iter() if "recharts-symbols-star" in (node.get("class") or "")]
    assert len(icons) == 1
    assert icons[0].tag == "polygon"
    assert icons[0].get("fill") == "#ff0000"


@pytest.mark.parametrize(
    "kind,count",
    [("triangle", 3), ("diamond", 4), ("square", 4), ("star", 10), ("cross", 12), ("wye", 12)],
)
def test_symbol_points_fit_icon_box(kind: str, count: int) -> None:
    points = symbol_points(kind, 14)
    assert points.shape == (count, 2)
    assert np.all(np.abs(points) <= 7 + 1e-9)

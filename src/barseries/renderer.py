from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from barseries.chart import ChartRender, render_chart
from barseries.config import DEFAULTS, BarDefaults
from barseries.errors import BarSeriesError
from barseries.series import BarSeries


def _load_params(params_path: Path) -> dict[str, Any]:
    text = params_path.read_text()
    try:
        if params_path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BarSeriesError(
            code="E1101_PARAMS_INVALID",
            message=f"Failed to parse params: {exc}",
            hint="Ensure the params file is valid JSON or YAML.",
        ) from exc
    if not isinstance(data, dict):
        raise BarSeriesError(
            code="E1102_PARAMS_TYPE",
            message="params must contain an object at the top level.",
            hint="Wrap parameters in an object with keys like chart/series.",
        )
    return data


def _resolve_canvas_size(params: dict[str, Any]) -> tuple[int, int]:
    chart = params.get("chart") or {}
    if not isinstance(chart, dict):
        raise BarSeriesError(
            code="E1103_CANVAS_INVALID",
            message="chart must be an object with type, width and height.",
            hint="Provide chart as an object.",
        )
    try:
        width = int(chart.get("width", 500))
        height = int(chart.get("height", 500))
    except (TypeError, ValueError) as exc:
        raise BarSeriesError(
            code="E1103_CANVAS_INVALID",
            message="chart width/height must be numeric.",
            hint="Provide numeric chart dimensions.",
        ) from exc
    return width, height


def build_chart(params: dict[str, Any], defaults: BarDefaults = DEFAULTS) -> ChartRender:
    width, height = _resolve_canvas_size(params)
    chart = params.get("chart") or {}
    series_raw = params.get("series", [])
    if not isinstance(series_raw, list):
        raise BarSeriesError(
            code="E1110_SERIES_TYPE",
            message="series must be a list.",
            hint="Provide series as a list of bar series objects.",
        )
    series = [BarSeries.from_dict(raw, index) for index, raw in enumerate(series_raw)]
    return render_chart(
        str(chart.get("type", "bar")),
        series,
        width=width,
        height=height,
        margin=chart.get("margin"),
        legend=bool(params.get("legend", False)),
        settled=bool(params.get("settled", False)),
        defaults=defaults,
    )


def render_svg(params_path: Path, output_svg: Path, defaults: BarDefaults = DEFAULTS) -> ChartRender:
    params = _load_params(params_path)
    result = build_chart(params, defaults)
    result.builder.save(output_svg)
    return result

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from barseries.errors import BarSeriesError


@dataclass(frozen=True)
class BarDefaults:
    label_offset: float = 5
    label_fill: str = "#808080"
    background_fill: str = "#eee"
    bar_fill: str = "#8884d8"
    legend_icon_size: float = 14
    legend_font_size: float = 12
    legend_item_gap: float = 10


DEFAULTS = BarDefaults()


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        raise BarSeriesError(
            code="E1120_DEFAULTS_INVALID",
            message=f"Failed to read defaults YAML: {exc}",
            hint="Point --defaults at a readable YAML file.",
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BarSeriesError(
            code="E1120_DEFAULTS_INVALID",
            message=f"Expected mapping at top of YAML: {path}",
            hint="Use the layout of config/bar_defaults.v1.yaml.",
        )
    return data


def load_defaults(path: Path | None = None) -> BarDefaults:
    if path is None:
        return DEFAULTS
    data = _load_yaml(path)
    label = data.get("label", {}) or {}
    background = data.get("background", {}) or {}
    bar = data.get("bar", {}) or {}
    legend = data.get("legend", {}) or {}
    try:
        return replace(
            DEFAULTS,
            label_offset=float(label.get("offset", DEFAULTS.label_offset)),
            label_fill=str(label.get("fill", DEFAULTS.label_fill)),
            background_fill=str(background.get("fill", DEFAULTS.background_fill)),
            bar_fill=str(bar.get("fill", DEFAULTS.bar_fill)),
            legend_icon_size=float(legend.get("icon_size", DEFAULTS.legend_icon_size)),
            legend_font_size=float(legend.get("font_size", DEFAULTS.legend_font_size)),
            legend_item_gap=float(legend.get("item_gap", DEFAULTS.legend_item_gap)),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise BarSeriesError(
            code="E1120_DEFAULTS_INVALID",
            message=f"Invalid defaults values: {exc}",
            hint="Sections must be mappings and sizes numeric.",
        ) from exc

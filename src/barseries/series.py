from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from svgwrite.base import BaseElement

from barseries.animation import AnimationGate
from barseries.background import render_backgrounds
from barseries.compat import admits_bar
from barseries.config import DEFAULTS, BarDefaults
from barseries.errors import BarSeriesError
from barseries.geometry import coerce_items, resolve_geometry
from barseries.labels import LABEL_LIST_CLASS, render_labels, resolve_label_spec
from barseries.legend import LegendPayload, LegendRegistry, legend_descriptor
from barseries.types import LAYOUTS, DataItem, Geometry, Layout, Rect
from common.svg_builder import SvgBuilder, number

logger = logging.getLogger(__name__)

BAR_CLASS = "recharts-bar"
BAR_RECTANGLE_CLASS = "recharts-rectangle recharts-bar-rectangle"


@dataclass
class BarSeries:
    data: list[DataItem] = field(default_factory=list)
    data_key: str = "value"
    layout: Layout = "horizontal"
    background: Any = None
    label: Any = False
    legend_type: str = "rect"
    is_animation_active: bool = True
    name: str | None = None
    fill: str | None = None
    radius: float = 0
    on_animation_start: Callable[[], None] | None = None
    on_animation_end: Callable[[], None] | None = None

    def __post_init__(self) -> None:
        self.data = coerce_items(self.data, self.data_key)

    @classmethod
    def from_dict(cls, raw: Any, index: int = 0) -> BarSeries:
        if not isinstance(raw, dict):
            raise BarSeriesError(
                code="E1110_SERIES_TYPE",
                message=f"series[{index}] must be an object.",
                hint="Describe each series as {data_key, data, label, ...}.",
                context={"series": index},
            )
        layout = str(raw.get("layout", "horizontal"))
        if layout not in LAYOUTS:
            raise BarSeriesError(
                code="E1111_SERIES_FIELD",
                message=f"series[{index}].layout must be horizontal or vertical, got {layout!r}.",
                hint="Use layout 'horizontal' for column bars or 'vertical' for row bars.",
                context={"series": index},
            )
        data = raw.get("data", [])
        if not isinstance(data, list):
            raise BarSeriesError(
                code="E1111_SERIES_FIELD",
                message=f"series[{index}].data must be a list.",
                hint="Provide data as a list of {x, y, width, height, value} records.",
                context={"series": index},
            )
        for key in ("label", "background"):
            value = raw.get(key)
            if value is not None and not isinstance(value, (bool, dict)):
                raise BarSeriesError(
                    code="E1111_SERIES_FIELD",
                    message=f"series[{index}].{key} must be a boolean or an object.",
                    hint=f"Set {key} to true/false or an attribute object.",
                    context={"series": index},
                )
        try:
            radius = float(raw.get("radius", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise BarSeriesError(
                code="E1111_SERIES_FIELD",
                message=f"series[{index}].radius must be numeric.",
                hint="Provide the corner radius in target units.",
                context={"series": index},
            ) from exc
        is_animation_active = raw.get("is_animation_active", True)
        if not isinstance(is_animation_active, bool):
            raise BarSeriesError(
                code="E1111_SERIES_FIELD",
                message=f"series[{index}].is_animation_active must be a boolean, got {is_animation_active!r}.",
                hint="Set is_animation_active to true or false without quotes.",
                context={"series": index},
            )
        data_key = str(raw.get("data_key", "value"))
        return cls(
            data=coerce_items(data, data_key),
            data_key=data_key,
            layout=layout,
            background=raw.get("background"),
            label=raw.get("label", False),
            legend_type=str(raw.get("legend_type", "rect")),
            is_animation_active=is_animation_active,
            name=raw.get("name"),
            fill=raw.get("fill"),
            radius=radius,
        )

    def animation_gate(self) -> AnimationGate:
        return AnimationGate(
            is_active=self.is_animation_active,
            on_start=self.on_animation_start or (lambda: None),
            on_end=self.on_animation_end or (lambda: None),
        )


@dataclass
class SeriesRender:
    admitted: bool
    geometries: list[Geometry] = field(default_factory=list)
    bars: list[BaseElement] = field(default_factory=list)
    backgrounds: list[BaseElement] = field(default_factory=list)
    labels: list[BaseElement] = field(default_factory=list)
    legend: LegendPayload | None = None
    group: BaseElement | None = None

    def summary(self) -> dict[str, Any]:
        return {
            "admitted": self.admitted,
            "geometries": [geometry.to_dict() for geometry in self.geometries],
            "bars": len(self.bars),
            "backgrounds": len(self.backgrounds),
            "labels": len(self.labels),
            "legend": self.legend.to_dict() if self.legend else None,
        }


def _bar_rect(builder: SvgBuilder, series: BarSeries, geometry: Geometry, defaults: BarDefaults) -> BaseElement:
    node = builder.rect(
        geometry.x,
        geometry.y,
        geometry.width,
        geometry.height,
        fill=series.fill or defaults.bar_fill,
        class_=BAR_RECTANGLE_CLASS,
    )
    if series.radius:
        node.update({"rx": number(series.radius), "ry": number(series.radius)})
    return node


def render_series(
    builder: SvgBuilder,
    series: BarSeries,
    chart_type: str,
    view_box: Rect,
    registry: LegendRegistry | None = None,
    animation: AnimationGate | None = None,
    defaults: BarDefaults = DEFAULTS,
) -> SeriesRender:
    """Render one bar series into ``builder`` when ``chart_type`` can host it.

    Without an explicit ``animation`` gate a fresh one is started, so an
    animated series draws its bars but no labels on this pass.
    """
    if not admits_bar(chart_type):
        return SeriesRender(admitted=False)

    if animation is None:
        animation = series.animation_gate()
        animation.begin()

    items = series.data
    geometries = resolve_geometry(items, series.layout)
    layer = builder.layer(BAR_CLASS)

    backgrounds = render_backgrounds(
        builder,
        series.background,
        items,
        geometries,
        series.layout,
        view_box,
        data_key=series.data_key,
        on_animation_start=animation.on_start,
        on_animation_end=animation.on_end,
        defaults=defaults,
    )
    if backgrounds:
        background_layer = builder.layer("recharts-bar-background", parent=layer)
        for node in backgrounds:
            background_layer.add(node)

    bars = [
        _bar_rect(builder, series, geometry, defaults)
        for item, geometry in zip(items, geometries)
        if item.valid
    ]
    rectangles = builder.layer("recharts-bar-rectangles", parent=layer)
    for node in bars:
        rectangles.add(node)

    labels = render_labels(
        builder,
        resolve_label_spec(series.label),
        items,
        geometries,
        visible=animation.labels_visible,
        defaults=defaults,
    )
    if labels:
        label_layer = builder.layer(LABEL_LIST_CLASS, parent=layer)
        for node in labels:
            label_layer.add(node)

    payload = legend_descriptor(
        series.legend_type,
        series.name,
        series.data_key,
        series.fill or defaults.bar_fill,
    )
    if registry is not None:
        registry.register(series, payload)

    logger.debug(
        "bar series %s: %d bars, %d backgrounds, %d labels",
        series.data_key,
        len(bars),
        len(backgrounds),
        len(labels),
    )
    return SeriesRender(
        admitted=True,
        geometries=geometries,
        bars=bars,
        backgrounds=backgrounds,
        labels=labels,
        legend=payload,
        group=layer,
    )

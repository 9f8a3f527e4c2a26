from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from barseries.config import DEFAULTS, BarDefaults
from barseries.errors import BarSeriesError
from barseries.legend import LegendRegistry, render_legend
from barseries.series import BarSeries, SeriesRender, render_series
from barseries.types import Rect
from common.svg_builder import SvgBuilder

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = {"top": 5, "right": 5, "bottom": 5, "left": 5}
LEGEND_PADDING = 10


@dataclass
class ChartRender:
    chart_type: str
    builder: SvgBuilder
    view_box: Rect
    series: list[SeriesRender] = field(default_factory=list)
    registry: LegendRegistry = field(default_factory=LegendRegistry)

    def summary(self) -> dict[str, Any]:
        return {
            "chart_type": self.chart_type,
            "view_box": self.view_box.to_dict(),
            "series": [result.summary() for result in self.series],
            "legend": [entry.to_dict() for entry in self.registry.entries],
        }

    def tostring(self) -> str:
        return self.builder.tostring()


def resolve_margin(margin: Mapping[str, Any] | None) -> dict[str, float]:
    resolved = dict(DEFAULT_MARGIN)
    if margin is None:
        return resolved
    for side in DEFAULT_MARGIN:
        if side in margin:
            try:
                resolved[side] = float(margin[side])
            except (TypeError, ValueError) as exc:
                raise BarSeriesError(
                    code="E1103_CANVAS_INVALID",
                    message=f"margin.{side} must be numeric.",
                    hint="Provide numeric top/right/bottom/left margins.",
                ) from exc
    return resolved


def plot_view_box(width: float, height: float, margin: Mapping[str, float], legend_height: float = 0) -> Rect:
    return Rect(
        x=margin["left"],
        y=margin["top"],
        width=max(0.0, width - margin["left"] - margin["right"]),
        height=max(0.0, height - margin["top"] - margin["bottom"] - legend_height),
    )


def render_chart(
    chart_type: str,
    series: Iterable[BarSeries],
    width: int = 500,
    height: int = 500,
    margin: Mapping[str, Any] | None = None,
    legend: bool = False,
    settled: bool = False,
    defaults: BarDefaults = DEFAULTS,
) -> ChartRender:
    """Host bar series in a chart of ``chart_type`` and draw them.

    ``settled=True`` renders the pass that follows the end of every series
    animation, so animated series show their labels.
    """
    if int(width) <= 0 or int(height) <= 0:
        raise BarSeriesError(
            code="E1103_CANVAS_INVALID",
            message="chart width/height must be positive.",
            hint="Provide positive chart dimensions.",
        )
    builder = SvgBuilder.create(width=int(width), height=int(height))
    legend_height = defaults.legend_icon_size + LEGEND_PADDING if legend else 0
    view_box = plot_view_box(builder.width, builder.height, resolve_margin(margin), legend_height)
    result = ChartRender(chart_type=chart_type, builder=builder, view_box=view_box)
    for entry in series:
        gate = entry.animation_gate()
        gate.begin()
        if settled:
            gate.settle()
        result.series.append(
            render_series(
                builder,
                entry,
                chart_type,
                view_box,
                registry=result.registry,
                animation=gate,
                defaults=defaults,
            )
        )

    logger.debug(
        "%s chart: %d of %d bar series admitted",
        chart_type,
        sum(1 for entry in result.series if entry.admitted),
        len(result.series),
    )
    if legend:
        render_legend(builder, result.registry.entries, defaults)
    return result

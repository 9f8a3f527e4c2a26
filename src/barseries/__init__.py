"""barseries library package."""

from .animation import AnimationGate
from .chart import ChartRender, render_chart
from .compat import BAR_HOST_CHARTS, admits_bar
from .config import BarDefaults, load_defaults
from .errors import BarSeriesError
from .labels import LabelSpec, resolve_label_spec
from .legend import LegendPayload, LegendRegistry, legend_descriptor
from .renderer import build_chart, render_svg
from .series import BarSeries, SeriesRender, render_series
from .types import DataItem, Geometry, Rect

__all__ = [
    "AnimationGate",
    "BAR_HOST_CHARTS",
    "BarDefaults",
    "BarSeries",
    "BarSeriesError",
    "ChartRender",
    "DataItem",
    "Geometry",
    "LabelSpec",
    "LegendPayload",
    "LegendRegistry",
    "Rect",
    "SeriesRender",
    "admits_bar",
    "build_chart",
    "legend_descriptor",
    "load_defaults",
    "render_chart",
    "render_series",
    "render_svg",
    "resolve_label_spec",
]

"""Which parent charts may host a bar series."""

from __future__ import annotations

import logging
from typing import get_args

from barseries.types import ChartType

logger = logging.getLogger(__name__)

# Only charts with a discrete category axis can host bar rectangles.
BAR_HOST_CHARTS: frozenset[str] = frozenset({"bar", "composed"})
KNOWN_CHARTS: frozenset[str] = frozenset(get_args(ChartType))


def normalize_chart_type(chart_type: str) -> str:
    """``BarChart``, ``bar_chart`` and ``bar`` all name the same chart."""
    key = str(chart_type).strip().lower().replace("-", "_")
    if key.endswith("chart"):
        key = key[: -len("chart")].rstrip("_")
    if key == "radialbar":
        key = "radial_bar"
    return key


def admits_bar(chart_type: ChartType | str) -> bool:
    key = normalize_chart_type(chart_type)
    if key in BAR_HOST_CHARTS:
        return True
    if key not in KNOWN_CHARTS:
        logger.warning("unknown chart type %r, bar series will not render", chart_type)
    else:
        logger.debug("%s chart cannot host a bar series", key)
    return False

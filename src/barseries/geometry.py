from __future__ import annotations

import logging
from typing import Any, Iterable

from barseries.types import DataItem, Geometry, Layout

logger = logging.getLogger(__name__)


def value_axis(layout: Layout) -> str:
    """Axis carrying the bar magnitude: ``y`` for horizontal charts, ``x`` for vertical."""
    return "x" if layout == "vertical" else "y"


def coerce_items(raw_items: Iterable[Any] | None, data_key: str = "value") -> list[DataItem]:
    if raw_items is None:
        return []
    items: list[DataItem] = []
    for raw in raw_items:
        if isinstance(raw, DataItem):
            items.append(raw)
        else:
            items.append(DataItem.from_mapping(raw, data_key))
    return items


def resolve_geometry(items: Iterable[DataItem], layout: Layout = "horizontal") -> list[Geometry]:
    """Map each item to its rectangle, keeping order and count.

    The layout does not change the rectangle itself; positions arrive already
    scaled; it only names the value axis reported for skipped items. Items
    with unusable coordinates resolve to a zero-sized geometry so downstream
    renderers can skip them by index.
    """
    axis = value_axis(layout)
    geometries: list[Geometry] = []
    for index, item in enumerate(items):
        if not item.valid:
            logger.debug("bar item %d has no usable x/y/width/height (value axis %s), drawing nothing", index, axis)
            geometries.append(Geometry.empty())
            continue
        geometries.append(Geometry.normalized(item.x, item.y, item.width, item.height))
    return geometries

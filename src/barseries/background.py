"""Companion rectangles drawn behind each bar.

A background setting of ``True`` or a style mapping draws a ``rect`` per item.
A callable is invoked per item as ``fn(props)`` (or ``fn(props, {})`` when it
requires a second argument, matching label functions) and its return value is
drawn verbatim; a function that raises draws nothing for that item.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from svgwrite.base import BaseElement

from barseries.callbacks import call_render_function, positional_count
from barseries.config import DEFAULTS, BarDefaults
from barseries.geometry import value_axis
from barseries.types import DataItem, Geometry, Layout, Rect
from common.svg_builder import SvgBuilder, number

logger = logging.getLogger(__name__)

BACKGROUND_CLASS = "recharts-bar-background-rectangle"


def background_enabled(spec: Any) -> bool:
    return spec is True or isinstance(spec, Mapping) or callable(spec)


def background_rect(item: DataItem, geometry: Geometry, layout: Layout, view_box: Rect) -> Rect:
    """Companion rectangle spanning the whole value axis unless the item brings its own."""
    if item.background is not None:
        return item.background
    if value_axis(layout) == "x":
        return Rect(x=view_box.x, y=geometry.y, width=view_box.width, height=geometry.height)
    return Rect(x=geometry.x, y=view_box.y, width=geometry.width, height=view_box.height)


def _style_attributes(style: Mapping[str, Any]) -> dict[str, Any]:
    attributes = {}
    for key, value in style.items():
        if key in ("className", "class_name", "class", "class_"):
            continue
        attributes[key] = value
    return attributes


def render_backgrounds(
    builder: SvgBuilder,
    spec: Any,
    items: Sequence[DataItem],
    geometries: Sequence[Geometry],
    layout: Layout,
    view_box: Rect,
    data_key: str = "value",
    on_animation_start: Callable[[], None] | None = None,
    on_animation_end: Callable[[], None] | None = None,
    defaults: BarDefaults = DEFAULTS,
) -> list[BaseElement]:
    """Build one background node per drawable item; nothing when ``spec`` is off."""
    if not background_enabled(spec):
        return []
    is_function = callable(spec) and not isinstance(spec, Mapping)
    function_args = positional_count(spec, 1) if is_function else 1
    nodes: list[BaseElement] = []
    for index, (item, geometry) in enumerate(zip(items, geometries)):
        if not item.valid:
            continue
        rect = background_rect(item, geometry, layout, view_box)
        if is_function:
            props = {
                "class_name": BACKGROUND_CLASS,
                "data_key": data_key,
                "fill": defaults.background_fill,
                "height": rect.height,
                "index": index,
                "label": item.label,
                "on_animation_start": on_animation_start or (lambda: None),
                "on_animation_end": on_animation_end or (lambda: None),
                "width": rect.width,
                "x": rect.x,
                "y": rect.y,
            }
            node = call_render_function(spec, props, function_args, index, "background")
            if node is None:
                continue
            if not isinstance(node, BaseElement):
                logger.debug("background function returned %r for item %d, ignoring", type(node), index)
                continue
            nodes.append(node)
            continue

        attributes: dict[str, Any] = {"fill": defaults.background_fill}
        if isinstance(spec, Mapping):
            attributes.update(_style_attributes(spec))
        node = builder.rect(rect.x, rect.y, rect.width, rect.height)
        node.update(attributes)
        node.update(
            {
                "x": number(rect.x),
                "y": number(rect.y),
                "width": number(rect.width),
                "height": number(rect.height),
                "class": BACKGROUND_CLASS,
            }
        )
        nodes.append(node)
    return nodes

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from svgwrite.base import BaseElement

from barseries.config import DEFAULTS, BarDefaults
from barseries.types import LEGEND_NONE, LEGEND_TYPES
from common.svg_builder import DEFAULT_FONT_FAMILY, SvgBuilder, number

logger = logging.getLogger(__name__)

LEGEND_ITEM_TEXT_CLASS = "recharts-legend-item-text"
LEGEND_ICON_CLASS = "recharts-legend-icon"
ICON_TEXT_GAP = 4
# Rough glyph advance for Arial at a given font size.
CHAR_WIDTH_RATIO = 0.6


@dataclass(frozen=True)
class LegendPayload:
    value: str
    type: str
    color: str
    data_key: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "type": self.type,
            "color": self.color,
            "data_key": self.data_key,
        }


def normalize_legend_type(legend_type: Any) -> str:
    key = str(legend_type).strip().lower()
    if key == LEGEND_NONE or key in LEGEND_TYPES:
        return key
    logger.warning("unknown legend type %r, using rect", legend_type)
    return "rect"


def legend_descriptor(
    legend_type: Any,
    name: str | None,
    data_key: str,
    color: str,
) -> LegendPayload | None:
    """One legend entry for the series, or ``None`` when its type is ``none``."""
    kind = normalize_legend_type(legend_type)
    if kind == LEGEND_NONE:
        return None
    return LegendPayload(value=str(name or data_key), type=kind, color=color, data_key=data_key)


@dataclass
class LegendRegistry:
    entries: list[LegendPayload] = field(default_factory=list)
    _owners: set[int] = field(default_factory=set, repr=False)

    def register(self, owner: Any, payload: LegendPayload | None) -> None:
        """Record ``payload`` for ``owner``; each series registers at most once."""
        if payload is None:
            return
        key = id(owner)
        if key in self._owners:
            logger.debug("legend entry for %r already registered", payload.value)
            return
        self._owners.add(key)
        self.entries.append(payload)

    def __len__(self) -> int:
        return len(self.entries)


def _regular_polygon(count: int, radius: float, phase: float = -math.pi / 2) -> np.ndarray:
    angles = phase + np.arange(count) * (2 * math.pi / count)
    return np.column_stack([np.cos(angles), np.sin(angles)]) * radius


def _rotate(points: np.ndarray, angle: float) -> np.ndarray:
    rotation = np.array([[math.cos(angle), -math.sin(angle)], [math.sin(angle), math.cos(angle)]])
    return points @ rotation.T


def symbol_points(kind: str, size: float) -> np.ndarray:
    """Outline of a legend symbol centred on the origin."""
    radius = size / 2
    if kind == "triangle":
        return _regular_polygon(3, radius)
    if kind == "diamond":
        half_width = radius * math.tan(math.pi / 6)
        return np.array([[0, -radius], [half_width, 0], [0, radius], [-half_width, 0]])
    if kind == "star":
        outer = _regular_polygon(5, radius)
        inner = _regular_polygon(5, radius * 0.382, phase=-math.pi / 2 + math.pi / 5)
        return np.stack([outer, inner], axis=1).reshape(-1, 2)
    if kind == "cross":
        arm = radius / 3
        return np.array(
            [
                [-arm, -radius], [arm, -radius], [arm, -arm], [radius, -arm],
                [radius, arm], [arm, arm], [arm, radius], [-arm, radius],
                [-arm, arm], [-radius, arm], [-radius, -arm], [-arm, -arm],
            ]
        )
    if kind == "wye":
        arm = radius / 4
        spoke = np.array([[-arm, 0], [-arm, -radius], [arm, -radius], [arm, 0]])
        spokes = [_rotate(spoke, angle) for angle in (0, 2 * math.pi / 3, 4 * math.pi / 3)]
        return np.vstack(spokes)
    half = radius
    return np.array([[-half, -half], [half, -half], [half, half], [-half, half]])


def legend_icon(builder: SvgBuilder, payload: LegendPayload, x: float, y: float, size: float) -> BaseElement:
    """Icon whose top-left corner sits at ``(x, y)``."""
    drawing = builder.drawing
    cx = x + size / 2
    cy = y + size / 2
    icon_class = f"{LEGEND_ICON_CLASS} recharts-symbols-{payload.type}"
    if payload.type == "plainline":
        return drawing.line(
            start=(number(x), number(cy)),
            end=(number(x + size), number(cy)),
            stroke=payload.color,
            stroke_width=4,
            class_=icon_class,
        )
    if payload.type == "line":
        icon = drawing.g(class_=icon_class)
        icon.add(
            drawing.line(
                start=(number(x), number(cy)),
                end=(number(x + size), number(cy)),
                stroke=payload.color,
                stroke_width=4,
            )
        )
        icon.add(drawing.circle(center=(number(cx), number(cy)), r=number(size / 4), fill="none", stroke=payload.color))
        return icon
    if payload.type == "rect":
        return builder.rect(x, y + size / 8, size, size * 3 / 4, fill=payload.color, class_=icon_class)
    if payload.type == "circle":
        return drawing.circle(center=(number(cx), number(cy)), r=number(size / 2), fill=payload.color, class_=icon_class)
    points = symbol_points(payload.type, size) + np.array([cx, cy])
    return drawing.polygon(
        points=[(round(float(px), 3), round(float(py), 3)) for px, py in points],
        fill=payload.color,
        class_=icon_class,
    )


def render_legend(
    builder: SvgBuilder,
    entries: list[LegendPayload],
    defaults: BarDefaults = DEFAULTS,
) -> BaseElement | None:
    """Draw registered entries as one centred row along the bottom edge."""
    if not entries:
        return None
    drawing = builder.drawing
    icon_size = defaults.legend_icon_size
    font_size = defaults.legend_font_size
    widths = [
        icon_size + ICON_TEXT_GAP + len(entry.value) * font_size * CHAR_WIDTH_RATIO
        for entry in entries
    ]
    total = sum(widths) + defaults.legend_item_gap * (len(entries) - 1)
    legend_x = (builder.width - total) / 2
    legend_y = builder.height - icon_size - 5

    legend = drawing.g(class_="recharts-legend-wrapper")
    for idx, (entry, width) in enumerate(zip(entries, widths)):
        item = drawing.g(class_=f"recharts-legend-item legend-item-{idx}")
        item.add(legend_icon(builder, entry, legend_x, legend_y, icon_size))
        item.add(
            builder.text(
                entry.value,
                legend_x + icon_size + ICON_TEXT_GAP,
                legend_y + icon_size / 2 + font_size * 0.35,
                class_=LEGEND_ITEM_TEXT_CLASS,
                font_family=DEFAULT_FONT_FAMILY,
                font_size=number(font_size),
                fill=entry.color,
                text_anchor="start",
            )
        )
        legend.add(item)
        legend_x += width + defaults.legend_item_gap
    builder.groups["g_legend"].add(legend)
    return legend

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Mapping, get_args

Layout = Literal["horizontal", "vertical"]
AnimationState = Literal["idle", "animating", "settled"]
ChartType = Literal[
    "bar",
    "composed",
    "area",
    "line",
    "scatter",
    "pie",
    "radar",
    "radial_bar",
    "funnel",
    "treemap",
    "sankey",
]
LegendType = Literal[
    "circle",
    "cross",
    "diamond",
    "line",
    "plainline",
    "rect",
    "square",
    "star",
    "triangle",
    "wye",
    "none",
]

LAYOUTS: tuple[str, ...] = get_args(Layout)
LEGEND_NONE = "none"
LEGEND_TYPES: tuple[str, ...] = tuple(kind for kind in get_args(LegendType) if kind != LEGEND_NONE)

RECT_FIELDS = ("x", "y", "width", "height")


def _finite(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_mapping(cls, raw: Any) -> Rect | None:
        """Parse ``{x, y, width, height}``; ``None`` when any field is unusable."""
        if not isinstance(raw, Mapping):
            return None
        values = [_finite(raw.get(key)) for key in RECT_FIELDS]
        if any(value is None for value in values):
            return None
        return cls(*values)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Geometry(Rect):
    """Bar rectangle in target space. Width and height are never negative."""

    @classmethod
    def normalized(cls, x: float, y: float, width: float, height: float) -> Geometry:
        if width < 0:
            x, width = x + width, -width
        if height < 0:
            y, height = y + height, -height
        return cls(x=x, y=y, width=width, height=height)

    @classmethod
    def empty(cls) -> Geometry:
        return cls(x=0.0, y=0.0, width=0.0, height=0.0)


@dataclass(frozen=True)
class DataItem:
    """One record per rendered bar, already scaled into target space."""

    x: float
    y: float
    width: float
    height: float
    value: Any = None
    label: Any = None
    background: Rect | None = None
    valid: bool = True

    @classmethod
    def from_mapping(cls, raw: Any, data_key: str = "value") -> DataItem:
        if not isinstance(raw, Mapping):
            return cls(x=0.0, y=0.0, width=0.0, height=0.0, valid=False)
        values = [_finite(raw.get(key)) for key in RECT_FIELDS]
        valid = all(value is not None for value in values)
        x, y, width, height = (value if value is not None else 0.0 for value in values)
        return cls(
            x=x,
            y=y,
            width=width,
            height=height,
            value=raw.get(data_key),
            label=raw.get("label"),
            background=Rect.from_mapping(raw.get("background")),
            valid=valid,
        )

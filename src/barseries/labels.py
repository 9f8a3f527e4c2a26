"""Value labels drawn on top of bar rectangles.

A series label setting is resolved once per render pass into a ``LabelSpec``
whose ``kind`` selects how every item gets its label:

* ``suppressed``: ``False``/``None``, nothing is drawn.
* ``default``: ``True``, a ``text`` node with fixed styling.
* ``style``: a mapping whose keys are merged onto the default ``text`` node.
* ``function``: a callable invoked per item as ``fn(props, {})`` (or
  ``fn(props)`` when it takes one argument), its return value drawn verbatim.
  A function that raises draws nothing for that item.
* ``element``: a pre-built svgwrite element copied per item with positional
  attributes injected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Sequence

from svgwrite.base import BaseElement
from svgwrite.params import Parameter

from barseries.callbacks import call_render_function, positional_count
from barseries.config import DEFAULTS, BarDefaults
from barseries.types import DataItem, Geometry
from common.svg_builder import SvgBuilder, number

logger = logging.getLogger(__name__)

LabelKind = Literal["suppressed", "default", "style", "function", "element"]

TEXT_CLASS = "recharts-text"
LABEL_CLASS = "recharts-label"
LABEL_LIST_CLASS = "recharts-label-list"

_CLASS_KEYS = ("className", "class_name", "class", "class_")
# Keys steering the label rather than emitted as attributes.
_CONTROL_KEYS = ("position", "formatter")


@dataclass(frozen=True)
class LabelSpec:
    kind: LabelKind
    style: Mapping[str, Any] | None = None
    function: Callable[..., Any] | None = None
    element: BaseElement | None = None
    function_args: int = 2

    @property
    def class_name(self) -> str:
        if self.style:
            for key in _CLASS_KEYS:
                if self.style.get(key):
                    return f"{TEXT_CLASS} {self.style[key]}"
        return f"{TEXT_CLASS} {LABEL_CLASS}"

    @property
    def position(self) -> str:
        if self.style and self.style.get("position"):
            return str(self.style["position"])
        return "center"

    @property
    def formatter(self) -> Callable[[Any], Any] | None:
        if self.style and callable(self.style.get("formatter")):
            return self.style["formatter"]
        return None


SUPPRESSED = LabelSpec(kind="suppressed")


def resolve_label_spec(raw: Any) -> LabelSpec:
    if raw is None or raw is False:
        return SUPPRESSED
    if raw is True:
        return LabelSpec(kind="default")
    if isinstance(raw, BaseElement):
        return LabelSpec(kind="element", element=raw)
    if isinstance(raw, Mapping):
        return LabelSpec(kind="style", style=dict(raw))
    if callable(raw):
        return LabelSpec(kind="function", function=raw, function_args=positional_count(raw, 2))
    logger.warning("unsupported label setting %r, labels disabled", type(raw).__name__)
    return SUPPRESSED


def label_position(position: str, geometry: Geometry, offset: float) -> tuple[float, float, str]:
    """Anchor point and text-anchor for a label placed relative to its bar."""
    x, y, width, height = geometry.x, geometry.y, geometry.width, geometry.height
    mid_x = x + width / 2
    mid_y = y + height / 2
    if position == "top":
        return mid_x, y - offset, "middle"
    if position == "bottom":
        return mid_x, y + height + offset, "middle"
    if position == "left":
        return x - offset, mid_y, "end"
    if position == "right":
        return x + width + offset, mid_y, "start"
    if position == "insideLeft":
        return x + offset, mid_y, "start"
    if position == "insideRight":
        return x + width - offset, mid_y, "end"
    if position == "insideTop":
        return mid_x, y + offset, "middle"
    if position == "insideBottom":
        return mid_x, y + height - offset, "middle"
    if position not in ("center", "inside"):
        logger.debug("unknown label position %r, using center", position)
    return mid_x, mid_y, "middle"


def _label_text(spec: LabelSpec, value: Any) -> str:
    formatter = spec.formatter
    if formatter is not None:
        value = formatter(value)
    return "" if value is None else str(value)


def _render_positioned(
    builder: SvgBuilder,
    spec: LabelSpec,
    index: int,
    item: DataItem,
    geometry: Geometry,
    defaults: BarDefaults,
) -> BaseElement:
    offset = defaults.label_offset
    x, y, anchor = label_position(spec.position, geometry, offset)
    node = builder.drawing.text(_label_text(spec, item.value))
    node.update(
        {
            "x": number(x),
            "y": number(y),
            "height": number(geometry.height),
            "width": number(geometry.width),
            "offset": number(offset),
            "text_anchor": anchor,
            "fill": defaults.label_fill,
        }
    )
    if spec.style:
        node.update(
            {
                key: value
                for key, value in spec.style.items()
                if key not in _CLASS_KEYS and key not in _CONTROL_KEYS
            }
        )
    node["class"] = spec.class_name
    return node


def _render_function(
    builder: SvgBuilder,
    spec: LabelSpec,
    index: int,
    item: DataItem,
    geometry: Geometry,
    defaults: BarDefaults,
) -> Any:
    props = {
        "content": spec.function,
        "height": geometry.height,
        "index": index,
        "offset": defaults.label_offset,
        "parent_view_box": None,
        "text_break_all": None,
        "value": item.value,
        "view_box": {
            "height": geometry.height,
            "width": geometry.width,
            "x": geometry.x,
            "y": geometry.y,
        },
        "width": geometry.width,
        "x": geometry.x,
        "y": geometry.y,
    }
    return call_render_function(spec.function, props, spec.function_args, index, "label")


def _render_element(
    builder: SvgBuilder,
    spec: LabelSpec,
    index: int,
    item: DataItem,
    geometry: Geometry,
    defaults: BarDefaults,
) -> BaseElement:
    # The copy takes the bar's own y (near edge), not the positioned y used
    # by text labels. Callers depend on this.
    node = spec.element.copy()
    node.set_parameter(Parameter(debug=False, profile=builder.drawing.profile))
    node.update(
        {
            "x": number(geometry.x),
            "y": number(geometry.y),
            "height": number(geometry.height),
            "width": number(geometry.width),
            "offset": number(defaults.label_offset),
        }
    )
    return node


_RENDERERS = {
    "default": _render_positioned,
    "style": _render_positioned,
    "function": _render_function,
    "element": _render_element,
}


def render_labels(
    builder: SvgBuilder,
    spec: LabelSpec,
    items: Sequence[DataItem],
    geometries: Sequence[Geometry],
    visible: bool = True,
    defaults: BarDefaults = DEFAULTS,
) -> list[BaseElement]:
    """Label nodes for every drawable item, or none while labels are hidden."""
    if spec.kind == "suppressed" or not visible:
        return []
    render_one = _RENDERERS[spec.kind]
    nodes: list[BaseElement] = []
    for index, (item, geometry) in enumerate(zip(items, geometries)):
        if not item.valid:
            continue
        node = render_one(builder, spec, index, item, geometry, defaults)
        if node is None:
            continue
        if not isinstance(node, BaseElement):
            logger.debug("label for item %d is %r, not an element; skipped", index, type(node).__name__)
            continue
        nodes.append(node)
    return nodes

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import svgwrite

REQUIRED_GROUP_IDS = [
    "figure_root",
    "g_series",
    "g_legend",
]

DEFAULT_FONT_FAMILY = "Arial, sans-serif"


def number(value: float) -> int | float:
    """Collapse integral floats so attributes serialise as ``75`` not ``75.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class SvgBuilder:
    drawing: svgwrite.Drawing
    root: svgwrite.container.Group
    groups: dict[str, svgwrite.container.Group]
    width: int
    height: int

    @classmethod
    def create(cls, width: int, height: int) -> "SvgBuilder":
        # Series decorations carry attributes outside the SVG schema
        # (offset, elevation, ...), so attribute validation stays off.
        drawing = svgwrite.Drawing(size=(width, height), profile="full", debug=False)
        root = drawing.g(id="figure_root", class_="recharts-surface")
        drawing.add(root)

        groups: dict[str, svgwrite.container.Group] = {}
        for group_id in REQUIRED_GROUP_IDS:
            if group_id == "figure_root":
                continue
            group = drawing.g(id=group_id)
            root.add(group)
            groups[group_id] = group

        return cls(
            drawing=drawing,
            root=root,
            groups=groups,
            width=int(width),
            height=int(height),
        )

    def layer(self, class_name: str, parent: svgwrite.container.Group | None = None, **extra):
        group = self.drawing.g(class_=f"recharts-layer {class_name}", **extra)
        (parent if parent is not None else self.groups["g_series"]).add(group)
        return group

    def rect(self, x: float, y: float, width: float, height: float, **extra):
        return self.drawing.rect(
            insert=(number(x), number(y)),
            size=(number(width), number(height)),
            **extra,
        )

    def text(self, content: str, x: float, y: float, **extra):
        return self.drawing.text(content, x=[number(x)], y=[number(y)], **extra)

    def tostring(self) -> str:
        return self.drawing.tostring()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.drawing.saveas(str(path))

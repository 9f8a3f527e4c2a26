from __future__ import annotations

import json
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from barseries.chart import ChartRender


def _box(attribs: dict) -> list[float] | None:
    try:
        x = float(attribs["x"])
        y = float(attribs["y"])
        width = float(attribs["width"])
        height = float(attribs["height"])
    except (KeyError, TypeError, ValueError):
        return None
    return [min(x, x + width), min(y, y + height), max(x, x + width), max(y, y + height)]


def write_debug_artifacts(debug_dir: Path, result: ChartRender) -> None:
    """Dump resolved geometry as JSON and an overlay PNG of bars, backgrounds and labels."""
    debug_dir.mkdir(parents=True, exist_ok=True)
    (debug_dir / "geometry.json").write_text(json.dumps(result.summary(), indent=2, sort_keys=True))

    canvas = np.full((result.builder.height, result.builder.width, 4), 255, dtype=np.uint8)
    overlay = Image.fromarray(canvas)
    draw = ImageDraw.Draw(overlay, "RGBA")

    view = result.view_box
    draw.rectangle(
        [view.x, view.y, view.x + view.width, view.y + view.height],
        outline=(0, 200, 0, 200),
        width=1,
    )
    for series in result.series:
        for node in series.backgrounds:
            box = _box(node.attribs)
            if box:
                draw.rectangle(box, fill=(200, 200, 200, 120))
        for geometry in series.geometries:
            if geometry.width == 0 and geometry.height == 0:
                continue
            draw.rectangle(
                [geometry.x, geometry.y, geometry.x + geometry.width, geometry.y + geometry.height],
                outline=(255, 165, 0, 220),
                width=2,
            )
        for node in series.labels:
            try:
                x = float(node.attribs["x"])
                y = float(node.attribs["y"])
            except (KeyError, TypeError, ValueError):
                continue
            draw.ellipse([x - 2, y - 2, x + 2, y + 2], outline=(255, 0, 0, 200), width=1)
    overlay.save(debug_dir / "overlay.png")

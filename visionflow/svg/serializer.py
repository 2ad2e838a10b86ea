"""Write a standalone SVG overlay document from rendered patterns."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from visionflow.engine.config import Viewport
from visionflow.models.render import RenderedPattern
from visionflow.svg.path_data import fmt

ANCHOR_RADIUS = 8
LABEL_OFFSET = 12  # px above the anchor dot
LABEL_FONT_SIZE = 12
ANCHOR_OUTLINE = "#0F172A"


def _element_lines(elem: dict[str, Any], indent: int) -> list[str]:
    pad = "  " * indent
    tag = elem.get("tag", "path")
    text = elem.get("text")
    children = elem.get("children") or []
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "children", "text") and v is not None}
    attr_str = "".join(f" {k}={quoteattr(str(v))}" for k, v in attrs.items())

    if children:
        lines = [f"{pad}<{tag}{attr_str}>"]
        for child in children:
            lines.extend(_element_lines(child, indent + 1))
        lines.append(f"{pad}</{tag}>")
        return lines
    if text is not None:
        return [f"{pad}<{tag}{attr_str}>{escape(str(text))}</{tag}>"]
    return [f"{pad}<{tag}{attr_str} />"]


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float,
    canvas_h: float,
    title: str = "",
    description: str = "",
) -> str:
    """Generate SVG markup from element definitions.

    Each element is a dict of attributes plus ``tag``, optional ``text`` and
    optional nested ``children``.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {fmt(canvas_w)} {fmt(canvas_h)}" width="{fmt(canvas_w)}"'
        f' height="{fmt(canvas_h)}" xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    for elem in elements:
        lines.extend(_element_lines(elem, 1))

    lines.append("</svg>")
    return "\n".join(lines)


def pattern_group(rendered: RenderedPattern, index: int, show_labels: bool = True) -> dict[str, Any]:
    """One ``<g>`` holding the pattern path, its anchor dots and its label."""
    children: list[dict[str, Any]] = []

    if rendered.path:
        children.append({
            "tag": "path",
            "d": rendered.path,
            "stroke": rendered.stroke_color,
            "stroke-width": "2",
            "fill": rendered.fill_color,
            "stroke-dasharray": rendered.dash_array,
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
        })

    for x, y in rendered.anchors_px:
        children.append({
            "tag": "circle",
            "cx": fmt(x),
            "cy": fmt(y),
            "r": str(ANCHOR_RADIUS),
            "fill": rendered.stroke_color,
            "stroke": ANCHOR_OUTLINE,
            "stroke-width": "2",
        })

    if show_labels and rendered.anchors_px:
        x, y = rendered.anchors_px[0]
        children.append({
            "tag": "text",
            "x": fmt(x),
            "y": fmt(y - ANCHOR_RADIUS - LABEL_OFFSET),
            "fill": rendered.stroke_color,
            "font-size": str(LABEL_FONT_SIZE),
            "font-weight": "700",
            "text-anchor": "middle",
            "text": f"P{index + 1}",
        })

    return {
        "tag": "g",
        "id": f"pattern-{index}",
        "data-type": rendered.type.value,
        "children": children,
    }


def serialize_overlay(
    rendered: Iterable[RenderedPattern],
    viewport: Viewport,
    show_labels: bool = True,
    title: str = "",
) -> str:
    """Full overlay document sized to the viewport's content area."""
    groups = [pattern_group(r, i, show_labels) for i, r in enumerate(rendered)]
    width = viewport.width + viewport.offset_x
    height = viewport.height + viewport.offset_y
    return serialize_svg(groups, width, height, title=title)

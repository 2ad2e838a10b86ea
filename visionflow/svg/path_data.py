"""SVG path-data command builders with compact number formatting."""

from __future__ import annotations

import re

_COMMAND_RE = re.compile(r"[MLCAZ]")


def fmt(value: float) -> str:
    """Format a coordinate: integral values without a decimal point, others to 4 places."""
    v = float(value)
    if v != v or v in (float("inf"), float("-inf")):
        return str(v)
    text = f"{v:.4f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def move_to(x: float, y: float) -> str:
    return f"M {fmt(x)} {fmt(y)}"


def line_to(x: float, y: float) -> str:
    return f"L {fmt(x)} {fmt(y)}"


def cubic_to(
    c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
) -> str:
    return f"C {fmt(c1x)} {fmt(c1y)}, {fmt(c2x)} {fmt(c2y)}, {fmt(x)} {fmt(y)}"


def arc_to(
    rx: float,
    ry: float,
    x: float,
    y: float,
    rotation: float = 0,
    large_arc: bool = False,
    sweep: bool = True,
) -> str:
    """Elliptical arc: ``A rx ry x-axis-rotation large-arc-flag sweep-flag x y``."""
    return (
        f"A {fmt(rx)} {fmt(ry)} {fmt(rotation)} {int(large_arc)} {int(sweep)} "
        f"{fmt(x)} {fmt(y)}"
    )


def close() -> str:
    return "Z"


def command_letters(d: str) -> list[str]:
    """Command letters of a path string, in order (absolute commands only)."""
    return _COMMAND_RE.findall(d)

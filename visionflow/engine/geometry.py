"""Pattern geometry — anchors + pattern type → SVG path data and decorative hints.

Path generators by geometry kind:

  fibonacci                              → 4 quarter-turn arcs growing by φ
  wave                                   → cubic Bézier S-curves through the anchors
  geometric / symmetry / sacred_geometry → closed polygon (M … L … Z)
  channel / pitchfork                    → open polyline (M … L …)
  anything else                          → open polyline

``wave``, ``sacred_geometry``, ``channel`` and ``pitchfork`` are legacy labels
that no longer exist in PatternType but still appear in stored and AI data,
so kinds are handled as plain strings here.

Under-populated input never raises: each shape returns "" below its minimum
anchor count (1 spiral, 2 wave, 3 polygon, 2 polyline). NaN or out-of-range
coordinates are not special-cased; the arithmetic result is emitted as-is.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from visionflow.engine.config import RenderConfig
from visionflow.engine.taxonomy import normalize_pattern_type
from visionflow.models.pattern import PATTERN_COLORS, Pattern, PatternType
from visionflow.models.render import RenderedPattern
from visionflow.svg.path_data import arc_to, close, command_letters, cubic_to, line_to, move_to
from visionflow.utils.geometry import anchors_to_pixels, distance

logger = logging.getLogger(__name__)

SPIRAL_KINDS = frozenset({"fibonacci"})
WAVE_KINDS = frozenset({"wave"})
CLOSED_KINDS = frozenset({"geometric", "symmetry", "sacred_geometry"})
OPEN_KINDS = frozenset({"channel", "pitchfork"})

_MIN_WAVE_ANCHORS = 2
_MIN_POLYGON_ANCHORS = 3
_MIN_POLYLINE_ANCHORS = 2

_DEFAULT_CONFIG = RenderConfig()


def _kind(pattern_type: PatternType | str) -> str:
    return getattr(pattern_type, "value", pattern_type)


def _to_pixels(anchors: Sequence[Any], config: RenderConfig) -> NDArray[np.float64]:
    vp = config.viewport
    return anchors_to_pixels(anchors, vp.width, vp.height, offset=(vp.offset_x, vp.offset_y))


def _golden_ratio(measurements: Mapping[str, Any] | None, config: RenderConfig) -> float:
    value = (measurements or {}).get("goldenRatio")
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
        return float(value)
    return config.golden_ratio


def fibonacci_spiral_path(
    anchors: Sequence[Any],
    measurements: Mapping[str, Any] | None = None,
    config: RenderConfig = _DEFAULT_CONFIG,
) -> str:
    """Golden spiral approximated by circular quarter arcs around anchor 0.

    Each arc keeps the current radius and ends on the next, larger radius,
    so the piecewise curve follows logarithmic growth without being a true
    logarithmic spiral. The arc count is fixed by ``config.spiral_quarters``.
    """
    if len(anchors) < 1:
        return ""

    pts = _to_pixels(anchors, config)
    cx, cy = float(pts[0, 0]), float(pts[0, 1])
    phi = _golden_ratio(measurements, config)

    if len(pts) > 1:
        radius = distance(pts[0], pts[1]) / 3
    else:
        radius = config.fallback_radius

    quarters = config.spiral_quarters
    angle_step = 2 * math.pi / quarters
    growth = phi ** (angle_step / (math.pi / 2))

    parts = [move_to(cx, cy + radius)]
    angle = math.pi / 2  # start at the bottom of the circle
    for _ in range(quarters):
        next_angle = angle + angle_step
        next_radius = radius * growth
        end_x = cx + next_radius * math.cos(next_angle)
        end_y = cy + next_radius * math.sin(next_angle)
        parts.append(arc_to(radius, radius, end_x, end_y))
        angle = next_angle
        radius = next_radius

    return " ".join(parts)


def wave_path(anchors: Sequence[Any], config: RenderConfig = _DEFAULT_CONFIG) -> str:
    """Horizontally eased cubic Béziers through every anchor in order."""
    if len(anchors) < _MIN_WAVE_ANCHORS:
        return ""

    pts = _to_pixels(anchors, config)
    parts = [move_to(pts[0, 0], pts[0, 1])]
    for (x0, y0), (x1, y1) in zip(pts[:-1], pts[1:]):
        span = x1 - x0
        parts.append(cubic_to(x0 + span / 3, y0, x0 + 2 * span / 3, y1, x1, y1))
    return " ".join(parts)


def _polyline(pts: NDArray[np.float64]) -> list[str]:
    return [move_to(pts[0, 0], pts[0, 1])] + [line_to(x, y) for x, y in pts[1:]]


def polygon_path(anchors: Sequence[Any], config: RenderConfig = _DEFAULT_CONFIG) -> str:
    """Closed polygon through the anchors in the given order."""
    if len(anchors) < _MIN_POLYGON_ANCHORS:
        return ""
    return " ".join(_polyline(_to_pixels(anchors, config)) + [close()])


def polyline_path(anchors: Sequence[Any], config: RenderConfig = _DEFAULT_CONFIG) -> str:
    """Open polyline through the anchors in the given order."""
    if len(anchors) < _MIN_POLYLINE_ANCHORS:
        return ""
    return " ".join(_polyline(_to_pixels(anchors, config)))


def generate_path(
    pattern_type: PatternType | str,
    anchors: Sequence[Any],
    measurements: Mapping[str, Any] | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Route a pattern to its path generator. Unknown kinds render as an open polyline."""
    config = config or _DEFAULT_CONFIG
    anchors = list(anchors)
    if not anchors:
        return ""

    kind = _kind(pattern_type)
    if kind in SPIRAL_KINDS:
        return fibonacci_spiral_path(anchors, measurements, config)
    if kind in WAVE_KINDS:
        return wave_path(anchors, config)
    if kind in CLOSED_KINDS:
        return polygon_path(anchors, config)
    if kind not in OPEN_KINDS:
        logger.debug("No dedicated generator for %r, using open polyline", kind)
    return polyline_path(anchors, config)


def get_dash_pattern(
    pattern_type: PatternType | str, config: RenderConfig | None = None
) -> str | None:
    """Dash spec for open multi-point kinds, None otherwise."""
    if _kind(pattern_type) in OPEN_KINDS:
        return (config or _DEFAULT_CONFIG).dash_pattern
    return None


def get_fill_opacity(
    pattern_type: PatternType | str, config: RenderConfig | None = None
) -> float:
    """Low fill for closed shapes; open shapes are stroke-only."""
    if _kind(pattern_type) in CLOSED_KINDS:
        return (config or _DEFAULT_CONFIG).closed_fill_opacity
    return 0.0


def fill_color(color: str, opacity: float) -> str:
    """``#RRGGBB`` + two-digit hex alpha, or "none" when there is no fill."""
    if opacity <= 0:
        return "none"
    return f"{color}{round(opacity * 255):02x}"


def render_pattern(
    pattern_type: PatternType | str,
    anchors: Iterable[Any],
    measurements: Mapping[str, Any] | None = None,
    config: RenderConfig | None = None,
    *,
    pattern_id: str | None = None,
    name: str = "",
) -> RenderedPattern:
    """Path, decorative hints, colors and pixel anchors for one pattern.

    Geometry follows the raw kind (so legacy labels keep their shape) while
    the color follows the normalized taxonomy type.
    """
    config = config or _DEFAULT_CONFIG
    anchors = list(anchors)
    path = generate_path(pattern_type, anchors, measurements, config)
    taxonomy_type = normalize_pattern_type(_kind(pattern_type))
    color = PATTERN_COLORS[taxonomy_type]
    opacity = get_fill_opacity(pattern_type, config)
    pixels = _to_pixels(anchors, config) if anchors else np.empty((0, 2))

    return RenderedPattern(
        id=pattern_id,
        name=name,
        kind=_kind(pattern_type),
        type=taxonomy_type,
        path=path,
        dash_array=get_dash_pattern(pattern_type, config),
        fill_opacity=opacity,
        stroke_color=color,
        fill_color=fill_color(color, opacity),
        closed=command_letters(path)[-1:] == ["Z"],
        anchors_px=[(float(x), float(y)) for x, y in pixels],
    )


def render_patterns(
    patterns: Iterable[Pattern], config: RenderConfig | None = None
) -> list[RenderedPattern]:
    return [
        render_pattern(
            p.type, p.anchors, p.measurements, config, pattern_id=p.id, name=p.name
        )
        for p in patterns
    ]

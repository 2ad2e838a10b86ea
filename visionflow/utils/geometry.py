"""Leaf-node coordinate helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
from numpy.typing import NDArray


def _xy(point: Any) -> tuple[float, float]:
    """Accept an ``{"x", "y"}`` mapping, an (x, y) pair or any object exposing ``.x`` / ``.y``."""
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


def to_pixels(point: Any, width: float, height: float) -> tuple[float, float]:
    """Percentage point (0-100) → pixel coordinates inside a width × height box."""
    x, y = _xy(point)
    return (x / 100 * width, y / 100 * height)


def anchors_to_pixels(
    anchors: Iterable[Any],
    width: float,
    height: float,
    offset: tuple[float, float] = (0.0, 0.0),
) -> NDArray[np.float64]:
    """Scale a sequence of percentage points to an Nx2 pixel array, shifted by ``offset``."""
    px = np.array([to_pixels(a, width, height) for a in anchors], dtype=np.float64).reshape(-1, 2)
    return px + np.asarray(offset, dtype=np.float64)


def distance(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """Euclidean distance between two 2-D points."""
    return float(np.hypot(b[0] - a[0], b[1] - a[1]))

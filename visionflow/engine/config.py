"""Render configuration — explicit viewport and spiral constants for the geometry engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from visionflow.config import Settings
    from visionflow.models.pattern import ContentArea

# 4:3 photo frame, matching the capture aspect of the camera screen.
DEFAULT_ASPECT = 3 / 4


@dataclass(frozen=True)
class Viewport:
    """Pixel box that anchor percentages resolve against.

    ``offset_x``/``offset_y`` place the content area inside a larger image;
    they stay 0 when the viewport is the content area itself.
    """

    width: float = 390.0
    height: float = 390.0 * DEFAULT_ASPECT
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def from_content_area(
        cls, image_width: float, image_height: float, area: ContentArea
    ) -> Viewport:
        """Viewport covering ``area`` (percentages of the full image) in image pixels."""
        left = area.top_left_x / 100 * image_width
        top = area.top_left_y / 100 * image_height
        right = area.bottom_right_x / 100 * image_width
        bottom = area.bottom_right_y / 100 * image_height
        return cls(width=right - left, height=bottom - top, offset_x=left, offset_y=top)


@dataclass(frozen=True)
class RenderConfig:
    """Everything the path generators read besides the pattern itself."""

    viewport: Viewport = field(default_factory=Viewport)
    golden_ratio: float = 1.618
    fallback_radius: float = 20.0  # px, spiral start when only one anchor exists
    spiral_quarters: int = 4
    dash_pattern: str = "10 10"
    closed_fill_opacity: float = 0.15

    @classmethod
    def from_settings(cls, settings: Settings) -> RenderConfig:
        return cls(
            viewport=Viewport(
                width=settings.viewport_width,
                height=settings.viewport_height,
            ),
            golden_ratio=settings.golden_ratio,
            fallback_radius=settings.fallback_spiral_radius,
        )

    def with_viewport(self, viewport: Viewport) -> RenderConfig:
        return replace(self, viewport=viewport)

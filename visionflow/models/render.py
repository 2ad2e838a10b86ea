"""Rendered pattern — what a vector renderer needs to draw one pattern overlay."""

from __future__ import annotations

from pydantic import BaseModel, Field

from visionflow.models.pattern import PatternType


class RenderedPattern(BaseModel):
    id: str | None = None
    name: str = ""
    kind: str  # geometry kind the path was generated for (may be a legacy label)
    type: PatternType  # taxonomy type, drives the color
    path: str = ""
    dash_array: str | None = None
    fill_opacity: float = 0.0
    stroke_color: str
    fill_color: str = "none"
    closed: bool = False
    anchors_px: list[tuple[float, float]] = Field(default_factory=list)

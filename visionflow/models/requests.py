"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from visionflow.engine.library import PatternFilters, SortBy, SortOrder
from visionflow.models.pattern import AnchorPoint, ContentArea, Pattern


class ViewportSpec(BaseModel):
    width: float = Field(..., gt=0, description="Content area width in px")
    height: float = Field(..., gt=0, description="Content area height in px")
    offset_x: float = Field(default=0.0, description="Content area left edge in px")
    offset_y: float = Field(default=0.0, description="Content area top edge in px")


class ImageFrame(BaseModel):
    """Full image size plus the detected content area inside it."""

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    content_area: ContentArea = Field(default_factory=ContentArea)


class RenderItem(BaseModel):
    id: str | None = None
    name: str = ""
    type: str = Field(..., description="Pattern type or legacy geometry kind (wave, channel...)")
    anchors: list[AnchorPoint] = Field(default_factory=list)
    measurements: dict[str, float | list[float]] = Field(default_factory=dict)


class RenderRequest(BaseModel):
    patterns: list[RenderItem] = Field(..., description="Patterns to render")
    viewport: ViewportSpec | None = Field(default=None, description="Defaults to settings")
    image: ImageFrame | None = Field(
        default=None, description="Resolve anchors against a content area inside this image"
    )


class SvgRequest(RenderRequest):
    show_labels: bool = True
    title: str = ""


class NormalizeRequest(BaseModel):
    labels: list[Any] = Field(..., description="Raw AI labels")


class LibraryRequest(BaseModel):
    patterns: list[dict[str, Any]] = Field(..., description="Stored pattern records")
    filters: PatternFilters = Field(default_factory=PatternFilters)
    sort_by: SortBy = "created"
    sort_order: SortOrder = "desc"


class StatsRequest(BaseModel):
    patterns: list[Pattern] = Field(..., description="Pattern records")


class SanitizeRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    analysis: dict[str, Any] = Field(..., description="Decoded model response")
    model_version: str | None = None

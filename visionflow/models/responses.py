"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from visionflow.models.pattern import Pattern, PatternDomain, PatternType
from visionflow.models.render import RenderedPattern


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    pattern_types: int = 0


class TaxonomyEntry(BaseModel):
    type: PatternType
    label: str
    description: str
    color: str


class TaxonomyResponse(BaseModel):
    types: list[TaxonomyEntry] = Field(default_factory=list)
    domain_colors: dict[PatternDomain, str] = Field(default_factory=dict)


class NormalizedLabel(BaseModel):
    label: Any
    type: PatternType
    valid: bool


class NormalizeResponse(BaseModel):
    results: list[NormalizedLabel] = Field(default_factory=list)


class RenderResponse(BaseModel):
    patterns: list[RenderedPattern] = Field(default_factory=list)
    viewport_width: float
    viewport_height: float


class LibraryResponse(BaseModel):
    patterns: list[Pattern] = Field(default_factory=list)
    total: int = 0
    skipped: int = 0

"""POST /api/patterns/* — normalize labels, render geometry, export SVG, library views."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from visionflow.dependencies import get_render_config
from visionflow.engine.config import RenderConfig, Viewport
from visionflow.engine.geometry import render_pattern
from visionflow.engine.library import (
    PatternStatistics,
    filter_patterns,
    load_patterns,
    pattern_statistics,
    sort_patterns,
)
from visionflow.engine.taxonomy import is_valid_pattern_type, normalize_pattern_type
from visionflow.models.render import RenderedPattern
from visionflow.models.requests import (
    LibraryRequest,
    NormalizeRequest,
    RenderRequest,
    StatsRequest,
    SvgRequest,
)
from visionflow.models.responses import (
    LibraryResponse,
    NormalizedLabel,
    NormalizeResponse,
    RenderResponse,
)
from visionflow.svg.serializer import serialize_overlay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patterns")


def _resolve_config(req: RenderRequest, base: RenderConfig) -> RenderConfig:
    if req.image is not None:
        viewport = Viewport.from_content_area(
            req.image.width, req.image.height, req.image.content_area
        )
        return base.with_viewport(viewport)
    if req.viewport is not None:
        return base.with_viewport(Viewport(**req.viewport.model_dump()))
    return base


def _render_all(req: RenderRequest, config: RenderConfig) -> list[RenderedPattern]:
    return [
        render_pattern(
            item.type,
            item.anchors,
            item.measurements,
            config,
            pattern_id=item.id,
            name=item.name,
        )
        for item in req.patterns
    ]


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize(req: NormalizeRequest) -> NormalizeResponse:
    return NormalizeResponse(
        results=[
            NormalizedLabel(
                label=label,
                type=normalize_pattern_type(label),
                valid=is_valid_pattern_type(label),
            )
            for label in req.labels
        ]
    )


@router.post("/render", response_model=RenderResponse)
async def render(
    req: RenderRequest, base: RenderConfig = Depends(get_render_config)
) -> RenderResponse:
    config = _resolve_config(req, base)
    rendered = _render_all(req, config)
    logger.debug("Rendered %d patterns into %sx%s", len(rendered), config.viewport.width, config.viewport.height)
    return RenderResponse(
        patterns=rendered,
        viewport_width=config.viewport.width,
        viewport_height=config.viewport.height,
    )


@router.post("/svg")
async def svg(req: SvgRequest, base: RenderConfig = Depends(get_render_config)) -> Response:
    config = _resolve_config(req, base)
    document = serialize_overlay(
        _render_all(req, config), config.viewport, show_labels=req.show_labels, title=req.title
    )
    return Response(content=document, media_type="image/svg+xml")


@router.post("/library", response_model=LibraryResponse)
async def library(req: LibraryRequest) -> LibraryResponse:
    patterns = load_patterns(req.patterns)
    result = sort_patterns(filter_patterns(patterns, req.filters), req.sort_by, req.sort_order)
    return LibraryResponse(
        patterns=result,
        total=len(result),
        skipped=len(req.patterns) - len(patterns),
    )


@router.post("/stats", response_model=PatternStatistics)
async def stats(req: StatsRequest) -> PatternStatistics:
    return pattern_statistics(req.patterns)

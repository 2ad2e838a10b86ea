"""Health check + taxonomy meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from visionflow.models.pattern import (
    DOMAIN_COLORS,
    PATTERN_COLORS,
    PatternType,
    get_pattern_type_description,
    get_pattern_type_label,
)
from visionflow.models.responses import HealthResponse, TaxonomyEntry, TaxonomyResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", pattern_types=len(PatternType))


@router.get("/taxonomy", response_model=TaxonomyResponse)
async def taxonomy() -> TaxonomyResponse:
    return TaxonomyResponse(
        types=[
            TaxonomyEntry(
                type=t,
                label=get_pattern_type_label(t),
                description=get_pattern_type_description(t),
                color=PATTERN_COLORS[t],
            )
            for t in PatternType
        ],
        domain_colors=DOMAIN_COLORS,
    )

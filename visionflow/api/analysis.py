"""POST /api/analysis/sanitize — repair a decoded vision-model response."""

from __future__ import annotations

import time

from fastapi import APIRouter

from visionflow.config import settings
from visionflow.engine.analysis import sanitize_analysis
from visionflow.models.pattern import AIPatternAnalysis
from visionflow.models.requests import SanitizeRequest

router = APIRouter(prefix="/analysis")


@router.post("/sanitize", response_model=AIPatternAnalysis, response_model_by_alias=True)
async def sanitize(req: SanitizeRequest) -> AIPatternAnalysis:
    start = time.perf_counter()
    result = sanitize_analysis(
        req.analysis,
        model_version=req.model_version or settings.model_version,
        min_confidence=settings.min_pattern_confidence,
    )
    result.metadata.processing_time = round((time.perf_counter() - start) * 1000, 1)
    return result

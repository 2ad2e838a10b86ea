"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from visionflow.api import analysis, health, patterns

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(patterns.router)
api_router.include_router(analysis.router)

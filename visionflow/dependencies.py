"""FastAPI dependency injection."""

from __future__ import annotations

from visionflow.config import settings
from visionflow.engine.config import RenderConfig


def get_render_config() -> RenderConfig:
    return RenderConfig.from_settings(settings)

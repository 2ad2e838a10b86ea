"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    visionflow_env: str = "development"
    visionflow_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:8081"]

    # Default render viewport (content area, in px)
    viewport_width: float = 390.0
    viewport_height: float = 292.5

    # Geometry defaults
    golden_ratio: float = 1.618
    fallback_spiral_radius: float = 20.0

    # AI analysis post-processing
    min_pattern_confidence: float = 0.25
    model_version: str = "gemini-2.5-flash"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ()}


settings = Settings()

"""VisionFlow pattern engine — geometry generation and taxonomy normalization."""

from visionflow.engine.config import RenderConfig, Viewport
from visionflow.engine.geometry import (
    generate_path,
    get_dash_pattern,
    get_fill_opacity,
    render_pattern,
    render_patterns,
)
from visionflow.engine.taxonomy import (
    is_valid_pattern_type,
    normalize_pattern_type,
    validate_pattern_type,
)

__all__ = [
    "RenderConfig",
    "Viewport",
    "generate_path",
    "get_dash_pattern",
    "get_fill_opacity",
    "render_pattern",
    "render_patterns",
    "is_valid_pattern_type",
    "normalize_pattern_type",
    "validate_pattern_type",
]

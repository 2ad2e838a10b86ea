"""Pattern data model — the record the geometry engine and library operate on.

Stored records use camelCase keys; models accept either spelling and dump
camelCase with ``by_alias=True``.
"""

from __future__ import annotations

import enum
import time
import uuid
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class PatternType(str, enum.Enum):
    """The closed pattern taxonomy. Nothing else may be stored in ``Pattern.type``."""

    FIBONACCI = "fibonacci"
    GEOMETRIC = "geometric"
    SYMMETRY = "symmetry"
    CUSTOM = "custom"


class PatternDomain(str, enum.Enum):
    FINANCE = "finance"
    NATURE = "nature"
    ART = "art"
    GEOMETRY = "geometry"
    ARCHITECTURE = "architecture"
    OTHER = "other"


class PatternScale(str, enum.Enum):
    MICRO = "micro"
    MESO = "meso"
    MACRO = "macro"
    MULTI_SCALE = "multi-scale"


class AnalysisQuality(str, enum.Enum):
    HIGH = "high"  # avg confidence > 0.7
    MEDIUM = "medium"  # 0.5 - 0.7
    LOW = "low"


class PatternComplexity(str, enum.Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    HIGHLY_COMPLEX = "highly_complex"


PATTERN_COLORS: dict[PatternType, str] = {
    PatternType.FIBONACCI: "#FACC15",
    PatternType.GEOMETRIC: "#A855F7",
    PatternType.SYMMETRY: "#6366F1",
    PatternType.CUSTOM: "#EF4444",
}

DOMAIN_COLORS: dict[PatternDomain, str] = {
    PatternDomain.FINANCE: "#10B981",
    PatternDomain.NATURE: "#84CC16",
    PatternDomain.ART: "#F472B6",
    PatternDomain.GEOMETRY: "#A855F7",
    PatternDomain.ARCHITECTURE: "#6366F1",
    PatternDomain.OTHER: "#9CA3AF",
}

_TYPE_LABELS = {
    PatternType.FIBONACCI: "Fibonacci",
    PatternType.GEOMETRIC: "Geometric",
    PatternType.SYMMETRY: "Symmetry",
    PatternType.CUSTOM: "Custom",
}

_TYPE_DESCRIPTIONS = {
    PatternType.FIBONACCI: (
        "Golden ratio, spirals, and Fibonacci sequences found in nature and mathematics"
    ),
    PatternType.GEOMETRIC: "Geometric shapes, grids, repetition, and structured patterns",
    PatternType.SYMMETRY: (
        "Bilateral, radial, or mirror symmetry creating balance and harmony"
    ),
    PatternType.CUSTOM: "User-defined or unclassified patterns",
}


def get_pattern_type_label(pattern_type: PatternType | str) -> str:
    try:
        return _TYPE_LABELS[PatternType(pattern_type)]
    except ValueError:
        return "Unknown"


def get_pattern_type_description(pattern_type: PatternType | str) -> str:
    try:
        return _TYPE_DESCRIPTIONS[PatternType(pattern_type)]
    except ValueError:
        return "Unknown pattern type"


def now_ms() -> int:
    return int(time.time() * 1000)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


class AnchorPoint(CamelModel):
    x: float  # % of content-area width
    y: float  # % of content-area height


class ContentArea(CamelModel):
    """Region of the full image holding real content (percentages of the full image)."""

    top_left_x: float = 0.0
    top_left_y: float = 0.0
    bottom_right_x: float = 100.0
    bottom_right_y: float = 100.0
    confidence: float = 0.5
    detected_artifacts: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        coords = (self.top_left_x, self.top_left_y, self.bottom_right_x, self.bottom_right_y)
        return (
            all(0 <= c <= 100 for c in coords)
            and self.top_left_x < self.bottom_right_x
            and self.top_left_y < self.bottom_right_y
        )


# Open numeric map: goldenRatio, angles, symmetryAxes, nodeCount, ...
PatternMeasurements = dict[str, float | list[float]]


class PatternInsights(CamelModel):
    explanation: str = "Pattern analysis completed."
    secret_message: str = "Hidden patterns revealed."
    share_caption: str = "Discover the patterns within."
    mathematical_context: str | None = None
    cultural_context: str | None = None
    primary_domain: PatternDomain = PatternDomain.OTHER
    pattern_complexity: PatternComplexity = PatternComplexity.SIMPLE
    suggested_actions: list[str] = Field(default_factory=list)


class Pattern(CamelModel):
    """A detected or manually created pattern.

    ``type`` is always re-validated through the taxonomy normalizer, so
    records saved under older taxonomies load as current types. The original
    label is kept in ``subtype`` when none was stored.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: PatternType = PatternType.CUSTOM
    subtype: str | None = None
    name: str
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    anchors: list[AnchorPoint] = Field(default_factory=list)
    measurements: PatternMeasurements = Field(default_factory=dict)
    overlay_steps: list[str] | None = None
    insights: PatternInsights | None = None
    source: Literal["ai", "manual"] = "manual"
    image_uri: str = ""
    edge_image_uri: str | None = None
    domain: PatternDomain | None = None
    scale: PatternScale | None = None
    orientation: float | None = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
    user_notes: str | None = None
    tags: list[str] | None = None
    is_favorite: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalize_type(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "type" not in data:
            return data
        from visionflow.engine.taxonomy import is_valid_pattern_type, normalize_pattern_type

        label = data["type"]
        if isinstance(label, PatternType):
            return data
        data = dict(data)
        data["type"] = normalize_pattern_type(label)
        if not is_valid_pattern_type(label) and not data.get("subtype") and label:
            data["subtype"] = str(label)
        return data


class DetectedPattern(CamelModel):
    """One pattern as returned by the analysis step, before it is saved."""

    type: PatternType
    subtype: str | None = None
    name: str
    confidence: float
    anchors: list[AnchorPoint]
    measurements: PatternMeasurements = Field(default_factory=dict)
    overlay_steps: list[str]
    domain: PatternDomain = PatternDomain.OTHER
    scale: PatternScale = PatternScale.MACRO
    orientation: float = 0.0


class AnalysisMetadata(CamelModel):
    processing_time: float = 0.0
    model_version: str = ""
    edge_detection_applied: bool = False
    analysis_quality: AnalysisQuality = AnalysisQuality.LOW


class AIPatternAnalysis(CamelModel):
    content_area: ContentArea
    patterns: list[DetectedPattern]
    insights: PatternInsights
    metadata: AnalysisMetadata

"""AI analysis post-processing — repair a decoded model response into an AIPatternAnalysis.

The vision model is asked for structured JSON but routinely returns partial
or out-of-range data. Every repair is logged and degrades to a safe default;
only a response without a ``patterns`` list is rejected.

Phases:
  1. content area    → full image when missing or out of bounds
  2. patterns list   → AnalysisError when missing
  3. per pattern     → type normalized, steps/anchors/confidence/domain/scale/orientation repaired
  4. quality gate    → drop low-confidence patterns, placeholder when none remain
  5. insights        → defaults, primary domain and complexity derived
  6. metadata        → quality from average confidence
"""

from __future__ import annotations

import logging
from typing import Any

from visionflow.engine.taxonomy import is_valid_pattern_type, normalize_pattern_type
from visionflow.models.pattern import (
    AIPatternAnalysis,
    AnalysisMetadata,
    AnalysisQuality,
    ContentArea,
    DetectedPattern,
    PatternComplexity,
    PatternDomain,
    PatternInsights,
    PatternScale,
    PatternType,
)

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.25
MIN_OVERLAY_STEPS = 3
MAX_OVERLAY_STEPS = 5
PAD_STEP = "Continue pattern development"

_FALLBACK_ANCHORS = [{"x": 25.0, "y": 25.0}, {"x": 75.0, "y": 75.0}]
_FALLBACK_CONFIDENCE = 0.5

_QUALITY_HIGH = 0.7
_QUALITY_MEDIUM = 0.5

_DOMAIN_VALUES = frozenset(d.value for d in PatternDomain)
_SCALE_VALUES = frozenset(s.value for s in PatternScale)
_COMPLEXITY_VALUES = frozenset(c.value for c in PatternComplexity)

# Keyed by the raw model label first, then by taxonomy type.
_DEFAULT_OVERLAY_STEPS: dict[str, list[str]] = {
    PatternType.FIBONACCI.value: [
        "Mark Fibonacci spiral center point",
        "Draw logarithmic spiral curve with φ=1.618 growth",
        "Add golden ratio rectangles",
        "Highlight quarter-arc segments",
    ],
    "elliott_wave": [
        "Mark 5 wave peaks and troughs",
        "Connect wave progression 1→2→3→4→5",
        "Add Fibonacci retracement levels (38.2%, 61.8%)",
        "Highlight Wave 3 impulse strength",
    ],
    "sacred_geometry": [
        "Plot center point and primary circles",
        "Add overlapping circles for sacred pattern",
        "Connect intersection points",
        "Complete geometric mandala",
    ],
    "fractal": [
        "Identify self-similar regions at 3 scales",
        "Mark recursive branching points",
        "Connect fractal structure",
        "Highlight scale-invariant patterns",
    ],
    "spiral": [
        "Mark spiral center and growth direction",
        "Draw curve with consistent growth rate",
        "Add rotation markers every 90°",
        "Complete spiral progression",
    ],
    PatternType.SYMMETRY.value: [
        "Mark symmetry axis/center",
        "Plot mirrored/rotated anchor points",
        "Connect symmetrical elements",
        "Emphasize balanced structure",
    ],
    "perspective": [
        "Identify vanishing point locations",
        "Draw converging perspective lines",
        "Add horizon line",
        "Complete perspective grid",
    ],
    "head_shoulders": [
        "Mark left shoulder, head, and right shoulder peaks",
        "Draw neckline connecting troughs",
        "Add projected price target below neckline",
        "Highlight reversal pattern structure",
    ],
}

_GENERIC_OVERLAY_STEPS = [
    "Mark key anchor points",
    "Connect primary pattern structure",
    "Add secondary details and measurements",
    "Complete pattern overlay visualization",
]


class AnalysisError(Exception):
    """A model response that cannot be repaired."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_one_of(value: Any, allowed: frozenset[str]) -> bool:
    return isinstance(value, str) and value in allowed


def default_overlay_steps(label: str | None, pattern_type: PatternType) -> list[str]:
    for key in (label, pattern_type.value):
        if key in _DEFAULT_OVERLAY_STEPS:
            return list(_DEFAULT_OVERLAY_STEPS[key])
    return list(_GENERIC_OVERLAY_STEPS)


def sanitize_content_area(raw: Any) -> ContentArea:
    if not isinstance(raw, dict):
        logger.warning("Missing contentArea, assuming full image")
        return ContentArea()

    artifacts = raw.get("detectedArtifacts")
    coords = {k: raw.get(k) for k in ("topLeftX", "topLeftY", "bottomRightX", "bottomRightY")}
    if not all(_is_number(v) for v in coords.values()):
        logger.warning("Non-numeric contentArea %r, resetting to full image", coords)
        return ContentArea()

    confidence = raw.get("confidence")
    area = ContentArea(
        **coords,
        confidence=confidence if _is_number(confidence) else _FALLBACK_CONFIDENCE,
        detected_artifacts=[str(a) for a in artifacts] if isinstance(artifacts, list) else [],
    )
    if not area.is_valid:
        logger.warning("Invalid content area coordinates %r, resetting to full image", coords)
        return ContentArea()
    return area


def _sanitize_anchors(raw: Any, name: str) -> list[dict[str, float]]:
    if not isinstance(raw, list):
        logger.warning("Pattern %r missing anchors, using defaults", name)
        return list(_FALLBACK_ANCHORS)

    valid = []
    for anchor in raw:
        x = anchor.get("x") if isinstance(anchor, dict) else None
        y = anchor.get("y") if isinstance(anchor, dict) else None
        if _is_number(x) and _is_number(y) and 0 <= x <= 100 and 0 <= y <= 100:
            valid.append({"x": float(x), "y": float(y)})
        else:
            logger.warning("Invalid anchor %r removed from %r", anchor, name)

    if len(valid) < 2:
        return list(_FALLBACK_ANCHORS)
    return valid


def _sanitize_measurements(raw: Any) -> dict[str, float | list[float]]:
    if not isinstance(raw, dict):
        return {}
    clean: dict[str, float | list[float]] = {}
    for key, value in raw.items():
        if _is_number(value):
            clean[key] = float(value)
        elif isinstance(value, list) and all(_is_number(v) for v in value):
            clean[key] = [float(v) for v in value]
    return clean


def sanitize_pattern(raw: dict[str, Any]) -> DetectedPattern:
    name = str(raw.get("name") or "Unnamed Pattern")
    label = raw.get("type")
    pattern_type = normalize_pattern_type(label)
    subtype = raw.get("subtype")
    if not subtype and isinstance(label, str) and label and not is_valid_pattern_type(label):
        subtype = label

    steps = raw.get("overlaySteps")
    if not isinstance(steps, list) or not steps:
        logger.warning("Pattern %r missing overlaySteps, generating defaults", name)
        steps = default_overlay_steps(label if isinstance(label, str) else None, pattern_type)
    steps = [str(s) for s in steps]
    if len(steps) < MIN_OVERLAY_STEPS:
        logger.warning("Pattern %r has only %d steps, padding to %d", name, len(steps), MIN_OVERLAY_STEPS)
        steps += [PAD_STEP] * (MIN_OVERLAY_STEPS - len(steps))
    if len(steps) > MAX_OVERLAY_STEPS:
        logger.warning("Pattern %r has %d steps, truncating to %d", name, len(steps), MAX_OVERLAY_STEPS)
        steps = steps[:MAX_OVERLAY_STEPS]

    confidence = raw.get("confidence")
    if not _is_number(confidence) or not 0 <= confidence <= 1:
        logger.warning("Invalid confidence %r for %r, setting to %s", confidence, name, _FALLBACK_CONFIDENCE)
        confidence = _FALLBACK_CONFIDENCE

    domain = raw.get("domain")
    if not _is_one_of(domain, _DOMAIN_VALUES):
        domain = PatternDomain.OTHER.value

    scale = raw.get("scale")
    if not _is_one_of(scale, _SCALE_VALUES):
        scale = PatternScale.MACRO.value

    orientation = raw.get("orientation")
    if not _is_number(orientation) or not 0 <= orientation <= 360:
        orientation = 0.0

    return DetectedPattern(
        type=pattern_type,
        subtype=str(subtype) if subtype else None,
        name=name,
        confidence=float(confidence),
        anchors=_sanitize_anchors(raw.get("anchors"), name),
        measurements=_sanitize_measurements(raw.get("measurements")),
        overlay_steps=steps,
        domain=domain,
        scale=scale,
        orientation=float(orientation),
    )


def _placeholder_pattern() -> DetectedPattern:
    return DetectedPattern(
        type=PatternType.CUSTOM,
        subtype="unidentified",
        name="No Clear Pattern Detected",
        confidence=0.3,
        anchors=[{"x": 50.0, "y": 50.0}],
        measurements={},
        overlay_steps=["No clear geometric pattern found in this image"],
        domain=PatternDomain.OTHER,
        scale=PatternScale.MACRO,
        orientation=0.0,
    )


def _complexity_for(count: int) -> PatternComplexity:
    if count >= 3:
        return PatternComplexity.COMPLEX
    if count == 2:
        return PatternComplexity.MODERATE
    return PatternComplexity.SIMPLE


def sanitize_insights(raw: Any, patterns: list[DetectedPattern]) -> PatternInsights:
    data = dict(raw) if isinstance(raw, dict) else {}
    if not _is_one_of(data.get("primaryDomain"), _DOMAIN_VALUES):
        data["primaryDomain"] = patterns[0].domain if patterns else PatternDomain.OTHER
    if not _is_one_of(data.get("patternComplexity"), _COMPLEXITY_VALUES):
        data["patternComplexity"] = _complexity_for(len(patterns))
    actions = data.get("suggestedActions")
    data["suggestedActions"] = [str(a) for a in actions] if isinstance(actions, list) else []
    for key in ("explanation", "secretMessage", "shareCaption", "mathematicalContext", "culturalContext"):
        if not isinstance(data.get(key), str) or not data[key]:
            data.pop(key, None)
    return PatternInsights.model_validate(data)


def assess_quality(patterns: list[DetectedPattern]) -> AnalysisQuality:
    if not patterns:
        return AnalysisQuality.LOW
    avg = sum(p.confidence for p in patterns) / len(patterns)
    if avg > _QUALITY_HIGH:
        return AnalysisQuality.HIGH
    if avg > _QUALITY_MEDIUM:
        return AnalysisQuality.MEDIUM
    return AnalysisQuality.LOW


def sanitize_analysis(
    raw: Any,
    model_version: str = "",
    min_confidence: float = MIN_CONFIDENCE,
) -> AIPatternAnalysis:
    """Validate and repair a decoded analysis response."""
    if not isinstance(raw, dict):
        raise AnalysisError("AI response is not a JSON object", "INVALID_RESPONSE")

    content_area = sanitize_content_area(raw.get("contentArea"))

    raw_patterns = raw.get("patterns")
    if not isinstance(raw_patterns, list):
        raise AnalysisError("AI response has invalid structure", "INVALID_RESPONSE")

    patterns = [sanitize_pattern(p) for p in raw_patterns if isinstance(p, dict)]

    kept = [p for p in patterns if p.confidence >= min_confidence]
    if len(kept) < len(patterns):
        logger.info(
            "Filtered %d low-confidence patterns (below %s)", len(patterns) - len(kept), min_confidence
        )
    if not kept:
        logger.warning("No patterns detected, adding placeholder")
        kept = [_placeholder_pattern()]

    insights = sanitize_insights(raw.get("insights"), kept)
    quality = assess_quality(kept)

    logger.info(
        "Pattern analysis: %d patterns, primary domain %s, quality %s",
        len(kept),
        insights.primary_domain.value,
        quality.value,
    )
    for idx, p in enumerate(kept, 1):
        logger.debug(
            "  %d. %s (%s) confidence=%.1f%% anchors=%d steps=%d",
            idx,
            p.name,
            p.type.value,
            p.confidence * 100,
            len(p.anchors),
            len(p.overlay_steps),
        )

    return AIPatternAnalysis(
        content_area=content_area,
        patterns=kept,
        insights=insights,
        metadata=AnalysisMetadata(model_version=model_version, analysis_quality=quality),
    )

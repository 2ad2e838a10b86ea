"""Pattern type taxonomy — collapse free-form AI labels onto the closed PatternType enum.

The vision model has described patterns with ~30 labels over time
(``elliott_wave``, ``golden_angle``, ``head_shoulders``, ``radial`` ...).
Everything downstream only ever sees the four PatternType values:

  label is already a PatternType value        → unchanged
  says unknown / ambiguous / unclear          → custom
  contains a fibonacci keyword (spiral, phi…)  → fibonacci
  contains a symmetry keyword (mirror, radial…)→ symmetry
  contains a geometric keyword (grid, wedge…)  → geometric
  anything else, "", non-strings             → custom

Buckets are checked in that order, so ``elliott_wave`` is fibonacci even
though ``wave`` alone is geometric.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from visionflow.models.pattern import PatternType

logger = logging.getLogger(__name__)

_VALID_VALUES = frozenset(t.value for t in PatternType)

_FIBONACCI_KEYWORDS = (
    "fibonacci",
    "golden",
    "spiral",
    "phi",
    "elliott",
    "logarithmic",
    "phyllotaxis",
    "nautilus",
    "retracement",
)

_SYMMETRY_KEYWORDS = (
    "symmetr",
    "bilateral",
    "radial",
    "mirror",
    "reflect",
    "rotational",
    "balance",
    "axis",
)

_GEOMETRIC_KEYWORDS = (
    "geometr",
    "repetition",
    "repeat",
    "grid",
    "tile",
    "tessellat",
    "pattern",
    "fractal",
    "shape",
    "polygon",
    "triangle",
    "square",
    "circle",
    "hexagon",
    "sacred",
    "channel",
    "pitchfork",
    "wave",
    "head_shoulders",
    "head_and_shoulders",
    "wedge",
    "flag",
    "pennant",
    "double_top",
    "double_bottom",
    "cup_handle",
    "cup_and_handle",
    "voronoi",
    "perspective",
    "lattice",
    "mandala",
)

# Explicitly unclassifiable labels win over any keyword they happen to contain.
_CUSTOM_KEYWORDS = ("unknown", "unidentified", "ambiguous", "unclear", "none")

KEYWORD_BUCKETS: tuple[tuple[PatternType, tuple[str, ...]], ...] = (
    (PatternType.CUSTOM, _CUSTOM_KEYWORDS),
    (PatternType.FIBONACCI, _FIBONACCI_KEYWORDS),
    (PatternType.SYMMETRY, _SYMMETRY_KEYWORDS),
    (PatternType.GEOMETRIC, _GEOMETRIC_KEYWORDS),
)

# "Head & Shoulders", "double-top" and "cup and handle" all reduce to the snake_case keywords.
_SEPARATORS_RE = re.compile(r"[\s\-&/_]+")


def _canonical(label: str) -> str:
    text = label.strip().lower().replace("&", "_and_")
    return _SEPARATORS_RE.sub("_", text).strip("_")


def _matches(keyword: str, canonical: str, tokens: list[str]) -> bool:
    # Short keywords only match at a word start ("phi" must not hit "graphic").
    if len(keyword) <= 4:
        return any(t.startswith(keyword) for t in tokens)
    return keyword in canonical


def is_valid_pattern_type(label: Any) -> bool:
    """True iff ``label`` is exactly one of the PatternType values."""
    if isinstance(label, PatternType):
        return True
    return isinstance(label, str) and label in _VALID_VALUES


def validate_pattern_type(label: Any) -> PatternType:
    """Strict check: return the member, or CUSTOM with a warning for anything else."""
    if not is_valid_pattern_type(label):
        logger.warning("Invalid pattern type %r, falling back to %s", label, PatternType.CUSTOM.value)
        return PatternType.CUSTOM
    return PatternType(label)


def normalize_pattern_type(label: Any) -> PatternType:
    """Map any label onto the taxonomy. Never raises."""
    if is_valid_pattern_type(label):
        return PatternType(label)
    if not isinstance(label, str):
        logger.debug("Non-string pattern label %r coerced to custom", label)
        return PatternType.CUSTOM

    canonical = _canonical(label)
    tokens = canonical.split("_")
    for pattern_type, keywords in KEYWORD_BUCKETS:
        if any(_matches(k, canonical, tokens) for k in keywords):
            logger.debug("Pattern label %r normalized to %s", label, pattern_type.value)
            return pattern_type

    logger.debug("Unrecognized pattern label %r coerced to custom", label)
    return PatternType.CUSTOM

"""Pattern library operations over in-memory records: load, filter, sort, stats, edits.

Storage itself lives elsewhere; these functions take and return plain lists of
Pattern models. Loading always goes through the Pattern model, so records
saved under an older taxonomy come back with a current ``type``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from typing import Any, Literal

from pydantic import Field, ValidationError

from visionflow.models.pattern import (
    AnalysisQuality,
    CamelModel,
    Pattern,
    PatternDomain,
    PatternScale,
    PatternType,
    now_ms,
)

logger = logging.getLogger(__name__)

SortBy = Literal["confidence", "created", "updated", "type", "name", "domain"]
SortOrder = Literal["asc", "desc"]


class DateRange(CamelModel):
    start: datetime
    end: datetime


class PatternFilters(CamelModel):
    """``None`` / ``"all"`` disables a criterion."""

    type: PatternType | Literal["all"] = "all"
    source: Literal["ai", "manual", "all"] = "all"
    domain: PatternDomain | Literal["all"] = "all"
    scale: PatternScale | Literal["all"] = "all"
    min_confidence: float | None = None
    tags: list[str] | None = None
    date_range: DateRange | None = None
    is_favorite: bool | None = None


class PatternStatistics(CamelModel):
    total_patterns: int = 0
    ai_generated: int = 0
    manual: int = 0
    favorite_count: int = 0
    by_type: dict[PatternType, int] = Field(default_factory=dict)
    by_domain: dict[PatternDomain, int] = Field(default_factory=dict)
    average_confidence: float = 0.0
    average_quality: AnalysisQuality = AnalysisQuality.LOW
    most_common_pattern: PatternType | None = None
    most_common_domain: PatternDomain | None = None


def load_patterns(records: Iterable[Any]) -> list[Pattern]:
    """Re-validate stored records. Unreadable records are skipped with a warning."""
    patterns: list[Pattern] = []
    for record in records:
        try:
            patterns.append(Pattern.model_validate(record))
        except ValidationError as e:
            logger.warning("Skipping unreadable pattern record: %s", e.errors()[:1])
    return patterns


def _epoch_ms(value: datetime) -> float:
    return value.timestamp() * 1000


def filter_patterns(patterns: Iterable[Pattern], filters: PatternFilters) -> list[Pattern]:
    result = list(patterns)

    if filters.type != "all":
        result = [p for p in result if p.type == filters.type]
    if filters.source != "all":
        result = [p for p in result if p.source == filters.source]
    if filters.domain != "all":
        result = [p for p in result if p.domain == filters.domain]
    if filters.scale != "all":
        result = [p for p in result if p.scale == filters.scale]
    if filters.min_confidence is not None:
        result = [
            p for p in result if p.confidence is not None and p.confidence >= filters.min_confidence
        ]
    if filters.tags:
        wanted = set(filters.tags)
        result = [p for p in result if p.tags and wanted.intersection(p.tags)]
    if filters.date_range is not None:
        start = _epoch_ms(filters.date_range.start)
        end = _epoch_ms(filters.date_range.end)
        result = [p for p in result if start <= p.created_at <= end]
    if filters.is_favorite is not None:
        result = [p for p in result if p.is_favorite == filters.is_favorite]

    return result


_SORT_KEYS = {
    "confidence": lambda p: p.confidence or 0.0,
    "created": lambda p: p.created_at,
    "updated": lambda p: p.updated_at,
    "type": lambda p: p.type.value,
    "name": lambda p: p.name.lower(),
    "domain": lambda p: p.domain.value if p.domain else "",
}


def sort_patterns(
    patterns: Iterable[Pattern], by: SortBy = "created", order: SortOrder = "desc"
) -> list[Pattern]:
    return sorted(patterns, key=_SORT_KEYS[by], reverse=order == "desc")


def _quality_for(avg: float) -> AnalysisQuality:
    if avg > 0.7:
        return AnalysisQuality.HIGH
    if avg > 0.5:
        return AnalysisQuality.MEDIUM
    return AnalysisQuality.LOW


def pattern_statistics(patterns: Iterable[Pattern]) -> PatternStatistics:
    patterns = list(patterns)
    if not patterns:
        return PatternStatistics(
            by_type={t: 0 for t in PatternType},
            by_domain={d: 0 for d in PatternDomain},
        )

    type_counts = Counter(p.type for p in patterns)
    domain_counts = Counter(p.domain or PatternDomain.OTHER for p in patterns)
    confidences = [p.confidence for p in patterns if p.confidence is not None]
    avg = sum(confidences) / len(confidences) if confidences else 0.0

    return PatternStatistics(
        total_patterns=len(patterns),
        ai_generated=sum(1 for p in patterns if p.source == "ai"),
        manual=sum(1 for p in patterns if p.source == "manual"),
        favorite_count=sum(1 for p in patterns if p.is_favorite),
        by_type={t: type_counts.get(t, 0) for t in PatternType},
        by_domain={d: domain_counts.get(d, 0) for d in PatternDomain},
        average_confidence=round(avg, 4),
        average_quality=_quality_for(avg),
        most_common_pattern=type_counts.most_common(1)[0][0],
        most_common_domain=domain_counts.most_common(1)[0][0],
    )


def update_pattern(pattern: Pattern, **updates: Any) -> Pattern:
    """Copy with ``updates`` applied, re-validated, and ``updated_at`` refreshed."""
    data = pattern.model_dump()
    data.update(updates)
    data["updated_at"] = now_ms()
    return Pattern.model_validate(data)


def toggle_favorite(pattern: Pattern) -> Pattern:
    return update_pattern(pattern, is_favorite=not pattern.is_favorite)

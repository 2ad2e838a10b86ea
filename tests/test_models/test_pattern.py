"""Tests for the pattern data model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from visionflow.models.pattern import (
    PATTERN_COLORS,
    ContentArea,
    Pattern,
    PatternType,
    get_pattern_type_description,
    get_pattern_type_label,
)
from tests.conftest import make_record


def test_record_loads_from_camel_case():
    p = Pattern.model_validate(make_record(isFavorite=True, userNotes="nice"))
    assert p.image_uri == "file:///tmp/grid.jpg"
    assert p.is_favorite is True
    assert p.user_notes == "nice"
    assert p.anchors[0].x == 10


def test_dump_by_alias_is_camel_case():
    data = Pattern.model_validate(make_record()).model_dump(by_alias=True)
    assert {"imageUri", "createdAt", "updatedAt", "isFavorite", "overlaySteps"} <= set(data)
    assert data["type"] == PatternType.GEOMETRIC


def test_legacy_type_is_normalized_and_kept_as_subtype():
    p = Pattern.model_validate(make_record(type="sacred_geometry"))
    assert p.type == PatternType.GEOMETRIC
    assert p.subtype == "sacred_geometry"


def test_existing_subtype_is_not_overwritten():
    p = Pattern.model_validate(make_record(type="golden_spiral", subtype="nautilus"))
    assert p.type == PatternType.FIBONACCI
    assert p.subtype == "nautilus"


def test_valid_type_has_no_subtype():
    p = Pattern.model_validate(make_record(type="symmetry"))
    assert p.subtype is None


def test_enum_type_passes_through():
    p = Pattern(name="Spiral", type=PatternType.FIBONACCI)
    assert p.type == PatternType.FIBONACCI
    assert p.source == "manual"
    assert p.id


def test_missing_type_defaults_to_custom():
    assert Pattern(name="Sketch").type == PatternType.CUSTOM


@pytest.mark.parametrize("confidence", [-0.1, 1.01])
def test_confidence_bounds(confidence):
    with pytest.raises(ValidationError):
        Pattern.model_validate(make_record(confidence=confidence))


def test_content_area_validity():
    assert ContentArea().is_valid
    assert not ContentArea(top_left_x=60, bottom_right_x=40).is_valid
    assert not ContentArea(bottom_right_y=101).is_valid


def test_every_type_has_color_label_description():
    for t in PatternType:
        assert PATTERN_COLORS[t].startswith("#")
        assert get_pattern_type_label(t) != "Unknown"
        assert get_pattern_type_description(t) != "Unknown pattern type"


def test_unknown_type_label():
    assert get_pattern_type_label("wave") == "Unknown"
    assert get_pattern_type_description("wave") == "Unknown pattern type"

"""Tests for the pattern geometry engine."""

from __future__ import annotations

import math
import re

import pytest

from visionflow.engine.config import RenderConfig, Viewport
from visionflow.engine.geometry import (
    fill_color,
    generate_path,
    get_dash_pattern,
    get_fill_opacity,
    render_pattern,
    render_patterns,
)
from visionflow.models.pattern import AnchorPoint, Pattern, PatternType
from visionflow.svg.path_data import command_letters
from tests.conftest import CHANNEL_ANCHORS, TRIANGLE_ANCHORS, UNIT_CONFIG, WAVE_ANCHORS

ALL_KINDS = [
    "fibonacci",
    "wave",
    "geometric",
    "symmetry",
    "sacred_geometry",
    "channel",
    "pitchfork",
    "custom",
    "something_else",
]


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_empty_anchors_give_empty_path(kind):
    assert generate_path(kind, [], {}, UNIT_CONFIG) == ""


# --- Fibonacci spiral ---


def test_fibonacci_single_anchor_uses_fallback_radius():
    path = generate_path("fibonacci", [(50, 50)], {}, UNIT_CONFIG)
    assert path.startswith("M 50 70 ")
    # First arc keeps r=20 and ends at angle π on radius 20·φ
    assert path.startswith("M 50 70 A 20 20 0 0 1 17.64 50")


def test_fibonacci_radius_from_second_anchor():
    # Distance 30px → starting radius 10
    path = generate_path("fibonacci", [(50, 50), (50, 80)], {}, UNIT_CONFIG)
    assert path.startswith("M 50 60 A 10 10 ")


@pytest.mark.parametrize("count", [1, 2, 3, 7])
def test_fibonacci_always_four_arcs(count):
    anchors = [(10 + i * 10, 20 + i * 5) for i in range(count)]
    path = generate_path(PatternType.FIBONACCI, anchors, {}, UNIT_CONFIG)
    assert command_letters(path) == ["M", "A", "A", "A", "A"]


def test_fibonacci_growth_follows_golden_ratio_measurement():
    path = generate_path("fibonacci", [(50, 50)], {"goldenRatio": 2.0}, UNIT_CONFIG)
    radii = re.findall(r"A (\S+) ", path)
    assert radii == ["20", "40", "80", "160"]


def test_fibonacci_default_golden_ratio():
    path = generate_path("fibonacci", [(50, 50)], {}, UNIT_CONFIG)
    radii = [float(r) for r in re.findall(r"A (\S+) ", path)]
    for prev, nxt in zip(radii, radii[1:]):
        assert nxt / prev == pytest.approx(1.618, rel=1e-3)


def test_fibonacci_zero_golden_ratio_falls_back_to_default():
    with_zero = generate_path("fibonacci", [(50, 50)], {"goldenRatio": 0}, UNIT_CONFIG)
    default = generate_path("fibonacci", [(50, 50)], {}, UNIT_CONFIG)
    assert with_zero == default


def test_fibonacci_last_arc_closes_full_turn():
    path = generate_path("fibonacci", [(50, 50)], {"goldenRatio": 2.0}, UNIT_CONFIG)
    # After 360° the endpoint sits straight below the center on radius 20·2⁴
    last = path.split(" A ")[-1].split()
    assert float(last[-2]) == pytest.approx(50, abs=1e-3)
    assert float(last[-1]) == pytest.approx(50 + 320, abs=1e-3)


def test_fibonacci_fallback_radius_is_configurable():
    config = RenderConfig(viewport=Viewport(100, 100), fallback_radius=5)
    assert generate_path("fibonacci", [(50, 50)], None, config).startswith("M 50 55 ")


# --- Wave ---


def test_wave_three_anchors():
    path = generate_path("wave", WAVE_ANCHORS, {}, UNIT_CONFIG)
    assert path.startswith("M 0 0")
    assert command_letters(path).count("C") == 2
    assert path == (
        "M 0 0 C 16.6667 0, 33.3333 50, 50 50 C 66.6667 50, 83.3333 0, 100 0"
    )


def test_wave_needs_two_anchors():
    assert generate_path("wave", [(10, 10)], {}, UNIT_CONFIG) == ""


# --- Closed polygons ---


@pytest.mark.parametrize("kind", ["geometric", "symmetry", "sacred_geometry"])
def test_closed_polygon_three_anchors(kind):
    path = generate_path(kind, TRIANGLE_ANCHORS, {}, UNIT_CONFIG)
    assert command_letters(path) == ["M", "L", "L", "Z"]
    assert path == "M 0 0 L 100 0 L 50 100 Z"


@pytest.mark.parametrize("kind", ["geometric", "symmetry"])
def test_closed_polygon_needs_three_anchors(kind):
    assert generate_path(kind, [(0, 0), (10, 10)], {}, UNIT_CONFIG) == ""


def test_polygon_with_many_anchors_emits_all_points():
    anchors = [(i * 2, (i * 7) % 100) for i in range(50)]
    letters = command_letters(generate_path("geometric", anchors, {}, UNIT_CONFIG))
    assert letters == ["M"] + ["L"] * 49 + ["Z"]


# --- Open polylines ---


@pytest.mark.parametrize("kind", ["channel", "pitchfork"])
@pytest.mark.parametrize("count", [2, 3, 4])
def test_open_polyline_point_count(kind, count):
    path = generate_path(kind, CHANNEL_ANCHORS[:count], {}, UNIT_CONFIG)
    letters = command_letters(path)
    assert len(letters) == count
    assert "Z" not in letters


def test_unknown_kind_falls_back_to_polyline():
    assert generate_path("head_shoulders", CHANNEL_ANCHORS, {}, UNIT_CONFIG) == generate_path(
        "channel", CHANNEL_ANCHORS, {}, UNIT_CONFIG
    )


def test_custom_single_anchor_is_empty():
    assert generate_path("custom", [(50, 50)], {}, UNIT_CONFIG) == ""


# --- Scaling ---


def test_default_viewport_is_four_by_three():
    path = generate_path("channel", [(0, 0), (100, 100)])
    assert path == "M 0 0 L 390 292.5"


def test_content_area_viewport_offsets_anchors():
    from visionflow.models.pattern import ContentArea

    area = ContentArea(top_left_x=10, top_left_y=20, bottom_right_x=90, bottom_right_y=70)
    config = RenderConfig(viewport=Viewport.from_content_area(1000, 800, area))
    path = generate_path("channel", [(0, 0), (50, 50)], {}, config)
    assert path == "M 100 160 L 500 360"


def test_accepts_anchor_models():
    anchors = [AnchorPoint(x=0, y=0), AnchorPoint(x=100, y=0), AnchorPoint(x=50, y=100)]
    assert generate_path("geometric", anchors, {}, UNIT_CONFIG) == "M 0 0 L 100 0 L 50 100 Z"


def test_nan_coordinates_do_not_raise():
    path = generate_path("channel", [(math.nan, 0), (10, 10)], {}, UNIT_CONFIG)
    assert path.startswith("M nan 0")


# --- Decorative hints ---


def test_dash_pattern_only_for_open_kinds():
    assert get_dash_pattern("channel") == "10 10"
    assert get_dash_pattern("pitchfork") == "10 10"
    for kind in ("fibonacci", "wave", "geometric", "symmetry", "custom"):
        assert get_dash_pattern(kind) is None


def test_fill_opacity():
    assert get_fill_opacity("geometric") == 0.15
    assert get_fill_opacity(PatternType.SYMMETRY) == 0.15
    assert get_fill_opacity("sacred_geometry") == 0.15
    assert get_fill_opacity("wave") == 0
    assert get_fill_opacity("channel") == 0
    assert get_fill_opacity("fibonacci") == 0


def test_fill_color_alpha():
    assert fill_color("#A855F7", 0.15) == "#A855F726"
    assert fill_color("#A855F7", 0) == "none"


# --- Rendering bundle ---


def test_render_pattern_legacy_kind_keeps_shape_and_maps_color():
    rendered = render_pattern("channel", CHANNEL_ANCHORS, {}, UNIT_CONFIG, pattern_id="c1")
    assert rendered.id == "c1"
    assert rendered.kind == "channel"
    assert rendered.type == PatternType.GEOMETRIC
    assert rendered.stroke_color == "#A855F7"
    assert rendered.dash_array == "10 10"
    assert rendered.fill_color == "none"
    assert not rendered.closed
    assert rendered.anchors_px[0] == (10.0, 20.0)


def test_render_pattern_closed_polygon():
    rendered = render_pattern(PatternType.SYMMETRY, TRIANGLE_ANCHORS, {}, UNIT_CONFIG)
    assert rendered.closed
    assert rendered.fill_opacity == 0.15
    assert rendered.fill_color == "#6366F126"


def test_render_pattern_without_anchors():
    rendered = render_pattern("fibonacci", [], {}, UNIT_CONFIG)
    assert rendered.path == ""
    assert rendered.anchors_px == []
    assert not rendered.closed


def test_render_patterns_from_models():
    patterns = [
        Pattern(name="Spiral", type="fibonacci", anchors=[{"x": 50, "y": 50}]),
        Pattern(name="Grid", type="geometric", anchors=[{"x": x, "y": y} for x, y in TRIANGLE_ANCHORS]),
    ]
    rendered = render_patterns(patterns, UNIT_CONFIG)
    assert [r.name for r in rendered] == ["Spiral", "Grid"]
    assert rendered[0].id == patterns[0].id
    assert rendered[0].stroke_color == "#FACC15"
    assert rendered[1].path.endswith("Z")


def test_generate_path_is_deterministic():
    a = generate_path("fibonacci", [(30, 40), (60, 80)], {"goldenRatio": 1.5}, UNIT_CONFIG)
    b = generate_path("fibonacci", [(30, 40), (60, 80)], {"goldenRatio": 1.5}, UNIT_CONFIG)
    assert a == b


def test_dict_anchors_render_like_tuples():
    dict_anchors = [{"x": x, "y": y} for x, y in TRIANGLE_ANCHORS]
    assert generate_path("geometric", dict_anchors, {}, UNIT_CONFIG) == "M 0 0 L 100 0 L 50 100 Z"
    rendered = render_pattern("channel", dict_anchors, {}, UNIT_CONFIG)
    assert rendered.anchors_px == [(0.0, 0.0), (100.0, 0.0), (50.0, 100.0)]

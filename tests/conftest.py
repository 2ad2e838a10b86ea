"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest

from visionflow.engine.config import RenderConfig, Viewport

# 100×100 viewport: percentages map 1:1 onto pixels.
UNIT_CONFIG = RenderConfig(viewport=Viewport(width=100.0, height=100.0))

WAVE_ANCHORS = [(0, 0), (50, 50), (100, 0)]
TRIANGLE_ANCHORS = [(0, 0), (100, 0), (50, 100)]
CHANNEL_ANCHORS = [(10, 20), (30, 40), (50, 20), (70, 40)]

# Decoded vision-model response with the usual mix of good and broken fields
RAW_ANALYSIS = {
    "contentArea": {
        "topLeftX": 8,
        "topLeftY": 12,
        "bottomRightX": 92,
        "bottomRightY": 88,
        "confidence": 0.9,
        "detectedArtifacts": ["google_border"],
    },
    "patterns": [
        {
            "type": "elliott_wave",
            "name": "Impulse Wave",
            "confidence": 0.82,
            "anchors": [{"x": 10, "y": 80}, {"x": 30, "y": 40}, {"x": 45, "y": 60}],
            "measurements": {"waveCount": 5, "angles": [30, 45]},
            "overlaySteps": ["Mark peaks", "Connect waves", "Add levels"],
            "domain": "finance",
            "scale": "macro",
            "orientation": 15,
        },
        {
            "type": "radial",
            "name": "Flower Symmetry",
            "confidence": 0.64,
            "anchors": [{"x": 50, "y": 50}, {"x": 70, "y": 50}],
            "measurements": {"symmetryAxes": 6},
            "overlaySteps": ["Mark center", "Plot petals", "Connect", "Balance"],
            "domain": "nature",
            "scale": "meso",
            "orientation": 0,
        },
    ],
    "insights": {
        "explanation": "A five-wave impulse with a radial flower motif.",
        "secretMessage": "Growth follows the spiral.",
        "shareCaption": "Patterns everywhere.",
        "primaryDomain": "finance",
        "patternComplexity": "moderate",
        "suggestedActions": ["Wait for wave 5 confirmation"],
    },
}


def make_record(**overrides) -> dict:
    record = {
        "id": "p-1",
        "type": "geometric",
        "name": "Grid",
        "confidence": 0.7,
        "anchors": [{"x": 10, "y": 10}, {"x": 90, "y": 10}, {"x": 50, "y": 90}],
        "measurements": {},
        "source": "ai",
        "imageUri": "file:///tmp/grid.jpg",
        "createdAt": 1_700_000_000_000,
        "updatedAt": 1_700_000_000_000,
    }
    record.update(overrides)
    return record


@pytest.fixture
def unit_config() -> RenderConfig:
    return UNIT_CONFIG


@pytest.fixture
def raw_analysis() -> dict:
    return copy.deepcopy(RAW_ANALYSIS)

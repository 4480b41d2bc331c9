#!/usr/bin/env python3
"""
Situation classifier priority order and narrative templates
"""

from datetime import datetime

import pytest

from flood_engine.ladder import Ladder, above
from flood_engine.models import (
    HydrologyFlag,
    LandslideGrade,
    NewsType,
    RiskLevel,
    SinkholeGrade,
    TerrainAssessment,
    TerrainCategory,
)
from flood_engine.narrative import (
    build_intel_brief,
    build_news_feed,
    generate_narrative,
    hazard_badge,
    summarize_risk,
)
from flood_engine.situation import classify_situation

VALLEY = TerrainAssessment(TerrainCategory.VALLEY, 40.0, 160.0)
PEAK = TerrainAssessment(TerrainCategory.PEAK, 55.0, 20.0)
PLAIN = TerrainAssessment(TerrainCategory.PLAIN, 5.0, 50.0)
ISSUED = datetime(2026, 1, 1, 9, 5)


def test_ladder_first_match_wins():
    ladder = Ladder([(above(10), "big"), (above(5), "medium")], default="small")
    assert ladder.resolve(20) == "big"
    assert ladder.resolve(7) == "medium"
    assert ladder.resolve(5) == "small"


@pytest.mark.parametrize("acc, terrain, water, slope, expected", [
    (250, TerrainCategory.VALLEY, HydrologyFlag.DETECTED, 40, "SEVERE FLOODING"),
    (150, TerrainCategory.PLAIN, HydrologyFlag.DETECTED, 0, "RIVER OVERFLOW"),
    (150, TerrainCategory.PLAIN, HydrologyFlag.UNRESOLVED, 0, "FLOODED"),
    (100, TerrainCategory.PLAIN, HydrologyFlag.DETECTED, 0, "WATERLOGGED"),
    (80, TerrainCategory.VALLEY, HydrologyFlag.NONE, 0, "BASIN POOLING"),
    (80, TerrainCategory.PEAK, HydrologyFlag.NONE, 60, "WATERLOGGED"),
    (30, TerrainCategory.PEAK, HydrologyFlag.NONE, 25, "SLIPPERY SLOPES"),
    (30, TerrainCategory.PLAIN, HydrologyFlag.NONE, 10, "WET GROUND"),
    (15, TerrainCategory.PLAIN, HydrologyFlag.NONE, 0, "WET GROUND"),
    (5, TerrainCategory.VALLEY, HydrologyFlag.DETECTED, 90, "NORMAL"),
])
def test_situation_priority(acc, terrain, water, slope, expected):
    assert classify_situation(acc, terrain, water, slope).state == expected


def test_situation_colour_tags():
    assert classify_situation(250, TerrainCategory.PLAIN, HydrologyFlag.NONE, 0).severity_color_tag.startswith("bg-red-600")
    assert classify_situation(0, TerrainCategory.PLAIN, HydrologyFlag.NONE, 0).severity_color_tag == "bg-green-50 text-green-700"


def test_valley_brief_has_three_lines():
    brief = build_intel_brief(VALLEY, 10.0, 120.0, HydrologyFlag.DETECTED)
    assert len(brief) == 3
    assert brief[0].startswith("Analysis: Location is in a valley basin (Elev: 10m).")
    assert "(40m variance)" in brief[0]
    assert brief[1].startswith("Critical Weather: Massive rainfall of 120mm")
    assert brief[2].startswith("Hydrology: Proximity to water body detected.")


def test_peak_brief_with_moderate_rain():
    brief = build_intel_brief(PEAK, 900.0, 60.0, HydrologyFlag.NONE)
    assert brief[0].startswith("Analysis: Location is elevated.")
    assert brief[1] == "Weather Context: Significant rain (60mm) over past 2 days. Soil is responding."
    assert brief[2].startswith("Hydrology: No major river nearby.")


def test_plain_dry_brief_only_has_hydrology_line():
    brief = build_intel_brief(PLAIN, 50.0, 10.0, HydrologyFlag.UNRESOLVED)
    assert brief == [
        "Hydrology: No major river nearby. Flood risk is primarily localized pooling (pluvial)."
    ]


def test_flood_headline_and_river_warning():
    news = build_news_feed("Kandy", 4.0, 150.0, HydrologyFlag.DETECTED, "RIVER OVERFLOW", ISSUED)
    assert [n.type for n in news] == [NewsType.DANGER, NewsType.DANGER]
    assert news[0].headline == "CRITICAL: RIVER OVERFLOW in Kandy"
    assert "150mm" in news[0].body
    assert news[1].headline == "River Level Warning"
    assert all(n.timestamp == "09:05" for n in news)


def test_heavy_rain_warning_mentions_rate_and_wind():
    news = build_news_feed("Galle", 20.0, 30.0, HydrologyFlag.NONE, "WET GROUND", ISSUED, wind_speed=35.5)
    assert len(news) == 1
    assert news[0].type is NewsType.WARNING
    assert news[0].headline == "Heavy Rain Alert: Galle"
    assert "(20mm/h)" in news[0].body
    assert "35.5 km/h" in news[0].body


def test_info_update_plus_river_warning_below_flood_states():
    news = build_news_feed("Kandy", 2.0, 90.0, HydrologyFlag.DETECTED, "WATERLOGGED", "10:30")
    assert news[0].type is NewsType.INFO
    assert news[0].body == "Current status is WATERLOGGED. 48h Rainfall: 90mm."
    assert news[1].headline == "River Level Warning"
    assert news[1].timestamp == "10:30"


def test_narrative_is_deterministic():
    args = ("Kandy", VALLEY, 10.0, 4.0, 120.0, HydrologyFlag.DETECTED, "RIVER OVERFLOW", ISSUED)
    first = generate_narrative(*args)
    assert first == generate_narrative(*args)
    assert len(first.brief_lines) == 3
    assert first.to_dict()["news"][0]["timestamp"] == "09:05"


def test_risk_verdicts():
    assert summarize_risk(RiskLevel.SAFE, 120, HydrologyFlag.NONE)["title"] == "SATURATED SOIL"
    assert summarize_risk(RiskLevel.SAFE, 20, HydrologyFlag.NONE)["title"] == "LIKELY SAFE"
    assert summarize_risk(RiskLevel.CAUTION, 20, HydrologyFlag.DETECTED)["detail"] == "River levels rising."
    assert summarize_risk(RiskLevel.CAUTION, 20, HydrologyFlag.NONE)["detail"] == "Flash flooding possible."
    assert summarize_risk(RiskLevel.DANGER, 20, HydrologyFlag.NONE)["title"] == "DANGER"
    assert summarize_risk(RiskLevel.EXTREME, 300, HydrologyFlag.NONE)["title"] == "EXTREME DANGER"


def test_hazard_badges():
    assert hazard_badge("landslide", LandslideGrade.LOW) is None
    assert hazard_badge("landslide", LandslideGrade.MODERATE)["text"] == "POSSIBLE"
    assert hazard_badge("landslide", LandslideGrade.SEVERE)["text"] == "HIGH RISK"
    badge = hazard_badge("sinkhole", SinkholeGrade.HIGH)
    assert badge["label"] == "SINKHOLE WARNING"
    assert badge["text"] == "HIGH RISK"

# flood_engine/narrative.py
"""
Narrative Generator

Analyst-style brief lines and news-style alerts, interpolated from the
numeric state of the active location. Output depends only on the arguments:
the alert timestamp is passed in rather than read from the clock.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from flood_engine.models import (
    HydrologyFlag,
    LandslideGrade,
    NarrativeBundle,
    NewsItem,
    NewsType,
    RiskLevel,
    SinkholeGrade,
    TerrainAssessment,
    TerrainCategory,
)

HEAVY_RAIN_RATE = 15.0  # mm/h
RIVER_WARNING_ACCUMULATION = 80.0  # mm / 48h


def _format_timestamp(issued_at: Union[datetime, str]) -> str:
    if isinstance(issued_at, datetime):
        return issued_at.strftime("%H:%M")
    return str(issued_at)


def build_intel_brief(
    terrain: TerrainAssessment,
    center_elevation: float,
    accumulated_48h: float,
    hydrology: HydrologyFlag,
) -> List[str]:
    brief = []

    # 1. Terrain
    if terrain.category is TerrainCategory.VALLEY:
        brief.append(
            f"Analysis: Location is in a valley basin (Elev: {center_elevation:.0f}m). "
            f"Runoff from surrounding hills ({terrain.slope_meters:.0f}m variance) "
            f"will accumulate here rapidly."
        )
    elif terrain.category is TerrainCategory.PEAK:
        brief.append(
            "Analysis: Location is elevated. Primary risk is landslide/erosion "
            "rather than deep flooding."
        )

    # 2. Rainfall over the trailing window
    if accumulated_48h > 100:
        brief.append(
            f"Critical Weather: Massive rainfall of {accumulated_48h:.0f}mm recorded "
            f"in last 48h. Ground capacity exceeded."
        )
    elif accumulated_48h > 50:
        brief.append(
            f"Weather Context: Significant rain ({accumulated_48h:.0f}mm) over past "
            f"2 days. Soil is responding."
        )

    # 3. Hydrology, always present
    if hydrology.water_present:
        brief.append(
            "Hydrology: Proximity to water body detected. Saturated soil increases "
            "bank overflow risk."
        )
    else:
        brief.append(
            "Hydrology: No major river nearby. Flood risk is primarily localized "
            "pooling (pluvial)."
        )

    return brief


def build_news_feed(
    place_name: str,
    rain_rate: float,
    accumulated_48h: float,
    hydrology: HydrologyFlag,
    situation_state: str,
    issued_at: Union[datetime, str],
    wind_speed: Optional[float] = None,
) -> List[NewsItem]:
    timestamp = _format_timestamp(issued_at)
    items = []

    if "FLOOD" in situation_state or "OVERFLOW" in situation_state:
        items.append(NewsItem(
            NewsType.DANGER,
            f"CRITICAL: {situation_state} in {place_name}",
            f"Total 48h rainfall of {accumulated_48h:.0f}mm recorded. "
            f"Major flooding reported in low-lying areas.",
            timestamp,
        ))
    elif rain_rate > HEAVY_RAIN_RATE:
        body = f"Intense downpour ({rain_rate:g}mm/h) detected. Flash flood risk increasing rapidly."
        if wind_speed:
            body += f" Winds at {wind_speed:g} km/h."
        items.append(NewsItem(NewsType.WARNING, f"Heavy Rain Alert: {place_name}", body, timestamp))
    else:
        items.append(NewsItem(
            NewsType.INFO,
            f"Situational Update: {place_name}",
            f"Current status is {situation_state}. 48h Rainfall: {accumulated_48h:.0f}mm.",
            timestamp,
        ))

    if hydrology.water_present and accumulated_48h > RIVER_WARNING_ACCUMULATION:
        items.append(NewsItem(
            NewsType.DANGER,
            "River Level Warning",
            "High runoff volume entering local water bodies. Bank breach possible.",
            timestamp,
        ))

    return items


def generate_narrative(
    place_name: str,
    terrain: TerrainAssessment,
    center_elevation: float,
    rain_rate: float,
    accumulated_48h: float,
    hydrology: HydrologyFlag,
    situation_state: str,
    issued_at: Union[datetime, str],
    wind_speed: Optional[float] = None,
) -> NarrativeBundle:
    brief = build_intel_brief(terrain, center_elevation, accumulated_48h, hydrology)
    news = build_news_feed(
        place_name, rain_rate, accumulated_48h, hydrology, situation_state, issued_at, wind_speed
    )
    return NarrativeBundle(tuple(brief), tuple(news))


def summarize_risk(
    risk_level: RiskLevel,
    accumulated_48h: float,
    hydrology: HydrologyFlag,
) -> Dict[str, str]:
    """Headline verdict shown next to a finished risk assessment."""
    if risk_level is RiskLevel.SAFE and accumulated_48h > 100:
        return {"title": "SATURATED SOIL", "detail": "High rain accumulation. Watch for puddles."}
    if risk_level is RiskLevel.SAFE:
        return {"title": "LIKELY SAFE", "detail": "Minimal flood risk detected."}
    if risk_level is RiskLevel.CAUTION:
        detail = "River levels rising." if hydrology.water_present else "Flash flooding possible."
        return {"title": "CAUTION ADVISED", "detail": detail}
    if risk_level is RiskLevel.DANGER:
        return {"title": "DANGER", "detail": "Significant accumulation expected."}
    return {"title": "EXTREME DANGER", "detail": "Major flood event predicted."}


def hazard_badge(kind: str, grade: Union[LandslideGrade, SinkholeGrade]) -> Optional[Dict[str, str]]:
    if grade.value == "low":
        return None
    text = "HIGH RISK" if grade.value in ("high", "severe") else "POSSIBLE"
    return {"hazard": kind, "grade": grade.value, "label": f"{kind.upper()} WARNING", "text": text}

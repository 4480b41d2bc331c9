# flood_engine/risk_resilience/impact_zone.py
from typing import Any, Dict, Union

from flood_engine.models import RiskLevel

IMPACT_FILL_OPACITY = 0.2

# risk level -> (radius in meters, stroke/fill colour)
IMPACT_ZONES = {
    RiskLevel.SAFE: (200, "#22c55e"),
    RiskLevel.CAUTION: (500, "#eab308"),
    RiskLevel.DANGER: (1000, "#f97316"),
    RiskLevel.EXTREME: (2000, "#ef4444"),
}


def impact_zone(risk_level: Union[RiskLevel, str]) -> Dict[str, Any]:
    """
    Circle overlay for the map renderer. Depends on the risk level only, so
    any renderer redraws the same zone for the same assessment.

    Raises ValueError for a level name that does not exist.
    """
    level = RiskLevel(risk_level)
    radius, color = IMPACT_ZONES[level]
    return {
        "risk_level": level.value,
        "radius_meters": radius,
        "color": color,
        "fill_color": color,
        "fill_opacity": IMPACT_FILL_OPACITY,
    }

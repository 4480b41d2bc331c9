"""
FloodWatch hazard engine.

Deterministic rule/threshold pipeline: terrain + soil -> risk scoring ->
situation + narrative. No I/O happens in this package.
"""

from .hydrology.soil_saturation import model_soil_saturation
from .narrative import generate_narrative, hazard_badge, summarize_risk
from .physical_terrain.terrain_classifier import classify_terrain
from .risk_resilience.impact_zone import impact_zone
from .risk_resilience.risk_scoring import RiskInputs, score_risk
from .situation import classify_situation
from .weather import describe_weather_code, weather_snapshot

__all__ = [
    "classify_terrain",
    "model_soil_saturation",
    "RiskInputs",
    "score_risk",
    "impact_zone",
    "classify_situation",
    "generate_narrative",
    "summarize_risk",
    "hazard_badge",
    "describe_weather_code",
    "weather_snapshot",
]

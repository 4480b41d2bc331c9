# flood_engine/assessment.py
"""
Glue between raw provider samples and the derived per-location state.

Runs the stages in dependency order:
    samples -> {terrain, soil} -> situation -> narrative
and, on demand, the risk scoring for a forecast window.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from flood_config import DEFAULT_SIM_DURATION_H
from flood_engine.hydrology.soil_saturation import model_soil_saturation
from flood_engine.models import (
    HydrologyFlag,
    LocationContext,
    LocationSampleSet,
    PlaceIdentity,
    RiskAssessment,
    SamplePoint,
)
from flood_engine.narrative import generate_narrative
from flood_engine.physical_terrain.terrain_classifier import classify_terrain, unknown_terrain
from flood_engine.risk_resilience.risk_scoring import RiskInputs, score_risk
from flood_engine.situation import classify_situation
from flood_engine.weather import weather_snapshot

logger = logging.getLogger(__name__)


def build_location_context(
    latitude: float,
    longitude: float,
    samples: Optional[LocationSampleSet],
    hydrology: HydrologyFlag,
    place: PlaceIdentity,
    issued_at: Union[datetime, str],
) -> LocationContext:
    """
    Derives terrain, soil, situation and narrative for one acquisition.

    ``samples`` is None when the weather/elevation provider failed; terrain
    then falls back to UNKNOWN with the neutral catchment factor and the
    rain totals to zero, but a complete context is still produced.
    """
    if samples is None:
        samples = LocationSampleSet(SamplePoint(latitude, longitude))
        terrain = unknown_terrain()
    else:
        terrain = classify_terrain(samples)

    center = samples.center
    soil = model_soil_saturation(center.hourly_precipitation)
    situation = classify_situation(
        soil.accumulated_48h, terrain.category, hydrology, terrain.slope_meters
    )
    narrative = generate_narrative(
        place_name=place.city,
        terrain=terrain,
        center_elevation=center.elevation,
        rain_rate=center.precipitation_rate,
        accumulated_48h=soil.accumulated_48h,
        hydrology=hydrology,
        situation_state=situation.state,
        issued_at=issued_at,
        wind_speed=center.wind_speed,
    )

    logger.info(
        f"Location {latitude:.4f},{longitude:.4f} ({place.city}): terrain={terrain.category.value} "
        f"rain48h={soil.accumulated_48h:.1f}mm status={situation.state}"
    )

    return LocationContext(
        latitude=latitude,
        longitude=longitude,
        samples=samples,
        place=place,
        hydrology=hydrology,
        terrain=terrain,
        soil=soil,
        situation=situation,
        narrative=narrative,
        weather=weather_snapshot(center),
    )


def score_context(
    context: LocationContext,
    rainfall_rate_override: Optional[float] = None,
    duration_hours: float = DEFAULT_SIM_DURATION_H,
) -> RiskAssessment:
    """Scores a forecast window against the given context without mutating it."""
    rate = context.rainfall_rate if rainfall_rate_override is None else rainfall_rate_override
    return score_risk(RiskInputs(
        rainfall_rate=rate,
        duration_hours=duration_hours,
        soil=context.soil,
        terrain=context.terrain,
        hydrology=context.hydrology,
        elevation=context.elevation,
        accumulated_48h=context.soil.accumulated_48h,
    ))

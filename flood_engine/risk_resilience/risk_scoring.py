# flood_engine/risk_resilience/risk_scoring.py
"""
Risk Scoring Engine

Turns a rainfall forecast plus the current soil/terrain/hydrology state into
an estimated water rise, a flood risk level and secondary landslide and
sinkhole grades. Deterministic: no clock, no randomness, no I/O.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from flood_config import DRAINAGE_48H_MM, DRAINAGE_RATE_MM_PER_H, SOIL_CAPACITY_MM
from flood_engine.hydrology.soil_saturation import dry_soil
from flood_engine.ladder import Ladder, above
from flood_engine.models import (
    HydrologyFlag,
    LandslideGrade,
    RiskAssessment,
    RiskLevel,
    SinkholeGrade,
    SoilState,
    TerrainAssessment,
    TerrainCategory,
)
from flood_engine.physical_terrain.terrain_classifier import unknown_terrain

logger = logging.getLogger(__name__)

LOW_LYING_ELEVATION_M = 10.0

_RISK_LADDER = Ladder(
    [
        (above(2.5), RiskLevel.EXTREME),
        (above(1.0), RiskLevel.DANGER),
        (above(0.3), RiskLevel.CAUTION),
    ],
    default=RiskLevel.SAFE,
)

# Landslide thresholds depend on the slope bracket first.
_STEEP_LANDSLIDE = Ladder(
    [
        (above(150), LandslideGrade.SEVERE),
        (above(100), LandslideGrade.HIGH),
        (above(50), LandslideGrade.MODERATE),
    ],
    default=LandslideGrade.LOW,
)
_GENTLE_LANDSLIDE = Ladder(
    [
        (above(200), LandslideGrade.HIGH),
        (above(150), LandslideGrade.MODERATE),
    ],
    default=LandslideGrade.LOW,
)
_SLOPE_BRACKETS = Ladder(
    [
        (above(30), _STEEP_LANDSLIDE),
        (above(10), _GENTLE_LANDSLIDE),
    ],
    default=None,
)

_VALLEY_SINKHOLE = Ladder(
    [
        (above(200), SinkholeGrade.HIGH),
        (above(100), SinkholeGrade.MODERATE),
    ],
    default=SinkholeGrade.LOW,
)


@dataclass(frozen=True)
class RiskInputs:
    rainfall_rate: float
    duration_hours: float
    soil: SoilState = field(default_factory=dry_soil)
    terrain: TerrainAssessment = field(default_factory=unknown_terrain)
    hydrology: HydrologyFlag = HydrologyFlag.UNRESOLVED
    elevation: float = 0.0
    accumulated_48h: float = 0.0


def hydrology_multiplier(hydrology: HydrologyFlag, category: TerrainCategory) -> float:
    # Open water nearby removes the terrain discount entirely.
    if hydrology.water_present:
        return 1.0
    return 0.6 if category is TerrainCategory.VALLEY else 0.2


def estimate_rise(water_load_index: float) -> float:
    if water_load_index <= 0:
        return 0.0
    return math.log(water_load_index + 1) * 0.5


def grade_flood_risk(
    estimated_rise: float,
    category: TerrainCategory,
    hydrology: HydrologyFlag,
    elevation: float,
) -> RiskLevel:
    """Base grade from the rise, then one-way escalations out of CAUTION."""
    risk = _RISK_LADDER.resolve(estimated_rise)

    if risk is RiskLevel.CAUTION and category is TerrainCategory.VALLEY:
        risk = RiskLevel.DANGER
    if (
        risk is RiskLevel.CAUTION
        and hydrology.water_present
        and elevation < LOW_LYING_ELEVATION_M
    ):
        risk = RiskLevel.DANGER
    return risk


def grade_landslide(slope_meters: float, total_wetness: float) -> LandslideGrade:
    bracket: Optional[Ladder] = _SLOPE_BRACKETS.resolve(slope_meters)
    if bracket is None:
        return LandslideGrade.LOW
    return bracket.resolve(total_wetness)


def grade_sinkhole(category: TerrainCategory, total_wetness: float) -> SinkholeGrade:
    if category is not TerrainCategory.VALLEY:
        return SinkholeGrade.LOW
    return _VALLEY_SINKHOLE.resolve(total_wetness)


def score_risk(inputs: RiskInputs) -> RiskAssessment:
    """
    Runs the full scoring sequence for one forecast window.

    1. forecast = rate x duration
    2. soil absorbs up to its free capacity plus drainage over the window
    3. runoff + long-window surplus, scaled by catchment and hydrology,
       gives the water load index
    4. rise = ln(load + 1) x 0.5, graded and escalated
    5. landslide / sinkhole grades from the post-absorption wetness
    """
    rate = max(0.0, inputs.rainfall_rate or 0.0)
    duration = max(0.0, inputs.duration_hours or 0.0)
    terrain = inputs.terrain
    accumulated = max(0.0, inputs.accumulated_48h or 0.0)

    forecasted = rate * duration

    current_stored = inputs.soil.saturation_percent / 100.0 * SOIL_CAPACITY_MM
    available_capacity = SOIL_CAPACITY_MM - current_stored
    drainage_during_window = DRAINAGE_RATE_MM_PER_H * duration
    effective_available = available_capacity + drainage_during_window

    absorbed = min(forecasted, effective_available)
    runoff = max(0.0, forecasted - absorbed)

    historical_surplus = max(0.0, accumulated - SOIL_CAPACITY_MM - DRAINAGE_48H_MM)
    total_surplus = runoff + historical_surplus

    multiplier = hydrology_multiplier(inputs.hydrology, terrain.category)
    water_load_index = total_surplus * (1 + terrain.catchment_factor * 0.1) * multiplier

    rise = estimate_rise(water_load_index)
    risk = grade_flood_risk(rise, terrain.category, inputs.hydrology, inputs.elevation or 0.0)

    total_wetness = current_stored + absorbed
    landslide = grade_landslide(terrain.slope_meters, total_wetness)
    sinkhole = grade_sinkhole(terrain.category, total_wetness)

    logger.info(
        f"Risk scored: forecast={forecasted:.1f}mm runoff={runoff:.1f}mm "
        f"load={water_load_index:.2f} rise={rise:.2f}m -> {risk.value}"
    )

    return RiskAssessment(
        estimated_rise_meters=rise,
        risk_level=risk,
        landslide_grade=landslide,
        sinkhole_grade=sinkhole,
        excess_runoff_mm=runoff,
        forecasted_rainfall_mm=forecasted,
        total_wetness_mm=total_wetness,
        water_load_index=water_load_index,
    )

# flood_engine/physical_terrain/terrain_classifier.py
import logging

from flood_config import (
    MAX_CATCHMENT_FACTOR,
    NEUTRAL_CATCHMENT_FACTOR,
    PEAK_CATCHMENT_FACTOR,
    TERRAIN_DELTA_THRESHOLD_M,
    VALLEY_BASE_FACTOR,
    VALLEY_DELTA_WEIGHT,
)
from flood_engine.ladder import Ladder
from flood_engine.models import LocationSampleSet, TerrainAssessment, TerrainCategory

logger = logging.getLogger(__name__)

# delta = mean(neighbors) - center
_CATEGORY_LADDER = Ladder(
    [
        (lambda delta: delta > TERRAIN_DELTA_THRESHOLD_M, TerrainCategory.VALLEY),
        (lambda delta: delta < -TERRAIN_DELTA_THRESHOLD_M, TerrainCategory.PEAK),
    ],
    default=TerrainCategory.PLAIN,
)


def _catchment_factor(category: TerrainCategory, delta: float) -> float:
    if category is TerrainCategory.VALLEY:
        return min(VALLEY_BASE_FACTOR + delta * VALLEY_DELTA_WEIGHT, MAX_CATCHMENT_FACTOR)
    if category is TerrainCategory.PEAK:
        return PEAK_CATCHMENT_FACTOR
    return NEUTRAL_CATCHMENT_FACTOR


def unknown_terrain() -> TerrainAssessment:
    """Default used when the elevation provider could not be reached."""
    return TerrainAssessment(TerrainCategory.UNKNOWN, 0.0, NEUTRAL_CATCHMENT_FACTOR)


def classify_terrain(samples: LocationSampleSet) -> TerrainAssessment:
    """
    Terrain analysis from the 5-point elevation ring.

    Valleys collect runoff from the surrounding ring (multiplier grows with
    depth, capped at 300), peaks shed it (fixed 20), anything within +/-20 m
    is treated as plain (50). Without a ring the point is assumed plain.
    """
    if samples.neighbor_count == 0:
        return TerrainAssessment(TerrainCategory.PLAIN, 0.0, NEUTRAL_CATCHMENT_FACTOR)

    center = samples.center.elevation or 0.0
    ring = [p.elevation or 0.0 for p in samples.neighbors]

    avg_surrounding = sum(ring) / len(ring)
    delta = avg_surrounding - center
    slope = abs(max(ring) - center)

    category = _CATEGORY_LADDER.resolve(delta)
    factor = _catchment_factor(category, delta)

    logger.debug(f"Terrain delta={delta:.1f}m slope={slope:.1f}m -> {category.value} ({factor})")
    return TerrainAssessment(category, slope, factor)

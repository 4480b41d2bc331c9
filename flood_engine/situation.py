# flood_engine/situation.py
from flood_engine.ladder import Ladder
from flood_engine.models import HydrologyFlag, SituationRecord, TerrainCategory

# Rungs take (accumulated_48h, terrain, hydrology, slope). Thresholds overlap
# on purpose; the first matching rung wins.
SITUATION_LADDER = Ladder(
    [
        (lambda acc, terrain, water, slope: acc > 200,
         SituationRecord("SEVERE FLOODING", "bg-red-600 text-white animate-pulse")),
        (lambda acc, terrain, water, slope: acc > 100 and water.water_present,
         SituationRecord("RIVER OVERFLOW", "bg-orange-500 text-white")),
        (lambda acc, terrain, water, slope: acc > 100,
         SituationRecord("FLOODED", "bg-red-500 text-white")),
        (lambda acc, terrain, water, slope: acc > 60 and terrain is TerrainCategory.VALLEY,
         SituationRecord("BASIN POOLING", "bg-orange-100 text-orange-800")),
        (lambda acc, terrain, water, slope: acc > 60,
         SituationRecord("WATERLOGGED", "bg-yellow-100 text-yellow-800")),
        (lambda acc, terrain, water, slope: acc > 20 and slope > 20,
         SituationRecord("SLIPPERY SLOPES", "bg-yellow-50 text-yellow-700")),
        (lambda acc, terrain, water, slope: acc > 10,
         SituationRecord("WET GROUND", "bg-blue-50 text-blue-700")),
    ],
    default=SituationRecord("NORMAL", "bg-green-50 text-green-700"),
)


def classify_situation(
    accumulated_48h: float,
    terrain: TerrainCategory,
    hydrology: HydrologyFlag,
    slope_meters: float,
) -> SituationRecord:
    """Live status label for what the ground looks like right now."""
    return SITUATION_LADDER.resolve(accumulated_48h or 0.0, terrain, hydrology, slope_meters or 0.0)

# flood_engine/hydrology/soil_saturation.py
from typing import Iterable, Optional

from flood_config import DRAINAGE_48H_MM, SOIL_CAPACITY_MM
from flood_engine.ladder import Ladder, above
from flood_engine.models import GroundCondition, SoilState

_GROUND_LADDER = Ladder(
    [
        (above(90), GroundCondition.FULLY_SATURATED),
        (above(60), GroundCondition.WET_MUDDY),
        (above(30), GroundCondition.DAMP),
    ],
    default=GroundCondition.DRY_STABLE,
)


def accumulate_rainfall(hourly: Optional[Iterable[Optional[float]]]) -> float:
    """
    Sums the whole hourly series as the "48h" total.

    NOTE: the series is not aligned to the current hour. The provider is
    asked for two past days plus today, so the window is really 48-72 h and
    drifts through the day. Kept as a literal sum on purpose.
    """
    if not hourly:
        return 0.0
    return float(sum(v for v in hourly if v is not None))


def saturation_from_accumulation(accumulated_48h: float) -> float:
    effective_load = max(0.0, accumulated_48h - DRAINAGE_48H_MM)
    return max(0.0, min(effective_load / SOIL_CAPACITY_MM * 100.0, 100.0))


def ground_condition(saturation_percent: float) -> GroundCondition:
    return _GROUND_LADDER.resolve(saturation_percent)


def model_soil_saturation(hourly: Optional[Iterable[Optional[float]]]) -> SoilState:
    """
    Bucket model of soil moisture.

    Natural drainage removes up to 144 mm over 48 h; whatever is left fills
    a 120 mm soil store. Soil type, slope and multi-week antecedent
    conditions are ignored.
    """
    accumulated = max(0.0, accumulate_rainfall(hourly))
    saturation = saturation_from_accumulation(accumulated)
    return SoilState(accumulated, saturation, ground_condition(saturation))


def dry_soil() -> SoilState:
    return model_soil_saturation(())

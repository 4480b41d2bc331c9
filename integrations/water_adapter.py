import logging
from typing import Any, Optional

from flood_config import OVERPASS_URL, WATER_SEARCH_RADIUS_M
from flood_engine.models import HydrologyFlag

logger = logging.getLogger(__name__)


def build_water_query(lat: float, lon: float, radius: int = WATER_SEARCH_RADIUS_M) -> str:
    return f"""
    [out:json][timeout:5];
    (
      way["waterway"~"river|stream|canal"](around:{radius},{lat},{lon});
      way["natural"="water"](around:{radius},{lat},{lon});
      way["natural"="coastline"](around:{radius},{lat},{lon});
    );
    out count;
    """


def count_water_features(data: Any) -> Optional[int]:
    """
    Reads the feature count from an Overpass ``out count`` answer.
    Returns None when the answer has no elements list at all.
    """
    if not isinstance(data, dict):
        return None
    elements = data.get("elements")
    if elements is None:
        return None
    if not elements:
        return 0

    first = elements[0] if isinstance(elements[0], dict) else {}
    tags = first.get("tags") or {}
    for raw in (tags.get("total"), first.get("count")):
        try:
            if raw is not None:
                return int(raw)
        except (TypeError, ValueError):
            continue
    return len(elements)


def hydrology_flag_from_count(count: Optional[int]) -> HydrologyFlag:
    if count is None:
        return HydrologyFlag.UNRESOLVED
    return HydrologyFlag.DETECTED if count > 0 else HydrologyFlag.NONE


async def fetch_hydrology_flag(session, lat: float, lon: float) -> HydrologyFlag:
    """Rivers, lakes or coastline within 2 km. Provider failure -> UNRESOLVED."""
    try:
        async with session.post(OVERPASS_URL, data={"data": build_water_query(lat, lon)}) as response:
            if response.status != 200:
                logger.warning(f"Overpass HTTP {response.status} for {lat},{lon}")
                return HydrologyFlag.UNRESOLVED
            data = await response.json(content_type=None)
            return hydrology_flag_from_count(count_water_features(data))
    except Exception as e:
        logger.warning(f"Hydrology API error: {e}")
        return HydrologyFlag.UNRESOLVED

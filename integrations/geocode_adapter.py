import logging
from typing import Any

from flood_config import NOMINATIM_REVERSE_URL
from flood_engine.models import UNKNOWN_PLACE, PlaceIdentity

logger = logging.getLogger(__name__)


def parse_place(data: Any) -> PlaceIdentity:
    """Nominatim reverse answer -> {city, region}, with safe fallbacks."""
    if not isinstance(data, dict):
        return PlaceIdentity()
    addr = data.get("address") or {}
    city = addr.get("city") or addr.get("town") or addr.get("village") or UNKNOWN_PLACE
    region = addr.get("state") or addr.get("county") or ""
    return PlaceIdentity(city, region)


async def fetch_place_identity(session, lat: float, lon: float) -> PlaceIdentity:
    params = {"format": "json", "lat": lat, "lon": lon, "zoom": 12}
    try:
        async with session.get(NOMINATIM_REVERSE_URL, params=params) as response:
            if response.status != 200:
                logger.warning(f"Nominatim HTTP {response.status} for {lat},{lon}")
                return PlaceIdentity()
            return parse_place(await response.json(content_type=None))
    except Exception as e:
        logger.warning(f"Reverse geocode error: {e}")
        return PlaceIdentity()

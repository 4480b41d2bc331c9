import logging
from typing import Any, Dict, List, Optional, Tuple

from flood_config import OPEN_METEO_URL, SAMPLE_OFFSET_DEG
from flood_engine.models import LocationSampleSet, SamplePoint

logger = logging.getLogger(__name__)

_CURRENT_FIELDS = [
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "rain",
    "showers",
    "weather_code",
    "wind_speed_10m",
]


def sample_coordinates(lat: float, lng: float) -> List[Tuple[float, float]]:
    """Center first, then N, S, E, W at ~2 km."""
    o = SAMPLE_OFFSET_DEG
    return [
        (lat, lng),
        (lat + o, lng),
        (lat - o, lng),
        (lat, lng + o),
        (lat, lng - o),
    ]


def build_weather_params(lat: float, lng: float) -> Dict[str, Any]:
    coords = sample_coordinates(lat, lng)
    return {
        "latitude": ",".join(f"{c[0]:.4f}" for c in coords),
        "longitude": ",".join(f"{c[1]:.4f}" for c in coords),
        "current": ",".join(_CURRENT_FIELDS),
        "hourly": "precipitation",
        # two past days + today = the "48h" window
        "past_days": 2,
        "forecast_days": 1,
    }


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def _parse_point(entry: Dict[str, Any], lat: float, lng: float) -> SamplePoint:
    current = entry.get("current") or {}
    hourly = (entry.get("hourly") or {}).get("precipitation") or []
    code = current.get("weather_code")
    wind = current.get("wind_speed_10m")
    temp = current.get("temperature_2m")
    return SamplePoint(
        latitude=_as_float(entry.get("latitude"), lat),
        longitude=_as_float(entry.get("longitude"), lng),
        elevation=_as_float(entry.get("elevation")),
        precipitation_rate=_as_float(current.get("precipitation")),
        hourly_precipitation=tuple(_as_float(v) for v in hourly),
        weather_code=int(code) if isinstance(code, (int, float)) else None,
        wind_speed=_as_float(wind) if wind is not None else None,
        temperature=_as_float(temp) if temp is not None else None,
    )


def parse_weather_payload(payload: Any, lat: float, lng: float) -> Optional[LocationSampleSet]:
    """
    Open-Meteo answers a multi-location query with a list (one object per
    coordinate, in request order) and a single-location query with one
    object. A single object means degraded mode: center only.

    Returns None when the payload is an API error or unusable.
    """
    if isinstance(payload, dict):
        if payload.get("error"):
            logger.warning(f"Open-Meteo error: {payload.get('reason')}")
            return None
        return LocationSampleSet(_parse_point(payload, lat, lng))

    if isinstance(payload, list) and payload:
        coords = sample_coordinates(lat, lng)
        points = [
            _parse_point(entry if isinstance(entry, dict) else {}, *coords[min(i, len(coords) - 1)])
            for i, entry in enumerate(payload)
        ]
        return LocationSampleSet(points[0], tuple(points[1:]))

    logger.warning("Open-Meteo returned an empty or unexpected payload")
    return None


async def fetch_location_samples(session, lat: float, lng: float) -> Optional[LocationSampleSet]:
    """Fetches the 5-point weather + elevation grid. Never raises."""
    try:
        async with session.get(OPEN_METEO_URL, params=build_weather_params(lat, lng)) as response:
            if response.status != 200:
                logger.warning(f"Open-Meteo HTTP {response.status} for {lat},{lng}")
                return None
            data = await response.json()
            return parse_weather_payload(data, lat, lng)
    except Exception as e:
        logger.warning(f"Weather API error: {e}")
        return None

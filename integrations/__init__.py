"""
FloodWatch provider integration layer.

Adapters wrap the upstream services (Open-Meteo, Overpass, Nominatim,
Wikipedia). They degrade gracefully: a failed call returns a documented
default instead of raising.
"""

from .geocode_adapter import fetch_place_identity, parse_place
from .water_adapter import count_water_features, fetch_hydrology_flag, hydrology_flag_from_count
from .weather_adapter import fetch_location_samples, parse_weather_payload
from .wiki_adapter import fetch_historical_context, parse_search_results

__all__ = [
    "fetch_place_identity",
    "parse_place",
    "count_water_features",
    "fetch_hydrology_flag",
    "hydrology_flag_from_count",
    "fetch_location_samples",
    "parse_weather_payload",
    "fetch_historical_context",
    "parse_search_results",
]

# flood_engine/weather.py
from typing import Any, Dict, Optional

from flood_engine.models import SamplePoint

# WMO weather interpretation codes
_WMO_CODES = {
    0: "Clear Sky", 1: "Mainly Clear", 2: "Partly Cloudy", 3: "Overcast",
    45: "Foggy", 48: "Rime Fog",
    51: "Light Drizzle", 53: "Moderate Drizzle", 55: "Dense Drizzle",
    56: "Freezing Drizzle", 57: "Heavy Freezing Drizzle",
    61: "Slight Rain", 63: "Moderate Rain", 65: "Heavy Rain",
    66: "Freezing Rain", 67: "Heavy Freezing Rain",
    71: "Slight Snow", 73: "Moderate Snow", 75: "Heavy Snow",
    77: "Snow Grains",
    80: "Slight Showers", 81: "Moderate Showers", 82: "Violent Showers",
    85: "Snow Showers", 86: "Heavy Snow Showers",
    95: "Thunderstorm", 96: "Thunderstorm + Hail", 99: "Heavy Thunderstorm",
}


def describe_weather_code(code: Optional[int]) -> str:
    return _WMO_CODES.get(code, "Variable Conditions")


def weather_snapshot(center: SamplePoint) -> Dict[str, Any]:
    """Current-conditions block for the panel header."""
    return {
        "temp_c": center.temperature,
        "rain_mm": center.precipitation_rate,
        "wind_kmh": center.wind_speed,
        "weather_code": center.weather_code,
        "description": describe_weather_code(center.weather_code),
        "elevation": center.elevation,
    }

# flood_config.py
"""
Settings for the FloodWatch hazard backend.

Model constants are fixed here; deployment knobs come from the environment
(a local .env file is picked up through python-dotenv).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# --- Sampling grid ---
SAMPLE_OFFSET_DEG = 0.02  # ~2 km ring around the center point
WATER_SEARCH_RADIUS_M = 2000

# --- Terrain ---
TERRAIN_DELTA_THRESHOLD_M = 20.0
VALLEY_BASE_FACTOR = 100.0
VALLEY_DELTA_WEIGHT = 2.0
MAX_CATCHMENT_FACTOR = 300.0
PEAK_CATCHMENT_FACTOR = 20.0
NEUTRAL_CATCHMENT_FACTOR = 50.0

# --- Soil bucket ---
DRAINAGE_48H_MM = 144.0   # ~72 mm/day natural drainage
SOIL_CAPACITY_MM = 120.0
DRAINAGE_RATE_MM_PER_H = 3.0

# --- Scoring ---
SIM_DURATION_CHOICES = (12, 24, 48, 72)
DEFAULT_SIM_DURATION_H = 24
# Upper bound accepted for a rainfall-rate override (mm/h)
MAX_RAINFALL_RATE_MM_H = 500.0
SCORING_MIN_LATENCY_S = _env_float("FLOOD_SCORING_MIN_LATENCY", 1.5)

# --- Providers ---
HTTP_TIMEOUT_S = _env_float("FLOOD_HTTP_TIMEOUT", 10.0)
MAX_CONCURRENT = _env_int("FLOOD_MAX_CONCURRENT", 8)
USER_AGENT = os.getenv("FLOOD_USER_AGENT", "FloodWatch/1.0 (contact: support@example.com)")

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
OVERPASS_URL = "https://overpass-api.de/api/interpreter"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
HISTORY_RESULT_LIMIT = 3

# --- HTTP surface ---
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "FLOOD_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if o.strip()
]
PORT = _env_int("PORT", 5000)

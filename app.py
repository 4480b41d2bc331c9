import logging
import math

from flask import Flask, jsonify, request
from flask_cors import CORS

from flood_config import (
    ALLOWED_ORIGINS,
    DEFAULT_SIM_DURATION_H,
    MAX_RAINFALL_RATE_MM_H,
    PORT,
    SIM_DURATION_CHOICES,
)
from flood_engine.assessment import score_context
from flood_engine.narrative import hazard_badge, summarize_risk
from flood_engine.risk_resilience.impact_zone import impact_zone
from utils.active_context import ActiveLocationTracker
from utils.fast_analysis import acquire_location_sync, score_with_min_latency

log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

# --- Flask App Initialization ---
app = Flask(__name__)

CORS(app, resources={r"/*": {
    "origins": ALLOWED_ORIGINS,
    "methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["Content-Type", "Authorization", "Accept"]
}})


@app.after_request
def handle_options_and_headers(response):
    origin = request.headers.get('Origin')
    if origin in ALLOWED_ORIGINS and 'Access-Control-Allow-Origin' not in response.headers:
        response.headers.add('Access-Control-Allow-Origin', origin)
    return response


logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

# --- ACTIVE LOCATION (single-location focus) ---
# Every acquisition replaces the previous location wholesale; nothing is
# cached between acquisitions.
ACTIVE_LOCATION = ActiveLocationTracker()

NO_LOCATION_MESSAGE = "Please analyze a location on the map first."


def _parse_coordinates(data):
    lat = float(data["latitude"])
    lng = float(data["longitude"])
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise ValueError(f"Coordinates out of range: {lat},{lng}")
    return lat, lng


def _parse_optional_float(value):
    if value is None or value == "":
        return None
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _parse_duration(value):
    if isinstance(value, bool):
        raise ValueError(f"not a number of hours: {value!r}")
    hours = float(value)
    if not hours.is_integer():
        raise ValueError(f"duration_hours must be a whole number: {value!r}")
    return int(hours)


# --- 1. Health Check Route ---
@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "healthy"}), 200


# --- 2. Location Acquisition Route ---
@app.route('/acquire', methods=['POST', 'OPTIONS'])
def acquire():
    if request.method == 'OPTIONS':
        return jsonify({"status": "ok"}), 200

    data = request.get_json(silent=True) or {}
    try:
        latitude, longitude = _parse_coordinates(data)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid coordinates: {e}"}), 400

    try:
        token = ACTIVE_LOCATION.begin()
        result = acquire_location_sync(latitude, longitude)
        if not ACTIVE_LOCATION.commit(token, result.context):
            return jsonify({"error": "Superseded by a newer acquisition"}), 409
        return jsonify(result.context.to_dict())

    except Exception as e:
        logger.exception(f"Acquisition error: {e}")
        return jsonify({"error": str(e)}), 500


# --- 3. Risk Scoring Route ---
@app.route('/score_risk', methods=['POST', 'OPTIONS'])
def score_risk_route():
    if request.method == 'OPTIONS':
        return jsonify({"status": "ok"}), 200

    context = ACTIVE_LOCATION.current
    if context is None:
        return jsonify({"message": NO_LOCATION_MESSAGE}), 409

    data = request.get_json(silent=True) or {}
    try:
        duration = _parse_duration(data.get("duration_hours", DEFAULT_SIM_DURATION_H))
        rate_override = _parse_optional_float(data.get("rainfall_rate"))
    except (TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid scoring parameters: {e}"}), 400

    if duration not in SIM_DURATION_CHOICES:
        return jsonify({"error": f"duration_hours must be one of {list(SIM_DURATION_CHOICES)}"}), 400
    if rate_override is not None and not 0 <= rate_override <= MAX_RAINFALL_RATE_MM_H:
        return jsonify({"error": f"rainfall_rate must be between 0 and {MAX_RAINFALL_RATE_MM_H:g} mm/h"}), 400

    try:
        risk = score_with_min_latency(score_context, context, rate_override, duration)
        ACTIVE_LOCATION.record_risk(context, risk)

        hazards = [
            badge for badge in (
                hazard_badge("landslide", risk.landslide_grade),
                hazard_badge("sinkhole", risk.sinkhole_grade),
            ) if badge
        ]
        return jsonify({
            "location_name": context.place.city,
            "duration_hours": duration,
            "rainfall_rate": context.rainfall_rate if rate_override is None else rate_override,
            "risk": risk.to_dict(),
            "impact_zone": impact_zone(risk.risk_level),
            "verdict": summarize_risk(risk.risk_level, context.soil.accumulated_48h, context.hydrology),
            "hazards": hazards,
        })

    except Exception as e:
        logger.exception(f"Risk scoring error: {e}")
        return jsonify({"error": str(e)}), 500


# --- 4. Historical Context (best-effort, fills in after /acquire) ---
@app.route('/historical_context', methods=['GET'])
def historical_context():
    context = ACTIVE_LOCATION.current
    if context is None:
        return jsonify({"events": [], "message": NO_LOCATION_MESSAGE}), 200

    events = [e.to_dict() for e in list(context.historical_events)]
    payload = {"location_name": context.place.city, "events": events}
    if not events:
        payload["message"] = (
            "Select a location to see history." if not context.place.is_known
            else "No major historical flood records found."
        )
    return jsonify(payload)


@app.route('/impact_zone', methods=['POST', 'OPTIONS'])
def impact_zone_route():
    if request.method == 'OPTIONS':
        return jsonify({}), 200

    data = request.get_json(silent=True) or {}
    try:
        return jsonify(impact_zone(data.get("risk_level")))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@app.route('/reset', methods=['POST', 'OPTIONS'])
def reset():
    if request.method == 'OPTIONS':
        return jsonify({}), 200
    ACTIVE_LOCATION.reset()
    return jsonify({"status": "reset"}), 200


if __name__ == "__main__":
    app.run(debug=False, host="0.0.0.0", port=PORT, threaded=True)

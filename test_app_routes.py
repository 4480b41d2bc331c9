#!/usr/bin/env python3
"""
HTTP surface: acquisition, scoring, historical context, impact zone
"""

import json
import math

import pytest

import app as flood_app
from utils import fast_analysis
from utils.parallel_api_executor import AcquisitionResult


@pytest.fixture
def client(monkeypatch, valley_context):
    monkeypatch.setattr(fast_analysis, "SCORING_MIN_LATENCY_S", 0)
    monkeypatch.setattr(
        flood_app, "acquire_location_sync", lambda lat, lng: AcquisitionResult(valley_context)
    )
    flood_app.ACTIVE_LOCATION.reset()
    flood_app.app.config["TESTING"] = True
    with flood_app.app.test_client() as c:
        yield c
    flood_app.ACTIVE_LOCATION.reset()


def _acquire(client):
    return client.post("/acquire", json={"latitude": 7.2906, "longitude": 80.6337})


def test_health(client):
    assert client.get("/health").get_json() == {"status": "healthy"}


def test_scoring_requires_an_active_location(client):
    response = client.post("/score_risk", json={"duration_hours": 24})
    assert response.status_code == 409
    assert response.get_json()["message"] == flood_app.NO_LOCATION_MESSAGE


@pytest.mark.parametrize("body", [
    {},
    {"latitude": "abc", "longitude": 1},
    {"latitude": 95, "longitude": 10},
    {"latitude": 10, "longitude": -181},
])
def test_acquire_rejects_bad_coordinates(client, body):
    assert client.post("/acquire", json=body).status_code == 400


def test_acquire_returns_derived_state(client):
    data = _acquire(client).get_json()
    assert data["location_name"] == "Kandy"
    assert data["terrain"]["category"] == "valley"
    assert data["terrain"]["label"] == "Basin / Valley"
    assert data["situation"]["state"] == "RIVER OVERFLOW"
    assert len(data["intel_brief"]) == 3
    assert data["risk"] is None


def test_score_extreme_valley(client):
    _acquire(client)
    response = client.post("/score_risk", json={"duration_hours": 24, "rainfall_rate": 10})
    assert response.status_code == 200
    data = response.get_json()
    assert data["risk"]["risk_level"] == "extreme"
    assert data["impact_zone"]["radius_meters"] == 2000
    assert data["verdict"]["title"] == "EXTREME DANGER"
    assert {h["hazard"] for h in data["hazards"]} == {"landslide", "sinkhole"}
    assert flood_app.ACTIVE_LOCATION.current.risk.risk_level.value == "extreme"


def test_score_defaults_to_live_rate(client):
    _acquire(client)
    data = client.post("/score_risk", json={}).get_json()
    assert data["duration_hours"] == 24
    assert data["rainfall_rate"] == 4.0


@pytest.mark.parametrize("body", [
    {"duration_hours": 5},
    {"duration_hours": "soon"},
    {"duration_hours": 24, "rainfall_rate": -1},
    {"duration_hours": 24.9},
    {"duration_hours": "inf"},
    {"duration_hours": 24, "rainfall_rate": 1e308},
    {"duration_hours": 24, "rainfall_rate": "inf"},
    {"duration_hours": 24, "rainfall_rate": "nan"},
    {"duration_hours": 24, "rainfall_rate": 501},
])
def test_score_rejects_bad_parameters(client, body):
    _acquire(client)
    assert client.post("/score_risk", json=body).status_code == 400


def test_historical_context_before_lookup_finishes(client):
    _acquire(client)
    data = client.get("/historical_context").get_json()
    assert data["events"] == []
    assert data["message"] == "No major historical flood records found."


def test_impact_zone_route(client):
    assert client.post("/impact_zone", json={"risk_level": "danger"}).get_json()["radius_meters"] == 1000
    assert client.post("/impact_zone", json={"risk_level": "bogus"}).status_code == 400


def test_reset_clears_active_location(client):
    _acquire(client)
    assert client.post("/reset").status_code == 200
    assert client.post("/score_risk", json={}).status_code == 409


def test_stale_acquisition_is_rejected(client, monkeypatch, plain_context):
    def superseded(lat, lng):
        # A newer acquisition starts while this one is in flight
        token = flood_app.ACTIVE_LOCATION.begin()
        flood_app.ACTIVE_LOCATION.commit(token, plain_context)
        return AcquisitionResult(plain_context)

    monkeypatch.setattr(flood_app, "acquire_location_sync", superseded)
    response = _acquire(client)
    assert response.status_code == 409
    assert flood_app.ACTIVE_LOCATION.current is plain_context


def test_score_accepts_whole_float_duration_and_ceiling_rate(client):
    _acquire(client)
    response = client.post("/score_risk", json={"duration_hours": 48.0, "rainfall_rate": 500})
    assert response.status_code == 200
    data = json.loads(response.get_data(as_text=True), parse_constant=_reject_constant)
    assert data["duration_hours"] == 48
    assert math.isfinite(data["risk"]["estimated_rise_meters"])


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")

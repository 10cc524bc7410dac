"""Tests for the HTTP API."""

import pytest

from tests.conftest import analysis_payload


def test_health_endpoint(client):
    """GET /api/health should return ok."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_rate_endpoint(client):
    response = client.post("/api/rate", json={
        "position_ms": 1000,
        "analysis": analysis_payload(n_beats=8),
        "target_base_bpm": 120,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["strategy"] == "trap-nation"
    assert data["beat_state"] == "in_beat"
    assert data["instant_bpm"] == pytest.approx(120.0)
    assert data["phase"] == pytest.approx(0.0)
    assert 0.4 <= data["rate"] <= 2.5


def test_rate_endpoint_without_analysis(client):
    response = client.post("/api/rate", json={"position_ms": 1000})
    assert response.status_code == 200
    data = response.json()
    assert data["rate"] == 1.0
    assert data["beat_state"] == "pre_beat"
    assert data["instant_bpm"] is None


def test_rate_endpoint_simple_strategy(client):
    response = client.post("/api/rate", json={
        "position_ms": 0,
        "analysis": {"beats": [
            {"start": 0.0, "duration": 0.5, "confidence": 0.9},
            {"start": 0.5, "duration": 0.5, "confidence": 0.9},
            {"start": 1.0, "duration": 0.5, "confidence": 0.9},
        ]},
        "target_base_bpm": 120,
        "strategy": "simple",
    })
    assert response.status_code == 200
    assert response.json()["rate"] == pytest.approx(1.48 * 1.2)


def test_rate_endpoint_rejects_unknown_strategy(client):
    response = client.post("/api/rate", json={"position_ms": 0, "strategy": "disco"})
    assert response.status_code == 422


def test_rate_endpoint_rejects_bad_bpm(client):
    response = client.post("/api/rate", json={"position_ms": 0, "target_base_bpm": 0})
    assert response.status_code == 422


def test_rate_endpoint_tolerates_malformed_beats(client):
    payload = analysis_payload(n_beats=8)
    payload["beats"].insert(3, {"start": "bogus"})
    response = client.post("/api/rate", json={"position_ms": 1000, "analysis": payload})
    assert response.status_code == 200


def test_curve_endpoint(client):
    response = client.post("/api/rate/curve", json={
        "analysis": analysis_payload(n_beats=20),
        "start_ms": 0,
        "end_ms": 5000,
        "step_ms": 250,
    })
    assert response.status_code == 200
    data = response.json()
    assert len(data["points"]) == 20
    assert data["points"][1]["position_ms"] == 250
    assert data["min_rate"] <= data["mean_rate"] <= data["max_rate"]


def test_curve_endpoint_rejects_empty_range(client):
    response = client.post("/api/rate/curve", json={"start_ms": 1000, "end_ms": 1000})
    assert response.status_code == 400


def test_curve_endpoint_rejects_too_many_points(client, monkeypatch):
    from dancerate.config import settings

    monkeypatch.setattr(settings, "max_curve_points", 10)
    response = client.post("/api/rate/curve", json={"start_ms": 0, "end_ms": 1000, "step_ms": 10})
    assert response.status_code == 400
    assert "Too many points" in response.json()["detail"]


def test_better_bpm_endpoint(client):
    response = client.post("/api/tempo/better-bpm", json={
        "danceability": 0.3,
        "energy": 0.2,
        "track_bpm": 90,
    })
    assert response.status_code == 200
    assert response.json() == {"bpm": 70.0, "track_bpm": 90.0}


def test_better_bpm_endpoint_validates_features(client):
    response = client.post("/api/tempo/better-bpm", json={
        "danceability": 1.5,
        "energy": 0.2,
        "track_bpm": 90,
    })
    assert response.status_code == 422

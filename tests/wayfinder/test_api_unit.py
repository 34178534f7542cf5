"""Unit-level API tests for direct endpoint behavior and error handling."""

from __future__ import annotations

from fastapi.testclient import TestClient

from wayfinder.api import STATE, create_app
from wayfinder.sample_data import sample_building


def test_health_endpoint() -> None:
    """Health endpoint should report API availability."""
    client = TestClient(create_app())
    res = client.get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["building_loaded"] is False


def test_endpoints_without_building_return_400() -> None:
    """Catalog and routing should reject requests before a building is loaded."""
    client = TestClient(create_app())

    for path in ("/building", "/pois", "/categories"):
        res = client.get(path)
        assert res.status_code == 400
        assert "No building loaded" in res.json()["detail"]

    res = client.post("/route", json={"start": {"x": 0, "y": 0, "z": 0}, "destination_poi_id": "p"})
    assert res.status_code == 400


def test_route_unknown_poi_returns_404() -> None:
    """Unknown destination POI ids should return 404."""
    STATE.building = sample_building()
    client = TestClient(create_app())

    res = client.post("/route", json={"start": {"x": 0, "y": 0, "z": 0}, "destination_poi_id": "nowhere"})

    assert res.status_code == 404
    assert "nowhere" in res.json()["detail"]


def test_route_invalid_preferences_returns_400() -> None:
    """Non-positive walking speed should be rejected with 400."""
    STATE.building = sample_building()
    client = TestClient(create_app())

    res = client.post(
        "/route",
        json={
            "start": {"x": 0, "y": 0, "z": 0},
            "destination_poi_id": "poi-restroom",
            "preferences": {"walking_speed": 0},
        },
    )

    assert res.status_code == 400
    assert "walking_speed" in res.json()["detail"]


def test_demo_building_env_flag(monkeypatch) -> None:
    """WAYFINDER_DEMO_BUILDING=true should preload the bundled building."""
    monkeypatch.setenv("WAYFINDER_DEMO_BUILDING", "true")
    client = TestClient(create_app())

    res = client.get("/building")
    assert res.status_code == 200
    assert res.json()["building_id"] == "demo-building"
    assert res.json()["floors"] == [1, 2]

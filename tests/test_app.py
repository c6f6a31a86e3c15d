"""Tests for service endpoints, error envelopes, configuration and seeding."""

from __future__ import annotations

import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from unispace.config import Settings
from unispace.main import create_app, main
from unispace.services.users import UserService


def test_api_info(client):
    body = client.get("/api").json()
    assert body["endpoints"]["bookings"] == "/api/bookings"


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "OK"
    assert body["uptime"] >= 0


def test_unknown_endpoint(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Endpoint not found"}


def test_storage_integrity_error_maps_to_conflict(client, monkeypatch):
    """A unique violation that slips past the service check still yields 409."""
    monkeypatch.setattr(UserService, "_ensure_email_free", lambda self, email: None)
    user = {"name": "Ada Student", "email": "ada@uni.edu"}
    assert client.post("/api/users", json=user).status_code == 201

    response = client.post("/api/users", json=user)
    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "message": "Request conflicts with existing data",
        "error": "conflict",
    }
    assert len(client.get("/api/users").json()["data"]) == 1


def _app_with_failing_route(settings: Settings):
    app = create_app(settings)

    @app.get("/api/explode")
    def explode():
        raise RuntimeError("database on fire")

    return app


def test_unexpected_error_shows_detail_outside_production(settings):
    app = _app_with_failing_route(settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/explode")
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Internal server error",
        "error": "database on fire",
    }


def test_unexpected_error_hides_detail_in_production(settings):
    prod = settings.model_copy(update={"environment": "production"})
    app = _app_with_failing_route(prod)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/explode")
    assert response.status_code == 500
    assert response.json()["error"] == "Something went wrong"


def test_seed_on_startup(settings):
    seeded = settings.model_copy(update={"seed_on_startup": True})
    with TestClient(create_app(seeded)) as client:
        facilities = client.get("/api/facilities").json()["data"]
        assert len(facilities) == 6

        login = client.post(
            "/api/users/login",
            json={"email": "admin@unispace.edu", "password": "admin123"},
        )
        assert login.status_code == 200
        assert login.json()["data"]["role"] == "admin"


def test_settings_reject_inverted_hours():
    with pytest.raises(ValueError):
        Settings(_env_file=None, opening_time="22:00", closing_time="08:00")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("UNISPACE_SLOT_MINUTES", "60")
    monkeypatch.setenv("UNISPACE_ENVIRONMENT", "production")
    settings = Settings(_env_file=None)
    assert settings.slot_minutes == 60
    assert settings.expose_error_detail is False


def test_custom_slot_width_changes_availability(settings):
    hourly = settings.model_copy(update={"slot_minutes": 60})
    with TestClient(create_app(hourly)) as client:
        facility = client.post(
            "/api/facilities", json={"name": "Hall", "location": "B", "capacity": 5}
        ).json()["data"]
        data = client.get(
            "/api/bookings/availability/check",
            params={"facility_id": facility["id"], "date": "2026-03-02"},
        ).json()["data"]
    assert len(data["available_slots"]) == 14


def test_main_runs_uvicorn_with_app_factory(monkeypatch, settings):
    mock_uvicorn = SimpleNamespace(run=MagicMock())
    monkeypatch.setitem(sys.modules, "uvicorn", mock_uvicorn)
    served = settings.model_copy(update={"port": 9001})
    monkeypatch.setattr("unispace.main.get_settings", lambda: served)

    main()

    mock_uvicorn.run.assert_called_once_with(
        "unispace.main:create_app",
        host="127.0.0.1",
        port=9001,
        log_level="info",
        factory=True,
    )

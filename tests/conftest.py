"""Shared fixtures: an app bound to a private in-memory database per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from unispace.config import Settings
from unispace.main import create_app


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        environment="test",
        password_rounds=4,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def facility(client) -> dict:
    response = client.post(
        "/api/facilities",
        json={"name": "Study Room 202", "location": "Library, Floor 2", "capacity": 15},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture()
def user(client) -> dict:
    response = client.post(
        "/api/users",
        json={"name": "Ada Student", "email": "ada@uni.edu"},
    )
    assert response.status_code == 201
    return response.json()["data"]

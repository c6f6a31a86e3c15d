"""Tests for facility administration routes."""

from __future__ import annotations


def test_create_and_get_facility(client):
    response = client.post(
        "/api/facilities",
        json={"name": "Computer Lab 101", "location": "Building A, Floor 1", "capacity": 30},
    )
    assert response.status_code == 201
    body = response.json()
    assert body == {
        "success": True,
        "data": body["data"],
        "message": "Facility created successfully",
    }

    facility_id = body["data"]["id"]
    fetched = client.get(f"/api/facilities/{facility_id}").json()["data"]
    assert fetched["name"] == "Computer Lab 101"
    assert fetched["capacity"] == 30


def test_list_facilities_sorted_by_name(client):
    for name in ("Science Lab 501", "Art Studio 601", "Lecture Hall 401"):
        client.post("/api/facilities", json={"name": name, "location": "Campus", "capacity": 10})

    names = [f["name"] for f in client.get("/api/facilities").json()["data"]]
    assert names == ["Art Studio 601", "Lecture Hall 401", "Science Lab 501"]


def test_create_facility_validation(client):
    response = client.post("/api/facilities", json={"name": "", "location": "X", "capacity": 0})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    fields = {e["field"] for e in body["errors"]}
    assert {"name", "capacity"} <= fields


def test_partial_update(client, facility):
    response = client.put(f"/api/facilities/{facility['id']}", json={"capacity": 40})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["capacity"] == 40
    assert data["name"] == facility["name"]


def test_update_missing_facility(client):
    response = client.put("/api/facilities/999", json={"capacity": 40})
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Facility not found",
        "error": "not_found",
    }


def test_delete_facility_removes_its_bookings(client, facility, user):
    booking = client.post(
        "/api/bookings",
        json={
            "facility_id": facility["id"],
            "user_id": user["id"],
            "date": "2026-03-02",
            "start_time": "10:00",
            "end_time": "11:00",
        },
    ).json()["data"]

    response = client.delete(f"/api/facilities/{facility['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Facility deleted successfully"
    assert client.get(f"/api/facilities/{facility['id']}").status_code == 404
    assert client.get(f"/api/bookings/{booking['id']}").status_code == 404


def test_non_integer_id_is_validation_error(client):
    assert client.get("/api/facilities/abc").status_code == 400

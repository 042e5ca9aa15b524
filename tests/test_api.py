"""HTTP surface: status codes, error bodies and routing, backed by the in-memory gateway."""

import uuid

import pytest
from unittest.mock import MagicMock
from fastapi import FastAPI
from fastapi.testclient import TestClient
from transport_admin.database import get_gateway
from transport_admin.exceptions import PersistenceError
from transport_admin.gateway import InMemoryGateway
from transport_admin.main import APIKeyMiddleware, app

STATION = {
    "name": "Trg Slobode",
    "latitude": 45.2555,
    "longitude": 19.8447,
    "address": "Trg Slobode",
    "description": "City center main square",
}

DRIVER = {
    "full_name": "Marko Petrović",
    "license_number": "ns000001",
    "phone_number": "+381641234001",
    "license_issued_date": "2015-03-01",
    "license_expiry_date": "2035-03-01",
}

VEHICLE = {
    "registration_number": "NS-100-AB",
    "model": "Ikarbus IK-206",
    "capacity": 90,
    "manufacture_year": 2018,
}


@pytest.fixture
def client():
    gateway = InMemoryGateway()
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestStationEndpoints:
    def test_create_and_get(self, client):
        r = client.post("/api/v1/stations", json=STATION)
        assert r.status_code == 201
        body = r.json()
        assert body["name"] == "Trg Slobode"
        assert body["is_deleted"] is False

        r = client.get(f"/api/v1/stations/{body['id']}")
        assert r.status_code == 200
        assert r.json()["address"] == "Trg Slobode"

    def test_duplicate_name_is_400_with_kind(self, client):
        client.post("/api/v1/stations", json=STATION)
        r = client.post("/api/v1/stations", json=STATION)
        assert r.status_code == 400
        assert r.json()["kind"] == "Duplicate"
        assert "already exists" in r.json()["detail"]

    def test_out_of_range_coordinates(self, client):
        r = client.post("/api/v1/stations", json={**STATION, "latitude": 91})
        assert r.status_code == 400
        assert r.json() == {"detail": "Latitude must be between -90 and 90. Provided: 91.0",
                            "kind": "OutOfRange"}

    def test_unknown_id_is_404(self, client):
        r = client.get(f"/api/v1/stations/{uuid.uuid4()}")
        assert r.status_code == 404
        assert "was not found" in r.json()["detail"]

    def test_delete_hides_then_restore(self, client):
        station_id = client.post("/api/v1/stations", json=STATION).json()["id"]

        assert client.delete(f"/api/v1/stations/{station_id}").status_code == 204
        assert client.get(f"/api/v1/stations/{station_id}").status_code == 404
        assert client.get("/api/v1/stations").json() == []
        listed = client.get("/api/v1/stations", params={"include_deleted": True}).json()
        assert [s["is_deleted"] for s in listed] == [True]

        r = client.put(f"/api/v1/stations/{station_id}", json={**STATION, "name": "Renamed"})
        assert r.status_code == 400
        assert r.json()["kind"] == "InvalidState"

        r = client.post(f"/api/v1/stations/{station_id}/restore")
        assert r.status_code == 200
        assert r.json()["is_deleted"] is False

    def test_search(self, client):
        client.post("/api/v1/stations", json=STATION)
        client.post("/api/v1/stations", json={**STATION, "name": "Liman 1", "description": "Neighborhood"})
        r = client.get("/api/v1/stations", params={"search_term": "SQUARE"})
        assert [s["name"] for s in r.json()] == ["Trg Slobode"]

    def test_malformed_id_is_422(self, client):
        assert client.get("/api/v1/stations/not-a-uuid").status_code == 422


class TestDriverEndpoints:
    def test_create_reports_derived_flags(self, client):
        r = client.post("/api/v1/drivers", json=DRIVER)
        assert r.status_code == 201
        body = r.json()
        assert body["license_number"] == "NS000001"
        assert body["status"] == "Active"
        assert body["has_valid_license"] is True
        assert body["is_available"] is True

    def test_status_change(self, client):
        driver_id = client.post("/api/v1/drivers", json=DRIVER).json()["id"]
        r = client.patch(f"/api/v1/drivers/{driver_id}/status", json={"status": "OnLeave"})
        assert r.status_code == 200
        assert r.json()["status"] == "OnLeave"
        assert r.json()["is_available"] is False

        on_leave = client.get("/api/v1/drivers", params={"status": "OnLeave"}).json()
        assert [d["id"] for d in on_leave] == [driver_id]

    def test_expiry_before_issued(self, client):
        r = client.post("/api/v1/drivers", json={**DRIVER, "license_expiry_date": "2014-01-01"})
        assert r.status_code == 400
        assert r.json()["kind"] == "InvalidDateOrder"

    def test_unknown_status_value_is_422(self, client):
        driver_id = client.post("/api/v1/drivers", json=DRIVER).json()["id"]
        r = client.patch(f"/api/v1/drivers/{driver_id}/status", json={"status": "Retired"})
        assert r.status_code == 422


class TestVehicleEndpoints:
    def test_create_update_delete(self, client):
        vehicle_id = client.post("/api/v1/vehicles", json=VEHICLE).json()["id"]

        r = client.put(f"/api/v1/vehicles/{vehicle_id}",
                       json={"model": "Ikarbus IK-218", "capacity": 105, "manufacture_year": 2020})
        assert r.status_code == 200
        assert r.json()["capacity"] == 105

        assert client.delete(f"/api/v1/vehicles/{vehicle_id}").status_code == 204
        r = client.delete(f"/api/v1/vehicles/{vehicle_id}")
        assert r.status_code == 400
        assert r.json()["kind"] == "InvalidState"

    def test_capacity_limit(self, client):
        r = client.post("/api/v1/vehicles", json={**VEHICLE, "capacity": 201})
        assert r.status_code == 400
        assert r.json()["detail"] == "Vehicle capacity cannot exceed 200. Provided: 201"

    def test_maintenance_status(self, client):
        vehicle_id = client.post("/api/v1/vehicles", json=VEHICLE).json()["id"]
        r = client.patch(f"/api/v1/vehicles/{vehicle_id}/status", json={"status": "Maintenance"})
        assert r.json()["is_available"] is False


class TestErrorMapping:
    def test_persistence_failure_is_500(self):
        broken = MagicMock()
        broken.find_first.return_value = None
        broken.commit.side_effect = PersistenceError("Database error: connection refused")
        app.dependency_overrides[get_gateway] = lambda: broken
        try:
            r = TestClient(app, raise_server_exceptions=False).post("/api/v1/vehicles", json=VEHICLE)
        finally:
            app.dependency_overrides.clear()
        assert r.status_code == 500
        assert r.json() == {"detail": "Internal server error"}

    def test_health(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["database"] == "ok"


class TestAPIKeyMiddleware:
    @pytest.fixture
    def secured(self):
        secured_app = FastAPI()
        secured_app.add_middleware(APIKeyMiddleware, api_key="s3cret")

        @secured_app.get("/api/v1/stations")
        def stations():
            return []

        @secured_app.get("/api/v1/health")
        def health():
            return {"status": "ok"}

        return TestClient(secured_app)

    def test_missing_key_rejected(self, secured):
        r = secured.get("/api/v1/stations")
        assert r.status_code == 401
        assert r.json() == {"detail": "Invalid or missing API key"}

    def test_header_key_accepted(self, secured):
        assert secured.get("/api/v1/stations", headers={"X-API-Key": "s3cret"}).status_code == 200

    def test_health_is_open(self, secured):
        assert secured.get("/api/v1/health").status_code == 200

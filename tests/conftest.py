import pytest
from fastapi.testclient import TestClient

from clinic_api.app.core.config import settings
from clinic_api.app.core.db import init_db
from clinic_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    # Every test gets its own empty database file
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "clinic_test.db"))
    init_db()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def employee(client):
    response = client.post("/api/v1/employees/", json={"name": "Anna Reception", "role": "receptionist"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def service(client):
    response = client.post(
        "/api/v1/services/",
        json={"name": "Dental Cleaning", "price": 80, "duration_minutes": 30},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def booking_payload(employee, service):
    def _payload(**overrides):
        payload = {
            "receptionist_id": employee["id"],
            "service_id": service["id"],
            "assigned_staff_name": "Dr. Novak",
            "patient_id": "p-001",
            "patient_name": "Jane Doe",
            "booking_date": "2025-09-01",
            "booking_time": "09:30",
            "status": "scheduled",
            "remarks": "First visit",
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def create_booking(client, booking_payload):
    def _create(**overrides):
        response = client.post("/api/v1/bookings/", json=booking_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create

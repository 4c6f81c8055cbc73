"""
HTTP tests for the punch and reference routes.

The application's database dependency is overridden with the seeded
in-memory database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from punchclock.core.database import Database, get_database
from punchclock.main import app

from conftest import ASSEMBLY_BADGE, ASSEMBLY_TERMINAL, SHIPPING_TERMINAL, UNASSIGNED_BADGE


@pytest.fixture
def client(database):
    """Test client bound to the seeded database."""
    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()


def _punch_body(terminal_id, timestamp="2024-09-05T07:02:11", event_type="CLOCK IN"):
    return {
        "terminal_id": terminal_id,
        "badge_id": ASSEMBLY_BADGE,
        "original_timestamp": timestamp,
        "event_type": event_type,
    }


def test_create_and_get_punch(client):
    """Test recording a punch and reading it back by id."""
    # Act
    response = client.post("/api/v1/punches", json=_punch_body(ASSEMBLY_TERMINAL))

    # Assert
    assert response.status_code == 201
    created = response.json()
    assert created["id"] > 0
    assert created["badge_id"] == ASSEMBLY_BADGE
    assert created["event_type"] == "CLOCK IN"

    response = client.get(f"/api/v1/punches/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_create_punch_foreign_terminal_forbidden(client):
    response = client.post("/api/v1/punches", json=_punch_body(SHIPPING_TERMINAL))

    assert response.status_code == 403


def test_create_punch_rejects_offset_timestamp(client):
    """Test that a timestamp carrying a time zone offset is refused with 422."""
    # Arrange
    body = _punch_body(ASSEMBLY_TERMINAL, timestamp="2024-09-05T23:30:00-05:00")

    # Act
    response = client.post("/api/v1/punches", json=body)

    # Assert
    assert response.status_code == 422
    response = client.get(
        f"/api/v1/punches/badge/{ASSEMBLY_BADGE}/day", params={"day": "2024-09-05"}
    )
    assert response.json() == []


def test_create_punch_unknown_badge(client):
    body = _punch_body(ASSEMBLY_TERMINAL)
    body["badge_id"] = "00000000"

    response = client.post("/api/v1/punches", json=body)

    assert response.status_code == 404


def test_create_punch_unassigned_badge_forbidden(client):
    body = _punch_body(0)
    body["badge_id"] = UNASSIGNED_BADGE

    response = client.post("/api/v1/punches", json=body)

    assert response.status_code == 403


def test_get_punch_not_found(client):
    assert client.get("/api/v1/punches/999").status_code == 404


def test_list_punches_for_day(client):
    """Test listing a day, including a clock-out just after midnight."""
    # Arrange
    client.post("/api/v1/punches", json=_punch_body(ASSEMBLY_TERMINAL, "2024-09-05T16:00:00"))
    client.post("/api/v1/punches", json=_punch_body(ASSEMBLY_TERMINAL, "2024-09-05T08:00:00"))
    client.post(
        "/api/v1/punches",
        json=_punch_body(0, "2024-09-06T00:05:00", event_type="CLOCK OUT"),
    )

    # Act
    response = client.get(
        f"/api/v1/punches/badge/{ASSEMBLY_BADGE}/day", params={"day": "2024-09-05"}
    )

    # Assert
    assert response.status_code == 200
    timestamps = [p["original_timestamp"] for p in response.json()]
    assert timestamps == [
        "2024-09-05T08:00:00",
        "2024-09-05T16:00:00",
        "2024-09-06T00:05:00",
    ]


def test_list_punches_for_range_is_empty(client):
    client.post("/api/v1/punches", json=_punch_body(ASSEMBLY_TERMINAL))

    response = client.get(
        f"/api/v1/punches/badge/{ASSEMBLY_BADGE}/range",
        params={"begin": "2024-09-01", "end": "2024-09-30"},
    )

    assert response.status_code == 200
    assert response.json() == []


def test_get_employee(client):
    response = client.get("/api/v1/employees/1")

    assert response.status_code == 200
    employee = response.json()
    assert employee["first_name"] == "Amie"
    assert employee["badge"]["id"] == ASSEMBLY_BADGE
    assert employee["department"]["terminal_id"] == ASSEMBLY_TERMINAL
    assert employee["employee_type"] == "Full-Time Employee"


def test_get_employee_by_badge(client):
    response = client.get(f"/api/v1/employees/badge/{ASSEMBLY_BADGE}")

    assert response.status_code == 200
    assert response.json()["id"] == 1


def test_reference_not_found(client):
    assert client.get("/api/v1/employees/77").status_code == 404
    assert client.get(f"/api/v1/employees/badge/{UNASSIGNED_BADGE}").status_code == 404
    assert client.get("/api/v1/badges/00000000").status_code == 404
    assert client.get("/api/v1/departments/77").status_code == 404
    assert client.get("/api/v1/shifts/77").status_code == 404


def test_get_department_and_shift(client):
    department = client.get("/api/v1/departments/2").json()
    shift = client.get("/api/v1/shifts/1").json()

    assert department["terminal_id"] == SHIPPING_TERMINAL
    assert shift["shift_start"] == "07:00:00"


def test_storage_fault_returns_503():
    """Test that a storage fault is reported as 503."""
    broken = Database(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    app.dependency_overrides[get_database] = lambda: broken
    try:
        response = TestClient(app).get("/api/v1/punches/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503


def test_ready(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"

"""HTTP tests: routing, status codes and error bodies."""

import uuid

import pytest
from fastapi.testclient import TestClient

from carwash.api import deps
from carwash.main import app
from carwash.services.availability_service import AvailabilityService
from carwash.services.booking_service import BookingService
from carwash.services.schedule_service import ScheduleService
from carwash.services.wash_service import WashService
from tests.conftest import ZIP, InMemoryStore, make_block, make_washer


@pytest.fixture
def client(store):
    app.dependency_overrides[deps.get_availability_service] = lambda: AvailabilityService(store)
    app.dependency_overrides[deps.get_schedule_service] = (
        lambda: ScheduleService(store, AvailabilityService(store))
    )
    app.dependency_overrides[deps.get_booking_service] = lambda: BookingService(store, store)
    app.dependency_overrides[deps.get_wash_service] = lambda: WashService(store)
    yield TestClient(app)
    app.dependency_overrides.clear()


def booking_body(**overrides):
    body = {
        "sharetribe_user_id": "user-1",
        "zip": ZIP,
        "service_date": "2025-12-01",
        "start_time": "10:00",
        "end_time": "15:00",
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAvailabilityRoutes:
    def test_missing_zip(self, client):
        response = client.get("/api/v1/availability", params={"date": "2025-12-01"})
        assert response.status_code == 400
        assert response.json()["error"] == "missing_zip"

    def test_missing_date(self, client):
        response = client.get("/api/v1/availability", params={"zip": ZIP})
        assert response.status_code == 400
        assert response.json()["error"] == "missing_date"

    def test_day_view(self, client, store: InMemoryStore):
        alex = make_washer(store, "Alex", "555-0100")
        block = make_block(store, alex, current_bookings=1)

        response = client.get("/api/v1/availability", params={"zip": ZIP, "date": "2025-12-01"})

        assert response.status_code == 200
        body = response.json()
        assert body["zip"] == ZIP
        assert body["date"] == "2025-12-01"
        slot = body["slots"][0]
        assert slot["start_time"] == "10:00:00"
        assert slot["open_blocks"] == 1
        assert slot["total_capacity_remaining"] == 2
        assert slot["washers"][0] == {
            "id": str(alex.id),
            "name": "Alex",
            "phone": "555-0100",
            "availability_id": str(block.id),
        }

    def test_range_view(self, client, store):
        alex = make_washer(store, "Alex")
        make_block(store, alex)

        response = client.get(
            "/api/v1/availability",
            params={"zip": ZIP, "start_date": "2025-12-01", "end_date": "2025-12-07"},
        )

        assert response.status_code == 200
        assert response.json()["days"] == [{"date": "2025-12-01", "open_blocks": 1}]

    def test_store_failure_body(self, client, store):
        store.failing.add("list_blocks_for_day")
        response = client.get("/api/v1/availability", params={"zip": ZIP, "date": "2025-12-01"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "availability_day_failed"
        assert "boom" in body["details"]

    def test_admin_listing(self, client, store):
        alex = make_washer(store, "Alex")
        block = make_block(store, alex)

        response = client.get("/api/v1/admin/availability", params={"zip": ZIP})

        assert response.status_code == 200
        listed = response.json()["availability"]
        assert [b["id"] for b in listed] == [str(block.id)]
        assert listed[0]["washer"]["display_name"] == "Alex"


class TestBookingRoutes:
    def test_created(self, client, store):
        alex = make_washer(store, "Alex")
        block = make_block(store, alex)

        response = client.post("/api/v1/bookings", json=booking_body())

        assert response.status_code == 201
        body = response.json()
        assert body["ok"] is True
        assert body["assigned"]["availability_id"] == str(block.id)
        assert body["wash"]["status"] == "scheduled"

    def test_location_alias(self, client, store):
        alex = make_washer(store, "Alex")
        make_block(store, alex)
        body = booking_body()
        body["location"] = body.pop("zip")

        response = client.post("/api/v1/bookings", json=body)
        assert response.status_code == 201

    def test_missing_fields(self, client):
        response = client.post("/api/v1/bookings", json={"zip": ZIP})
        assert response.status_code == 400
        assert response.json()["error"] == "missing_required_fields"

    def test_missing_washer_id(self, client):
        response = client.post("/api/v1/bookings", json=booking_body(mode="specific"))
        assert response.status_code == 400
        assert response.json()["error"] == "missing_washer_id"

    def test_no_capacity_conflict(self, client):
        response = client.post("/api/v1/bookings", json=booking_body())
        assert response.status_code == 409
        assert response.json() == {
            "error": "no_capacity",
            "message": "No availability remaining for that time slot.",
        }


class TestScheduleRoutes:
    def test_save_and_read(self, client, store):
        washer_id = str(uuid.uuid4())
        payload = {
            "washer_id": washer_id,
            "month": "2025-12",
            "default_zip": ZIP,
            "default_week": [
                {"weekday": 1, "is_working": True, "start_time": "10:00", "end_time": "15:00"},
                {"weekday": 3, "is_working": True, "start_time": "10:00", "end_time": "15:00"},
            ],
            "exceptions": [],
        }

        response = client.post("/api/v1/staff/schedule", json=payload)
        assert response.status_code == 200
        assert response.json()["blocks_created"] == 10

        response = client.get("/api/v1/staff/schedule", params={"washer_id": washer_id, "month": "2025-12"})
        assert response.status_code == 200
        assert [row["weekday"] for row in response.json()["default_week"]] == [1, 3]

    def test_short_month_rejected(self, client, store):
        payload = {
            "washer_id": str(uuid.uuid4()),
            "month": "2025-06",
            "default_week": [
                {"weekday": 1, "is_working": True, "start_time": "10:00", "end_time": "15:00"},
                {"weekday": 3, "is_working": True, "start_time": "10:00", "end_time": "15:00"},
            ],
        }

        response = client.post("/api/v1/staff/schedule", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "min_weekly_hours_failed"
        assert body["failures"] == [{"week_start": "2025-06-29", "hours": 5.0}]
        assert store.blocks == {}

    def test_invalid_month(self, client):
        response = client.get(
            "/api/v1/staff/schedule", params={"washer_id": str(uuid.uuid4()), "month": "June"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_month"

    def test_preview(self, client, store):
        payload = {"washer_id": str(uuid.uuid4()), "month": "2025-06", "default_week": []}

        response = client.post("/api/v1/staff/schedule/preview", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert len(body["days"]) == 30
        assert body["validation"]["ok"] is False
        assert store.blocks == {}


class TestDashboardRoutes:
    def test_dashboard(self, client):
        response = client.get("/api/v1/dashboard", params={"user_id": "user-1"})
        assert response.status_code == 200
        assert response.json() == {"upcoming": [], "past": [], "credits": None}

    def test_admin_wash_created(self, client, store):
        response = client.post("/api/v1/admin/washes", json={
            "sharetribe_user_id": "user-1",
            "scheduled_start": "2025-12-01T10:00:00Z",
            "location_id": ZIP,
        })
        assert response.status_code == 201
        assert response.json()["wash"]["vehicle_count"] == 1
        assert len(store.washes) == 1

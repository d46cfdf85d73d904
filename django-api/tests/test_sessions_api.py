"""Integration tests for the seating API.

Run with: pytest tests/test_sessions_api.py -v
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from seating.handlers import views
from seating.models import MoveCharge, SeatType, Session


@pytest.fixture
def seat_type(db) -> SeatType:
    return SeatType.objects.create(name="Counter", price_per_unit=1000, time_unit_minutes=30)


@pytest.fixture
def vip(db) -> SeatType:
    return SeatType.objects.create(name="VIP", price_per_unit=3000, time_unit_minutes=60)


@pytest.fixture
def open_session(seat_type) -> Session:
    return Session.objects.create(
        table_number="A1",
        seat_type=seat_type,
        guest_count=2,
        charge_started_at=timezone.now() - timedelta(minutes=45),
    )


@pytest.mark.django_db
class TestSeatTypes:
    """Tests for /api/seat-types"""

    def test_list_seat_types_ordered(self, api_client: APIClient):
        SeatType.objects.create(name="VIP", price_per_unit=3000, display_order=2)
        SeatType.objects.create(name="Counter", price_per_unit=1000, display_order=1)
        response = api_client.get("/api/seat-types")
        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Counter", "VIP"]

    def test_create_seat_type_defaults_time_unit(self, api_client: APIClient):
        response = api_client.post("/api/seat-types", {"name": "Sofa", "price_per_unit": 1500})
        assert response.status_code == 201
        body = response.json()
        assert body["time_unit_minutes"] == 30
        assert SeatType.objects.get(pk=body["id"]).price_per_unit == 1500

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Bad", "price_per_unit": -5},
            {"name": "Bad", "price_per_unit": 1000, "time_unit_minutes": 0},
        ],
    )
    def test_create_seat_type_rejects_invalid_pricing(self, api_client: APIClient, payload):
        response = api_client.post("/api/seat-types", payload)
        assert response.status_code == 400
        assert not SeatType.objects.exists()

    def test_get_seat_type_invalid_id_format(self, api_client: APIClient):
        response = api_client.get("/api/seat-types/counter")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SEAT_TYPE_ID"


@pytest.mark.django_db
class TestSessions:
    """Tests for /api/sessions"""

    def test_open_session_starts_billing(self, api_client: APIClient, seat_type):
        response = api_client.post(
            "/api/sessions",
            {"table_number": "B2", "seat_type_id": str(seat_type.id), "guest_count": 3},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["charge_started_at"] is not None
        assert body["seat_type"]["name"] == "Counter"
        assert Session.objects.get(pk=body["id"]).guest_count == 3

    def test_open_session_unknown_seat_type(self, api_client: APIClient):
        response = api_client.post(
            "/api/sessions", {"table_number": "B2", "seat_type_id": str(uuid.uuid4())}
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SEAT_TYPE_NOT_FOUND"

    def test_get_session_not_found(self, api_client: APIClient):
        response = api_client.get(f"/api/sessions/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {
            "error": {"code": "SESSION_NOT_FOUND", "message": "Session not found"}
        }

    def test_get_session_invalid_id_format(self, api_client: APIClient):
        response = api_client.get("/api/sessions/123")
        assert response.status_code == 400


@pytest.mark.django_db
class TestCharge:
    """Tests for /api/sessions/{id}/charge and the pause/resume/checkout flow."""

    def test_running_charge(self, api_client: APIClient, open_session):
        response = api_client.get(f"/api/sessions/{open_session.id}/charge")
        assert response.status_code == 200
        body = response.json()
        assert body["elapsed_minutes"] == 45
        assert body["table_charge"] == 4000
        assert body["move_charge"] == 0
        assert body["charge_amount"] == 4000
        assert body["is_paused"] is False

    def test_charge_not_started_is_zero(self, api_client: APIClient, open_session):
        Session.objects.filter(pk=open_session.id).update(charge_started_at=None)
        body = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert body["charge_amount"] == 0

    def test_paused_charge_stops_at_pause(self, api_client: APIClient, open_session):
        Session.objects.filter(pk=open_session.id).update(
            charge_paused_at=open_session.charge_started_at + timedelta(minutes=10)
        )
        body = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert body["is_paused"] is True
        assert body["elapsed_minutes"] == 10
        assert body["table_charge"] == 2000

    def test_pause_then_pause_again_conflicts(self, api_client: APIClient, open_session):
        url = f"/api/sessions/{open_session.id}/pause"
        assert api_client.post(url).status_code == 200
        response = api_client.post(url)
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CHARGE_ALREADY_PAUSED"

    def test_resume_without_pause_conflicts(self, api_client: APIClient, open_session):
        response = api_client.post(f"/api/sessions/{open_session.id}/resume")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CHARGE_NOT_PAUSED"

    def test_resume_moves_start_forward(self, api_client: APIClient, open_session):
        paused_at = timezone.now() - timedelta(minutes=20)
        Session.objects.filter(pk=open_session.id).update(charge_paused_at=paused_at)

        response = api_client.post(f"/api/sessions/{open_session.id}/resume")

        assert response.status_code == 200
        open_session.refresh_from_db()
        assert open_session.charge_paused_at is None
        # 45 minutes on the clock, the last 20 paused
        body = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert body["elapsed_minutes"] == 25

    def test_move_charges_time_at_old_table(self, api_client: APIClient, open_session, vip):
        response = api_client.post(
            f"/api/sessions/{open_session.id}/move",
            {"seat_type_id": str(vip.id), "table_number": "B1"},
        )
        assert response.status_code == 200
        body = response.json()
        # 45 minutes: one full unit plus one started unit, for 2 guests
        assert body["full_unit_charge"] == 2000
        assert body["partial_unit_charge"] == 2000
        assert body["applied_charge"] == 4000
        assert body["session"]["table_number"] == "B1"
        assert body["session"]["price_per_unit"] == 3000

        [move_charge] = MoveCharge.objects.filter(session=open_session)
        assert move_charge.price_snapshot == 4000
        open_session.refresh_from_db()
        assert open_session.seat_type_id == vip.id
        assert open_session.charge_paused_at is None

        charge = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert charge["table_charge"] == 6000
        assert charge["move_charge"] == 4000
        assert charge["charge_amount"] == 10000

    def test_move_calculate_only_writes_nothing(self, api_client: APIClient, open_session, vip):
        response = api_client.post(
            f"/api/sessions/{open_session.id}/move",
            {"seat_type_id": str(vip.id), "calculate_only": True},
        )
        assert response.status_code == 200
        assert response.json()["previous_charge"] == 4000
        assert response.json()["applied_charge"] == 0
        assert not MoveCharge.objects.exists()
        open_session.refresh_from_db()
        assert open_session.seat_type_id != vip.id

    def test_move_to_occupied_table_conflicts(
        self, api_client: APIClient, open_session, seat_type, vip
    ):
        Session.objects.create(table_number="B1", seat_type=seat_type)
        response = api_client.post(
            f"/api/sessions/{open_session.id}/move",
            {"seat_type_id": str(vip.id), "table_number": "B1"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TABLE_OCCUPIED"

    def test_move_requires_seat_type(self, api_client: APIClient, open_session):
        response = api_client.post(f"/api/sessions/{open_session.id}/move", {})
        assert response.status_code == 400

    def test_price_edit_does_not_reprice_open_session(
        self, api_client: APIClient, open_session, seat_type
    ):
        SeatType.objects.filter(pk=seat_type.id).update(price_per_unit=3000)
        body = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert body["table_charge"] == 4000

    def test_closed_session_reports_saved_amount_after_price_edit(
        self, api_client: APIClient, open_session, seat_type
    ):
        checkout = api_client.post(f"/api/sessions/{open_session.id}/checkout").json()
        assert checkout["charge"]["charge_amount"] == 4000

        SeatType.objects.filter(pk=seat_type.id).update(price_per_unit=3000)

        body = api_client.get(f"/api/sessions/{open_session.id}/charge").json()
        assert body["charge_amount"] == 4000
        assert body["table_charge"] == 4000

    def test_checkout_persists_charge(self, api_client: APIClient, open_session):
        response = api_client.post(f"/api/sessions/{open_session.id}/checkout")
        assert response.status_code == 200
        body = response.json()
        assert body["charge"]["charge_amount"] == 4000
        assert body["session"]["closed_at"] is not None

        open_session.refresh_from_db()
        assert open_session.charge_amount == 4000
        assert open_session.closed_at is not None

    def test_checkout_twice_conflicts(self, api_client: APIClient, open_session):
        api_client.post(f"/api/sessions/{open_session.id}/checkout")
        response = api_client.post(f"/api/sessions/{open_session.id}/checkout")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SESSION_ALREADY_CLOSED"

    def test_unexpected_checkout_error_is_not_masked(
        self, api_client: APIClient, open_session, monkeypatch
    ):
        class BrokenService:
            def checkout(self, session_id):
                raise RuntimeError("database went away")

        monkeypatch.setattr(views, "billing_service", BrokenService)
        with pytest.raises(RuntimeError):
            api_client.post(f"/api/sessions/{open_session.id}/checkout")
        open_session.refresh_from_db()
        assert open_session.closed_at is None

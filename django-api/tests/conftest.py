"""Pytest configuration and shared fixtures."""

import contextlib
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from seating.domain import Money, MoveCharge, SeatType, SeatTypeId, Session, SessionId
from seating.stores.interfaces import SeatTypeStore, SessionStore

T0 = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)


class InMemorySeatTypeStore(SeatTypeStore):
    def __init__(self) -> None:
        self.seat_types: dict[uuid.UUID, SeatType] = {}

    def list_seat_types(self) -> list[SeatType]:
        return sorted(self.seat_types.values(), key=lambda s: (s.display_order, s.name))

    def get_seat_type(self, seat_type_id: SeatTypeId) -> SeatType | None:
        return self.seat_types.get(seat_type_id.value)

    def create_seat_type(
        self, name: str, price_per_unit: int, time_unit_minutes: int, display_order: int
    ) -> SeatType:
        seat_type = SeatType(
            id=SeatTypeId(value=uuid.uuid4()),
            name=name,
            price_per_unit=Money(price_per_unit),
            time_unit_minutes=time_unit_minutes,
            display_order=display_order,
            created_at=T0,
        )
        self.seat_types[seat_type.id.value] = seat_type
        return seat_type


class InMemorySessionStore(SessionStore):
    def __init__(self, seat_types: InMemorySeatTypeStore) -> None:
        self.seat_types = seat_types
        self.sessions: dict[uuid.UUID, Session] = {}
        self.move_charges: list[MoveCharge] = []
        self.locked: list[SessionId] = []

    def get_session(self, session_id: SessionId) -> Session | None:
        return self.sessions.get(session_id.value)

    def lock_session(self, session_id: SessionId):
        self.locked.append(session_id)
        return contextlib.nullcontext()

    def open_session(
        self,
        table_number,
        seat_type_id,
        price_per_unit,
        time_unit_minutes,
        guest_count,
        charge_started_at,
    ) -> Session:
        session = Session(
            id=SessionId(value=uuid.uuid4()),
            table_number=table_number,
            seat_type=self.seat_types.get_seat_type(seat_type_id),
            price_per_unit=Money(price_per_unit),
            time_unit_minutes=time_unit_minutes,
            guest_count=guest_count,
            charge_started_at=charge_started_at,
            charge_paused_at=None,
            closed_at=None,
            charge_amount=None,
            created_at=charge_started_at,
        )
        self.sessions[session.id.value] = session
        return session

    def find_open_session_at(self, table_number) -> Session | None:
        for session in self.sessions.values():
            if session.table_number == table_number and not session.is_closed:
                return session
        return None

    def move_session(
        self,
        session_id,
        table_number,
        seat_type_id,
        price_per_unit,
        time_unit_minutes,
        charge_started_at,
    ) -> Session:
        session = replace(
            self.sessions[session_id.value],
            table_number=table_number,
            seat_type=self.seat_types.get_seat_type(seat_type_id),
            price_per_unit=Money(price_per_unit),
            time_unit_minutes=time_unit_minutes,
            charge_started_at=charge_started_at,
            charge_paused_at=None,
        )
        self.sessions[session_id.value] = session
        return session

    def update_charge_clock(self, session_id, charge_started_at, charge_paused_at) -> Session:
        session = replace(
            self.sessions[session_id.value],
            charge_started_at=charge_started_at,
            charge_paused_at=charge_paused_at,
        )
        self.sessions[session_id.value] = session
        return session

    def close_session(self, session_id, closed_at, charge_amount) -> Session:
        session = replace(
            self.sessions[session_id.value],
            closed_at=closed_at,
            charge_amount=Money(charge_amount),
        )
        self.sessions[session_id.value] = session
        return session

    def list_move_charges(self, session_id: SessionId) -> list[MoveCharge]:
        return [c for c in self.move_charges if c.session_id == session_id]

    def add_move_charge(self, session_id, price_snapshot, note) -> MoveCharge:
        charge = MoveCharge(
            session_id=session_id,
            price_snapshot=Money(price_snapshot),
            note=note,
            created_at=T0,
        )
        self.move_charges.append(charge)
        return charge


class FakeClock:
    """Settable clock for services."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def seat_type_store() -> InMemorySeatTypeStore:
    return InMemorySeatTypeStore()


@pytest.fixture
def session_store(seat_type_store) -> InMemorySessionStore:
    return InMemorySessionStore(seat_type_store)


@pytest.fixture
def counter_seat(seat_type_store) -> SeatType:
    """1000 per 30 minutes."""
    return seat_type_store.create_seat_type("Counter", 1000, 30, 0)

"""Django ORM implementations of the seating stores."""

from contextlib import contextmanager
from datetime import datetime

from django.db import transaction

from seating import models
from seating.domain import (
    Money,
    MoveCharge,
    SeatType,
    SeatTypeId,
    Session,
    SessionId,
)
from seating.stores.interfaces import SeatTypeStore, SessionStore


def _to_seat_type(row: models.SeatType) -> SeatType:
    return SeatType(
        id=SeatTypeId(value=row.id),
        name=row.name,
        price_per_unit=Money(row.price_per_unit),
        time_unit_minutes=row.time_unit_minutes,
        display_order=row.display_order,
        created_at=row.created_at,
    )


def _to_session(row: models.Session) -> Session:
    seat_type = _to_seat_type(row.seat_type)
    return Session(
        id=SessionId(value=row.id),
        table_number=row.table_number,
        seat_type=seat_type,
        price_per_unit=Money(
            row.price_per_unit
            if row.price_per_unit is not None
            else seat_type.price_per_unit.amount
        ),
        time_unit_minutes=(
            row.time_unit_minutes
            if row.time_unit_minutes is not None
            else seat_type.time_unit_minutes
        ),
        guest_count=row.guest_count,
        charge_started_at=row.charge_started_at,
        charge_paused_at=row.charge_paused_at,
        closed_at=row.closed_at,
        charge_amount=Money(row.charge_amount) if row.charge_amount is not None else None,
        created_at=row.created_at,
    )


def _to_move_charge(row: models.MoveCharge) -> MoveCharge:
    return MoveCharge(
        session_id=SessionId(value=row.session_id),
        price_snapshot=Money(row.price_snapshot),
        note=row.note,
        created_at=row.created_at,
    )


class DjangoSeatTypeStore(SeatTypeStore):
    """PostgreSQL-backed seat type store using Django ORM."""

    def list_seat_types(self) -> list[SeatType]:
        return [_to_seat_type(row) for row in models.SeatType.objects.all()]

    def get_seat_type(self, seat_type_id: SeatTypeId) -> SeatType | None:
        row = models.SeatType.objects.filter(pk=seat_type_id.value).first()
        return _to_seat_type(row) if row else None

    def create_seat_type(
        self, name: str, price_per_unit: int, time_unit_minutes: int, display_order: int
    ) -> SeatType:
        row = models.SeatType.objects.create(
            name=name,
            price_per_unit=price_per_unit,
            time_unit_minutes=time_unit_minutes,
            display_order=display_order,
        )
        return _to_seat_type(row)


class DjangoSessionStore(SessionStore):
    """PostgreSQL-backed session store using Django ORM."""

    def _row(self, session_id: SessionId) -> models.Session:
        return models.Session.objects.select_related("seat_type").get(pk=session_id.value)

    def get_session(self, session_id: SessionId) -> Session | None:
        row = (
            models.Session.objects.select_related("seat_type")
            .filter(pk=session_id.value)
            .first()
        )
        return _to_session(row) if row else None

    @contextmanager
    def lock_session(self, session_id: SessionId):
        with transaction.atomic():
            # Evaluated for the lock; SQLite ignores FOR UPDATE.
            list(models.Session.objects.select_for_update().filter(pk=session_id.value))
            yield

    def open_session(
        self,
        table_number: str,
        seat_type_id: SeatTypeId,
        price_per_unit: int,
        time_unit_minutes: int,
        guest_count: int,
        charge_started_at: datetime,
    ) -> Session:
        row = models.Session.objects.create(
            table_number=table_number,
            seat_type_id=seat_type_id.value,
            price_per_unit=price_per_unit,
            time_unit_minutes=time_unit_minutes,
            guest_count=guest_count,
            charge_started_at=charge_started_at,
        )
        return _to_session(self._row(SessionId(value=row.id)))

    def find_open_session_at(self, table_number: str) -> Session | None:
        row = (
            models.Session.objects.select_related("seat_type")
            .filter(table_number=table_number, closed_at__isnull=True)
            .first()
        )
        return _to_session(row) if row else None

    def move_session(
        self,
        session_id: SessionId,
        table_number: str,
        seat_type_id: SeatTypeId,
        price_per_unit: int,
        time_unit_minutes: int,
        charge_started_at: datetime,
    ) -> Session:
        models.Session.objects.filter(pk=session_id.value).update(
            table_number=table_number,
            seat_type_id=seat_type_id.value,
            price_per_unit=price_per_unit,
            time_unit_minutes=time_unit_minutes,
            charge_started_at=charge_started_at,
            charge_paused_at=None,
        )
        return _to_session(self._row(session_id))

    def update_charge_clock(
        self,
        session_id: SessionId,
        charge_started_at: datetime | None,
        charge_paused_at: datetime | None,
    ) -> Session:
        models.Session.objects.filter(pk=session_id.value).update(
            charge_started_at=charge_started_at,
            charge_paused_at=charge_paused_at,
        )
        return _to_session(self._row(session_id))

    def close_session(
        self, session_id: SessionId, closed_at: datetime, charge_amount: int
    ) -> Session:
        models.Session.objects.filter(pk=session_id.value).update(
            closed_at=closed_at,
            charge_amount=charge_amount,
        )
        return _to_session(self._row(session_id))

    def list_move_charges(self, session_id: SessionId) -> list[MoveCharge]:
        rows = models.MoveCharge.objects.filter(session_id=session_id.value)
        return [_to_move_charge(row) for row in rows]

    def add_move_charge(
        self, session_id: SessionId, price_snapshot: int, note: str
    ) -> MoveCharge:
        row = models.MoveCharge.objects.create(
            session_id=session_id.value,
            price_snapshot=price_snapshot,
            note=note,
        )
        return _to_move_charge(row)

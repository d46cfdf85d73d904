"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in seating/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from seating.domain.value_objects import Money, SeatTypeId, SessionId


@dataclass(frozen=True)
class SeatType:
    """Domain representation of a SeatType."""

    id: SeatTypeId
    name: str
    price_per_unit: Money
    time_unit_minutes: int
    display_order: int
    created_at: datetime


@dataclass(frozen=True)
class Session:
    """Domain representation of a table Session.

    price_per_unit and time_unit_minutes are copied from the seat type when
    the party is seated or moved, so later seat type edits do not reprice
    time already sat.
    """

    id: SessionId
    table_number: str
    seat_type: SeatType
    price_per_unit: Money
    time_unit_minutes: int
    guest_count: int
    charge_started_at: datetime | None
    charge_paused_at: datetime | None
    closed_at: datetime | None
    charge_amount: Money | None
    created_at: datetime

    @property
    def is_paused(self) -> bool:
        return self.charge_paused_at is not None

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


@dataclass(frozen=True)
class MoveCharge:
    """Charge for the time spent at a table the party moved away from."""

    session_id: SessionId
    price_snapshot: Money
    note: str
    created_at: datetime

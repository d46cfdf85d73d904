"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from seating.domain import MoveCharge, SeatType, SeatTypeId, Session, SessionId


class SeatTypeStore(ABC):
    """Interface for seat type persistence operations."""

    @abstractmethod
    def list_seat_types(self) -> list[SeatType]:
        """Return all seat types ordered by display_order, then name."""
        ...

    @abstractmethod
    def get_seat_type(self, seat_type_id: SeatTypeId) -> SeatType | None:
        """Return a seat type by ID, or None if not found."""
        ...

    @abstractmethod
    def create_seat_type(
        self, name: str, price_per_unit: int, time_unit_minutes: int, display_order: int
    ) -> SeatType:
        """Persist a new seat type."""
        ...


class SessionStore(ABC):
    """Interface for table session persistence operations.

    Mutating methods are called by the service inside lock_session(), so
    implementations may assume the row is held for the duration.
    """

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def lock_session(self, session_id: SessionId):
        """Context manager holding the session row for a read-modify-write."""
        ...

    @abstractmethod
    def open_session(
        self,
        table_number: str,
        seat_type_id: SeatTypeId,
        price_per_unit: int,
        time_unit_minutes: int,
        guest_count: int,
        charge_started_at: datetime,
    ) -> Session:
        """Persist a new session with billing started and pricing snapshotted."""
        ...

    @abstractmethod
    def find_open_session_at(self, table_number: str) -> Session | None:
        """Return the session occupying a table, if any."""
        ...

    @abstractmethod
    def move_session(
        self,
        session_id: SessionId,
        table_number: str,
        seat_type_id: SeatTypeId,
        price_per_unit: int,
        time_unit_minutes: int,
        charge_started_at: datetime,
    ) -> Session:
        """Seat a session at another table, restart its clock and clear any pause."""
        ...

    @abstractmethod
    def update_charge_clock(
        self,
        session_id: SessionId,
        charge_started_at: datetime | None,
        charge_paused_at: datetime | None,
    ) -> Session:
        """Overwrite the start/pause instants of a session."""
        ...

    @abstractmethod
    def close_session(
        self, session_id: SessionId, closed_at: datetime, charge_amount: int
    ) -> Session:
        """Mark a session closed with its final charge."""
        ...

    @abstractmethod
    def list_move_charges(self, session_id: SessionId) -> list[MoveCharge]:
        """Return seat-move charges for a session, oldest first."""
        ...

    @abstractmethod
    def add_move_charge(
        self, session_id: SessionId, price_snapshot: int, note: str
    ) -> MoveCharge:
        """Persist a seat-move charge against a session."""
        ...

"""Session billing service - all session business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

The arithmetic itself is delegated to seating.domain.billing, which never
raises; this layer is where state rules (paused, closed, not started) are
enforced.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from django.utils import timezone

from seating.domain import GuestCount, SeatTypeId, Session, SessionId
from seating.domain.billing import (
    ChargeBreakdown,
    MoveChargeQuote,
    calculate_charge_with_pause,
    calculate_elapsed_minutes,
    calculate_move_charge,
    shift_start_for_resume,
    summarize_charge,
)
from seating.domain.errors import (
    ChargeAlreadyPausedError,
    ChargeNotPausedError,
    ChargeNotStartedError,
    InvalidSeatTypeIdError,
    InvalidSessionIdError,
    SeatTypeNotFoundError,
    SessionAlreadyClosedError,
    SessionNotFoundError,
    TableOccupiedError,
)
from seating.stores.interfaces import SeatTypeStore, SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """Result of moving a party, or of quoting the move."""

    session: Session
    quote: MoveChargeQuote
    applied_charge: int


def parse_session_id(session_id: str) -> SessionId:
    try:
        return SessionId.from_string(session_id)
    except (TypeError, ValueError) as exc:
        raise InvalidSessionIdError() from exc


def parse_seat_type_id(seat_type_id: str) -> SeatTypeId:
    try:
        return SeatTypeId.from_string(seat_type_id)
    except (TypeError, ValueError) as exc:
        raise InvalidSeatTypeIdError() from exc


class SessionBillingService:
    """Service for table sessions and their time charge."""

    def __init__(
        self,
        store: SessionStore,
        seat_type_store: SeatTypeStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._seat_type_store = seat_type_store
        self._clock = clock

    def _require(self, session_id: SessionId) -> Session:
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id.value))
        return session

    def open_session(self, table_number: str, seat_type_id: str, guest_count: int = 1) -> Session:
        """Seat a party and start the charge clock.

        The seat type's price and time unit are copied onto the session, so
        later edits to the seat type do not reprice it.

        Raises:
            InvalidSeatTypeIdError: If seat_type_id is not a valid UUID.
            SeatTypeNotFoundError: If the seat type does not exist.
            TableOccupiedError: If an open session is already at the table.
            ValueError: If guest_count is not positive.
        """
        seat_type_key = parse_seat_type_id(seat_type_id)
        seat_type = self._seat_type_store.get_seat_type(seat_type_key)
        if seat_type is None:
            raise SeatTypeNotFoundError(seat_type_id)
        guests = GuestCount(guest_count)
        if self._store.find_open_session_at(table_number) is not None:
            raise TableOccupiedError(table_number)

        session = self._store.open_session(
            table_number=table_number,
            seat_type_id=seat_type_key,
            price_per_unit=seat_type.price_per_unit.amount,
            time_unit_minutes=seat_type.time_unit_minutes,
            guest_count=guests.value,
            charge_started_at=self._clock(),
        )
        logger.info(
            "Session %s opened at table %s (%d guests)",
            session.id.value,
            table_number,
            guests.value,
        )
        return session

    def get_session(self, session_id: str) -> Session:
        """Return a session by ID.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        return self._require(parse_session_id(session_id))

    def breakdown(self, session: Session, at: datetime) -> ChargeBreakdown:
        """Charge owed for a session if it were settled at the given instant.

        Time is billed at the session's snapshotted price and time unit.
        """
        move_charges = [
            charge.price_snapshot.amount for charge in self._store.list_move_charges(session.id)
        ]
        if session.charge_started_at is None:
            return summarize_charge(0, move_charges)

        table_charge = calculate_charge_with_pause(
            session.charge_started_at,
            at,
            session.price_per_unit.amount,
            session.time_unit_minutes,
            session.charge_paused_at,
            session.guest_count,
        )
        elapsed = calculate_elapsed_minutes(
            session.charge_started_at, at, session.charge_paused_at
        )
        return summarize_charge(
            table_charge,
            move_charges,
            elapsed_minutes=elapsed,
            is_paused=session.is_paused,
        )

    def settled_breakdown(self, session: Session) -> ChargeBreakdown:
        """Breakdown of a closed session, read back from the saved amount."""
        if session.charge_amount is None:
            return self.breakdown(session, session.closed_at)

        move_charges = [
            charge.price_snapshot.amount for charge in self._store.list_move_charges(session.id)
        ]
        elapsed = calculate_elapsed_minutes(
            session.charge_started_at, session.closed_at, session.charge_paused_at
        )
        return summarize_charge(
            session.charge_amount.amount - sum(move_charges),
            move_charges,
            elapsed_minutes=elapsed,
            is_paused=session.is_paused,
        )

    def get_charge(self, session_id: str) -> ChargeBreakdown:
        """Running charge for a session as of now.

        A closed session reports the amount saved at checkout.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        session = self.get_session(session_id)
        if session.is_closed:
            return self.settled_breakdown(session)
        return self.breakdown(session, self._clock())

    def pause_charge(self, session_id: str) -> Session:
        """Freeze the charge clock.

        Raises:
            SessionAlreadyClosedError, ChargeNotStartedError,
            ChargeAlreadyPausedError
        """
        key = parse_session_id(session_id)
        with self._store.lock_session(key):
            session = self._require(key)
            if session.is_closed:
                raise SessionAlreadyClosedError()
            if session.charge_started_at is None:
                raise ChargeNotStartedError()
            if session.is_paused:
                raise ChargeAlreadyPausedError()

            now = self._clock()
            session = self._store.update_charge_clock(key, session.charge_started_at, now)

        logger.info("Charge paused for session %s at %s", key.value, now.isoformat())
        return session

    def resume_charge(self, session_id: str) -> Session:
        """Restart the charge clock, crediting the time spent paused.

        Raises:
            SessionAlreadyClosedError, ChargeNotPausedError,
            ChargeNotStartedError
        """
        key = parse_session_id(session_id)
        with self._store.lock_session(key):
            session = self._require(key)
            if session.is_closed:
                raise SessionAlreadyClosedError()
            if not session.is_paused:
                raise ChargeNotPausedError()
            if session.charge_started_at is None:
                raise ChargeNotStartedError()

            now = self._clock()
            started_at = shift_start_for_resume(
                session.charge_started_at, session.charge_paused_at, now
            )
            session = self._store.update_charge_clock(key, started_at, None)

        logger.info(
            "Charge resumed for session %s, start moved to %s",
            key.value,
            started_at.isoformat(),
        )
        return session

    def move_session(
        self,
        session_id: str,
        seat_type_id: str,
        table_number: str | None = None,
        calculate_only: bool = False,
        apply_full_charge: bool = True,
        apply_partial_charge: bool = True,
    ) -> MoveOutcome:
        """Move a party to another table or seat type.

        The time at the current table is priced with calculate_move_charge
        and kept as a move charge; the clock then restarts at the target
        seat type's price, and any pause is cleared. With calculate_only the
        quote is returned and nothing is written.

        Raises:
            SessionAlreadyClosedError: If the session was checked out.
            SeatTypeNotFoundError: If the target seat type does not exist.
            TableOccupiedError: If another open session is at the target table.
        """
        key = parse_session_id(session_id)
        target_key = parse_seat_type_id(seat_type_id)
        with self._store.lock_session(key):
            session = self._require(key)
            if session.is_closed:
                raise SessionAlreadyClosedError()
            target = self._seat_type_store.get_seat_type(target_key)
            if target is None:
                raise SeatTypeNotFoundError(seat_type_id)

            target_table = table_number or session.table_number
            if target_table != session.table_number:
                occupant = self._store.find_open_session_at(target_table)
                if occupant is not None and occupant.id != key:
                    raise TableOccupiedError(target_table)

            now = self._clock()
            quote = calculate_move_charge(
                session.charge_started_at,
                now,
                session.price_per_unit.amount,
                session.time_unit_minutes,
                session.charge_paused_at,
                session.guest_count,
            )
            if calculate_only:
                return MoveOutcome(session=session, quote=quote, applied_charge=0)

            applied = quote.applied_charge(apply_full_charge, apply_partial_charge)
            if applied > 0:
                self._store.add_move_charge(
                    key,
                    applied,
                    f"Table {session.table_number} ({session.seat_type.name})",
                )
            moved = self._store.move_session(
                key,
                table_number=target_table,
                seat_type_id=target_key,
                price_per_unit=target.price_per_unit.amount,
                time_unit_minutes=target.time_unit_minutes,
                charge_started_at=now,
            )

        logger.info(
            "Session %s moved from table %s to %s (%s): charged %s of %s",
            key.value,
            session.table_number,
            target_table,
            target.name,
            applied,
            quote.previous_charge,
        )
        return MoveOutcome(session=moved, quote=quote, applied_charge=applied)

    def checkout(self, session_id: str) -> tuple[Session, ChargeBreakdown]:
        """Close a session and persist the amount due.

        Raises:
            SessionAlreadyClosedError: If the session was already checked out.
        """
        key = parse_session_id(session_id)
        with self._store.lock_session(key):
            session = self._require(key)
            if session.is_closed:
                raise SessionAlreadyClosedError()

            closed_at = self._clock()
            breakdown = self.breakdown(session, closed_at)
            session = self._store.close_session(key, closed_at, breakdown.charge_amount)

        logger.info(
            "Session %s checked out: %s (table %s, moves %s, %d min)",
            key.value,
            breakdown.charge_amount,
            breakdown.table_charge,
            breakdown.move_charge,
            breakdown.elapsed_minutes,
        )
        return session, breakdown

"""Seat type service."""

import logging

from seating.domain import Money, SeatType, TimeUnit
from seating.domain.errors import SeatTypeNotFoundError
from seating.services.billing_service import parse_seat_type_id
from seating.stores.interfaces import SeatTypeStore

logger = logging.getLogger(__name__)


class SeatTypeService:
    """Service for seat type configuration."""

    def __init__(self, store: SeatTypeStore) -> None:
        self._store = store

    def list_seat_types(self) -> list[SeatType]:
        """Return all seat types."""
        return self._store.list_seat_types()

    def get_seat_type(self, seat_type_id: str) -> SeatType:
        """Return a seat type by ID.

        Raises:
            InvalidSeatTypeIdError: If the seat_type_id is not a valid UUID.
            SeatTypeNotFoundError: If the seat type does not exist.
        """
        seat_type = self._store.get_seat_type(parse_seat_type_id(seat_type_id))
        if seat_type is None:
            raise SeatTypeNotFoundError(seat_type_id)
        return seat_type

    def create_seat_type(
        self, name: str, price_per_unit: int, time_unit_minutes: int, display_order: int = 0
    ) -> SeatType:
        """Create a seat type.

        Raises:
            ValueError: If the price is negative or the time unit is not positive.
        """
        price = Money(price_per_unit)
        unit = TimeUnit(time_unit_minutes)
        seat_type = self._store.create_seat_type(name, price.amount, unit.minutes, display_order)
        logger.info("Seat type %r created: %s per %d min", name, price, unit.minutes)
        return seat_type

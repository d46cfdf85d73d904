from seating.domain.models import MoveCharge, SeatType, Session
from seating.domain.value_objects import GuestCount, Money, SeatTypeId, SessionId, TimeUnit

__all__ = [
    "SeatType",
    "Session",
    "MoveCharge",
    "SessionId",
    "SeatTypeId",
    "Money",
    "TimeUnit",
    "GuestCount",
]

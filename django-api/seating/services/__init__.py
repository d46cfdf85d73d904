from seating.services.billing_service import MoveOutcome, SessionBillingService
from seating.services.seat_type_service import SeatTypeService

__all__ = ["MoveOutcome", "SessionBillingService", "SeatTypeService"]

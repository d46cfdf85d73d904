from seating.handlers.views import (
    CheckoutView,
    SeatTypeDetailView,
    SeatTypeListView,
    SessionChargeView,
    SessionDetailView,
    SessionListView,
    SessionMoveView,
    SessionPauseView,
    SessionResumeView,
)

__all__ = [
    "CheckoutView",
    "SeatTypeDetailView",
    "SeatTypeListView",
    "SessionChargeView",
    "SessionDetailView",
    "SessionListView",
    "SessionMoveView",
    "SessionPauseView",
    "SessionResumeView",
]

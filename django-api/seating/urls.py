from django.urls import path

from seating.handlers import (
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

urlpatterns = [
    path("seat-types", SeatTypeListView.as_view(), name="seat-type-list"),
    path(
        "seat-types/<str:seat_type_id>",
        SeatTypeDetailView.as_view(),
        name="seat-type-detail",
    ),
    path("sessions", SessionListView.as_view(), name="session-list"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path(
        "sessions/<str:session_id>/charge",
        SessionChargeView.as_view(),
        name="session-charge",
    ),
    path(
        "sessions/<str:session_id>/pause",
        SessionPauseView.as_view(),
        name="session-pause",
    ),
    path(
        "sessions/<str:session_id>/resume",
        SessionResumeView.as_view(),
        name="session-resume",
    ),
    path(
        "sessions/<str:session_id>/move",
        SessionMoveView.as_view(),
        name="session-move",
    ),
    path(
        "sessions/<str:session_id>/checkout",
        CheckoutView.as_view(),
        name="session-checkout",
    ),
]

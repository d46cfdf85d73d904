"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from seating.conf import get_setting
from seating.domain.errors import DomainError, ErrorCode
from seating.handlers.serializers import (
    ChargeBreakdownSerializer,
    MoveOutcomeSerializer,
    SeatTypeInputSerializer,
    SeatTypeSerializer,
    SessionInputSerializer,
    SessionMoveInputSerializer,
    SessionSerializer,
)
from seating.services import SeatTypeService, SessionBillingService
from seating.stores.django_store import DjangoSeatTypeStore, DjangoSessionStore

SEAT_TYPE_LIST_CACHE_KEY = "seat_types:list"

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SEAT_TYPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_SESSION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SEAT_TYPE_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CHARGE_NOT_STARTED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CHARGE_ALREADY_PAUSED: status.HTTP_409_CONFLICT,
    ErrorCode.CHARGE_NOT_PAUSED: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_ALREADY_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.TABLE_OCCUPIED: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def seat_type_service() -> SeatTypeService:
    return SeatTypeService(DjangoSeatTypeStore())


def billing_service() -> SessionBillingService:
    return SessionBillingService(DjangoSessionStore(), DjangoSeatTypeStore())


class SeatTypeListView(APIView):
    """Handler for GET/POST /api/seat-types"""

    def get(self, request: Request) -> Response:
        data = cache.get(SEAT_TYPE_LIST_CACHE_KEY)
        if data is None:
            seat_types = seat_type_service().list_seat_types()
            data = SeatTypeSerializer(seat_types, many=True).data
            cache.set(
                SEAT_TYPE_LIST_CACHE_KEY, data, get_setting("SEAT_TYPE_CACHE_TIMEOUT")
            )
        return Response(data)

    def post(self, request: Request) -> Response:
        serializer = SeatTypeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seat_type = seat_type_service().create_seat_type(**serializer.validated_data)
        return Response(SeatTypeSerializer(seat_type).data, status=status.HTTP_201_CREATED)


class SeatTypeDetailView(APIView):
    """Handler for GET /api/seat-types/{seat_type_id}"""

    def get(self, request: Request, seat_type_id: str) -> Response:
        try:
            seat_type = seat_type_service().get_seat_type(seat_type_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(SeatTypeSerializer(seat_type).data)


class SessionListView(APIView):
    """Handler for POST /api/sessions"""

    def post(self, request: Request) -> Response:
        serializer = SessionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            session = billing_service().open_session(**serializer.validated_data)
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SessionDetailView(APIView):
    """Handler for GET /api/sessions/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        try:
            session = billing_service().get_session(session_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(session).data)


class SessionChargeView(APIView):
    """Handler for GET /api/sessions/{session_id}/charge"""

    def get(self, request: Request, session_id: str) -> Response:
        try:
            breakdown = billing_service().get_charge(session_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(ChargeBreakdownSerializer(breakdown).data)


class SessionPauseView(APIView):
    """Handler for POST /api/sessions/{session_id}/pause"""

    def post(self, request: Request, session_id: str) -> Response:
        try:
            session = billing_service().pause_charge(session_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(session).data)


class SessionResumeView(APIView):
    """Handler for POST /api/sessions/{session_id}/resume"""

    def post(self, request: Request, session_id: str) -> Response:
        try:
            session = billing_service().resume_charge(session_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(session).data)


class SessionMoveView(APIView):
    """Handler for POST /api/sessions/{session_id}/move"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = SessionMoveInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            outcome = billing_service().move_session(session_id, **serializer.validated_data)
        except DomainError as exc:
            return error_response(exc)
        return Response(MoveOutcomeSerializer(outcome).data)


class CheckoutView(APIView):
    """Handler for POST /api/sessions/{session_id}/checkout"""

    def post(self, request: Request, session_id: str) -> Response:
        try:
            session, breakdown = billing_service().checkout(session_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "session": SessionSerializer(session).data,
                "charge": ChargeBreakdownSerializer(breakdown).data,
            }
        )

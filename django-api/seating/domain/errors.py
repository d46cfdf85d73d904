"""Domain error codes for the seating module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SEAT_TYPE_NOT_FOUND = "SEAT_TYPE_NOT_FOUND"
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    INVALID_SEAT_TYPE_ID = "INVALID_SEAT_TYPE_ID"
    CHARGE_NOT_STARTED = "CHARGE_NOT_STARTED"
    CHARGE_ALREADY_PAUSED = "CHARGE_ALREADY_PAUSED"
    CHARGE_NOT_PAUSED = "CHARGE_NOT_PAUSED"
    SESSION_ALREADY_CLOSED = "SESSION_ALREADY_CLOSED"
    TABLE_OCCUPIED = "TABLE_OCCUPIED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class SeatTypeNotFoundError(DomainError):
    """Raised when a seat type is not found."""

    def __init__(self, seat_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.SEAT_TYPE_NOT_FOUND,
            message="Seat type not found",
        )
        self.seat_type_id = seat_type_id


class InvalidSessionIdError(DomainError):
    """Raised when a session ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION_ID,
            message="Invalid session ID format",
        )


class InvalidSeatTypeIdError(DomainError):
    """Raised when a seat type ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SEAT_TYPE_ID,
            message="Invalid seat type ID format",
        )


class ChargeNotStartedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CHARGE_NOT_STARTED,
            message="Charging has not started for this session",
        )


class ChargeAlreadyPausedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CHARGE_ALREADY_PAUSED,
            message="Charging is already paused",
        )


class ChargeNotPausedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CHARGE_NOT_PAUSED,
            message="Charging is not paused",
        )


class SessionAlreadyClosedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SESSION_ALREADY_CLOSED,
            message="Session is already closed",
        )


class TableOccupiedError(DomainError):
    """Raised when a party is moved to a table another session is using."""

    def __init__(self, table_number: str) -> None:
        super().__init__(
            code=ErrorCode.TABLE_OCCUPIED,
            message="Target table is already in use",
        )
        self.table_number = table_number

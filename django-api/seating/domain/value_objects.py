"""Domain primitives that enforce validity at creation time.

These guard data entry. The billing calculator itself never raises and
accepts raw numbers; see seating.domain.billing.
"""

from dataclasses import dataclass
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a table Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class SeatTypeId:
    """Unique identifier for a SeatType."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class Money:
    """Amount in the venue currency's smallest display unit."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class TimeUnit:
    """Billing granularity in whole minutes."""

    minutes: int

    def __post_init__(self) -> None:
        if self.minutes <= 0:
            raise ValueError("Time unit must be a positive number of minutes")


@dataclass(frozen=True)
class GuestCount:
    """Number of guests billed for a seat."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Guest count must be positive")

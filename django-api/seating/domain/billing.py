"""Time-based seat billing.

Pure functions that turn elapsed wall-clock time into a charge. Nothing in
here raises on bad input: invalid timestamps count as zero elapsed time and
invalid pricing configuration falls back to safe defaults, so a charge can
always be rendered. Callers that must reject bad configuration validate it
before it gets here (see value_objects).

Numbers may be int, float or Decimal. A float mixed with a Decimal is
converted to Decimal before any arithmetic.

Elapsed time is truncated to whole minutes first and only then rounded up to
the time unit. Keep that order: ceiling the raw fractional minutes instead
bills one more unit at the boundaries (30m59s is 30 minutes, one unit).
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Union

DEFAULT_TIME_UNIT_MINUTES = 30
DEFAULT_GUEST_COUNT = 1

Timestamp = Union[datetime, str, None]
Number = Union[int, float, Decimal]

_ONE_MINUTE = timedelta(minutes=1)


def _is_finite(value) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return False


def _is_positive(value) -> bool:
    return _is_finite(value) and value > 0


def _align(value: Number, like: Number) -> Number:
    """Convert a float to Decimal when it is about to meet a Decimal."""
    if isinstance(value, float) and isinstance(like, Decimal):
        return Decimal(repr(value))
    return value


def _valid_time_unit(time_unit_minutes: Number | None) -> Number:
    if not _is_positive(time_unit_minutes):
        return DEFAULT_TIME_UNIT_MINUTES
    return time_unit_minutes


def _valid_guest_count(guest_count: int | None) -> int:
    if not _is_positive(guest_count):
        return DEFAULT_GUEST_COUNT
    return guest_count


def _to_instant(value: Timestamp) -> datetime | None:
    """Normalize a timestamp to an aware datetime, or None if unusable.

    Naive datetimes are read as local time. Strings must be ISO 8601.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        try:
            return value.astimezone()
        except (OverflowError, OSError, ValueError):
            return None
    return value


def _billable_span(
    start_time: Timestamp, end_time: Timestamp, pause_time: Timestamp
) -> timedelta | None:
    """Time on the charge clock, or None when start or end is unusable.

    A pause at or before the start bills nothing, a pause inside the
    interval stops the clock, a pause at or after the end has no effect.
    """
    start = _to_instant(start_time)
    end = _to_instant(end_time)
    if start is None or end is None:
        return None

    pause = _to_instant(pause_time)
    if pause is not None:
        if pause <= start:
            return timedelta(0)
        if pause < end:
            end = pause

    span = end - start
    return span if span > timedelta(0) else timedelta(0)


def round_up_to_time_unit(
    elapsed_minutes: Number, time_unit_minutes: Number = DEFAULT_TIME_UNIT_MINUTES
) -> Number:
    """Round elapsed minutes up to a whole number of time units.

    Anything under one minute, including negative or non-finite input,
    bills one full unit.
    """
    unit = _valid_time_unit(time_unit_minutes)

    if not _is_finite(elapsed_minutes) or elapsed_minutes < 1:
        return unit

    elapsed_minutes = _align(elapsed_minutes, unit)
    unit = _align(unit, elapsed_minutes)
    return math.ceil(elapsed_minutes / unit) * unit


def calculate_elapsed_minutes(
    start_time: Timestamp, end_time: Timestamp, pause_time: Timestamp = None
) -> int:
    """Whole minutes billed between start and end.

    A pause instant freezes the clock: when it falls inside the interval,
    billing stops at the pause. A pause at or before the start bills nothing,
    a pause at or after the end has no effect. An unparseable pause is
    ignored.
    """
    span = _billable_span(start_time, end_time, pause_time)
    if span is None:
        return 0
    return span // _ONE_MINUTE


def calculate_charge(
    elapsed_minutes: Number,
    price_per_unit: Number | None,
    time_unit_minutes: Number = DEFAULT_TIME_UNIT_MINUTES,
    guest_count: int = DEFAULT_GUEST_COUNT,
) -> Number:
    """Charge for elapsed minutes at a per-unit, per-guest price.

    A missing, zero or negative price is treated as a free seat.
    """
    if not _is_positive(price_per_unit):
        return 0

    unit = _valid_time_unit(time_unit_minutes)
    guests = _valid_guest_count(guest_count)

    rounded_minutes = round_up_to_time_unit(elapsed_minutes, unit)
    units = rounded_minutes / _align(unit, rounded_minutes)
    if isinstance(units, float) and units.is_integer():
        units = int(units)

    price = _align(price_per_unit, units)
    units = _align(units, price)
    return units * price * _align(guests, price)


def calculate_charge_with_pause(
    start_time: Timestamp,
    end_time: Timestamp,
    price_per_unit: Number | None,
    time_unit_minutes: Number = DEFAULT_TIME_UNIT_MINUTES,
    pause_time: Timestamp = None,
    guest_count: int = DEFAULT_GUEST_COUNT,
) -> Number:
    """Charge for a start/end interval, honoring an optional pause."""
    elapsed_minutes = calculate_elapsed_minutes(start_time, end_time, pause_time)
    return calculate_charge(elapsed_minutes, price_per_unit, time_unit_minutes, guest_count)


def shift_start_for_resume(
    started_at: datetime, paused_at: datetime | None, resumed_at: datetime | None
) -> datetime:
    """Move the charge start forward by the time spent paused.

    The start never moves backwards, even if the resume instant precedes the
    pause (clock skew between writers).
    """
    if paused_at is None or resumed_at is None:
        return started_at
    paused_for = resumed_at - paused_at
    if paused_for <= timedelta(0):
        return started_at
    return started_at + paused_for


@dataclass(frozen=True)
class MoveChargeQuote:
    """Charge for the time spent at a table the party is leaving.

    Completed units and the unfinished unit are priced separately so the
    venue can waive either one when the party moves.
    """

    full_unit_charge: Number
    partial_unit_charge: Number
    time_unit_minutes: Number
    guest_count: int

    @property
    def previous_charge(self) -> Number:
        return self.full_unit_charge + self.partial_unit_charge

    def applied_charge(
        self, apply_full_charge: bool = True, apply_partial_charge: bool = True
    ) -> Number:
        charge = 0
        if apply_full_charge and self.full_unit_charge > 0:
            charge += self.full_unit_charge
        if apply_partial_charge and self.partial_unit_charge > 0:
            charge += self.partial_unit_charge
        return charge


def calculate_move_charge(
    start_time: Timestamp,
    end_time: Timestamp,
    price_per_unit: Number | None,
    time_unit_minutes: Number = DEFAULT_TIME_UNIT_MINUTES,
    pause_time: Timestamp = None,
    guest_count: int = DEFAULT_GUEST_COUNT,
) -> MoveChargeQuote:
    """Price the time at the current table when a party changes tables.

    Unlike calculate_charge this works on fractional minutes: every
    completed unit is billed, plus one unit for any started remainder. Under
    one minute bills one unit as the partial charge. Unusable timestamps or a
    free seat quote nothing.
    """
    unit = _valid_time_unit(time_unit_minutes)
    guests = _valid_guest_count(guest_count)
    span = _billable_span(start_time, end_time, pause_time)

    if span is None or not _is_positive(price_per_unit):
        return MoveChargeQuote(0, 0, unit, guests)

    per_unit = price_per_unit * _align(guests, price_per_unit)
    elapsed_minutes = _align(span / _ONE_MINUTE, unit)
    if elapsed_minutes < 1:
        return MoveChargeQuote(0, per_unit, unit, guests)

    full_units = math.floor(elapsed_minutes / unit)
    remaining_minutes = elapsed_minutes - full_units * unit
    return MoveChargeQuote(
        full_unit_charge=full_units * per_unit,
        partial_unit_charge=per_unit if remaining_minutes > 0 else 0,
        time_unit_minutes=unit,
        guest_count=guests,
    )


class ChargeIssue(Enum):
    """Input problems that were silently defaulted by calculate_charge."""

    INVALID_PRICE = "INVALID_PRICE"
    INVALID_TIME_UNIT = "INVALID_TIME_UNIT"
    INVALID_GUEST_COUNT = "INVALID_GUEST_COUNT"
    NEGATIVE_ELAPSED = "NEGATIVE_ELAPSED"


@dataclass(frozen=True)
class ChargeResult:
    """A charge together with whatever had to be defaulted to produce it."""

    amount: Number
    issues: tuple[ChargeIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.issues


def evaluate_charge(
    elapsed_minutes: Number,
    price_per_unit: Number | None,
    time_unit_minutes: Number = DEFAULT_TIME_UNIT_MINUTES,
    guest_count: int = DEFAULT_GUEST_COUNT,
) -> ChargeResult:
    """Strict variant of calculate_charge.

    The amount is always exactly what calculate_charge returns; the issues
    tell the caller which inputs were replaced by defaults.
    """
    issues = []
    if not (_is_finite(price_per_unit) and price_per_unit >= 0):
        issues.append(ChargeIssue.INVALID_PRICE)
    if not _is_positive(time_unit_minutes):
        issues.append(ChargeIssue.INVALID_TIME_UNIT)
    if not _is_positive(guest_count):
        issues.append(ChargeIssue.INVALID_GUEST_COUNT)
    if _is_finite(elapsed_minutes) and elapsed_minutes < 0:
        issues.append(ChargeIssue.NEGATIVE_ELAPSED)

    amount = calculate_charge(elapsed_minutes, price_per_unit, time_unit_minutes, guest_count)
    return ChargeResult(amount=amount, issues=tuple(issues))


@dataclass(frozen=True)
class ChargeBreakdown:
    """Table time charge plus seat-move charges for one session."""

    table_charge: Number
    move_charge: Number
    elapsed_minutes: int = 0
    is_paused: bool = False

    @property
    def charge_amount(self) -> Number:
        return self.table_charge + self.move_charge


def summarize_charge(
    table_charge: Number,
    move_charges: Iterable[Number] = (),
    elapsed_minutes: int = 0,
    is_paused: bool = False,
) -> ChargeBreakdown:
    """Combine the time charge with move charges, dropping negative parts."""
    move_total = sum((charge for charge in move_charges if charge > 0), 0)
    return ChargeBreakdown(
        table_charge=table_charge if table_charge > 0 else 0,
        move_charge=move_total,
        elapsed_minutes=elapsed_minutes,
        is_paused=is_paused,
    )

"""Shift pay decomposition.

Splits a worked interval into regular and night-differential hours by walking
it one clock hour at a time, then prices each bucket at its fixed rate. This
is the only place pay is computed; time cards, schedule previews and reports
all go through :func:`compute_shift_pay`.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import NIGHT_END_HOUR, NIGHT_RATE, NIGHT_START_HOUR, REGULAR_RATE
from ..core.exceptions import InvalidIntervalError

_SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class PayBreakdown:
    total_hours: float = 0.0
    regular_hours: float = 0.0
    night_hours: float = 0.0
    regular_pay: int = 0
    night_pay: int = 0
    total_pay: int = 0

    def as_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "regular_hours": self.regular_hours,
            "night_hours": self.night_hours,
            "regular_pay": self.regular_pay,
            "night_pay": self.night_pay,
            "total_pay": self.total_pay,
        }


ZERO_BREAKDOWN = PayBreakdown()


def is_night_hour(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like a cashier (0.5 goes up), not like round() (banker's)."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def _clamp(hours: float) -> float:
    if math.isnan(hours) or hours < 0:
        return 0.0
    return hours


def _next_hour(t: datetime) -> datetime:
    return t.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def split_hours(start: datetime, end: datetime) -> tuple[float, float]:
    """Return unrounded (regular_hours, night_hours) for start..end.

    Each segment runs from the cursor to the next top of the hour (or to end),
    and is attributed by the hour-of-day at the cursor.
    """
    regular = 0.0
    night = 0.0
    t = start
    while t < end:
        segment_end = min(end, _next_hour(t))
        hours = (segment_end - t).total_seconds() / _SECONDS_PER_HOUR
        if is_night_hour(t.hour):
            night += hours
        else:
            regular += hours
        t = segment_end
    return regular, night


def compute_shift_pay(start: datetime, end: datetime) -> PayBreakdown:
    """Compute hours and pay for one shift.

    ``start`` and ``end`` are local wall-clock instants. Overnight shifts must
    already have ``end`` on the following day; this function never guesses a
    rollover. A zero-length shift yields an all-zero breakdown.

    Raises:
        InvalidIntervalError: if ``end`` is before ``start`` or the two
            instants cannot be compared (naive vs aware).
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise InvalidIntervalError("start and end must both be naive or both be timezone-aware")
    if end < start:
        raise InvalidIntervalError(
            f"Shift ends before it starts ({start.isoformat()} -> {end.isoformat()})"
        )

    total = _clamp((end - start).total_seconds() / _SECONDS_PER_HOUR)
    regular, night = split_hours(start, end)
    regular = _clamp(regular)
    night = _clamp(night)

    regular_pay = int(round_half_up(regular * REGULAR_RATE))
    night_pay = int(round_half_up(night * NIGHT_RATE))

    return PayBreakdown(
        total_hours=float(round_half_up(total, 2)),
        regular_hours=float(round_half_up(regular, 2)),
        night_hours=float(round_half_up(night, 2)),
        regular_pay=regular_pay,
        night_pay=night_pay,
        total_pay=regular_pay + night_pay,
    )

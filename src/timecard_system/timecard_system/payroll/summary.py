from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .shift_pay import PayBreakdown, round_half_up


@dataclass(frozen=True)
class PaySummary:
    total_hours: float = 0.0
    regular_hours: float = 0.0
    night_hours: float = 0.0
    regular_pay: int = 0
    night_pay: int = 0
    total_pay: int = 0
    days_worked: int = 0
    entries: int = 0
    average_hours_per_day: float = 0.0

    def as_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "regular_hours": self.regular_hours,
            "night_hours": self.night_hours,
            "regular_pay": self.regular_pay,
            "night_pay": self.night_pay,
            "total_pay": self.total_pay,
            "days_worked": self.days_worked,
            "entries": self.entries,
            "average_hours_per_day": self.average_hours_per_day,
        }


def summarize(items: Iterable[tuple[date, PayBreakdown]]) -> PaySummary:
    """Sum breakdowns; ``days_worked`` counts distinct dates."""
    total = regular = night = 0.0
    regular_pay = night_pay = 0
    days: set[date] = set()
    entries = 0

    for work_date, b in items:
        total += b.total_hours
        regular += b.regular_hours
        night += b.night_hours
        regular_pay += b.regular_pay
        night_pay += b.night_pay
        days.add(work_date)
        entries += 1

    average = total / len(days) if days else 0.0
    return PaySummary(
        total_hours=float(round_half_up(total, 2)),
        regular_hours=float(round_half_up(regular, 2)),
        night_hours=float(round_half_up(night, 2)),
        regular_pay=regular_pay,
        night_pay=night_pay,
        total_pay=regular_pay + night_pay,
        days_worked=len(days),
        entries=entries,
        average_hours_per_day=float(round_half_up(average, 2)),
    )

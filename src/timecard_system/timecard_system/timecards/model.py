from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimeCardStatus
from ..payroll.shift_pay import PayBreakdown


@dataclass(frozen=True)
class TimeCard:
    """Thực thể miền (domain): Thẻ chấm công.

    The pay fields are a denormalized copy of the PayBreakdown computed when
    the card was completed; an active card carries zeros.
    """

    timecard_id: int
    user_id: int
    work_date: date
    time_in: datetime
    time_out: Optional[datetime]
    status: TimeCardStatus
    notes: Optional[str] = None
    total_hours: float = 0.0
    regular_hours: float = 0.0
    night_hours: float = 0.0
    regular_pay: int = 0
    night_pay: int = 0
    total_pay: int = 0

    @property
    def breakdown(self) -> PayBreakdown:
        return PayBreakdown(
            total_hours=self.total_hours,
            regular_hours=self.regular_hours,
            night_hours=self.night_hours,
            regular_pay=self.regular_pay,
            night_pay=self.night_pay,
            total_pay=self.total_pay,
        )

    @property
    def is_active(self) -> bool:
        return self.status == TimeCardStatus.ACTIVE


@dataclass(frozen=True)
class ImportResult:
    imported: int
    failed: int
    errors: list[str]

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import RecurringPattern, ScheduleType


@dataclass(frozen=True)
class Schedule:
    """Thực thể miền (domain): Một mục trên lịch (ca làm, họp, nghỉ...).

    start_time/end_time are wall-clock times on work_date; an end time that
    is not after the start belongs to the next morning.
    """

    schedule_id: int
    user_id: int
    title: str
    work_date: date
    start_time: time
    end_time: time
    schedule_type: ScheduleType = ScheduleType.WORK
    description: Optional[str] = None
    color: Optional[str] = None
    recurring: bool = False
    recurring_pattern: Optional[RecurringPattern] = None

    @property
    def is_work(self) -> bool:
        return self.schedule_type == ScheduleType.WORK

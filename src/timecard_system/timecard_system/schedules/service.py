from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, time
from typing import Any, Optional

from ..common.datetime_utils import now_local, overnight_interval
from ..common.validators import require_non_empty
from ..core.enums import RecurringPattern, ScheduleType
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.shift_pay import PayBreakdown
from ..payroll.summary import PaySummary, summarize
from .model import Schedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

_EDITABLE = {
    "title",
    "description",
    "work_date",
    "start_time",
    "end_time",
    "schedule_type",
    "color",
    "recurring",
    "recurring_pattern",
}


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._schedules = schedules
        self._calculator = calculator or StandardPayrollCalculator()

    def create(
        self,
        user_id: int,
        *,
        title: str,
        work_date: date,
        start_time: time,
        end_time: time,
        schedule_type: ScheduleType | str = ScheduleType.WORK,
        description: Optional[str] = None,
        color: Optional[str] = None,
        recurring: bool = False,
        recurring_pattern: RecurringPattern | str | None = None,
    ) -> Schedule:
        schedule = _validated(
            Schedule(
                schedule_id=0,
                user_id=int(user_id),
                title=title,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                schedule_type=schedule_type,
                description=description,
                color=color,
                recurring=recurring,
                recurring_pattern=recurring_pattern,
            )
        )
        return replace(schedule, schedule_id=self._schedules.create(schedule))

    def get(self, user_id: int, schedule_id: int) -> Schedule:
        schedule = self._schedules.get_by_id(user_id=int(user_id), schedule_id=int(schedule_id))
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Schedule]:
        if start is not None and end is not None and end < start:
            raise ValidationError("End date must not be before start date")
        return list(self._schedules.list_for_user(int(user_id), start=start, end=end))

    def update(self, user_id: int, schedule_id: int, /, **changes: Any) -> Schedule:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown schedule fields: {', '.join(sorted(unknown))}")

        schedule = _validated(replace(self.get(user_id, schedule_id), **changes))
        self._schedules.save(schedule)
        return schedule

    def delete(self, user_id: int, schedule_id: int) -> None:
        if not self._schedules.delete(user_id=int(user_id), schedule_id=int(schedule_id)):
            raise NotFoundError("Schedule not found")
        logger.info("user %s deleted schedule %s", user_id, schedule_id)

    def preview_pay(self, schedule: Schedule) -> Optional[PayBreakdown]:
        """Expected pay for a work shift; None for meetings, holidays, etc."""
        if not schedule.is_work:
            return None
        start, end = overnight_interval(schedule.work_date, schedule.start_time, schedule.end_time)
        return self._calculator.breakdown(start, end)

    def work_summary(
        self,
        user_id: int,
        *,
        start: date,
        end: date,
        as_of: Optional[date] = None,
    ) -> PaySummary:
        """Totals for work shifts in the range that are dated on or before
        ``as_of`` (today by default); future shifts are not counted yet."""
        as_of = as_of or now_local().date()
        items = []
        for s in self.list_for_user(user_id, start=start, end=end):
            if s.work_date > as_of:
                continue
            pay = self.preview_pay(s)
            if pay is not None:
                items.append((s.work_date, pay))
        return summarize(items)


def _validated(schedule: Schedule) -> Schedule:
    title = require_non_empty(schedule.title, "Title")

    try:
        schedule_type = ScheduleType(schedule.schedule_type)
    except ValueError:
        raise ValidationError(f"Unknown schedule type: {schedule.schedule_type}") from None

    pattern = None
    if schedule.recurring:
        if not schedule.recurring_pattern:
            raise ValidationError("A recurring schedule needs a recurring pattern")
        try:
            pattern = RecurringPattern(schedule.recurring_pattern)
        except ValueError:
            raise ValidationError(f"Unknown recurring pattern: {schedule.recurring_pattern}") from None

    return replace(
        schedule,
        title=title,
        schedule_type=schedule_type,
        description=(schedule.description or "").strip() or None,
        color=(schedule.color or "").strip() or None,
        recurring=bool(schedule.recurring),
        recurring_pattern=pattern,
    )

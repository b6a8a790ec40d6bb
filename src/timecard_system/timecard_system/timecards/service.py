from __future__ import annotations

import csv
import io
import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import now_local, overnight_interval, parse_clock_time, parse_iso_date
from ..core.enums import TimeCardStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.shift_pay import ZERO_BREAKDOWN
from .model import ImportResult, TimeCard
from .repository import TimeCardRepository

logger = logging.getLogger(__name__)

IMPORT_TEMPLATE_NAME = "timecard-import-template.csv"
IMPORT_TEMPLATE = """date,timeIn,timeOut
2025-07-08,17:55,23:00
2025-07-09,17:58,23:00
2025-07-10,17:57,23:00
2025-07-12,11:55,17:00
2025-07-13,12:00,18:00
2025-07-19,22:00,05:00
2025-07-31,17:58,23:13
"""


class TimeCardService:
    """Use cases: clock in/out, back-fill, edit and delete time cards."""

    def __init__(
        self,
        timecards: TimeCardRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._timecards = timecards
        self._calculator = calculator or StandardPayrollCalculator()

    def get_active(self, user_id: int) -> Optional[TimeCard]:
        return self._timecards.get_active(int(user_id))

    def clock_in(self, user_id: int, *, notes: Optional[str] = None, now: datetime | None = None) -> TimeCard:
        now = now or now_local()

        if self._timecards.get_active(int(user_id)):
            raise ValidationError("You already have an active time card")

        card = TimeCard(
            timecard_id=0,
            user_id=int(user_id),
            work_date=now.date(),
            time_in=now,
            time_out=None,
            status=TimeCardStatus.ACTIVE,
            notes=_clean(notes),
            **ZERO_BREAKDOWN.as_dict(),
        )
        card = replace(card, timecard_id=self._timecards.create(card))
        logger.info("user %s clocked in at %s", user_id, now.isoformat())
        return card

    def clock_out(self, user_id: int, *, notes: Optional[str] = None, now: datetime | None = None) -> TimeCard:
        now = now or now_local()

        active = self._timecards.get_active(int(user_id))
        if not active:
            raise ValidationError("No active time card found")

        card = self._complete(active, time_in=active.time_in, time_out=now)
        if _clean(notes):
            card = replace(card, notes=_clean(notes))

        self._timecards.save(card)
        logger.info("user %s clocked out at %s (%.2fh)", user_id, now.isoformat(), card.total_hours)
        return card

    def add_historical(
        self,
        user_id: int,
        *,
        work_date: date,
        time_in: datetime,
        time_out: datetime,
        notes: Optional[str] = None,
    ) -> TimeCard:
        """Create a completed card for a past shift.

        The interval is taken as given; an overnight shift must already have
        ``time_out`` on the following day.
        """
        card = TimeCard(
            timecard_id=0,
            user_id=int(user_id),
            work_date=work_date,
            time_in=time_in,
            time_out=None,
            status=TimeCardStatus.ACTIVE,
            notes=_clean(notes),
        )
        card = self._complete(card, time_in=time_in, time_out=time_out)
        return replace(card, timecard_id=self._timecards.create(card))

    def add_historical_from_clock(
        self,
        user_id: int,
        *,
        work_date: date,
        time_in: time,
        time_out: time,
        notes: Optional[str] = None,
    ) -> TimeCard:
        """Form/import entry: wall-clock times on ``work_date``.

        A time out that is not after the time in (e.g. 22:00 -> 05:00) is
        read as the next morning.
        """
        start, end = overnight_interval(work_date, time_in, time_out)
        return self.add_historical(user_id, work_date=work_date, time_in=start, time_out=end, notes=notes)

    def import_csv(self, user_id: int, text: str) -> ImportResult:
        """Bulk back-fill from ``date,timeIn,timeOut`` rows.

        A header row is recognised by the word "date" in its first line.
        Bad rows are reported in the result rather than aborting the import.
        """
        rows = [r for r in csv.reader(io.StringIO(text)) if any(c.strip() for c in r)]
        if rows and "date" in ",".join(rows[0]).lower():
            rows = rows[1:]

        imported = 0
        errors: list[str] = []
        for row in rows:
            parts = [c.strip() for c in row]
            if len(parts) < 3:
                continue
            try:
                self.add_historical_from_clock(
                    user_id,
                    work_date=parse_iso_date(parts[0]),
                    time_in=parse_clock_time(parts[1]),
                    time_out=parse_clock_time(parts[2]),
                )
                imported += 1
            except (ValueError, DomainError) as e:
                errors.append(f"{parts[0]}: {e}")

        logger.info("user %s imported %d time cards (%d failed)", user_id, imported, len(errors))
        return ImportResult(imported=imported, failed=len(errors), errors=errors)

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[TimeCard]:
        if start is not None and end is not None and end < start:
            raise ValidationError("End date must not be before start date")
        return list(self._timecards.list_for_user(int(user_id), start=start, end=end))

    def update(
        self,
        user_id: int,
        timecard_id: int,
        *,
        time_in: Optional[datetime] = None,
        time_out: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> TimeCard:
        """Edit a card. Changing either time recomputes pay.

        No day rollover is applied here: an edited time out earlier than the
        time in is rejected.
        """
        card = self._timecards.get_by_id(user_id=int(user_id), timecard_id=int(timecard_id))
        if not card:
            raise NotFoundError("Time card not found")

        if time_in is not None or time_out is not None:
            new_in = time_in or card.time_in
            new_out = time_out or card.time_out
            if new_out is not None:
                card = self._complete(card, time_in=new_in, time_out=new_out)
            else:
                card = replace(card, time_in=new_in)

        if notes is not None:
            card = replace(card, notes=_clean(notes))

        self._timecards.save(card)
        return card

    def delete(self, user_id: int, timecard_id: int) -> None:
        if not self._timecards.delete(user_id=int(user_id), timecard_id=int(timecard_id)):
            raise NotFoundError("Time card not found")
        logger.info("user %s deleted time card %s", user_id, timecard_id)

    def _complete(self, card: TimeCard, *, time_in: datetime, time_out: datetime) -> TimeCard:
        pay = self._calculator.breakdown(time_in, time_out)
        return replace(
            card,
            time_in=time_in,
            time_out=time_out,
            status=TimeCardStatus.COMPLETED,
            **pay.as_dict(),
        )


def _clean(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.strip() or None

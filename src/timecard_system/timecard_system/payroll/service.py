from __future__ import annotations

import calendar
import csv
import io
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import DEFAULT_HISTORY_MONTHS, DEFAULT_REPORT_DAYS, MAX_HISTORY_MONTHS
from ..core.enums import ReportPeriod, TimeCardStatus
from ..core.exceptions import ValidationError
from ..timecards.model import TimeCard
from ..timecards.repository import TimeCardRepository
from .shift_pay import round_half_up
from .summary import PaySummary, summarize

CSV_HEADER = [
    "Date",
    "Time In",
    "Time Out",
    "Regular Hours",
    "Night Hours",
    "Total Hours",
    "Regular Pay",
    "Night Pay",
    "Total Pay",
]


@dataclass(frozen=True)
class DailyTotal:
    work_date: date
    hours: float
    earnings: int


@dataclass(frozen=True)
class ReportData:
    start: date
    end: date
    rows: list[TimeCard]
    summary: PaySummary
    daily: list[DailyTotal]


@dataclass(frozen=True)
class MonthTotal:
    month: date
    total_hours: float
    total_pay: int


@dataclass(frozen=True)
class SalaryComparison:
    current: int
    previous: int
    difference: int
    percentage: float
    is_increase: bool


@dataclass(frozen=True)
class MonthlyHistory:
    months: list[MonthTotal]
    comparison: SalaryComparison


def period_bounds(kind: ReportPeriod | str, today: date) -> tuple[date, date]:
    try:
        kind = ReportPeriod(kind)
    except ValueError:
        raise ValidationError(f"Unknown report type: {kind}") from None

    if kind == ReportPeriod.WEEKLY:
        return today - timedelta(days=DEFAULT_REPORT_DAYS), today
    if kind == ReportPeriod.MONTHLY:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    return date(today.year, 1, 1), date(today.year, 12, 31)


def month_start(day: date, months_back: int = 0) -> date:
    index = day.year * 12 + day.month - 1 - months_back
    return date(index // 12, index % 12 + 1, 1)


def compare_months(current: int, previous: int) -> SalaryComparison:
    """Month-over-month earnings; percentage is the absolute change, 0 when
    there is nothing to compare against."""
    difference = current - previous
    percentage = abs(difference / previous * 100) if previous > 0 else 0.0
    return SalaryComparison(
        current=current,
        previous=previous,
        difference=difference,
        percentage=float(round_half_up(percentage, 2)),
        is_increase=difference >= 0,
    )


class PayrollReportService:
    """Aggregates completed time cards; pay itself is never recomputed here."""

    def __init__(self, timecards: TimeCardRepository):
        self._timecards = timecards

    def build_timecard_report(
        self,
        user_id: int,
        *,
        start: date,
        end: date,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        cards = self._timecards.list_for_user(int(user_id), start=start, end=end)
        completed = [c for c in cards if c.status == TimeCardStatus.COMPLETED]

        summary = summarize((c.work_date, c.breakdown) for c in completed)

        by_day: dict[date, list[TimeCard]] = {}
        for c in completed:
            by_day.setdefault(c.work_date, []).append(c)
        daily = [
            DailyTotal(
                work_date=d,
                hours=float(round_half_up(sum(c.total_hours for c in items), 2)),
                earnings=sum(c.total_pay for c in items),
            )
            for d, items in sorted(by_day.items())
        ]

        return ReportData(start=start, end=end, rows=completed, summary=summary, daily=daily)

    def build_period_report(self, user_id: int, *, kind: ReportPeriod | str, today: Optional[date] = None) -> ReportData:
        start, end = period_bounds(kind, today or date.today())
        return self.build_timecard_report(user_id, start=start, end=end)

    def monthly_history(
        self,
        user_id: int,
        *,
        months: int = DEFAULT_HISTORY_MONTHS,
        today: Optional[date] = None,
    ) -> MonthlyHistory:
        """Per-month totals for the last ``months`` calendar months (oldest
        first, current month last) and the current vs previous month change."""
        if months < 1 or months > MAX_HISTORY_MONTHS:
            raise ValidationError(f"months must be between 1 and {MAX_HISTORY_MONTHS}")
        today = today or date.today()

        totals = []
        for back in range(months - 1, -1, -1):
            start, end = period_bounds(ReportPeriod.MONTHLY, month_start(today, back))
            summary = self.build_timecard_report(user_id, start=start, end=end).summary
            totals.append(MonthTotal(month=start, total_hours=summary.total_hours, total_pay=summary.total_pay))

        if months > 1:
            previous = totals[-2].total_pay
        else:
            start, end = period_bounds(ReportPeriod.MONTHLY, month_start(today, 1))
            previous = self.build_timecard_report(user_id, start=start, end=end).summary.total_pay

        return MonthlyHistory(months=totals, comparison=compare_months(totals[-1].total_pay, previous))

    @staticmethod
    def export_csv(report: ReportData) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for c in report.rows:
            writer.writerow(
                [
                    c.work_date.strftime("%Y-%m-%d"),
                    c.time_in.strftime("%H:%M"),
                    c.time_out.strftime("%H:%M") if c.time_out else "",
                    f"{c.regular_hours:.2f}",
                    f"{c.night_hours:.2f}",
                    f"{c.total_hours:.2f}",
                    c.regular_pay,
                    c.night_pay,
                    c.total_pay,
                ]
            )
        return buf.getvalue()

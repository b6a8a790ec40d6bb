from __future__ import annotations

from datetime import datetime

from ..shift_pay import PayBreakdown, compute_shift_pay
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: regular rate by day, night rate from 22:00 to 06:00."""

    def breakdown(self, start: datetime, end: datetime) -> PayBreakdown:
        return compute_shift_pay(start, end)

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..shift_pay import PayBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def breakdown(self, start: datetime, end: datetime) -> PayBreakdown:
        raise NotImplementedError

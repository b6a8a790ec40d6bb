from datetime import datetime

from src.timecard_system.timecard_system.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.timecard_system.timecard_system.payroll.shift_pay import compute_shift_pay


def test_standard_calculator_delegates_to_shift_pay():
    start = datetime(2025, 7, 31, 17, 58)
    end = datetime(2025, 7, 31, 23, 13)

    calc = StandardPayrollCalculator()
    assert calc.breakdown(start, end) == compute_shift_pay(start, end)
    assert calc.breakdown(start, end).night_hours == 1.22

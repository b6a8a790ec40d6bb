"""Example: use the service layer without Flask.

Prints the pay breakdown for a few shifts from the import template.
"""

from datetime import datetime

from src.timecard_system.timecard_system.payroll.shift_pay import compute_shift_pay


def main():
    shifts = [
        (datetime(2025, 7, 8, 17, 55), datetime(2025, 7, 8, 23, 0)),
        (datetime(2025, 7, 12, 11, 55), datetime(2025, 7, 12, 17, 0)),
        (datetime(2025, 7, 19, 23, 0), datetime(2025, 7, 20, 5, 0)),
    ]
    for start, end in shifts:
        pay = compute_shift_pay(start, end)
        print(f"{start:%Y-%m-%d %H:%M} -> {end:%H:%M}: {pay.as_dict()}")


if __name__ == "__main__":
    main()

"""Timecard System package.

Personal time tracking and pay estimation. Organized by feature modules
(users, timecards, schedules, payroll) with a thin Flask controller layer
over service/repository layers. All pay figures come from
``payroll.shift_pay.compute_shift_pay``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .timecards.mysql_timecard_repository import MySQLTimeCardRepository
from .timecards.repository import TimeCardRepository
from .timecards.service import TimeCardService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    timecards_repo: TimeCardRepository
    schedules_repo: ScheduleRepository

    calculator: PayrollCalculator
    auth_service: AuthService
    timecard_service: TimeCardService
    schedule_service: ScheduleService
    payroll_report_service: PayrollReportService


def wire(
    *,
    users_repo: UserRepository,
    timecards_repo: TimeCardRepository,
    schedules_repo: ScheduleRepository,
    calculator: PayrollCalculator | None = None,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    calculator = calculator or StandardPayrollCalculator()
    return Container(
        users_repo=users_repo,
        timecards_repo=timecards_repo,
        schedules_repo=schedules_repo,
        calculator=calculator,
        auth_service=AuthService(users_repo),
        timecard_service=TimeCardService(timecards_repo, calculator=calculator),
        schedule_service=ScheduleService(schedules_repo, calculator=calculator),
        payroll_report_service=PayrollReportService(timecards_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        timecards_repo=MySQLTimeCardRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
    )

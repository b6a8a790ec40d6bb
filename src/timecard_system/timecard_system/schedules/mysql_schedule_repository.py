from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import RecurringPattern, ScheduleType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Schedule
from .repository import ScheduleRepository

_COLUMNS = """
    schedule_id, user_id, title, description, work_date, start_time, end_time,
    schedule_type, color, recurring, recurring_pattern
"""


def _to_schedule(r: dict[str, Any]) -> Schedule:
    pattern = r.get("recurring_pattern")
    return Schedule(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        description=r.get("description"),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        schedule_type=ScheduleType(r["schedule_type"]),
        color=r.get("color"),
        recurring=bool(r.get("recurring")),
        recurring_pattern=RecurringPattern(pattern) if pattern else None,
    )


def _params(s: Schedule) -> tuple:
    return (
        s.title,
        s.description,
        s.work_date,
        s.start_time,
        s.end_time,
        s.schedule_type.value,
        s.color,
        int(s.recurring),
        s.recurring_pattern.value if s.recurring_pattern else None,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, *, user_id: int, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM schedules WHERE schedule_id=%s AND user_id=%s",
                (int(schedule_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def create(self, schedule: Schedule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(
                    user_id, title, description, work_date, start_time, end_time,
                    schedule_type, color, recurring, recurring_pattern
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(schedule.user_id),) + _params(schedule),
            )
            return int(cur.lastrowid)

    def save(self, schedule: Schedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET title=%s, description=%s, work_date=%s, start_time=%s, end_time=%s,
                    schedule_type=%s, color=%s, recurring=%s, recurring_pattern=%s
                WHERE schedule_id=%s AND user_id=%s
                """,
                _params(schedule) + (int(schedule.schedule_id), int(schedule.user_id)),
            )
            # MySQL reports 0 affected rows when values are unchanged.
            return cur.rowcount >= 0

    def delete(self, *, user_id: int, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM schedules WHERE schedule_id=%s AND user_id=%s",
                (int(schedule_id), int(user_id)),
            )
            return cur.rowcount > 0

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Schedule]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None and end is not None:
            clauses.append("work_date BETWEEN %s AND %s")
            params.extend([start, end])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE {where}
                ORDER BY work_date ASC, start_time ASC
                """,
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

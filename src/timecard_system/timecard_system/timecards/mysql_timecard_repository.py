from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import TimeCardStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeCard
from .repository import TimeCardRepository

_COLUMNS = """
    timecard_id, user_id, work_date, time_in, time_out, status, notes,
    total_hours, regular_hours, night_hours, regular_pay, night_pay, total_pay
"""


def _to_card(r: dict[str, Any]) -> TimeCard:
    return TimeCard(
        timecard_id=int(r["timecard_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        time_in=r["time_in"],
        time_out=r.get("time_out"),
        status=TimeCardStatus(r["status"]),
        notes=r.get("notes"),
        total_hours=float(r.get("total_hours") or 0),
        regular_hours=float(r.get("regular_hours") or 0),
        night_hours=float(r.get("night_hours") or 0),
        regular_pay=int(r.get("regular_pay") or 0),
        night_pay=int(r.get("night_pay") or 0),
        total_pay=int(r.get("total_pay") or 0),
    )


class MySQLTimeCardRepository(TimeCardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self, user_id: int) -> Optional[TimeCard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timecards
                WHERE user_id=%s AND status=%s
                ORDER BY time_in DESC
                LIMIT 1
                """,
                (int(user_id), TimeCardStatus.ACTIVE.value),
            )
            r = fetchone(cur)
            return _to_card(r) if r else None

    def get_by_id(self, *, user_id: int, timecard_id: int) -> Optional[TimeCard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timecards WHERE timecard_id=%s AND user_id=%s",
                (int(timecard_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_card(r) if r else None

    def create(self, card: TimeCard) -> int:
        try:
            return self._insert(card)
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY and card.is_active:
                raise ValidationError("You already have an active time card") from None
            raise

    def _insert(self, card: TimeCard) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timecards(
                    user_id, work_date, time_in, time_out, status, notes,
                    total_hours, regular_hours, night_hours, regular_pay, night_pay, total_pay
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    card.user_id,
                    card.work_date,
                    card.time_in,
                    card.time_out,
                    card.status.value,
                    card.notes,
                    card.total_hours,
                    card.regular_hours,
                    card.night_hours,
                    card.regular_pay,
                    card.night_pay,
                    card.total_pay,
                ),
            )
            return int(cur.lastrowid)

    def save(self, card: TimeCard) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timecards
                SET work_date=%s, time_in=%s, time_out=%s, status=%s, notes=%s,
                    total_hours=%s, regular_hours=%s, night_hours=%s,
                    regular_pay=%s, night_pay=%s, total_pay=%s
                WHERE timecard_id=%s AND user_id=%s
                """,
                (
                    card.work_date,
                    card.time_in,
                    card.time_out,
                    card.status.value,
                    card.notes,
                    card.total_hours,
                    card.regular_hours,
                    card.night_hours,
                    card.regular_pay,
                    card.night_pay,
                    card.total_pay,
                    card.timecard_id,
                    card.user_id,
                ),
            )
            # MySQL reports 0 affected rows when values are unchanged.
            return cur.rowcount >= 0

    def delete(self, *, user_id: int, timecard_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM timecards WHERE timecard_id=%s AND user_id=%s",
                (int(timecard_id), int(user_id)),
            )
            return cur.rowcount > 0

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[TimeCard]:
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
                FROM timecards
                WHERE {where}
                ORDER BY work_date DESC, time_in DESC
                """,
                tuple(params),
            )
            return [_to_card(r) for r in fetchall(cur)]

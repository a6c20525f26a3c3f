from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _row_to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        holiday_date=r["holiday_date"],
        name=r["name"],
        holiday_type=HolidayType(r["holiday_type"]),
        description=r.get("description"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_date(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, holiday_type, description
                FROM holidays
                WHERE holiday_date=%s
                """,
                (holiday_date,),
            )
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Holiday]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None:
            clauses.append("holiday_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("holiday_date <= %s")
            params.append(end)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, holiday_date, name, holiday_type, description
                FROM holidays
                {where}
                ORDER BY holiday_date
                """,
                tuple(params),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        holiday_date: date,
        name: str,
        holiday_type: HolidayType,
        description: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(holiday_date, name, holiday_type, description)
                VALUES(%s,%s,%s,%s)
                """,
                (holiday_date, name, holiday_type.value, description),
            )
            return int(cur.lastrowid)

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0

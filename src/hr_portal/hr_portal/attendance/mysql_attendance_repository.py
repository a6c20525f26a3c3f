from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.enums import AttendanceMode, AttendanceStatus
from ..core.exceptions import RecordConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, require_rows
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, work_date, clock_in, clock_out, mode, status, work_hours, is_corrected"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        mode=AttendanceMode(r["mode"]),
        status=AttendanceStatus(r["status"]),
        work_hours=float(r.get("work_hours") or 0),
        is_corrected=bool(r.get("is_corrected")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_user(self, user_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (user_id, start, end),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY user_id
                """,
                (work_date,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        mode: AttendanceMode,
        status: AttendanceStatus,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, clock_in, mode, status, work_hours, is_corrected)
                    VALUES(%s,%s,%s,%s,%s,0,0)
                    """,
                    (user_id, work_date, clock_in, mode.value, status.value),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as e:
            if e.errno != errorcode.ER_DUP_ENTRY:
                raise
            raise RecordConflictError("Attendance for today was recorded by another request")

    def overwrite_checkin(
        self,
        *,
        attendance_id: int,
        clock_in: datetime,
        mode: AttendanceMode,
        status: AttendanceStatus,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=NULL, mode=%s, status=%s, work_hours=0, is_corrected=0
                WHERE attendance_id=%s AND NOT (clock_in IS NOT NULL AND clock_out IS NULL)
                """,
                (clock_in, mode.value, status.value, int(attendance_id)),
            )
            require_rows(cur, "Attendance for today was changed by another request")

    def update_checkout(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        status: AttendanceStatus,
        work_hours: float,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, status=%s, work_hours=%s
                WHERE attendance_id=%s AND clock_in IS NOT NULL AND clock_out IS NULL
                """,
                (clock_out, status.value, work_hours, int(attendance_id)),
            )
            require_rows(cur, "Attendance for today was closed by another request")

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        mode: AttendanceMode,
        status: AttendanceStatus,
        work_hours: float,
        is_corrected: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, mode=%s, status=%s, work_hours=%s, is_corrected=%s
                WHERE attendance_id=%s
                """,
                (clock_in, clock_out, mode.value, status.value, work_hours, int(is_corrected), int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_mode(self, *, attendance_id: int, mode: AttendanceMode) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET mode=%s WHERE attendance_id=%s",
                (mode.value, int(attendance_id)),
            )
            return cur.rowcount > 0

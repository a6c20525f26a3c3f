from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ApprovalRequest
from .repository import RequestRepository

_SELECT = """
    SELECT r.request_id, r.request_type, r.user_id, u.full_name, r.work_date, r.reason,
           r.requested_clock_in, r.requested_clock_out, r.status, r.created_at,
           r.resolved_by, r.resolved_at, r.admin_note
    FROM approval_requests r
    JOIN users u ON u.user_id = r.user_id
"""


def _row_to_request(r: dict) -> ApprovalRequest:
    return ApprovalRequest(
        request_id=int(r["request_id"]),
        request_type=RequestType(r["request_type"]),
        user_id=int(r["user_id"]),
        user_name=r["full_name"],
        work_date=r["work_date"],
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        requested_clock_in=normalize_mysql_time(r.get("requested_clock_in")),
        requested_clock_out=normalize_mysql_time(r.get("requested_clock_out")),
        resolved_by=r.get("resolved_by"),
        resolved_at=r.get("resolved_at"),
        admin_note=r.get("admin_note"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        request_type: RequestType,
        user_id: int,
        work_date: date,
        reason: str,
        requested_clock_in: Optional[time] = None,
        requested_clock_out: Optional[time] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO approval_requests(
                    request_type, user_id, work_date, reason, requested_clock_in, requested_clock_out, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_type.value,
                    int(user_id),
                    work_date,
                    reason,
                    requested_clock_in,
                    requested_clock_out,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[ApprovalRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[ApprovalRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("r.user_id=%s")
            params.append(int(user_id))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY r.created_at DESC LIMIT %s", tuple(params))
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        resolved_by: Optional[int],
        resolved_at: datetime,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE approval_requests
                SET status=%s, resolved_by=%s, resolved_at=%s, admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, resolved_by, resolved_at, admin_note, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

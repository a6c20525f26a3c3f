from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceMode, AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store for daily attendance.

    Writes are conditional: implementations raise ``RecordConflictError`` instead
    of overwriting a record that another request created or closed meanwhile.
    """

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        mode: AttendanceMode,
        status: AttendanceStatus,
    ) -> int:
        """Insert today's record; conflict if one already exists."""

        raise NotImplementedError

    def overwrite_checkin(
        self,
        *,
        attendance_id: int,
        clock_in: datetime,
        mode: AttendanceMode,
        status: AttendanceStatus,
    ) -> None:
        """Restart a record that is not open; conflict if it is open."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        status: AttendanceStatus,
        work_hours: float,
    ) -> None:
        """Close an open record; conflict if it is no longer open."""

        raise NotImplementedError

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
        """Admin-only override used after approval workflows."""

        raise NotImplementedError

    def update_mode(self, *, attendance_id: int, mode: AttendanceMode) -> bool:
        """Change the work mode only; times, status and the corrected flag stay."""

        raise NotImplementedError

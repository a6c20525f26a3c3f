from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceMode, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    mode: AttendanceMode
    status: AttendanceStatus
    work_hours: float = 0.0
    is_corrected: bool = False

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None


@dataclass(frozen=True)
class TodayAttendance:
    clocked_in: bool
    clock_in: Optional[datetime] = None
    mode: Optional[AttendanceMode] = None
    record: Optional[AttendanceRecord] = None

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import AttendanceMode, AttendanceStatus
from ..core.exceptions import (
    AlreadyClockedInError,
    NoOpenClockInError,
    NotFoundError,
    RecordConflictError,
    ValidationError,
    WeekendClockInDisallowedError,
)
from ..holidays.service import HolidayService
from ..settings.service import SettingsService
from ..worktime.calculator.base import WorkHoursCalculator
from ..worktime.calculator.standard_calculator import StandardWorkHoursCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, TodayAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockResult:
    record: AttendanceRecord
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceCorrection:
    record: AttendanceRecord
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    mode: AttendanceMode
    status: AttendanceStatus
    work_hours: float


class AttendanceService:
    """Clock-in / clock-out state machine for one employee's working day.

    Every command either fully applies or raises; a raised error leaves the
    stored record untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        settings: SettingsService,
        holidays: HolidayService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkHoursCalculator | None = None,
    ):
        self._attendance = attendance
        self._settings = settings
        self._holidays = holidays
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or StandardWorkHoursCalculator()

    def clock_in(
        self,
        user_id: int,
        mode: AttendanceMode = AttendanceMode.OFFICE,
        *,
        now: datetime | None = None,
        override: bool = False,
    ) -> ClockResult:
        now = now or now_local()
        today = now.date()
        settings = self._settings.get()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.is_open:
            raise AlreadyClockedInError("You are already clocked in for today")

        holiday = self._holidays.get_for_date(today)
        if not override:
            if holiday is not None:
                raise WeekendClockInDisallowedError(f"Clock-in is not allowed on a holiday ({holiday.name})")
            if settings.is_weekend(today):
                raise WeekendClockInDisallowedError("Clock-in is not allowed on weekends")

        if mode == AttendanceMode.REMOTE and not settings.allow_remote_clock_in:
            raise ValidationError("Remote clock-in is disabled")

        strategy = self._factory.for_checkin(now=now, settings=settings, holiday=holiday)
        decision = strategy.decide_checkin(now=now, settings=settings)

        if existing is None:
            self._attendance.create_checkin(
                user_id=user_id,
                work_date=today,
                clock_in=now,
                mode=mode,
                status=decision.status,
            )
        else:
            self._attendance.overwrite_checkin(
                attendance_id=existing.attendance_id,
                clock_in=now,
                mode=mode,
                status=decision.status,
            )

        logger.info("user %s clocked in at %s (%s, %s)", user_id, now.isoformat(), mode.value, decision.status.value)
        return ClockResult(record=self._reload(user_id, today), note=decision.note)

    def clock_out(self, user_id: int, *, now: datetime | None = None) -> ClockResult:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or not record.is_open:
            raise NoOpenClockInError("No open clock-in found for today")

        return self._close(record, at=now)

    def auto_clock_out(self, work_date: date, *, now: datetime | None = None) -> list[AttendanceRecord]:
        """Close every open record of ``work_date`` at the end of the work day.

        Records are closed at ``now`` when that comes before the work-day end,
        and never before their own clock-in.
        """
        now = now or now_local()
        settings = self._settings.get()
        if not settings.auto_clock_out:
            return []

        day_end = datetime.combine(work_date, settings.work_day_end)
        closed: list[AttendanceRecord] = []
        for record in self._attendance.list_for_date(work_date):
            if not record.is_open:
                continue
            at = max(min(day_end, now), record.clock_in)
            try:
                closed.append(self._close(record, at=at).record)
            except RecordConflictError:
                logger.warning("auto clock-out skipped for user %s: record changed", record.user_id)
        logger.info("auto clock-out closed %d record(s) for %s", len(closed), work_date.isoformat())
        return closed

    def _close(self, record: AttendanceRecord, *, at: datetime) -> ClockResult:
        if at < record.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        settings = self._settings.get()
        strategy = self._factory.for_checkout(now=at, settings=settings, current_status=record.status)
        decision = strategy.decide_checkout(now=at, settings=settings, current=record.status)
        work_hours = self._calculator.work_hours(record.clock_in, at)

        self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            clock_out=at,
            status=decision.status,
            work_hours=work_hours,
        )

        logger.info(
            "user %s clocked out at %s (%.1fh, %s)", record.user_id, at.isoformat(), work_hours, decision.status.value
        )
        return ClockResult(record=self._reload(record.user_id, record.work_date), note=decision.note)

    def prepare_correction(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        mode: Optional[AttendanceMode] = None,
    ) -> AttendanceCorrection:
        """Validate a time correction and derive its status and hours without saving."""
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if not record:
            raise NotFoundError("No attendance record for that date")

        new_in = clock_in or record.clock_in
        new_out = clock_out or record.clock_out
        if new_out is not None and new_in is None:
            raise ValidationError("Clock-out requires a clock-in")
        if new_in and new_out and new_out < new_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        settings = self._settings.get()
        status = record.status
        if new_in is not None:
            holiday = self._holidays.get_for_date(work_date)
            status = self._factory.for_checkin(now=new_in, settings=settings, holiday=holiday).decide_checkin(
                now=new_in, settings=settings
            ).status
            if new_out is not None:
                status = self._factory.for_checkout(now=new_out, settings=settings, current_status=status).decide_checkout(
                    now=new_out, settings=settings, current=status
                ).status

        return AttendanceCorrection(
            record=record,
            clock_in=new_in,
            clock_out=new_out,
            mode=mode or record.mode,
            status=status,
            work_hours=self._calculator.work_hours(new_in, new_out),
        )

    def save_correction(self, correction: AttendanceCorrection) -> AttendanceRecord:
        record = correction.record
        ok = self._attendance.admin_update_record(
            attendance_id=record.attendance_id,
            clock_in=correction.clock_in,
            clock_out=correction.clock_out,
            mode=correction.mode,
            status=correction.status,
            work_hours=correction.work_hours,
            is_corrected=True,
        )
        if not ok:
            raise RecordConflictError("Attendance record could not be updated")

        logger.info("attendance corrected for user %s on %s", record.user_id, record.work_date.isoformat())
        return self._reload(record.user_id, record.work_date)

    def apply_correction(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        mode: Optional[AttendanceMode] = None,
    ) -> AttendanceRecord:
        """Overwrite a day's times and re-derive status and hours (admin correction)."""
        return self.save_correction(
            self.prepare_correction(
                user_id=user_id, work_date=work_date, clock_in=clock_in, clock_out=clock_out, mode=mode
            )
        )

    def set_mode(self, user_id: int, work_date: date, mode: AttendanceMode) -> Optional[AttendanceRecord]:
        """Change only the work mode of a day; times, status and hours stay as recorded."""
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if record is None:
            return None
        if record.mode != mode and not self._attendance.update_mode(attendance_id=record.attendance_id, mode=mode):
            raise RecordConflictError("Attendance record could not be updated")
        return self._reload(user_id, work_date)

    def get_record(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, work_date)

    def get_today(self, user_id: int, *, now: datetime | None = None) -> TodayAttendance:
        now = now or now_local()
        record = self._attendance.get_for_user_and_date(user_id, now.date())
        if record and record.is_open:
            return TodayAttendance(clocked_in=True, clock_in=record.clock_in, mode=record.mode, record=record)
        return TodayAttendance(clocked_in=False, record=record)

    def history(
        self,
        user_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
        now: datetime | None = None,
    ) -> Sequence[AttendanceRecord]:
        end = end or (now or now_local()).date()
        start = start or end - timedelta(days=DEFAULT_HISTORY_DAYS - 1)
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return self._attendance.list_for_user(user_id, start=start, end=end)

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

    def _reload(self, user_id: int, work_date: date) -> AttendanceRecord:
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if record is None:
            raise RecordConflictError("Attendance record disappeared while saving")
        return record


def to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "user_id": record.user_id,
        "date": record.work_date.isoformat(),
        "clock_in": record.clock_in.isoformat() if record.clock_in else None,
        "clock_out": record.clock_out.isoformat() if record.clock_out else None,
        "mode": record.mode.value,
        "status": record.status.value,
        "status_label": status_label(record.status),
        "work_hours": record.work_hours,
        "is_corrected": record.is_corrected,
    }


def status_label(status: AttendanceStatus) -> str:
    return {
        AttendanceStatus.ON_TIME: "On time",
        AttendanceStatus.LATE: "Late",
        AttendanceStatus.EARLY: "Left early",
        AttendanceStatus.ABSENT: "Absent",
        AttendanceStatus.HOLIDAY: "Holiday",
        AttendanceStatus.WEEKEND: "Weekend",
    }.get(status, status.value)

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_local, week_start
from ..settings.service import SettingsService
from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator, round_hours

RecordPredicate = Callable[[AttendanceRecord], bool]


def in_range(start: date, end: date) -> RecordPredicate:
    """Records dated in [start, end] that are not weekend/holiday days."""

    def predicate(r: AttendanceRecord) -> bool:
        return start <= r.work_date <= end and not r.status.is_non_work_day

    return predicate


def sum_hours(records: Iterable[AttendanceRecord], predicate: RecordPredicate) -> float:
    return sum(r.work_hours for r in records if predicate(r))


def progress(actual: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return min(100.0, actual / target * 100)


@dataclass(frozen=True)
class PeriodSummary:
    start: date
    end: date
    hours: float
    target: float
    progress: float
    days_counted: int

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "hours": self.hours,
            "target": self.target,
            "progress": round(self.progress, 1),
            "days_counted": self.days_counted,
        }


@dataclass(frozen=True)
class WorkHoursSummary:
    today: PeriodSummary
    week: PeriodSummary
    month: PeriodSummary

    def to_dict(self) -> dict:
        return {"today": self.today.to_dict(), "week": self.week.to_dict(), "month": self.month.to_dict()}


class WorkHoursService:
    """Daily / weekly / monthly work-hour views, re-derived on every read."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        settings: SettingsService,
        *,
        calculator: Optional[WorkHoursCalculator] = None,
    ):
        self._attendance = attendance
        self._settings = settings
        self._calculator = calculator or StandardWorkHoursCalculator()

    def summary(self, user_id: int, *, day: date | None = None, now: datetime | None = None) -> WorkHoursSummary:
        now = now or now_local()
        day = day or now.date()
        settings = self._settings.get()
        target = float(settings.daily_target_hours)

        w_start = week_start(day, first_weekday=settings.week_start_day)
        w_end = w_start + timedelta(days=6)
        m_start, m_end = month_bounds(day)

        records = list(
            self._attendance.list_for_user(user_id, start=min(w_start, m_start), end=max(w_end, m_end))
        )

        return WorkHoursSummary(
            today=self._today(records, day=day, now=now, target=target),
            week=self._period(records, w_start, w_end, target),
            month=self._period(records, m_start, m_end, target),
        )

    def _today(self, records: list[AttendanceRecord], *, day: date, now: datetime, target: float) -> PeriodSummary:
        record = next((r for r in records if r.work_date == day), None)
        hours = 0.0
        if record is not None:
            hours = record.work_hours
            if record.is_open and day == now.date():
                # Live elapsed time while still clocked in.
                hours = self._calculator.work_hours(record.clock_in, max(now, record.clock_in))
        return PeriodSummary(
            start=day,
            end=day,
            hours=round_hours(hours),
            target=target,
            progress=progress(hours, target),
            days_counted=1 if record is not None else 0,
        )

    @staticmethod
    def _period(records: list[AttendanceRecord], start: date, end: date, daily_target: float) -> PeriodSummary:
        predicate = in_range(start, end)
        hours = sum_hours(records, predicate)
        days = sum(1 for r in records if predicate(r))
        target = round_hours(max(days, 1) * daily_target)
        return PeriodSummary(
            start=start,
            end=end,
            hours=round_hours(hours),
            target=target,
            progress=progress(hours, target),
            days_counted=days,
        )

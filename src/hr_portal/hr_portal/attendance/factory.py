from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus
from ..holidays.model import Holiday
from ..settings.model import OrganizationSettings
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.non_work_day_strategy import NonWorkDayStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Grace boundaries are inclusive: a clock-in exactly at start + grace is on
    time, a clock-out exactly at end - grace is not early.
    """

    def for_checkin(
        self,
        *,
        now: datetime,
        settings: OrganizationSettings,
        holiday: Optional[Holiday] = None,
    ) -> AttendanceStrategy:
        if holiday is not None:
            return NonWorkDayStrategy(AttendanceStatus.HOLIDAY, note=holiday.name)
        if settings.is_weekend(now.date()):
            return NonWorkDayStrategy(AttendanceStatus.WEEKEND)

        day_start = datetime.combine(now.date(), settings.work_day_start)
        if now <= day_start + timedelta(minutes=settings.grace_minutes_in):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(
        self,
        *,
        now: datetime,
        settings: OrganizationSettings,
        current_status: AttendanceStatus,
    ) -> AttendanceStrategy:
        if current_status.is_non_work_day:
            return NormalStrategy()

        day_end = datetime.combine(now.date(), settings.work_day_end)
        if now < day_end - timedelta(minutes=settings.grace_minutes_out):
            return EarlyLeaveStrategy()
        return NormalStrategy()

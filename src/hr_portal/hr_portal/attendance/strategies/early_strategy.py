from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...settings.model import OrganizationSettings
from .base import AttendanceStrategy, StatusDecision, most_severe


class EarlyLeaveStrategy(AttendanceStrategy):
    """Early clock-out. Does not replace a LATE clock-in; a clock-in through it counts as on time."""

    def decide_checkin(self, *, now: datetime, settings: OrganizationSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(
        self, *, now: datetime, settings: OrganizationSettings, current: AttendanceStatus
    ) -> StatusDecision:
        status = most_severe(current, AttendanceStatus.EARLY)
        note = None
        if status == AttendanceStatus.EARLY:
            end = datetime.combine(now.date(), settings.work_day_end)
            note = f"Left {int((end - now).total_seconds() // 60)} min early"
        return StatusDecision(status=status, note=note)

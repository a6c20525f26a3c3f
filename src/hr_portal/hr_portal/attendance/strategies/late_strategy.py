from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...settings.model import OrganizationSettings
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide_checkin(self, *, now: datetime, settings: OrganizationSettings) -> StatusDecision:
        start = datetime.combine(now.date(), settings.work_day_start)
        minutes = int((now - start).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {minutes} min")

    def decide_checkout(
        self, *, now: datetime, settings: OrganizationSettings, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current)

from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...settings.model import OrganizationSettings
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in; clock-out keeps whatever clock-in decided."""

    def decide_checkin(self, *, now: datetime, settings: OrganizationSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(
        self, *, now: datetime, settings: OrganizationSettings, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current)

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrganizationSettings
from .base import AttendanceStrategy, StatusDecision


class NonWorkDayStrategy(AttendanceStrategy):
    """Weekend or holiday: no lateness rules apply."""

    def __init__(self, status: AttendanceStatus, note: Optional[str] = None):
        self._status = status
        self._note = note

    def decide_checkin(self, *, now: datetime, settings: OrganizationSettings) -> StatusDecision:
        return StatusDecision(status=self._status, note=self._note)

    def decide_checkout(
        self, *, now: datetime, settings: OrganizationSettings, current: AttendanceStatus
    ) -> StatusDecision:
        return StatusDecision(status=current)

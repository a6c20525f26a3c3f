from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrganizationSettings

# Higher wins when clock-in and clock-out disagree.
SEVERITY = {
    AttendanceStatus.ON_TIME: 0,
    AttendanceStatus.EARLY: 1,
    AttendanceStatus.LATE: 2,
}


def most_severe(current: AttendanceStatus, candidate: AttendanceStatus) -> AttendanceStatus:
    if current not in SEVERITY or candidate not in SEVERITY:
        return current
    return candidate if SEVERITY[candidate] > SEVERITY[current] else current


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, settings: OrganizationSettings) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(
        self, *, now: datetime, settings: OrganizationSettings, current: AttendanceStatus
    ) -> StatusDecision:
        raise NotImplementedError

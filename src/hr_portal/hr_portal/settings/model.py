from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import FrozenSet


@dataclass(frozen=True)
class OrganizationSettings:
    """Organization-wide attendance rules (one row per organization)."""

    work_day_start: time
    work_day_end: time
    grace_minutes_in: int
    grace_minutes_out: int
    daily_target_hours: float
    weekend_days: FrozenSet[int]
    week_start_day: int = 6
    allow_remote_clock_in: bool = True
    auto_clock_out: bool = False
    timezone: str = "local"

    def is_weekend(self, day: date) -> bool:
        return day.weekday() in self.weekend_days

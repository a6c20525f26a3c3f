from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...core.constants import WORK_HOURS_PRECISION
from .base import WorkHoursCalculator


def round_hours(hours: float) -> float:
    """Round to one decimal, halves away from zero (9.25 -> 9.3)."""
    return float(Decimal(str(hours)).quantize(Decimal(WORK_HOURS_PRECISION), rounding=ROUND_HALF_UP))


class StandardWorkHoursCalculator(WorkHoursCalculator):
    """Standard rule: out - in, in hours, one decimal, not below 0."""

    def work_hours(self, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> float:
        if not clock_in or not clock_out:
            return 0.0
        seconds = (clock_out - clock_in).total_seconds()
        return max(round_hours(seconds / 3600), 0.0)

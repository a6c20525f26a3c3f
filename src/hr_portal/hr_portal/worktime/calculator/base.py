from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class WorkHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def work_hours(self, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> float:
        raise NotImplementedError

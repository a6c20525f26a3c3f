from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    holiday_date: date
    name: str
    holiday_type: HolidayType = HolidayType.PUBLIC
    description: Optional[str] = None

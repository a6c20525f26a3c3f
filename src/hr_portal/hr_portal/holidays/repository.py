from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import HolidayType
from .model import Holiday


class HolidayRepository(Protocol):
    def get_for_date(self, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Holiday]:
        raise NotImplementedError

    def create(
        self,
        *,
        holiday_date: date,
        name: str,
        holiday_type: HolidayType,
        description: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import HolidayType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    """Company holiday calendar. A holiday is a non-work day for clock-in."""

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def get_for_date(self, day: date) -> Optional[Holiday]:
        return self._holidays.get_for_date(day)

    def is_holiday(self, day: date) -> bool:
        return self._holidays.get_for_date(day) is not None

    def list(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        if year is None:
            return self._holidays.list_range()
        return self._holidays.list_range(start=date(year, 1, 1), end=date(year, 12, 31))

    def add(
        self,
        *,
        current_role: Role,
        holiday_date: date,
        name: str,
        holiday_type: HolidayType = HolidayType.PUBLIC,
        description: Optional[str] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        name = require_non_empty(name, "Holiday name")
        if self._holidays.get_for_date(holiday_date):
            raise ValidationError(f"A holiday already exists on {holiday_date.isoformat()}")

        holiday_id = self._holidays.create(
            holiday_date=holiday_date,
            name=name,
            holiday_type=holiday_type,
            description=(description or "").strip() or None,
        )
        logger.info("holiday added: %s %s", holiday_date.isoformat(), name)
        return holiday_id

    def remove(self, *, current_role: Role, holiday_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Holiday not found")

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

from ..common.datetime_utils import parse_hhmm
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import OrganizationSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_BOOL_FIELDS = ("allow_remote_clock_in", "auto_clock_out")
_INT_FIELDS = ("grace_minutes_in", "grace_minutes_out", "week_start_day")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class SettingsService:
    """Use case: read and change organization attendance rules.

    The stored row wins over ``defaults``; ``defaults`` come from configuration
    and are used until an admin saves settings for the first time.
    """

    def __init__(self, repo: SettingsRepository, defaults: OrganizationSettings):
        self._repo = repo
        self._defaults = defaults

    def get(self) -> OrganizationSettings:
        return self._repo.load() or self._defaults

    def update(self, *, current_role: Role, changes: Mapping[str, Any]) -> OrganizationSettings:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        current = self.get()
        values: dict[str, Any] = {}
        for key, raw in changes.items():
            if key in ("work_day_start", "work_day_end"):
                values[key] = parse_hhmm(str(raw))
            elif key in _INT_FIELDS:
                try:
                    values[key] = int(raw)
                except (TypeError, ValueError):
                    raise ValidationError(f"{key} must be an integer")
            elif key == "daily_target_hours":
                try:
                    values[key] = float(raw)
                except (TypeError, ValueError):
                    raise ValidationError("daily_target_hours must be a number")
            elif key == "weekend_days":
                try:
                    values[key] = frozenset(int(d) for d in raw)
                except (TypeError, ValueError):
                    raise ValidationError("weekend_days must be a list of weekday numbers")
            elif key in _BOOL_FIELDS:
                values[key] = _as_bool(raw)
            elif key == "timezone":
                values[key] = str(raw).strip() or "local"
            else:
                raise ValidationError(f"Unknown setting: {key}")

        updated = replace(current, **values)
        self._validate(updated)
        self._repo.save(updated)
        logger.info("organization settings updated: %s", sorted(values))
        return updated

    @staticmethod
    def _validate(s: OrganizationSettings) -> None:
        if s.work_day_start >= s.work_day_end:
            raise ValidationError("Work day start must be before work day end")
        if s.grace_minutes_in < 0 or s.grace_minutes_out < 0:
            raise ValidationError("Grace minutes cannot be negative")
        if s.daily_target_hours <= 0:
            raise ValidationError("Daily target hours must be positive")
        if not 0 <= s.week_start_day <= 6 or any(not 0 <= d <= 6 for d in s.weekend_days):
            raise ValidationError("Weekdays must be between 0 (Monday) and 6 (Sunday)")

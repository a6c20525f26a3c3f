from datetime import date, time

import pytest

from src.hr_portal.hr_portal.container import default_settings
from src.hr_portal.hr_portal.core.enums import HolidayType, Role
from src.hr_portal.hr_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_defaults_until_saved(container, repos, org_settings):
    assert container.settings_service.get() == org_settings
    assert repos["settings_repo"].saved is None


def test_update_settings(container, repos):
    updated = container.settings_service.update(
        current_role=Role.ADMIN,
        changes={"work_day_start": "09:00", "grace_minutes_in": "5", "weekend_days": [4, 5]},
    )

    assert updated.work_day_start == time(9, 0)
    assert updated.grace_minutes_in == 5
    assert updated.weekend_days == frozenset({4, 5})
    assert repos["settings_repo"].saved == updated
    assert container.settings_service.get() == updated


@pytest.mark.parametrize(
    "changes",
    [
        {"work_day_start": "20:00"},
        {"grace_minutes_out": -1},
        {"daily_target_hours": 0},
        {"weekend_days": [7]},
        {"work_day_end": "7pm"},
        {"colour": "blue"},
    ],
)
def test_invalid_settings_are_rejected(container, repos, changes):
    with pytest.raises(ValidationError):
        container.settings_service.update(current_role=Role.ADMIN, changes=changes)
    assert repos["settings_repo"].saved is None


def test_only_admins_change_settings(container):
    with pytest.raises(AuthorizationError):
        container.settings_service.update(current_role=Role.USER, changes={"grace_minutes_in": 0})


def test_default_settings_from_config_module():
    class FakeConfig:
        WORK_DAY_START = "08:30"
        WORK_DAY_END = "17:30"
        WEEKEND_DAYS = "6"
        AUTO_CLOCK_OUT = True

    settings = default_settings(FakeConfig)

    assert settings.work_day_start == time(8, 30)
    assert settings.weekend_days == frozenset({6})
    assert settings.grace_minutes_in == 10
    assert settings.auto_clock_out is True


def test_holiday_calendar(container):
    svc = container.holiday_service
    new_year = svc.add(current_role=Role.ADMIN, holiday_date=date(2025, 1, 1), name="New Year")
    svc.add(
        current_role=Role.ADMIN,
        holiday_date=date(2026, 1, 1),
        name="New Year",
        holiday_type=HolidayType.OPTIONAL,
    )

    assert svc.is_holiday(date(2025, 1, 1))
    assert not svc.is_holiday(date(2025, 1, 2))
    assert [h.holiday_date.year for h in svc.list(year=2025)] == [2025]
    assert len(svc.list()) == 2

    with pytest.raises(ValidationError):
        svc.add(current_role=Role.ADMIN, holiday_date=date(2025, 1, 1), name="Again")
    with pytest.raises(AuthorizationError):
        svc.remove(current_role=Role.USER, holiday_id=new_year)

    svc.remove(current_role=Role.ADMIN, holiday_id=new_year)
    with pytest.raises(NotFoundError):
        svc.remove(current_role=Role.ADMIN, holiday_id=new_year)

from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import OrganizationSettings
from .repository import SettingsRepository


def _weekend_to_db(days) -> str:
    return ",".join(str(d) for d in sorted(days))


def _weekend_from_db(value) -> frozenset[int]:
    return frozenset(int(p) for p in str(value or "").split(",") if p.strip())


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> Optional[OrganizationSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_day_start, work_day_end, grace_minutes_in, grace_minutes_out,
                       daily_target_hours, weekend_days, week_start_day,
                       allow_remote_clock_in, auto_clock_out, timezone
                FROM organization_settings
                WHERE settings_id=1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return OrganizationSettings(
                work_day_start=normalize_mysql_time(r["work_day_start"]),
                work_day_end=normalize_mysql_time(r["work_day_end"]),
                grace_minutes_in=int(r["grace_minutes_in"]),
                grace_minutes_out=int(r["grace_minutes_out"]),
                daily_target_hours=float(r["daily_target_hours"]),
                weekend_days=_weekend_from_db(r["weekend_days"]),
                week_start_day=int(r["week_start_day"]),
                allow_remote_clock_in=bool(r["allow_remote_clock_in"]),
                auto_clock_out=bool(r["auto_clock_out"]),
                timezone=r.get("timezone") or "local",
            )

    def save(self, settings: OrganizationSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO organization_settings(
                    settings_id, work_day_start, work_day_end, grace_minutes_in, grace_minutes_out,
                    daily_target_hours, weekend_days, week_start_day,
                    allow_remote_clock_in, auto_clock_out, timezone
                )
                VALUES(1,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    work_day_start=VALUES(work_day_start),
                    work_day_end=VALUES(work_day_end),
                    grace_minutes_in=VALUES(grace_minutes_in),
                    grace_minutes_out=VALUES(grace_minutes_out),
                    daily_target_hours=VALUES(daily_target_hours),
                    weekend_days=VALUES(weekend_days),
                    week_start_day=VALUES(week_start_day),
                    allow_remote_clock_in=VALUES(allow_remote_clock_in),
                    auto_clock_out=VALUES(auto_clock_out),
                    timezone=VALUES(timezone)
                """,
                (
                    settings.work_day_start,
                    settings.work_day_end,
                    settings.grace_minutes_in,
                    settings.grace_minutes_out,
                    settings.daily_target_hours,
                    _weekend_to_db(settings.weekend_days),
                    settings.week_start_day,
                    int(settings.allow_remote_clock_in),
                    int(settings.auto_clock_out),
                    settings.timezone,
                ),
            )

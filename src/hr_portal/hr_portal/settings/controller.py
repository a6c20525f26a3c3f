from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..security.context import SessionContext
from ..security.guards import build_guards
from .model import OrganizationSettings


def to_dict(s: OrganizationSettings) -> dict:
    return {
        "work_day_start": s.work_day_start.strftime("%H:%M"),
        "work_day_end": s.work_day_end.strftime("%H:%M"),
        "grace_minutes_in": s.grace_minutes_in,
        "grace_minutes_out": s.grace_minutes_out,
        "daily_target_hours": s.daily_target_hours,
        "weekend_days": sorted(s.weekend_days),
        "week_start_day": s.week_start_day,
        "allow_remote_clock_in": s.allow_remote_clock_in,
        "auto_clock_out": s.auto_clock_out,
        "timezone": s.timezone,
    }


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)

    @app.route("/admin/settings", methods=["GET"], endpoint="settings_get")
    @login_required
    def get_settings(ctx: SessionContext):
        return jsonify(to_dict(container.settings_service.get()))

    @app.route("/admin/settings", methods=["PUT"], endpoint="settings_update")
    @admin_required
    def update_settings(ctx: SessionContext):
        updated = container.settings_service.update(current_role=ctx.role, changes=json_body())
        return jsonify(to_dict(updated))

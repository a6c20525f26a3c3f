from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import date_arg, json_body
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import AttendanceMode
from ..security.context import SessionContext
from ..security.guards import build_guards
from .service import ClockResult, to_dict


def _clock_response(result: ClockResult) -> dict:
    return {"record": to_dict(result.record), "note": result.note}


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)
    attendance = container.attendance_service

    @app.route("/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in(ctx: SessionContext):
        data = json_body()
        mode = require_enum(AttendanceMode, str(data.get("mode") or "OFFICE").upper(), "mode")
        # Only admins may clock in on a weekend or holiday.
        override = bool(data.get("override")) and ctx.is_admin
        result = attendance.clock_in(ctx.require_user_id(), mode, override=override)
        return jsonify(_clock_response(result)), 201

    @app.route("/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out(ctx: SessionContext):
        return jsonify(_clock_response(attendance.clock_out(ctx.require_user_id())))

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today(ctx: SessionContext):
        state = attendance.get_today(ctx.require_user_id())
        return jsonify(
            {
                "clocked_in": state.clocked_in,
                "clock_in": state.clock_in.isoformat() if state.clock_in else None,
                "mode": state.mode.value if state.mode else None,
                "record": to_dict(state.record) if state.record else None,
            }
        )

    @app.route("/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history(ctx: SessionContext):
        records = attendance.history(ctx.require_user_id(), start=date_arg("start"), end=date_arg("end"))
        return jsonify([to_dict(r) for r in records])

    @app.route("/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def summary(ctx: SessionContext):
        result = container.work_hours_service.summary(ctx.require_user_id(), day=date_arg("date"))
        return jsonify(result.to_dict())

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance(ctx: SessionContext):
        day = date_arg("date") or now_local().date()
        return jsonify({"date": day.isoformat(), "records": [to_dict(r) for r in attendance.list_for_date(day)]})

    @app.route("/admin/attendance/auto-clock-out", methods=["POST"], endpoint="admin_auto_clock_out")
    @admin_required
    def auto_clock_out(ctx: SessionContext):
        raw = json_body().get("date")
        day = parse_iso_date(raw) if raw else now_local().date()
        closed = attendance.auto_clock_out(day)
        return jsonify({"date": day.isoformat(), "closed": [to_dict(r) for r in closed]})

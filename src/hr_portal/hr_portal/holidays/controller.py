from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import HolidayType
from ..core.exceptions import ValidationError
from ..security.context import SessionContext
from ..security.guards import build_guards
from .model import Holiday


def to_dict(h: Holiday) -> dict:
    return {
        "id": h.holiday_id,
        "date": h.holiday_date.isoformat(),
        "name": h.name,
        "type": h.holiday_type.value,
        "description": h.description,
    }


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)

    @app.route("/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    def list_holidays(ctx: SessionContext):
        year = request.args.get("year")
        if year is not None and not year.isdigit():
            raise ValidationError("year must be a number")
        holidays = container.holiday_service.list(year=int(year) if year else None)
        return jsonify([to_dict(h) for h in holidays])

    @app.route("/holidays", methods=["POST"], endpoint="holidays_add")
    @admin_required
    def add_holiday(ctx: SessionContext):
        data = json_body()
        holiday_id = container.holiday_service.add(
            current_role=ctx.role,
            holiday_date=parse_iso_date(data.get("date", "")),
            name=data.get("name", ""),
            holiday_type=require_enum(HolidayType, data.get("type") or "public", "type"),
            description=data.get("description"),
        )
        return jsonify({"id": holiday_id}), 201

    @app.route("/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @admin_required
    def delete_holiday(holiday_id: int, ctx: SessionContext):
        container.holiday_service.remove(current_role=ctx.role, holiday_id=holiday_id)
        return "", 204

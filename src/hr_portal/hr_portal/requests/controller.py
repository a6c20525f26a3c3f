from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, optional_time
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import RequestStatus, RequestType
from ..security.context import SessionContext
from ..security.guards import build_guards
from .service import to_dict


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)
    requests_ = container.request_service

    @app.route("/requests", methods=["GET"], endpoint="requests_mine")
    @login_required
    def my_requests(ctx: SessionContext):
        return jsonify([to_dict(r) for r in requests_.list_mine(ctx)])

    @app.route("/requests", methods=["POST"], endpoint="requests_submit")
    @login_required
    def submit(ctx: SessionContext):
        data = json_body()
        req = requests_.submit(
            ctx,
            request_type=require_enum(RequestType, str(data.get("type") or "").upper(), "type"),
            work_date=parse_iso_date(data.get("date", "")),
            reason=data.get("reason", ""),
            requested_clock_in=optional_time(data.get("clock_in")),
            requested_clock_out=optional_time(data.get("clock_out")),
        )
        return jsonify(to_dict(req)), 201

    @app.route("/admin/requests", methods=["GET"], endpoint="requests_all")
    @admin_required
    def all_requests(ctx: SessionContext):
        raw = request.args.get("status")
        status = require_enum(RequestStatus, raw.upper(), "status") if raw else None
        return jsonify([to_dict(r) for r in requests_.list_all(status)])

    @app.route("/admin/requests/<int:request_id>/approve", methods=["POST"], endpoint="requests_approve")
    @admin_required
    def approve(request_id: int, ctx: SessionContext):
        req = requests_.approve(ctx, request_id, json_body().get("admin_note", ""))
        return jsonify(to_dict(req))

    @app.route("/admin/requests/<int:request_id>/reject", methods=["POST"], endpoint="requests_reject")
    @admin_required
    def reject(request_id: int, ctx: SessionContext):
        req = requests_.reject(ctx, request_id, json_body().get("admin_note", ""))
        return jsonify(to_dict(req))

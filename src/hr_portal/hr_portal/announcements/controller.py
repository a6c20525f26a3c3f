from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import Priority
from ..security.context import SessionContext
from ..security.guards import build_guards
from .service import to_dict


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)

    @app.route("/announcements", methods=["GET"], endpoint="announcements_list")
    @login_required
    def list_announcements(ctx: SessionContext):
        return jsonify([to_dict(a) for a in container.announcement_service.list()])

    @app.route("/announcements", methods=["POST"], endpoint="announcements_create")
    @admin_required
    def create_announcement(ctx: SessionContext):
        data = json_body()
        created = container.announcement_service.create(
            ctx,
            title=data.get("title", ""),
            subject=data.get("subject"),
            content=data.get("content", ""),
            priority=require_enum(Priority, str(data.get("priority") or "medium").lower(), "priority"),
        )
        return jsonify(to_dict(created)), 201

    @app.route("/announcements/<int:announcement_id>", methods=["DELETE"], endpoint="announcements_delete")
    @admin_required
    def delete_announcement(announcement_id: int, ctx: SessionContext):
        container.announcement_service.delete(ctx, announcement_id)
        return "", 204

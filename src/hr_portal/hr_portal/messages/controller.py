from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..core.exceptions import ValidationError
from ..security.context import SessionContext
from ..security.guards import build_guards
from .service import to_dict


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.tokens)

    @app.route("/messages", methods=["GET"], endpoint="messages_list")
    @login_required
    def list_messages(ctx: SessionContext):
        return jsonify([to_dict(m) for m in container.message_service.list_for(ctx)])

    @app.route("/messages", methods=["POST"], endpoint="messages_send")
    @login_required
    def send_message(ctx: SessionContext):
        data = json_body()
        try:
            receiver_id = int(data.get("receiver_id"))
        except (TypeError, ValueError):
            raise ValidationError("receiver_id must be a user id")
        sent = container.message_service.send(
            ctx, receiver_id=receiver_id, subject=data.get("subject", ""), body=data.get("body", "")
        )
        return jsonify(to_dict(sent)), 201

    @app.route("/messages/<int:message_id>/read", methods=["POST"], endpoint="messages_read")
    @login_required
    def mark_read(message_id: int, ctx: SessionContext):
        return jsonify(to_dict(container.message_service.mark_read(ctx, message_id)))

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container
from ..security.context import SessionContext
from ..security.guards import build_guards
from .service import user_to_dict


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.tokens)

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        return jsonify(container.auth_service.login(data.get("email", ""), data.get("password", "")))

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me(ctx: SessionContext):
        if ctx.user_id is None:
            return jsonify({"id": None, "email": ctx.email, "role": ctx.role.value, "super_admin": True})
        return jsonify(user_to_dict(container.user_service.get(ctx.user_id)))

    def _account_fields(data: dict) -> dict:
        return {
            "email": data.get("email", ""),
            "password": data.get("password", ""),
            "full_name": data.get("full_name") or data.get("name") or "",
            "department": data.get("department"),
            "position": data.get("position"),
        }

    @app.route("/auth/admin/create-user", methods=["POST"], endpoint="auth_create_user")
    @admin_required
    def create_user(ctx: SessionContext):
        user = container.user_service.create_user(**_account_fields(json_body()))
        return jsonify(user_to_dict(user)), 201

    @app.route("/auth/admin/create-admin", methods=["POST"], endpoint="auth_create_admin")
    @admin_required
    def create_admin(ctx: SessionContext):
        user = container.user_service.create_admin(**_account_fields(json_body()))
        return jsonify(user_to_dict(user)), 201

    @app.route("/directory", methods=["GET"], endpoint="directory")
    @login_required
    def directory(ctx: SessionContext):
        users = container.directory_service.list(
            search=request.args.get("search", ""),
            department=request.args.get("department", ""),
            sort_by=request.args.get("sort_by", "name"),
            sort_order=request.args.get("sort_order", "asc"),
        )
        return jsonify([user_to_dict(u) for u in users])

    @app.route("/departments", methods=["GET"], endpoint="departments_list")
    @login_required
    def departments(ctx: SessionContext):
        return jsonify([{"id": d.dept_id, "name": d.dept_name} for d in container.user_service.list_departments()])

    @app.route("/departments", methods=["POST"], endpoint="departments_add")
    @admin_required
    def add_department(ctx: SessionContext):
        dept_id = container.user_service.add_department(current_role=ctx.role, name=json_body().get("name", ""))
        return jsonify({"id": dept_id}), 201

    @app.route("/departments/<int:dept_id>", methods=["DELETE"], endpoint="departments_delete")
    @admin_required
    def delete_department(dept_id: int, ctx: SessionContext):
        container.user_service.remove_department(current_role=ctx.role, dept_id=dept_id)
        return "", 204

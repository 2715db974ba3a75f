from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import make_admin_required
from ..common.http import json_body
from ..container import Container
from .payloads import parse_key, parse_patch, parse_submission


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.auth_service)

    @app.route("/api/folhas", methods=["POST"], endpoint="submit_folha")
    def submit_folha():
        """Public write path used by school staff."""
        container.submission_service.submit(parse_submission(json_body()))
        return jsonify({"ok": True})

    @app.route("/api/admin/folhas", methods=["POST"], endpoint="admin_save_folha")
    @admin_required
    def admin_save_folha():
        """Admin save of any roster row, including employees who have not submitted yet."""
        key = container.submission_service.submit(parse_submission(json_body()))
        return jsonify(container.record_admin_service.get(key).to_dict())

    @app.route("/api/admin/registros/<int:record_id>", methods=["GET"], endpoint="admin_get_record")
    @admin_required
    def admin_get_record(record_id: int):
        return jsonify(container.record_admin_service.get(record_id).to_dict())

    @app.route("/api/admin/registros/<int:record_id>", methods=["PATCH"], endpoint="admin_edit_record")
    @admin_required
    def admin_edit_record(record_id: int):
        record = container.record_admin_service.edit(record_id, parse_patch(json_body()))
        return jsonify(record.to_dict())

    @app.route("/api/admin/registros", methods=["PATCH"], endpoint="admin_edit_record_by_key")
    @admin_required
    def admin_edit_record_by_key():
        data = json_body()
        record = container.record_admin_service.edit(parse_key(data), parse_patch(data))
        return jsonify(record.to_dict())

    @app.route("/api/admin/registros/<int:record_id>", methods=["DELETE"], endpoint="admin_delete_record")
    @admin_required
    def admin_delete_record(record_id: int):
        container.record_admin_service.delete(record_id)
        return jsonify({"ok": True})

    @app.route("/api/admin/registros", methods=["DELETE"], endpoint="admin_delete_record_by_key")
    @admin_required
    def admin_delete_record_by_key():
        container.record_admin_service.delete(parse_key(json_body()))
        return jsonify({"ok": True})

from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = json_body()
        password = data.get("password")
        if password is None:
            password = data.get("senha")
        issued = container.auth_service.login(str(password) if password is not None else None)
        return jsonify(issued.to_dict())

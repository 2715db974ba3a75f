from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import make_admin_required
from ..common.http import json_body
from ..container import Container
from ..folhas.payloads import parse_employee


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.auth_service)

    @app.route("/api/funcionarios", methods=["GET"], endpoint="list_employees")
    def list_employees():
        employees = container.employee_service.list(request.args.get("q"))
        return jsonify([e.to_dict() for e in employees])

    @app.route("/api/admin/funcionarios/<matricula>", methods=["PUT"], endpoint="admin_upsert_employee")
    @admin_required
    def admin_upsert_employee(matricula: str):
        employee = container.employee_service.upsert(parse_employee(json_body(), matricula=matricula))
        return jsonify(employee.to_dict())

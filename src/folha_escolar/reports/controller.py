from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..auth.guards import make_admin_required
from ..container import Container
from ..core.constants import CSV_ENCODING

CSV_FIELDS = [
    "matricula",
    "nome",
    "funcao",
    "vinculo",
    "carga",
    "escola",
    "faltas",
    "faltas_com_atestado",
    "horas_extras",
    "observacoes",
    "enviado",
]


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.auth_service)

    def _school_arg():
        # Absent means every school; an empty value selects records without a school.
        return request.args.get("escola")

    @app.route("/api/admin/folhas/<period>", methods=["GET"], endpoint="admin_monthly_roster")
    @admin_required
    def admin_monthly_roster(period: str):
        rows = container.report_service.monthly_roster(period, school=_school_arg())
        return jsonify({"period": period, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/admin/folhas/<period>/totais", methods=["GET"], endpoint="admin_period_totals")
    @admin_required
    def admin_period_totals(period: str):
        body = container.report_service.period_totals(period, school=_school_arg()).to_dict()
        body["por_escola"] = [t.to_dict() for t in container.report_service.totals_by_school(period)]
        return jsonify(body)

    @app.route("/api/admin/folhas/<period>/export.csv", methods=["GET"], endpoint="admin_roster_csv")
    @admin_required
    def admin_roster_csv(period: str):
        rows = container.report_service.monthly_roster(period, school=_school_arg())

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            data = row.to_dict()
            data["enviado"] = "sim" if row.submitted else "não"
            writer.writerow(data)

        return app.response_class(
            out.getvalue().encode(CSV_ENCODING),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=folha_{period}.csv"},
        )

    @app.route("/api/admin/consolidado", methods=["GET"], endpoint="admin_consolidated")
    @admin_required
    def admin_consolidated():
        period = request.args.get("period") or request.args.get("mes") or None
        rows = container.report_service.consolidated_by_employee(period)
        return jsonify({"period": period, "rows": [r.to_dict() for r in rows]})

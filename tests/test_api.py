from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from folha_escolar.core.enums import Role

SCENARIO = {
    "period": "2026-02",
    "matricula": "101",
    "nome": "Maria",
    "escola": "Escola A",
    "faltas": 1,
    "horas_extras": 3.5,
}


def test_health_reports_database_state(client, db_conn):
    assert client.get("/api/health").get_json() == {"ok": True, "db": True}

    db_conn.alive = False
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True, "db": False}


def test_submission_then_roster_and_totals(client, admin_headers):
    resp = client.post("/api/folhas", json=SCENARIO)
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}

    roster = client.get("/api/admin/folhas/2026-02", headers=admin_headers).get_json()
    [row] = roster["rows"]
    assert row["matricula"] == "101"
    assert row["nome"] == "Maria"
    assert row["faltas"] == 1
    assert row["horas_extras"] == 3.5
    assert row["enviado"] is True

    totals = client.get("/api/admin/folhas/2026-02/totais", headers=admin_headers).get_json()
    assert totals["count"] == 1
    assert totals["sum_overtime"] == 3.5
    assert totals["sum_absences"] == 1
    assert totals["por_escola"][0]["escola"] == "Escola A"


def test_invalid_submission_is_400_with_field(client):
    resp = client.post("/api/folhas", json={"period": "2026-2", "matricula": "1"})
    assert resp.status_code == 400
    assert resp.get_json()["campo"] == "period"
    assert "erro" in resp.get_json()

    resp = client.post("/api/folhas", json={"period": "2026-02"})
    assert resp.status_code == 400
    assert resp.get_json()["campo"] == "matricula"


def test_submission_without_json_body_is_400(client):
    resp = client.post("/api/folhas", data="not json", content_type="text/plain")
    assert resp.status_code == 400


def test_public_employee_list_and_search(client):
    client.post("/api/folhas", json=SCENARIO)
    client.post("/api/folhas", json={"period": "2026-02", "matricula": "202", "nome": "Paulo"})

    assert [e["matricula"] for e in client.get("/api/funcionarios").get_json()] == ["101", "202"]
    assert [e["nome"] for e in client.get("/api/funcionarios?q=pau").get_json()] == ["Paulo"]


ADMIN_ROUTES = [
    ("get", "/api/admin/folhas/2026-02"),
    ("get", "/api/admin/folhas/2026-02/totais"),
    ("get", "/api/admin/folhas/2026-02/export.csv"),
    ("get", "/api/admin/consolidado"),
    ("get", "/api/admin/registros/1"),
    ("patch", "/api/admin/registros/1"),
    ("delete", "/api/admin/registros/1"),
    ("patch", "/api/admin/registros"),
    ("delete", "/api/admin/registros"),
    ("put", "/api/admin/funcionarios/101"),
    ("post", "/api/admin/folhas"),
]


@pytest.mark.parametrize("method, path", ADMIN_ROUTES)
def test_admin_routes_without_credential_are_401(client, method, path):
    resp = getattr(client, method)(path, json={})
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize("method, path", ADMIN_ROUTES)
def test_admin_routes_with_viewer_role_are_403(client, auth_service, method, path):
    token = auth_service.issue(Role.VIEWER).token
    resp = getattr(client, method)(path, json={}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_expired_or_tampered_credential_is_401(client, auth_service, admin_headers):
    past = datetime.now(timezone.utc) - timedelta(hours=13)
    expired = auth_service.issue(Role.ADMIN, now=past).token
    resp = client.get("/api/admin/consolidado", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401

    tampered = admin_headers["Authorization"][:-4] + "AAAA"
    resp = client.get("/api/admin/consolidado", headers={"Authorization": tampered})
    assert resp.status_code == 401

    resp = client.get("/api/admin/consolidado", headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401


def test_login_wrong_password_is_401(client):
    resp = client.post("/api/admin/login", json={"password": "errada"})
    assert resp.status_code == 401
    assert resp.get_json()["erro"]


def test_login_without_configuration_is_500(employees_repo, folhas_repo, db_conn):
    from folha_escolar.auth.service import AuthService
    from folha_escolar.container import wire_services
    from folha_escolar.main import create_app

    container = wire_services(
        conn=db_conn,
        employees_repo=employees_repo,
        folhas_repo=folhas_repo,
        auth_service=AuthService(admin_password=None, signing_secret=None),
    )
    client = create_app(settings_module="config.testing", container=container).test_client()

    resp = client.post("/api/admin/login", json={"password": ""})
    assert resp.status_code == 500
    assert "ADMIN_PASSWORD" in resp.get_json()["erro"]


def test_edit_and_delete_by_id(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)
    [row] = client.get("/api/admin/folhas/2026-02", headers=admin_headers).get_json()["rows"]
    record_id = row["id"]

    resp = client.patch(f"/api/admin/registros/{record_id}", json={"horas_extras": "2"}, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["horas_extras"] == 2.0
    assert body["faltas"] == 1

    assert client.delete(f"/api/admin/registros/{record_id}", headers=admin_headers).get_json() == {"ok": True}
    resp = client.delete(f"/api/admin/registros/{record_id}", headers=admin_headers)
    assert resp.status_code == 404

    resp = client.patch(f"/api/admin/registros/{record_id}", json={"faltas": 1}, headers=admin_headers)
    assert resp.status_code == 404


def test_edit_and_delete_by_natural_key(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)
    key = {"period": "2026-02", "matricula": "101", "escola": "Escola A"}

    resp = client.patch("/api/admin/registros", json={**key, "observacoes": "revisado"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["observacoes"] == "revisado"

    assert client.delete("/api/admin/registros", json=key, headers=admin_headers).status_code == 200
    assert client.delete("/api/admin/registros", json=key, headers=admin_headers).status_code == 404


def test_admin_upsert_employee_keeps_existing_values(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)

    resp = client.put("/api/admin/funcionarios/101", json={"nome": "", "funcao": "Merendeira"}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.get_json()["nome"] == "Maria"
    assert resp.get_json()["funcao"] == "Merendeira"


def test_roster_csv_export(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)
    client.put("/api/admin/funcionarios/202", json={"nome": "Paulo"}, headers=admin_headers)

    resp = client.get("/api/admin/folhas/2026-02/export.csv", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0].startswith("matricula,nome,funcao")
    assert len(lines) == 3
    assert lines[1].startswith("101,Maria")
    assert lines[2].endswith("não")


def test_consolidated_endpoint(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)
    client.post("/api/folhas", json={**SCENARIO, "period": "2026-03", "horas_extras": 1})

    body = client.get("/api/admin/consolidado", headers=admin_headers).get_json()
    assert body["rows"][0]["horas_extras"] == 4.5
    assert body["rows"][0]["meses"] == 2

    body = client.get("/api/admin/consolidado?period=2026-03", headers=admin_headers).get_json()
    assert body["rows"][0]["horas_extras"] == 1.0


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nao-existe")
    assert resp.status_code == 404
    assert "erro" in resp.get_json()


def test_admin_saves_row_for_employee_without_submission(client, admin_headers):
    client.put("/api/admin/funcionarios/202", json={"nome": "Paulo"}, headers=admin_headers)
    [row] = client.get("/api/admin/folhas/2026-02", headers=admin_headers).get_json()["rows"]
    assert row["id"] is None

    payload = {"period": "2026-02", "matricula": "202", "faltas": 2, "horas_extras": "1,5"}
    resp = client.post("/api/admin/folhas", json=payload, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["nome"] == "Paulo"
    assert body["faltas"] == 2
    assert body["horas_extras"] == 1.5

    resp = client.post("/api/admin/folhas", json={**payload, "faltas": 0}, headers=admin_headers)
    assert resp.get_json()["faltas"] == 0
    assert resp.get_json()["id"] == body["id"]


def test_out_of_range_numbers_are_stored_as_zero(client, admin_headers):
    resp = client.post("/api/folhas", json={"period": "2026-02", "matricula": "1", "horas_extras": 1e30})
    assert resp.status_code == 200
    resp = client.post("/api/folhas", json={"period": "2026-02", "matricula": "2", "faltas": "1e40"})
    assert resp.status_code == 200

    rows = client.get("/api/admin/folhas/2026-02", headers=admin_headers).get_json()["rows"]
    assert [(r["horas_extras"], r["faltas"]) for r in rows] == [(0.0, 0), (0.0, 0)]


def test_roster_blank_school_query_filters_records_without_school(client, admin_headers):
    client.post("/api/folhas", json=SCENARIO)
    client.post("/api/folhas", json={"period": "2026-02", "matricula": "202", "nome": "Paulo", "faltas": 2})

    body = client.get("/api/admin/folhas/2026-02/totais?escola=", headers=admin_headers).get_json()
    assert body["count"] == 1
    assert body["sum_absences"] == 2
    assert body["escola"] == ""

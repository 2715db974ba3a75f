from __future__ import annotations

from datetime import datetime, timezone

import pytest

from folha_escolar.auth.service import AuthService
from folha_escolar.container import wire_services
from folha_escolar.main import create_app

from tests.fakes import FakeConnection, InMemoryEmployees, InMemoryFolhas

ADMIN_PASSWORD = "senha-admin"
JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 10, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def folhas_repo(employees_repo):
    return InMemoryFolhas(employees_repo)


@pytest.fixture
def auth_service():
    return AuthService(admin_password=ADMIN_PASSWORD, signing_secret=JWT_SECRET)


@pytest.fixture
def db_conn():
    return FakeConnection()


@pytest.fixture
def container(db_conn, employees_repo, folhas_repo, auth_service):
    return wire_services(
        conn=db_conn,
        employees_repo=employees_repo,
        folhas_repo=folhas_repo,
        auth_service=auth_service,
    )


@pytest.fixture
def app(container):
    return create_app(settings_module="config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}

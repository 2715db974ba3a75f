from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.service import AuthService
from .core.constants import DEFAULT_TOKEN_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .folhas.mysql_folha_repository import MySQLFolhaRepository
from .folhas.service import RecordAdminService, SubmissionService
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    folhas_repo: MySQLFolhaRepository

    auth_service: AuthService
    employee_service: EmployeeService
    submission_service: SubmissionService
    record_admin_service: RecordAdminService
    report_service: ReportService


def wire_services(*, conn, employees_repo, folhas_repo, auth_service: AuthService) -> Container:
    return Container(
        conn=conn,
        employees_repo=employees_repo,
        folhas_repo=folhas_repo,
        auth_service=auth_service,
        employee_service=EmployeeService(employees_repo),
        submission_service=SubmissionService(folhas_repo),
        record_admin_service=RecordAdminService(folhas_repo),
        report_service=ReportService(employees_repo, folhas_repo),
    )


def build_container(
    *,
    db_config: dict,
    admin_password: Optional[str] = None,
    admin_password_hash: Optional[str] = None,
    signing_secret: Optional[str] = None,
    token_hours: int = DEFAULT_TOKEN_HOURS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    auth_service = AuthService(
        admin_password=admin_password,
        admin_password_hash=admin_password_hash,
        signing_secret=signing_secret,
        token_hours=token_hours,
    )

    return wire_services(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        folhas_repo=MySQLFolhaRepository(conn),
        auth_service=auth_service,
    )

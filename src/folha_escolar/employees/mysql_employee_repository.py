from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

EMPLOYEE_COLUMNS = "matricula, nome, funcao, vinculo, carga, escola"

# Empty incoming values keep what is stored.
UPSERT_EMPLOYEE_SQL = """
    INSERT INTO funcionarios (matricula, nome, funcao, vinculo, carga, escola)
    VALUES (%s, %s, %s, %s, %s, %s)
    ON DUPLICATE KEY UPDATE
        nome = IF(VALUES(nome) = '', nome, VALUES(nome)),
        funcao = IF(VALUES(funcao) = '', funcao, VALUES(funcao)),
        vinculo = IF(VALUES(vinculo) = '', vinculo, VALUES(vinculo)),
        carga = IF(VALUES(carga) = '', carga, VALUES(carga)),
        escola = IF(VALUES(escola) = '', escola, VALUES(escola))
"""


def employee_params(employee: Employee) -> tuple:
    return (
        employee.matricula,
        employee.name,
        employee.role,
        employee.employment_type,
        employee.workload,
        employee.school,
    )


def row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        matricula=str(r["matricula"]),
        name=r.get("nome") or "",
        role=r.get("funcao") or "",
        employment_type=r.get("vinculo") or "",
        workload=r.get("carga") or "",
        school=r.get("escola") or "",
    )


def _like(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, query: Optional[str] = None) -> Sequence[Employee]:
        where = ""
        params: list[object] = []
        if query:
            where = "WHERE nome LIKE %s OR matricula LIKE %s"
            params = [_like(query), _like(query)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {EMPLOYEE_COLUMNS}
                FROM funcionarios
                {where}
                ORDER BY (nome = '') ASC, nome ASC, matricula ASC
                """,
                tuple(params),
            )
            return [row_to_employee(r) for r in fetchall(cur)]

    def get(self, matricula: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {EMPLOYEE_COLUMNS} FROM funcionarios WHERE matricula=%s",
                (matricula,),
            )
            r = fetchone(cur)
            return row_to_employee(r) if r else None

    def upsert(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(UPSERT_EMPLOYEE_SQL, employee_params(employee))
            cur.execute(
                f"SELECT {EMPLOYEE_COLUMNS} FROM funcionarios WHERE matricula=%s",
                (employee.matricula,),
            )
            return row_to_employee(fetchone(cur))

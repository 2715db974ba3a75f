from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_naive_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from ..employees.model import Employee
from ..employees.mysql_employee_repository import UPSERT_EMPLOYEE_SQL, employee_params
from .model import FolhaRecord, RecordFields, RecordKey, RecordPatch
from .repository import FolhaRepository

# Resubmission replaces every column (last write wins, no accumulation).
UPSERT_RECORD_SQL = """
    INSERT INTO folhas
        (periodo, matricula, escola, faltas, faltas_com_atestado, horas_extras, observacoes, extra, atualizado_em)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
    ON DUPLICATE KEY UPDATE
        faltas = VALUES(faltas),
        faltas_com_atestado = VALUES(faltas_com_atestado),
        horas_extras = VALUES(horas_extras),
        observacoes = VALUES(observacoes),
        extra = VALUES(extra),
        atualizado_em = VALUES(atualizado_em)
"""

RECORD_SELECT = """
    SELECT
        fl.id, fl.periodo, fl.matricula, fl.escola,
        fl.faltas, fl.faltas_com_atestado, fl.horas_extras,
        fl.observacoes, fl.extra, fl.atualizado_em,
        f.nome
    FROM folhas fl
    JOIN funcionarios f ON f.matricula = fl.matricula
"""

_PATCH_COLUMNS = {
    "absences": "faltas",
    "absences_with_excuse": "faltas_com_atestado",
    "overtime_hours": "horas_extras",
    "notes": "observacoes",
    "extra": "extra",
}


def row_to_record(r: Dict[str, Any]) -> FolhaRecord:
    return FolhaRecord(
        record_id=int(r["id"]),
        period=r["periodo"],
        matricula=str(r["matricula"]),
        school=r.get("escola") or "",
        absences=int(r.get("faltas") or 0),
        absences_with_excuse=int(r.get("faltas_com_atestado") or 0),
        overtime_hours=Decimal(r.get("horas_extras") or 0),
        notes=r.get("observacoes") or "",
        extra=load_json(r.get("extra")),
        updated_at=r.get("atualizado_em"),
        employee_name=r.get("nome") or "",
    )


class MySQLFolhaRepository(FolhaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def submit(
        self,
        *,
        employee: Employee,
        key: RecordKey,
        fields: RecordFields,
        updated_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(UPSERT_EMPLOYEE_SQL, employee_params(employee))
            cur.execute(
                UPSERT_RECORD_SQL,
                (
                    key.period,
                    key.matricula,
                    key.school,
                    int(fields.absences),
                    int(fields.absences_with_excuse),
                    fields.overtime_hours,
                    fields.notes,
                    dump_json(fields.extra),
                    to_naive_utc(updated_at),
                ),
            )

    def list_records(
        self,
        *,
        period: Optional[str] = None,
        school: Optional[str] = None,
    ) -> Sequence[FolhaRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if period is not None:
            clauses.append("fl.periodo=%s")
            params.append(period)
        if school is not None:
            clauses.append("fl.escola=%s")
            params.append(school)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {RECORD_SELECT}
                {where}
                ORDER BY (f.nome = '') ASC, f.nome ASC, fl.matricula ASC, fl.periodo ASC, fl.escola ASC
                """,
                tuple(params),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[FolhaRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{RECORD_SELECT} WHERE fl.id=%s", (int(record_id),))
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def find_id(self, key: RecordKey) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM folhas WHERE periodo=%s AND matricula=%s AND escola=%s",
                (key.period, key.matricula, key.school),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else None

    def update(self, *, record_id: int, patch: RecordPatch, updated_at: datetime) -> Optional[FolhaRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, matricula FROM folhas WHERE id=%s FOR UPDATE", (int(record_id),))
            current = fetchone(cur)
            if not current:
                return None

            sets = ["atualizado_em=%s"]
            params: list[object] = [to_naive_utc(updated_at)]
            for attr, value in patch.record_changes().items():
                sets.append(f"{_PATCH_COLUMNS[attr]}=%s")
                params.append(dump_json(value) if attr == "extra" else value)
            params.append(int(record_id))
            cur.execute(f"UPDATE folhas SET {', '.join(sets)} WHERE id=%s", tuple(params))

            employee_changes = patch.employee_changes()
            if employee_changes:
                employee = replace(Employee(matricula=str(current["matricula"])), **employee_changes)
                cur.execute(UPSERT_EMPLOYEE_SQL, employee_params(employee))

            cur.execute(f"{RECORD_SELECT} WHERE fl.id=%s", (int(record_id),))
            return row_to_record(fetchone(cur))

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM folhas WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0

"""JSON request bodies -> typed submissions, keys and patches.

Keys are the ones the school front-end posts (``nome``, ``escola``, ``faltas`` ...).
Numbers are coerced, never rejected; period and matricula are validated by the services.
"""
from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import clean_text, to_count, to_decimal
from ..employees.model import Employee
from .model import RecordFields, RecordKey, RecordPatch, Submission


def _period(data: Mapping[str, Any]) -> str:
    value = data.get("period")
    if value is None:
        value = data.get("mes")
    return clean_text(value)


def _extra(value: Any) -> dict:
    return dict(value) if isinstance(value, Mapping) else {}


def parse_employee(data: Mapping[str, Any], *, matricula: Any = None) -> Employee:
    return Employee(
        matricula=clean_text(matricula if matricula is not None else data.get("matricula")),
        name=clean_text(data.get("nome")),
        role=clean_text(data.get("funcao")),
        employment_type=clean_text(data.get("vinculo")),
        workload=clean_text(data.get("carga")),
        school=clean_text(data.get("escola")),
    )


def parse_submission(data: Mapping[str, Any]) -> Submission:
    employee = parse_employee(data)
    return Submission(
        period=_period(data),
        matricula=employee.matricula,
        school=employee.school,
        employee=employee,
        fields=RecordFields(
            absences=to_count(data.get("faltas")),
            absences_with_excuse=to_count(data.get("faltas_com_atestado")),
            overtime_hours=to_decimal(data.get("horas_extras")),
            notes=clean_text(data.get("observacoes")),
            extra=_extra(data.get("extra")),
        ),
    )


def parse_key(data: Mapping[str, Any]) -> RecordKey:
    return RecordKey(
        period=_period(data),
        matricula=clean_text(data.get("matricula")),
        school=clean_text(data.get("escola")),
    )


def parse_patch(data: Mapping[str, Any]) -> RecordPatch:
    def opt(key: str, convert):
        return convert(data[key]) if key in data else None

    return RecordPatch(
        absences=opt("faltas", to_count),
        absences_with_excuse=opt("faltas_com_atestado", to_count),
        overtime_hours=opt("horas_extras", to_decimal),
        notes=opt("observacoes", clean_text),
        extra=opt("extra", _extra),
        name=opt("nome", clean_text),
        role=opt("funcao", clean_text),
        employment_type=opt("vinculo", clean_text),
        workload=opt("carga", clean_text),
    )

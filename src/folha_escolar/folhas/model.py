from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..employees.model import Employee


@dataclass(frozen=True)
class RecordKey:
    """Natural key of a period record. A blank school is the single-school case."""

    period: str
    matricula: str
    school: str = ""


@dataclass(frozen=True)
class RecordFields:
    """Replaceable part of a period record. Every field overwrites on resubmission."""

    absences: int = 0
    absences_with_excuse: int = 0
    overtime_hours: Decimal = Decimal("0")
    notes: str = ""
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Submission:
    """Typed monthly submission for one employee (optionally scoped to a school)."""

    period: str
    matricula: str
    school: str
    employee: Employee
    fields: RecordFields


@dataclass(frozen=True)
class RecordPatch:
    """Partial admin edit: ``None`` keeps the stored value.

    Identity fields (name, role, ...) follow the employee fill-don't-erase rule.
    """

    absences: Optional[int] = None
    absences_with_excuse: Optional[int] = None
    overtime_hours: Optional[Decimal] = None
    notes: Optional[str] = None
    extra: Optional[dict] = None
    name: Optional[str] = None
    role: Optional[str] = None
    employment_type: Optional[str] = None
    workload: Optional[str] = None

    def record_changes(self) -> dict:
        return {
            k: v
            for k, v in (
                ("absences", self.absences),
                ("absences_with_excuse", self.absences_with_excuse),
                ("overtime_hours", self.overtime_hours),
                ("notes", self.notes),
                ("extra", self.extra),
            )
            if v is not None
        }

    def employee_changes(self) -> dict:
        return {
            k: v
            for k, v in (
                ("name", self.name),
                ("role", self.role),
                ("employment_type", self.employment_type),
                ("workload", self.workload),
            )
            if v
        }

    def is_empty(self) -> bool:
        return not self.record_changes() and not self.employee_changes()


@dataclass(frozen=True)
class FolhaRecord:
    """Domain entity: one stored period record, joined with its employee's name."""

    record_id: int
    period: str
    matricula: str
    school: str
    absences: int
    absences_with_excuse: int
    overtime_hours: Decimal
    notes: str
    extra: dict
    updated_at: Optional[datetime]
    employee_name: str = ""

    @property
    def key(self) -> RecordKey:
        return RecordKey(period=self.period, matricula=self.matricula, school=self.school)

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "period": self.period,
            "matricula": self.matricula,
            "nome": self.employee_name,
            "escola": self.school,
            "faltas": self.absences,
            "faltas_com_atestado": self.absences_with_excuse,
            "horas_extras": float(self.overtime_hours),
            "observacoes": self.notes,
            "extra": self.extra,
            "atualizado_em": self.updated_at.isoformat() if self.updated_at else None,
        }

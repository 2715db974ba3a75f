from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class RosterRow:
    """Read-model: one employee in the monthly roster, submitted or not."""

    matricula: str
    name: str
    role: str
    employment_type: str
    workload: str
    school: str
    record_id: Optional[int] = None
    absences: int = 0
    absences_with_excuse: int = 0
    overtime_hours: Decimal = Decimal("0")
    notes: str = ""
    updated_at: Optional[datetime] = None

    @property
    def submitted(self) -> bool:
        return self.record_id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "matricula": self.matricula,
            "nome": self.name,
            "funcao": self.role,
            "vinculo": self.employment_type,
            "carga": self.workload,
            "escola": self.school,
            "faltas": self.absences,
            "faltas_com_atestado": self.absences_with_excuse,
            "horas_extras": float(self.overtime_hours),
            "observacoes": self.notes,
            "enviado": self.submitted,
            "atualizado_em": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class PeriodTotals:
    period: str
    count: int = 0
    sum_overtime: Decimal = Decimal("0")
    sum_absences: int = 0
    sum_absences_with_excuse: int = 0
    school: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "period": self.period,
            "count": self.count,
            "sum_overtime": float(self.sum_overtime),
            "sum_absences": self.sum_absences,
            "sum_absences_with_excuse": self.sum_absences_with_excuse,
        }
        if self.school is not None:
            out["escola"] = self.school
        return out


@dataclass(frozen=True)
class ConsolidatedRow:
    """Read-model: every matching record of one employee summed into a single line."""

    matricula: str
    name: str
    schools: str
    notes: str
    periods: int
    records: int
    absences: int
    absences_with_excuse: int
    overtime_hours: Decimal

    def to_dict(self) -> dict:
        return {
            "matricula": self.matricula,
            "nome": self.name,
            "escolas": self.schools,
            "observacoes": self.notes,
            "meses": self.periods,
            "registros": self.records,
            "faltas": self.absences,
            "faltas_com_atestado": self.absences_with_excuse,
            "horas_extras": float(self.overtime_hours),
        }

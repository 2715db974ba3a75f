from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.validators import require_period
from ..employees.model import name_order, sort_key
from ..employees.repository import EmployeeRepository
from ..folhas.model import FolhaRecord
from ..folhas.repository import FolhaRepository
from .model import ConsolidatedRow, PeriodTotals, RosterRow

SCHOOL_SEPARATOR = ", "
NOTES_SEPARATOR = " | "


def _distinct(values) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen


def _totals(period: str, records: Sequence[FolhaRecord], *, school: Optional[str] = None) -> PeriodTotals:
    return PeriodTotals(
        period=period,
        count=len(records),
        sum_overtime=sum((r.overtime_hours for r in records), Decimal("0")),
        sum_absences=sum(r.absences for r in records),
        sum_absences_with_excuse=sum(r.absences_with_excuse for r in records),
        school=school,
    )


class ReportService:
    """Administrative read views over employees and period records.

    Sums use Decimal/int arithmetic; nothing is rounded before display.
    """

    def __init__(self, employees: EmployeeRepository, folhas: FolhaRepository):
        self._employees = employees
        self._folhas = folhas

    def monthly_roster(self, period: str, *, school: Optional[str] = None) -> list[RosterRow]:
        """Every known employee, left-joined to the period's records (and school, if given)."""
        period = require_period(period)
        school = school.strip() if school is not None else None

        by_matricula: dict[str, list[FolhaRecord]] = {}
        for r in self._folhas.list_records(period=period, school=school):
            by_matricula.setdefault(r.matricula, []).append(r)

        rows: list[RosterRow] = []
        for e in sorted(self._employees.list_all(), key=sort_key):
            records = sorted(by_matricula.get(e.matricula, []), key=lambda r: r.school)
            if not records:
                rows.append(
                    RosterRow(
                        matricula=e.matricula,
                        name=e.name,
                        role=e.role,
                        employment_type=e.employment_type,
                        workload=e.workload,
                        school=school if school is not None else e.school,
                    )
                )
                continue

            for r in records:
                rows.append(
                    RosterRow(
                        matricula=e.matricula,
                        name=e.name,
                        role=e.role,
                        employment_type=e.employment_type,
                        workload=e.workload,
                        school=r.school,
                        record_id=r.record_id,
                        absences=r.absences,
                        absences_with_excuse=r.absences_with_excuse,
                        overtime_hours=r.overtime_hours,
                        notes=r.notes,
                        updated_at=r.updated_at,
                    )
                )
        return rows

    def period_totals(self, period: str, *, school: Optional[str] = None) -> PeriodTotals:
        """``count`` is the number of stored records, not the number of employees."""
        period = require_period(period)
        school = school.strip() if school is not None else None
        return _totals(period, self._folhas.list_records(period=period, school=school), school=school)

    def totals_by_school(self, period: str) -> list[PeriodTotals]:
        period = require_period(period)

        groups: dict[str, list[FolhaRecord]] = {}
        for r in self._folhas.list_records(period=period):
            groups.setdefault(r.school, []).append(r)

        return [
            _totals(period, groups[school], school=school)
            for school in sorted(groups, key=lambda s: (s == "", s.casefold()))
        ]

    def consolidated_by_employee(self, period: Optional[str] = None) -> list[ConsolidatedRow]:
        if period:
            period = require_period(period)

        groups: dict[str, list[FolhaRecord]] = {}
        for r in self._folhas.list_records(period=period or None):
            groups.setdefault(r.matricula, []).append(r)

        rows: list[ConsolidatedRow] = []
        for matricula, records in groups.items():
            records.sort(key=lambda r: (r.period, r.school))
            rows.append(
                ConsolidatedRow(
                    matricula=matricula,
                    name=records[0].employee_name,
                    schools=SCHOOL_SEPARATOR.join(sorted(_distinct(r.school for r in records), key=str.casefold)),
                    notes=NOTES_SEPARATOR.join(_distinct(r.notes.strip() for r in records)),
                    periods=len({r.period for r in records}),
                    records=len(records),
                    absences=sum(r.absences for r in records),
                    absences_with_excuse=sum(r.absences_with_excuse for r in records),
                    overtime_hours=sum((r.overtime_hours for r in records), Decimal("0")),
                )
            )

        rows.sort(key=lambda row: name_order(row.name, row.matricula))
        return rows

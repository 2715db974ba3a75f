from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import require_matricula
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: list/search employees, admin upsert."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list(self, query: Optional[str] = None) -> Sequence[Employee]:
        query = (query or "").strip()
        return self._employees.list_all(query=query or None)

    def upsert(self, employee: Employee) -> Employee:
        """Create the employee or fill its empty fields; a blank value never erases."""
        matricula = require_matricula(employee.matricula)
        return self._employees.upsert(replace(employee, matricula=matricula))

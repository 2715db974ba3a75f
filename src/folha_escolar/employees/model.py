from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

MERGED_FIELDS = ("name", "role", "employment_type", "workload", "school")


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member identified by the client-assigned matricula.

    Note: plain data object, no DB access here.
    """

    matricula: str
    name: str = ""
    role: str = ""
    employment_type: str = ""
    workload: str = ""
    school: str = ""

    def to_dict(self) -> dict:
        return {
            "matricula": self.matricula,
            "nome": self.name,
            "funcao": self.role,
            "vinculo": self.employment_type,
            "carga": self.workload,
            "escola": self.school,
        }


def fill_dont_erase(stored: Optional[Employee], incoming: Employee) -> Employee:
    """Merge ``incoming`` over ``stored`` keeping stored values where incoming is empty."""
    if stored is None:
        return incoming
    changes = {f: getattr(incoming, f) for f in MERGED_FIELDS if getattr(incoming, f)}
    return replace(stored, **changes)


def name_order(name: str, matricula: str) -> tuple:
    """Name ascending with empty names last, then matricula."""
    return (name == "", name.casefold(), matricula)


def sort_key(employee: Employee) -> tuple:
    return name_order(employee.name, employee.matricula)

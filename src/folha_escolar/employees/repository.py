from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def list_all(self, *, query: Optional[str] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def get(self, matricula: str) -> Optional[Employee]:
        raise NotImplementedError

    def upsert(self, employee: Employee) -> Employee:
        """Insert, or merge with fill-don't-erase semantics; returns the stored row."""

        raise NotImplementedError

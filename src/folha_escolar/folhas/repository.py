from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..employees.model import Employee
from .model import FolhaRecord, RecordFields, RecordKey, RecordPatch


class FolhaRepository(Protocol):
    def submit(
        self,
        *,
        employee: Employee,
        key: RecordKey,
        fields: RecordFields,
        updated_at: datetime,
    ) -> None:
        """Employee upsert (fill-don't-erase) then record upsert (replace), one transaction."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        period: Optional[str] = None,
        school: Optional[str] = None,
    ) -> Sequence[FolhaRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[FolhaRecord]:
        raise NotImplementedError

    def find_id(self, key: RecordKey) -> Optional[int]:
        raise NotImplementedError

    def update(self, *, record_id: int, patch: RecordPatch, updated_at: datetime) -> Optional[FolhaRecord]:
        """Partial update; returns None when the record does not exist."""

        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

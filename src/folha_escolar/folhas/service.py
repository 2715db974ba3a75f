from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import now_utc
from ..common.validators import require_matricula, require_period
from ..core.exceptions import NotFoundError, ValidationError
from .model import FolhaRecord, RecordKey, RecordPatch, Submission
from .repository import FolhaRepository

logger = logging.getLogger(__name__)

RecordRef = Union[int, RecordKey]


class SubmissionService:
    """Use case: public monthly submission (no credential required)."""

    def __init__(self, folhas: FolhaRepository):
        self._folhas = folhas

    def submit(self, submission: Submission, *, now: Optional[datetime] = None) -> RecordKey:
        period = require_period(submission.period)
        matricula = require_matricula(submission.matricula)
        school = (submission.school or "").strip()

        key = RecordKey(period=period, matricula=matricula, school=school)
        employee = replace(submission.employee, matricula=matricula)

        self._folhas.submit(
            employee=employee,
            key=key,
            fields=submission.fields,
            updated_at=now or now_utc(),
        )
        return key


class RecordAdminService:
    """Use case: admin get/edit/delete of a single period record by id or natural key."""

    def __init__(self, folhas: FolhaRepository):
        self._folhas = folhas

    def _resolve(self, ref: RecordRef) -> int:
        if isinstance(ref, RecordKey):
            key = RecordKey(
                period=require_period(ref.period),
                matricula=require_matricula(ref.matricula),
                school=(ref.school or "").strip(),
            )
            record_id = self._folhas.find_id(key)
            if record_id is None:
                raise NotFoundError("Registro não encontrado")
            return record_id
        return int(ref)

    def get(self, ref: RecordRef) -> FolhaRecord:
        record = self._folhas.get_by_id(self._resolve(ref))
        if not record:
            raise NotFoundError("Registro não encontrado")
        return record

    def edit(self, ref: RecordRef, patch: RecordPatch, *, now: Optional[datetime] = None) -> FolhaRecord:
        if patch.is_empty():
            raise ValidationError("Informe ao menos um campo para alterar")

        record_id = self._resolve(ref)
        record = self._folhas.update(record_id=record_id, patch=patch, updated_at=now or now_utc())
        if not record:
            raise NotFoundError("Registro não encontrado")

        logger.info("record %s edited (%s)", record_id, ", ".join(sorted(patch.record_changes())) or "identity")
        return record

    def delete(self, ref: RecordRef) -> None:
        record_id = self._resolve(ref)
        if not self._folhas.delete(record_id):
            raise NotFoundError("Registro não encontrado")
        logger.info("record %s deleted", record_id)

from __future__ import annotations

from decimal import Decimal

import pytest

from folha_escolar.core.exceptions import NotFoundError, ValidationError
from folha_escolar.employees.model import Employee
from folha_escolar.folhas.model import RecordKey, RecordPatch
from folha_escolar.folhas.payloads import parse_submission
from folha_escolar.folhas.service import RecordAdminService, SubmissionService


@pytest.fixture
def seeded(folhas_repo, fixed_now):
    SubmissionService(folhas_repo).submit(
        parse_submission(
            {
                "period": "2026-02",
                "matricula": "101",
                "nome": "Maria",
                "funcao": "Professora",
                "escola": "Escola A",
                "faltas": 2,
                "horas_extras": "4,5",
                "observacoes": "licença",
            }
        ),
        now=fixed_now,
    )
    return folhas_repo.find_id(RecordKey("2026-02", "101", "Escola A"))


def test_edit_only_touches_supplied_fields(folhas_repo, seeded):
    svc = RecordAdminService(folhas_repo)

    record = svc.edit(seeded, RecordPatch(absences=0))

    assert record.absences == 0
    assert record.overtime_hours == Decimal("4.5")
    assert record.notes == "licença"


def test_edit_by_natural_key(folhas_repo, seeded):
    svc = RecordAdminService(folhas_repo)

    record = svc.edit(RecordKey("2026-02", "101", "Escola A"), RecordPatch(notes=""))

    assert record.record_id == seeded
    assert record.notes == ""


def test_edit_identity_fields_never_blank_employee(employees_repo, folhas_repo, seeded):
    svc = RecordAdminService(folhas_repo)

    svc.edit(seeded, RecordPatch(name="Maria Souza", role="", absences=1))

    assert employees_repo.get("101") == Employee(
        matricula="101", name="Maria Souza", role="Professora", school="Escola A"
    )


def test_edit_unknown_record_is_not_found(folhas_repo):
    svc = RecordAdminService(folhas_repo)

    with pytest.raises(NotFoundError):
        svc.edit(999, RecordPatch(absences=1))
    with pytest.raises(NotFoundError):
        svc.edit(RecordKey("2026-02", "404"), RecordPatch(absences=1))


def test_empty_patch_is_rejected(folhas_repo, seeded):
    with pytest.raises(ValidationError):
        RecordAdminService(folhas_repo).edit(seeded, RecordPatch())


def test_delete_twice_reports_not_found(folhas_repo, seeded):
    svc = RecordAdminService(folhas_repo)

    svc.delete(seeded)
    with pytest.raises(NotFoundError):
        svc.delete(seeded)

    assert folhas_repo.count() == 0


def test_delete_by_key_with_invalid_period_is_validation_error(folhas_repo, seeded):
    with pytest.raises(ValidationError):
        RecordAdminService(folhas_repo).delete(RecordKey("2026-2", "101", "Escola A"))

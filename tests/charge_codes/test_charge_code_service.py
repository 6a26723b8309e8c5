from __future__ import annotations

from datetime import date

import pytest

from src.timesheet_admin.timesheet_admin.charge_codes.service import ChargeCodeService
from src.timesheet_admin.timesheet_admin.core.exceptions import AuthorizationError, ConflictError, ValidationError


@pytest.fixture
def service(repos):
    return ChargeCodeService(repos.charge_codes)


def test_create_upper_cases_the_code(service, admin):
    code = service.create_charge_code(admin, code=" proj-009 ", description=" New work ")

    assert code.code == "PROJ-009"
    assert code.description == "New work"
    assert code.is_active


def test_create_inactive(service, admin):
    assert not service.create_charge_code(admin, code="X-1", description="x", is_active=False).is_active


def test_duplicate_code_is_rejected_case_insensitively(service, admin):
    with pytest.raises(ValidationError, match="Charge code already exists"):
        service.create_charge_code(admin, code="proj-001", description="Again")


@pytest.mark.parametrize("code,description", [("", "desc"), ("X", ""), (None, None), ("  ", "desc")])
def test_code_and_description_are_required(service, admin, code, description):
    with pytest.raises(ValidationError, match="Code and description are required"):
        service.create_charge_code(admin, code=code, description=description)


def test_update_description_and_active_flag(service, admin):
    code = service.update_charge_code(admin, charge_code_id=2, description="Renamed", is_active=False)

    assert code.code == "PROJ-001"
    assert code.description == "Renamed"
    assert not code.is_active


def test_code_cannot_change_after_creation(service, admin):
    with pytest.raises(ValidationError, match="cannot be changed"):
        service.update_charge_code(admin, charge_code_id=2, code="PROJ-002")

    assert service.update_charge_code(admin, charge_code_id=2, code="proj-001").code == "PROJ-001"


def test_delete_blocked_while_entries_exist(service, admin, repos):
    for day in (4, 5):
        repos.entries.add(user_id=2, charge_code_id=2, work_date=date(2024, 3, day), hours=3)

    with pytest.raises(ConflictError) as exc:
        service.delete_charge_code(admin, charge_code_id=2)

    assert str(exc.value) == "Cannot delete charge code with existing time entries"
    assert exc.value.details == {"entries_count": 2}
    assert repos.charge_codes.get_by_id(2) is not None


def test_delete_unused_code(service, admin, repos):
    service.delete_charge_code(admin, charge_code_id="1")

    assert repos.charge_codes.get_by_id(1) is None
    with pytest.raises(ValidationError, match="Charge code not found"):
        service.delete_charge_code(admin, charge_code_id=1)


def test_list_reports_entry_counts(service, admin, repos):
    repos.entries.add(user_id=2, charge_code_id=3, work_date=date(2024, 3, 4), hours=1)

    codes = {c.code: c for c in service.list_charge_codes(admin)}

    assert codes["OLD-001"].entries_count == 1
    assert not codes["OLD-001"].can_delete
    assert codes["PROJ-001"].can_delete
    assert [c.code for c in service.list_active()] == ["ADMIN-OPS", "PROJ-001"]


def test_employee_is_unauthorized(service, employee):
    with pytest.raises(AuthorizationError):
        service.list_charge_codes(employee)
    with pytest.raises(AuthorizationError):
        service.delete_charge_code(employee, charge_code_id=1)


def test_non_text_fields_are_rejected(service, admin):
    with pytest.raises(ValidationError, match="must be text"):
        service.create_charge_code(admin, code="X-9", description=5)

    with pytest.raises(ValidationError, match="must be text"):
        service.update_charge_code(admin, charge_code_id=2, description=5)

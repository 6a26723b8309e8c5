from __future__ import annotations

from datetime import date

import pytest

from src.timesheet_admin.timesheet_admin.common.authorization import Actor
from src.timesheet_admin.timesheet_admin.core.enums import Role
from src.timesheet_admin.timesheet_admin.core.exceptions import AuthorizationError, ValidationError
from src.timesheet_admin.timesheet_admin.core.sentinels import NO_RESTRICTION, NO_VALUE

MONDAY = date(2024, 3, 11)
SATURDAY = date(2024, 3, 9)

OPS, PROJ, OLD = 1, 2, 3


@pytest.fixture
def service(container):
    return container.timesheet_service


def test_current_period_comes_from_today(service):
    assert service.current_period().value == "2024-03-01"


def test_get_period_lists_active_codes_and_is_editable(service, employee):
    sheet = service.get_period(employee)

    assert sheet.period.label == "March 2024 (1st - 15th)"
    assert [c.code for c in sheet.charge_codes] == ["ADMIN-OPS", "PROJ-001"]
    assert sheet.editable
    assert len(sheet.days) == 15


def test_inactive_code_with_hours_stays_visible(service, employee, repos):
    repos.entries.add(user_id=employee.user_id, charge_code_id=OLD, work_date=date(2024, 3, 4), hours=3)

    sheet = service.get_period(employee, "2024-03-01")

    assert [c.code for c in sheet.charge_codes] == ["ADMIN-OPS", "PROJ-001", "OLD-001"]
    assert sheet.cell(PROJ, date(2024, 3, 4)).max_hours == 4
    assert sheet.cell(OLD, date(2024, 3, 4)).value == 3
    assert sheet.day_total(date(2024, 3, 4)) == 3


def test_set_hours_stores_an_entry(service, employee, repos):
    entry = service.set_hours(employee, charge_code_id=PROJ, work_date="2024-03-11", hours=5)

    assert entry.hours == 5
    assert entry.work_date == MONDAY
    assert repos.entries.get_cell(user_id=employee.user_id, charge_code_id=PROJ, work_date=MONDAY).hours == 5


def test_daily_total_cannot_exceed_seven(service, employee):
    service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=5)

    with pytest.raises(ValidationError, match="Hours must be between 1 and 2"):
        service.set_hours(employee, charge_code_id=OPS, work_date=MONDAY, hours=3)

    assert service.set_hours(employee, charge_code_id=OPS, work_date=MONDAY, hours="2").hours == 2

    with pytest.raises(ValidationError, match="No hours remaining"):
        service.set_hours(employee, charge_code_id=OLD, work_date=MONDAY, hours=1)


def test_changing_own_value_uses_own_budget(service, employee):
    service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=5)

    assert service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=7).hours == 7


@pytest.mark.parametrize("cleared", [None, NO_VALUE, "", "0"])
def test_clearing_deletes_the_entry(service, employee, repos, cleared):
    service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=4)

    assert service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=cleared) is None
    assert repos.entries.all() == []


@pytest.mark.parametrize("bad", [0, 8, True, "9"])
def test_out_of_range_hours_are_rejected(service, employee, bad):
    with pytest.raises(ValidationError, match="Hours must be between 1 and 7"):
        service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=bad)


def test_weekend_is_read_only(service, employee):
    with pytest.raises(ValidationError, match="Weekend"):
        service.set_hours(employee, charge_code_id=PROJ, work_date=SATURDAY, hours=2)


def test_period_outside_window_is_rejected(service, employee, container, admin):
    container.settings_service.update_settings(
        admin, oldest_editable_period=None, latest_editable_period="2024-02-16"
    )

    with pytest.raises(ValidationError, match=r"March 2024 \(1st - 15th\) is not open for editing"):
        service.set_hours(employee, charge_code_id=PROJ, work_date=MONDAY, hours=2)

    sheet = service.get_period(employee)
    assert not sheet.editable
    assert sheet.cell(PROJ, MONDAY).read_only
    assert service.get_period(employee, "2024-02-16").editable


def test_inactive_code_rejects_new_hours(service, employee):
    with pytest.raises(ValidationError, match="Charge code is not active"):
        service.set_hours(employee, charge_code_id=OLD, work_date=MONDAY, hours=3)


def test_unknown_code_and_bad_date(service, employee):
    with pytest.raises(ValidationError, match="Charge code not found"):
        service.set_hours(employee, charge_code_id=99, work_date=MONDAY, hours=3)

    with pytest.raises(ValidationError, match="Work date"):
        service.set_hours(employee, charge_code_id=PROJ, work_date="11/03/2024", hours=3)


def test_admin_only_user_cannot_enter_hours(service, admin):
    with pytest.raises(AuthorizationError):
        service.get_period(admin)

    with pytest.raises(AuthorizationError):
        service.set_hours(admin, charge_code_id=PROJ, work_date=MONDAY, hours=1)


def test_admin_with_employee_role_can_enter_hours(service):
    both = Actor(user_id=1, roles=frozenset({Role.ADMIN, Role.EMPLOYEE}))

    assert service.set_hours(both, charge_code_id=OPS, work_date=MONDAY, hours=1).hours == 1


def test_settings_default_to_no_restriction(service, employee, repos):
    service.get_period(employee)

    assert repos.settings.row.oldest_editable_period is NO_RESTRICTION

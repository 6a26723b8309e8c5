from __future__ import annotations

from datetime import date

import pytest

from src.timesheet_admin.timesheet_admin.admin_settings.model import AdminSettings
from src.timesheet_admin.timesheet_admin.admin_settings.service import AdminSettingsService
from src.timesheet_admin.timesheet_admin.core.exceptions import AuthorizationError, ValidationError
from src.timesheet_admin.timesheet_admin.core.sentinels import NO_RESTRICTION
from src.timesheet_admin.timesheet_admin.timesheet.periods import Period


@pytest.fixture
def service(repos):
    return AdminSettingsService(repos.settings)


def test_settings_are_created_lazily_once(service, repos):
    first = service.current()
    second = service.current()

    assert first == second
    assert first.is_unrestricted
    assert repos.settings.creates == 1
    assert first.to_dict() == {"id": 1, "oldestEditablePeriod": None, "latestEditablePeriod": None}


def test_update_bounds(service, admin):
    settings = service.update_settings(
        admin,
        oldest_editable_period="2024-01-01",
        latest_editable_period="2024-03-16T00:00:00.000Z",
    )

    assert settings.oldest_editable_period == date(2024, 1, 1)
    assert settings.latest_editable_period == date(2024, 3, 16)
    assert settings.to_dict()["latestEditablePeriod"] == "2024-03-16"


def test_empty_bound_means_no_restriction(service, admin):
    settings = service.update_settings(admin, oldest_editable_period="", latest_editable_period=None)

    assert settings.oldest_editable_period is NO_RESTRICTION
    assert settings.latest_editable_period is NO_RESTRICTION


def test_oldest_after_latest_is_rejected(service, admin):
    with pytest.raises(ValidationError, match="must not be after"):
        service.update_settings(admin, oldest_editable_period="2024-03-16", latest_editable_period="2024-03-01")


def test_bounds_must_be_period_starts(service, admin):
    with pytest.raises(ValidationError):
        service.update_settings(admin, oldest_editable_period="2024-03-05", latest_editable_period=None)

    with pytest.raises(ValidationError, match="ISO date"):
        service.update_settings(admin, oldest_editable_period="March", latest_editable_period=None)


def test_allows():
    settings = AdminSettings(
        settings_id=1,
        oldest_editable_period=date(2024, 2, 1),
        latest_editable_period=date(2024, 3, 1),
    )

    assert settings.allows(Period(date(2024, 2, 1)))
    assert settings.allows(Period(date(2024, 3, 1)))
    assert not settings.allows(Period(date(2024, 1, 16)))
    assert not settings.allows(Period(date(2024, 3, 16)))
    assert AdminSettings(settings_id=1).allows(Period(date(1999, 1, 1)))


def test_employee_is_unauthorized(service, employee):
    with pytest.raises(AuthorizationError):
        service.get_settings(employee)
    with pytest.raises(AuthorizationError):
        service.update_settings(employee, oldest_editable_period=None, latest_editable_period=None)

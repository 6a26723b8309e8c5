from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admin_settings.mysql_admin_settings_repository import MySQLAdminSettingsRepository
from .admin_settings.repository import AdminSettingsRepository
from .admin_settings.service import AdminSettingsService
from .charge_codes.mysql_charge_code_repository import MySQLChargeCodeRepository
from .charge_codes.repository import ChargeCodeRepository
from .charge_codes.service import ChargeCodeService
from .core.constants import DEFAULT_TOAST_TTL_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .notifications.queue import NotificationCenter
from .timesheet.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timesheet.repository import TimeEntryRepository
from .timesheet.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    charge_codes_repo: ChargeCodeRepository
    settings_repo: AdminSettingsRepository
    time_entries_repo: TimeEntryRepository

    auth_service: AuthService
    user_service: UserService
    charge_code_service: ChargeCodeService
    settings_service: AdminSettingsService
    timesheet_service: TimesheetService

    notifications: NotificationCenter


def assemble(
    *,
    users_repo: UserRepository,
    charge_codes_repo: ChargeCodeRepository,
    settings_repo: AdminSettingsRepository,
    time_entries_repo: TimeEntryRepository,
    notifications: NotificationCenter,
    conn: Optional[DatabaseConnection] = None,
    timesheet_kwargs: Optional[dict] = None,
) -> Container:
    """Wire services on top of any set of repositories."""
    settings_service = AdminSettingsService(settings_repo)
    return Container(
        conn=conn,
        users_repo=users_repo,
        charge_codes_repo=charge_codes_repo,
        settings_repo=settings_repo,
        time_entries_repo=time_entries_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        charge_code_service=ChargeCodeService(charge_codes_repo),
        settings_service=settings_service,
        timesheet_service=TimesheetService(
            time_entries_repo,
            charge_codes_repo,
            settings_service,
            **(timesheet_kwargs or {}),
        ),
        notifications=notifications,
    )


def build_container(*, db_config: dict, toast_ttl: float = DEFAULT_TOAST_TTL_SECONDS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        charge_codes_repo=MySQLChargeCodeRepository(conn),
        settings_repo=MySQLAdminSettingsRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        notifications=NotificationCenter(ttl=toast_ttl),
    )

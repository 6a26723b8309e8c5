from __future__ import annotations

from typing import Optional

from ..core.sentinels import NO_RESTRICTION
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchone
from .model import AdminSettings, PeriodBound
from .repository import AdminSettingsRepository

# the table holds at most this one row
SETTINGS_ROW_ID = 1


def _to_column(bound: PeriodBound):
    return None if bound is NO_RESTRICTION else bound


def _from_column(value) -> PeriodBound:
    return NO_RESTRICTION if value is None else as_date(value)


def _read_row(cur) -> Optional[AdminSettings]:
    cur.execute(
        """
        SELECT settings_id, oldest_editable_period, latest_editable_period
        FROM admin_settings
        WHERE settings_id=%s
        """,
        (SETTINGS_ROW_ID,),
    )
    row = fetchone(cur)
    if not row:
        return None
    return AdminSettings(
        settings_id=int(row["settings_id"]),
        oldest_editable_period=_from_column(row.get("oldest_editable_period")),
        latest_editable_period=_from_column(row.get("latest_editable_period")),
    )


class MySQLAdminSettingsRepository(AdminSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[AdminSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _read_row(cur)

    def create(self, *, oldest: PeriodBound, latest: PeriodBound) -> AdminSettings:
        """Insert the settings row; when another request got there first, keep theirs."""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admin_settings (settings_id, oldest_editable_period, latest_editable_period)
                VALUES (%s, %s, %s)
                ON DUPLICATE KEY UPDATE settings_id=settings_id
                """,
                (SETTINGS_ROW_ID, _to_column(oldest), _to_column(latest)),
            )
            return _read_row(cur)

    def update(self, settings_id: int, *, oldest: PeriodBound, latest: PeriodBound) -> AdminSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE admin_settings
                SET oldest_editable_period=%s, latest_editable_period=%s
                WHERE settings_id=%s
                """,
                (_to_column(oldest), _to_column(latest), settings_id),
            )
            return AdminSettings(
                settings_id=settings_id,
                oldest_editable_period=oldest,
                latest_editable_period=latest,
            )

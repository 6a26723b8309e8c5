from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryRepository


def _row_to_entry(row: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(row["entry_id"]),
        user_id=int(row["user_id"]),
        charge_code_id=int(row["charge_code_id"]),
        work_date=as_date(row["work_date"]),
        hours=int(row["hours"]),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, charge_code_id, work_date, hours
                FROM time_entries
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date, charge_code_id
                """,
                (user_id, start, end),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_cell(self, *, user_id: int, charge_code_id: int, work_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, charge_code_id, work_date, hours
                FROM time_entries
                WHERE user_id=%s AND charge_code_id=%s AND work_date=%s
                """,
                (user_id, charge_code_id, work_date),
            )
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def upsert(self, *, user_id: int, charge_code_id: int, work_date: date, hours: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries (user_id, charge_code_id, work_date, hours)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE hours=VALUES(hours), entry_id=LAST_INSERT_ID(entry_id)
                """,
                (user_id, charge_code_id, work_date, hours),
            )
            return int(cur.lastrowid)

    def delete_cell(self, *, user_id: int, charge_code_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM time_entries WHERE user_id=%s AND charge_code_id=%s AND work_date=%s",
                (user_id, charge_code_id, work_date),
            )
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ChargeCode
from .repository import ChargeCodeRepository

_SELECT_CODES = """
    SELECT c.charge_code_id, c.code, c.description, c.is_active,
           (SELECT COUNT(*) FROM time_entries e WHERE e.charge_code_id = c.charge_code_id) AS entries_count
    FROM charge_codes c
"""


def _row_to_code(row: dict) -> ChargeCode:
    return ChargeCode(
        charge_code_id=int(row["charge_code_id"]),
        code=row["code"],
        description=row["description"],
        is_active=bool(row["is_active"]),
        entries_count=int(row.get("entries_count") or 0),
    )


class MySQLChargeCodeRepository(ChargeCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, charge_code_id: int) -> Optional[ChargeCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_CODES} WHERE c.charge_code_id=%s", (charge_code_id,))
            row = fetchone(cur)
            return _row_to_code(row) if row else None

    def get_by_code(self, code: str) -> Optional[ChargeCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_CODES} WHERE c.code=%s", (code,))
            row = fetchone(cur)
            return _row_to_code(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[ChargeCode]:
        where = "WHERE c.is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_CODES} {where} ORDER BY c.code")
            return [_row_to_code(r) for r in fetchall(cur)]

    def count_entries(self, charge_code_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM time_entries WHERE charge_code_id=%s", (charge_code_id,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def create(self, *, code: str, description: str, is_active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO charge_codes (code, description, is_active) VALUES (%s, %s, %s)",
                (code, description, 1 if is_active else 0),
            )
            return int(cur.lastrowid)

    def update(self, charge_code_id: int, *, description: str, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT charge_code_id FROM charge_codes WHERE charge_code_id=%s", (charge_code_id,))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE charge_codes SET description=%s, is_active=%s WHERE charge_code_id=%s",
                (description, 1 if is_active else 0, charge_code_id),
            )
            return True

    def delete_by_id(self, charge_code_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM charge_codes WHERE charge_code_id=%s", (charge_code_id,))
            return cur.rowcount > 0

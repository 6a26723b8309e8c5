from __future__ import annotations

from typing import FrozenSet, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_SELECT_USERS = """
    SELECT u.user_id, u.email, u.name, u.fmno, u.created_at,
           GROUP_CONCAT(r.role ORDER BY r.role) AS roles
    FROM users u
    LEFT JOIN user_roles r ON r.user_id = u.user_id
"""


def _row_to_user(row: dict) -> User:
    roles = frozenset(Role(r) for r in (row.get("roles") or "").split(",") if r)
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        name=row.get("name"),
        fmno=str(row["fmno"]),
        roles=roles,
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_USERS} WHERE {where} GROUP BY u.user_id", params)
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._fetch_one("u.user_id=%s", (user_id,))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._fetch_one("u.email=%s", (email,))

    def find_conflicting(self, *, email: str, fmno: str, exclude_id: Optional[int] = None) -> Optional[User]:
        if exclude_id is None:
            return self._fetch_one("(u.email=%s OR u.fmno=%s)", (email, fmno))
        return self._fetch_one("(u.email=%s OR u.fmno=%s) AND u.user_id<>%s", (email, fmno, exclude_id))

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_USERS} GROUP BY u.user_id ORDER BY u.name IS NULL, u.name, u.email")
            return [_row_to_user(r) for r in fetchall(cur)]

    @staticmethod
    def _write_roles(cur, user_id: int, roles: FrozenSet[Role]) -> None:
        cur.execute("DELETE FROM user_roles WHERE user_id=%s", (user_id,))
        for role in sorted(roles, key=lambda r: r.value):
            cur.execute("INSERT INTO user_roles (user_id, role) VALUES (%s, %s)", (user_id, role.value))

    def create_user(self, *, email: str, name: Optional[str], fmno: str, roles: FrozenSet[Role]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users (email, name, fmno) VALUES (%s, %s, %s)",
                (email, name, fmno),
            )
            user_id = int(cur.lastrowid)
            self._write_roles(cur, user_id, roles)
            return user_id

    def update_user(
        self,
        user_id: int,
        *,
        email: str,
        name: Optional[str],
        fmno: str,
        roles: FrozenSet[Role],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE user_id=%s", (user_id,))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE users SET email=%s, name=%s, fmno=%s WHERE user_id=%s",
                (email, name, fmno, user_id),
            )
            self._write_roles(cur, user_id, roles)
            return True

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

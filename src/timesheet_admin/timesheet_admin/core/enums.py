from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable


class Role(str, Enum):
    """Roles a user can hold; a user always holds at least one."""

    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


class Capability(str, Enum):
    """What a role allows at an authorization checkpoint."""

    ENTER_HOURS = "ENTER_HOURS"
    MANAGE_USERS = "MANAGE_USERS"
    MANAGE_CHARGE_CODES = "MANAGE_CHARGE_CODES"
    MANAGE_SETTINGS = "MANAGE_SETTINGS"


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


def capabilities_for(role: Role) -> FrozenSet[Capability]:
    if role is Role.EMPLOYEE:
        return frozenset({Capability.ENTER_HOURS})
    if role is Role.ADMIN:
        return frozenset(
            {
                Capability.MANAGE_USERS,
                Capability.MANAGE_CHARGE_CODES,
                Capability.MANAGE_SETTINGS,
            }
        )
    raise ValueError(f"Unhandled role: {role!r}")


def capabilities_of(roles: Iterable[Role]) -> FrozenSet[Capability]:
    caps: set[Capability] = set()
    for role in roles:
        caps |= capabilities_for(role)
    return frozenset(caps)


def parse_roles(values: Iterable[str]) -> FrozenSet[Role]:
    """Parse role names (case-insensitive); unknown names raise ValueError."""
    return frozenset(Role(str(v).strip().upper()) for v in values)

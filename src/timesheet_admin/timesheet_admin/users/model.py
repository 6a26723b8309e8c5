from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee identity.

    Note: Plain data object, no DB access here.
    """

    user_id: int
    email: str
    name: Optional[str]
    fmno: str
    roles: FrozenSet[Role]
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "fmno": self.fmno,
            "roles": sorted(r.value for r in self.roles),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

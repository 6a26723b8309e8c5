from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeCode:
    """A billing/work category that time entries are logged against."""

    charge_code_id: int
    code: str
    description: str
    is_active: bool = True
    entries_count: int = 0

    @property
    def can_delete(self) -> bool:
        return self.entries_count == 0

    def to_dict(self) -> dict:
        return {
            "id": self.charge_code_id,
            "code": self.code,
            "description": self.description,
            "isActive": self.is_active,
            "entriesCount": self.entries_count,
        }

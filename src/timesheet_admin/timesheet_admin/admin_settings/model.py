from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..core.sentinels import NO_RESTRICTION, NoRestriction
from ..timesheet.periods import Period

PeriodBound = Union[date, NoRestriction]


def bound_to_json(bound: PeriodBound) -> Optional[str]:
    return None if bound is NO_RESTRICTION else bound.isoformat()


@dataclass(frozen=True)
class AdminSettings:
    """Singleton bounding which periods employees may edit."""

    settings_id: int
    oldest_editable_period: PeriodBound = NO_RESTRICTION
    latest_editable_period: PeriodBound = NO_RESTRICTION

    @property
    def is_unrestricted(self) -> bool:
        return self.oldest_editable_period is NO_RESTRICTION and self.latest_editable_period is NO_RESTRICTION

    def allows(self, period: Period) -> bool:
        if self.oldest_editable_period is not NO_RESTRICTION and period.start < self.oldest_editable_period:
            return False
        if self.latest_editable_period is not NO_RESTRICTION and period.start > self.latest_editable_period:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.settings_id,
            "oldestEditablePeriod": bound_to_json(self.oldest_editable_period),
            "latestEditablePeriod": bound_to_json(self.latest_editable_period),
        }

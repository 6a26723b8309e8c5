from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Sequence, Tuple

from ..charge_codes.model import ChargeCode
from ..common.datetime_utils import is_weekend
from ..core.constants import MAX_DAILY_HOURS
from ..core.sentinels import NO_VALUE
from .hour_input import HourInput
from .periods import Period


@dataclass(frozen=True)
class TimeEntry:
    entry_id: int
    user_id: int
    charge_code_id: int
    work_date: date
    hours: int

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "chargeCodeId": self.charge_code_id,
            "workDate": self.work_date.isoformat(),
            "hours": self.hours,
        }


@dataclass(frozen=True)
class PeriodSheet:
    """One user's entries for a period, laid out for the hour grid."""

    period: Period
    charge_codes: Sequence[ChargeCode]
    entries: Sequence[TimeEntry]
    editable: bool
    _cells: Dict[Tuple[int, date], TimeEntry] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_cells", {(e.charge_code_id, e.work_date): e for e in self.entries})

    @property
    def days(self) -> List[date]:
        return self.period.days()

    def day_total(self, day: date) -> int:
        return sum(e.hours for e in self.entries if e.work_date == day)

    def entry(self, charge_code_id: int, day: date):
        return self._cells.get((charge_code_id, day))

    def cell(self, charge_code_id: int, day: date) -> HourInput:
        current = self.entry(charge_code_id, day)
        own = current.hours if current else 0
        return HourInput(
            value=current.hours if current else NO_VALUE,
            max_hours=MAX_DAILY_HOURS - (self.day_total(day) - own),
            is_weekend=is_weekend(day),
            disabled=not self.editable,
        )

    @property
    def total_hours(self) -> int:
        return sum(e.hours for e in self.entries)

    def to_dict(self) -> dict:
        return {
            "period": {"value": self.period.value, "label": self.period.label, "end": self.period.end.isoformat()},
            "editable": self.editable,
            "chargeCodes": [c.to_dict() for c in self.charge_codes],
            "entries": [e.to_dict() for e in self.entries],
            "dayTotals": {d.isoformat(): self.day_total(d) for d in self.days},
            "totalHours": self.total_hours,
        }

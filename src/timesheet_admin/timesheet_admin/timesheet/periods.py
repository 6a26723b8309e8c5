"""Half-month timesheet periods.

A period runs from the 1st to the 15th, or from the 16th to the last day of
the month, and is identified by its start date.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

from ..common.datetime_utils import parse_iso_date, today_local
from ..core.constants import PERIOD_MONTHS_AHEAD, PERIOD_MONTHS_BACK, SECOND_HALF_START_DAY
from ..core.exceptions import ValidationError


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


@dataclass(frozen=True, order=True)
class Period:
    start: date

    @classmethod
    def from_start(cls, start: date) -> "Period":
        if start.day not in (1, SECOND_HALF_START_DAY):
            raise ValidationError(f"A period starts on the 1st or the {ordinal(SECOND_HALF_START_DAY)}")
        return cls(start)

    @classmethod
    def parse(cls, value: str) -> "Period":
        try:
            start = parse_iso_date(str(value).strip()[:10])
        except ValueError:
            raise ValidationError("Period must be an ISO date (YYYY-MM-DD)")
        return cls.from_start(start)

    @classmethod
    def containing(cls, day: date) -> "Period":
        start_day = 1 if day.day < SECOND_HALF_START_DAY else SECOND_HALF_START_DAY
        return cls(day.replace(day=start_day))

    @property
    def is_first_half(self) -> bool:
        return self.start.day == 1

    @property
    def end(self) -> date:
        if self.is_first_half:
            return self.start.replace(day=SECOND_HALF_START_DAY - 1)
        return self.start.replace(day=last_day_of_month(self.start.year, self.start.month))

    @property
    def value(self) -> str:
        return self.start.isoformat()

    @property
    def label(self) -> str:
        month = f"{calendar.month_name[self.start.month]} {self.start.year}"
        return f"{month} ({ordinal(self.start.day)} - {ordinal(self.end.day)})"

    def days(self) -> List[date]:
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def next(self) -> "Period":
        return Period.containing(self.end + timedelta(days=1))

    def previous(self) -> "Period":
        return Period.containing(self.start - timedelta(days=1))


@dataclass(frozen=True)
class PeriodOption:
    value: str
    label: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label}


def generate_period_options(today: Optional[date] = None) -> List[PeriodOption]:
    """Half-month options from 12 months back to 6 months ahead of ``today``.

    Always 38 entries in increasing start order. ``today`` defaults to the
    current local date, read on every call.
    """
    if today is None:
        today = today_local()

    options: List[PeriodOption] = []
    for offset in range(-PERIOD_MONTHS_BACK, PERIOD_MONTHS_AHEAD + 1):
        year, month = shift_month(today.year, today.month, offset)
        for start_day in (1, SECOND_HALF_START_DAY):
            period = Period(date(year, month, start_day))
            options.append(PeriodOption(value=period.value, label=period.label))
    return options

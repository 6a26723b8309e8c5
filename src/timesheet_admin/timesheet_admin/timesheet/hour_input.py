"""Daily hour input for one timesheet cell.

``HourInput`` is immutable: every edit returns a new instance, or the same
instance when the candidate is not committed. Weekend and disabled cells are
read-only and raise on any edit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Union

from ..core.constants import MAX_DAILY_HOURS, MIN_DAILY_HOURS
from ..core.exceptions import ValidationError
from ..core.sentinels import NO_VALUE, NoValue

HourValue = Union[int, NoValue]

HOUR_CHOICES = tuple(range(MIN_DAILY_HOURS, MAX_DAILY_HOURS + 1))

_NON_DIGITS = re.compile(r"\D")


def digits_only(raw) -> str:
    if raw is None:
        return ""
    return _NON_DIGITS.sub("", str(raw))


def parse_digits(raw) -> Union[int, None]:
    text = digits_only(raw)
    return int(text) if text else None


def is_committable(value, max_hours: int = MAX_DAILY_HOURS) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_DAILY_HOURS <= value <= MAX_DAILY_HOURS and value <= max_hours


@dataclass(frozen=True)
class HourButton:
    hour: int
    enabled: bool
    selected: bool

    @property
    def title(self) -> str:
        if not self.enabled:
            return f"Cannot exceed {MAX_DAILY_HOURS} hours per day"
        return f"{self.hour} hour{'s' if self.hour > 1 else ''}"


@dataclass(frozen=True)
class HourInput:
    value: HourValue = NO_VALUE
    max_hours: int = MAX_DAILY_HOURS
    is_weekend: bool = False
    disabled: bool = False

    def __post_init__(self):
        object.__setattr__(self, "max_hours", max(0, min(MAX_DAILY_HOURS, int(self.max_hours))))

    @property
    def read_only(self) -> bool:
        return self.is_weekend or self.disabled

    @property
    def has_value(self) -> bool:
        return self.value is not NO_VALUE

    @property
    def display(self) -> str:
        return "—" if self.value is NO_VALUE else str(self.value)

    @property
    def hint(self) -> str:
        if self.max_hours < MAX_DAILY_HOURS:
            return f"Max {self.max_hours}h remaining for this day"
        return f"Type or click to select hours ({MIN_DAILY_HOURS}-{MAX_DAILY_HOURS})"

    def accepts(self, value) -> bool:
        return is_committable(value, self.max_hours)

    def buttons(self) -> List[HourButton]:
        return [
            HourButton(hour=h, enabled=h <= self.max_hours, selected=self.value == h)
            for h in HOUR_CHOICES
        ]

    def _ensure_editable(self) -> None:
        if self.read_only:
            raise ValidationError("Weekend hours cannot be edited" if self.is_weekend else "This entry is read-only")

    def _commit(self, value: HourValue) -> "HourInput":
        if value == self.value:
            return self
        return replace(self, value=value)

    def typed(self, raw) -> "HourInput":
        """Keystroke: commit as soon as the digits form an acceptable value."""
        self._ensure_editable()
        candidate = parse_digits(raw)
        if self.accepts(candidate):
            return self._commit(candidate)
        return self

    def confirmed(self, raw) -> "HourInput":
        """Enter: commit an acceptable value, treat empty or zero as a clear."""
        self._ensure_editable()
        text = digits_only(raw)
        candidate = int(text) if text else None
        if self.accepts(candidate):
            return self._commit(candidate)
        if text in ("", "0"):
            return self._commit(NO_VALUE)
        return self

    def selected(self, hour: int) -> "HourInput":
        """Grid click; a disabled button does nothing."""
        self._ensure_editable()
        if self.accepts(hour):
            return self._commit(hour)
        return self

    def cleared(self) -> "HourInput":
        self._ensure_editable()
        return self._commit(NO_VALUE)

    def with_max_hours(self, max_hours: int) -> "HourInput":
        # A value above the new cap is kept as is.
        return replace(self, max_hours=max_hours)

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..core.exceptions import ValidationError
from ..core.sentinels import NO_RESTRICTION, NoRestriction


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_bound(value: Optional[str], field_name: str) -> Union[date, NoRestriction]:
    """Parse an ISO date (or a full ISO timestamp) into a period bound.

    ``None`` and the empty string mean "no restriction".
    """
    if value is None:
        return NO_RESTRICTION
    text = str(value).strip()
    if not text or text.lower() == "none":
        return NO_RESTRICTION
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD)")


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()

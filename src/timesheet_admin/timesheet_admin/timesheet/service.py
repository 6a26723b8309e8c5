from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Union

from ..admin_settings.service import AdminSettingsService
from ..charge_codes.repository import ChargeCodeRepository
from ..common.authorization import Actor, require_capability
from ..common.datetime_utils import is_weekend, parse_iso_date, today_local
from ..common.validators import require_id
from ..core.constants import MAX_DAILY_HOURS
from ..core.enums import Capability
from ..core.exceptions import ValidationError
from ..core.sentinels import NO_VALUE, NoValue
from .hour_input import HourInput, digits_only
from .model import PeriodSheet, TimeEntry
from .periods import Period
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)

HoursInput = Union[int, str, None, NoValue]


def _as_work_date(value) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError("Work date is required")
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        raise ValidationError("Work date must be an ISO date (YYYY-MM-DD)")


def _rejected(cell: HourInput) -> ValidationError:
    if cell.max_hours == 0:
        return ValidationError(f"No hours remaining for this day (max {MAX_DAILY_HOURS})")
    return ValidationError(f"Hours must be between 1 and {cell.max_hours}")


class TimesheetService:
    """Use case: an employee records hours per charge code per day."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        charge_codes: ChargeCodeRepository,
        settings: AdminSettingsService,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._entries = entries
        self._codes = charge_codes
        self._settings = settings
        self._today = today

    def current_period(self) -> Period:
        return Period.containing(self._today())

    def get_period(self, actor: Optional[Actor], period: Union[Period, str, None] = None) -> PeriodSheet:
        actor = require_capability(actor, Capability.ENTER_HOURS)
        if period is None or period == "":
            period = self.current_period()
        elif not isinstance(period, Period):
            period = Period.parse(period)

        entries = self._entries.list_for_user(user_id=actor.user_id, start=period.start, end=period.end)
        active = list(self._codes.list_all(active_only=True))
        # codes retired after hours were logged stay visible for the period
        active_ids = {c.charge_code_id for c in active}
        for code_id in sorted({e.charge_code_id for e in entries} - active_ids):
            code = self._codes.get_by_id(code_id)
            if code:
                active.append(code)

        return PeriodSheet(
            period=period,
            charge_codes=active,
            entries=entries,
            editable=self._settings.current().allows(period),
        )

    def set_hours(self, actor: Optional[Actor], *, charge_code_id, work_date, hours: HoursInput) -> Optional[TimeEntry]:
        """Set (or clear) one cell. Returns the stored entry, ``None`` when cleared."""
        actor = require_capability(actor, Capability.ENTER_HOURS)
        charge_code_id = require_id(charge_code_id, "Charge code ID")
        work_date = _as_work_date(work_date)

        period = Period.containing(work_date)
        if not self._settings.current().allows(period):
            raise ValidationError(f"{period.label} is not open for editing")

        code = self._codes.get_by_id(charge_code_id)
        if code is None:
            raise ValidationError("Charge code not found")

        day_entries = self._entries.list_for_user(user_id=actor.user_id, start=work_date, end=work_date)
        own = next((e for e in day_entries if e.charge_code_id == charge_code_id), None)
        others = sum(e.hours for e in day_entries if e.charge_code_id != charge_code_id)
        cell = HourInput(
            value=own.hours if own else NO_VALUE,
            max_hours=MAX_DAILY_HOURS - others,
            is_weekend=is_weekend(work_date),
        )

        if hours is None or hours is NO_VALUE:
            updated = cell.cleared()
        elif isinstance(hours, bool):
            raise _rejected(cell)
        elif isinstance(hours, int):
            updated = cell.selected(hours)
            if updated.value != hours:
                raise _rejected(cell)
        else:
            text = digits_only(hours)
            updated = cell.confirmed(text)
            if text not in ("", "0") and updated.value != int(text):
                raise _rejected(cell)

        if updated.value is NO_VALUE:
            if own:
                self._entries.delete_cell(user_id=actor.user_id, charge_code_id=charge_code_id, work_date=work_date)
                logger.info("user %s cleared %s on %s", actor.user_id, code.code, work_date)
            return None

        if not code.is_active:
            raise ValidationError("Charge code is not active")

        entry_id = self._entries.upsert(
            user_id=actor.user_id,
            charge_code_id=charge_code_id,
            work_date=work_date,
            hours=updated.value,
        )
        logger.info("user %s set %sh on %s for %s", actor.user_id, updated.value, work_date, code.code)
        return TimeEntry(
            entry_id=entry_id,
            user_id=actor.user_id,
            charge_code_id=charge_code_id,
            work_date=work_date,
            hours=updated.value,
        )

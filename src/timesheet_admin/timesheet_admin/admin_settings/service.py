from __future__ import annotations

import logging
from typing import Optional

from ..common.authorization import Actor, require_capability
from ..common.datetime_utils import parse_optional_bound
from ..core.enums import Capability
from ..core.exceptions import ValidationError
from ..core.sentinels import NO_RESTRICTION
from ..timesheet.periods import Period
from .model import AdminSettings, PeriodBound
from .repository import AdminSettingsRepository

logger = logging.getLogger(__name__)


def _period_bound(value, field_name: str) -> PeriodBound:
    bound = parse_optional_bound(value, field_name)
    if bound is not NO_RESTRICTION:
        Period.from_start(bound)
    return bound


class AdminSettingsService:
    """Use case: read/update the editable-period window."""

    def __init__(self, settings: AdminSettingsRepository):
        self._settings = settings

    def current(self) -> AdminSettings:
        """The settings row, created unrestricted on first read."""
        settings = self._settings.get()
        if settings is None:
            settings = self._settings.create(oldest=NO_RESTRICTION, latest=NO_RESTRICTION)
            logger.info("admin settings initialised (no restriction)")
        return settings

    def get_settings(self, actor: Optional[Actor]) -> AdminSettings:
        require_capability(actor, Capability.MANAGE_SETTINGS)
        return self.current()

    def update_settings(self, actor: Optional[Actor], *, oldest_editable_period, latest_editable_period) -> AdminSettings:
        """Dates are ISO strings; ``None`` or ``""`` lifts that bound."""
        actor = require_capability(actor, Capability.MANAGE_SETTINGS)

        oldest = _period_bound(oldest_editable_period, "Oldest editable period")
        latest = _period_bound(latest_editable_period, "Latest editable period")
        if oldest is not NO_RESTRICTION and latest is not NO_RESTRICTION and oldest > latest:
            raise ValidationError("Oldest editable period must not be after the latest editable period")

        existing = self._settings.get()
        if existing is None:
            settings = self._settings.create(oldest=oldest, latest=latest)
        else:
            settings = self._settings.update(existing.settings_id, oldest=oldest, latest=latest)
        logger.info("admin settings updated by %s: %s", actor.user_id, settings.to_dict())
        return settings

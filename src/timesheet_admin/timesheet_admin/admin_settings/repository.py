from __future__ import annotations

from typing import Optional, Protocol

from .model import AdminSettings, PeriodBound


class AdminSettingsRepository(Protocol):
    """Storage for the single AdminSettings row."""

    def get(self) -> Optional[AdminSettings]:
        raise NotImplementedError

    def create(self, *, oldest: PeriodBound, latest: PeriodBound) -> AdminSettings:
        raise NotImplementedError

    def update(self, settings_id: int, *, oldest: PeriodBound, latest: PeriodBound) -> AdminSettings:
        raise NotImplementedError

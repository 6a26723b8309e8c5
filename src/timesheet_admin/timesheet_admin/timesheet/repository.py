from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def list_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def get_cell(self, *, user_id: int, charge_code_id: int, work_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, charge_code_id: int, work_date: date, hours: int) -> int:
        raise NotImplementedError

    def delete_cell(self, *, user_id: int, charge_code_id: int, work_date: date) -> bool:
        raise NotImplementedError

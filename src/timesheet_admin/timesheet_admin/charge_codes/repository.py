from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ChargeCode


class ChargeCodeRepository(Protocol):
    def get_by_id(self, charge_code_id: int) -> Optional[ChargeCode]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[ChargeCode]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[ChargeCode]:
        raise NotImplementedError

    def count_entries(self, charge_code_id: int) -> int:
        raise NotImplementedError

    def create(self, *, code: str, description: str, is_active: bool) -> int:
        raise NotImplementedError

    def update(self, charge_code_id: int, *, description: str, is_active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, charge_code_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.authorization import Actor, require_capability
from ..common.validators import as_bool, require_id, require_non_empty
from ..core.enums import Capability
from ..core.exceptions import ConflictError, ValidationError
from .model import ChargeCode
from .repository import ChargeCodeRepository

logger = logging.getLogger(__name__)


def normalize_code(code: Optional[str]) -> str:
    return require_non_empty(code, "Code").upper()


def _text(value) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValidationError("Code and description must be text")


class ChargeCodeService:
    """Use case: manage charge codes (admin)."""

    def __init__(self, charge_codes: ChargeCodeRepository):
        self._codes = charge_codes

    def list_charge_codes(self, actor: Optional[Actor]) -> Sequence[ChargeCode]:
        require_capability(actor, Capability.MANAGE_CHARGE_CODES)
        return self._codes.list_all()

    def list_active(self) -> Sequence[ChargeCode]:
        return self._codes.list_all(active_only=True)

    def create_charge_code(
        self,
        actor: Optional[Actor],
        *,
        code: Optional[str],
        description: Optional[str],
        is_active=None,
    ) -> ChargeCode:
        actor = require_capability(actor, Capability.MANAGE_CHARGE_CODES)

        code = _text(code)
        description = _text(description)
        if not (code or "").strip() or not (description or "").strip():
            raise ValidationError("Code and description are required")
        code = normalize_code(code)
        description = description.strip()
        active = as_bool(is_active, default=True)

        if self._codes.get_by_code(code):
            raise ValidationError("Charge code already exists")

        charge_code_id = self._codes.create(code=code, description=description, is_active=active)
        logger.info("charge code %s (%s) created by %s", code, charge_code_id, actor.user_id)
        return self._get_or_fail(charge_code_id)

    def update_charge_code(
        self,
        actor: Optional[Actor],
        *,
        charge_code_id,
        description: Optional[str] = None,
        is_active=None,
        code: Optional[str] = None,
    ) -> ChargeCode:
        """Update description/active flag; the code itself never changes."""
        actor = require_capability(actor, Capability.MANAGE_CHARGE_CODES)
        charge_code_id = require_id(charge_code_id, "Charge code ID")

        code = _text(code)
        description = _text(description)

        current = self._get_or_fail(charge_code_id)
        if code is not None and normalize_code(code) != current.code:
            raise ValidationError("Charge code cannot be changed after creation")

        new_description = require_non_empty(description, "Description") if description is not None else current.description
        new_active = as_bool(is_active, default=current.is_active)

        if not self._codes.update(charge_code_id, description=new_description, is_active=new_active):
            raise ValidationError("Charge code not found")
        logger.info("charge code %s updated by %s", current.code, actor.user_id)
        return self._get_or_fail(charge_code_id)

    def delete_charge_code(self, actor: Optional[Actor], *, charge_code_id) -> None:
        actor = require_capability(actor, Capability.MANAGE_CHARGE_CODES)
        charge_code_id = require_id(charge_code_id, "Charge code ID")

        entries = self._codes.count_entries(charge_code_id)
        if entries > 0:
            raise ConflictError(
                "Cannot delete charge code with existing time entries",
                entries_count=entries,
            )

        if not self._codes.delete_by_id(charge_code_id):
            raise ValidationError("Charge code not found")
        logger.info("charge code %s deleted by %s", charge_code_id, actor.user_id)

    def _get_or_fail(self, charge_code_id: int) -> ChargeCode:
        code = self._codes.get_by_id(charge_code_id)
        if not code:
            raise ValidationError("Charge code not found")
        return code

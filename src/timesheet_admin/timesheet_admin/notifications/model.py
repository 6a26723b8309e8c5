from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ToastVariant


@dataclass(frozen=True)
class Toast:
    toast_id: str
    title: Optional[str]
    description: Optional[str]
    variant: ToastVariant
    expires_at: float

    @property
    def is_destructive(self) -> bool:
        return self.variant is ToastVariant.DESTRUCTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.toast_id,
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value,
        }

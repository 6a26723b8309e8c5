from __future__ import annotations

from typing import FrozenSet, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this Protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def find_conflicting(self, *, email: str, fmno: str, exclude_id: Optional[int] = None) -> Optional[User]:
        """Another user holding ``email`` or ``fmno``, if any."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, name: Optional[str], fmno: str, roles: FrozenSet[Role]) -> int:
        raise NotImplementedError

    def update_user(
        self,
        user_id: int,
        *,
        email: str,
        name: Optional[str],
        fmno: str,
        roles: FrozenSet[Role],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

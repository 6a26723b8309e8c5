from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from ..core.enums import Capability, Role, capabilities_of
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """The signed-in user on whose behalf a use case runs."""

    user_id: int
    roles: FrozenSet[Role]

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return capabilities_of(self.roles)

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities


def require_capability(actor: Optional[Actor], capability: Capability) -> Actor:
    """Gate a use case; raises before any data access happens."""
    if actor is None or not actor.can(capability):
        raise AuthorizationError("Unauthorized")
    return actor

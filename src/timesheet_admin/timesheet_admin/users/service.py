from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Optional, Sequence, Union

from ..common.authorization import Actor, require_capability
from ..common.validators import optional_text, require_email, require_fmno, require_id
from ..core.enums import Capability, Role, parse_roles
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

RoleInput = Union[Role, str]


def normalize_roles(roles: Optional[Iterable[RoleInput]], *, default: FrozenSet[Role]) -> FrozenSet[Role]:
    if roles is None:
        return default
    if isinstance(roles, (str, Role)):
        roles = [roles]
    elif not isinstance(roles, (list, tuple, set, frozenset)):
        raise ValidationError("Roles must be a list")
    try:
        parsed = parse_roles(r.value if isinstance(r, Role) else r for r in roles)
    except ValueError:
        raise ValidationError("Unknown role")
    if not parsed:
        raise ValidationError("User must have at least one role")
    return parsed


class AuthService:
    """Use case: sign in with email + FMNO."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, fmno: str) -> User:
        try:
            email = require_email(email)
            fmno = require_fmno(fmno)
        except ValidationError:
            raise AuthenticationError("Invalid email or FMNO")

        user = self._users.get_by_email(email)
        if not user or user.fmno != fmno or not user.roles:
            raise AuthenticationError("Invalid email or FMNO")
        return user


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, actor: Optional[Actor]) -> Sequence[User]:
        require_capability(actor, Capability.MANAGE_USERS)
        return self._users.list_all()

    def create_user(
        self,
        actor: Optional[Actor],
        *,
        email: Optional[str],
        fmno: Optional[str],
        name: Optional[str] = None,
        roles: Optional[Iterable[RoleInput]] = None,
    ) -> User:
        require_capability(actor, Capability.MANAGE_USERS)

        if not email or not fmno:
            raise ValidationError("Email and FMNO are required")
        email = require_email(email)
        fmno = require_fmno(fmno)
        role_set = normalize_roles(roles, default=frozenset({Role.EMPLOYEE}))

        if self._users.find_conflicting(email=email, fmno=fmno):
            raise ValidationError("User with this email or FMNO already exists")

        user_id = self._users.create_user(email=email, name=optional_text(name), fmno=fmno, roles=role_set)
        logger.info("user %s created by %s", user_id, actor.user_id)
        return self._get_or_fail(user_id)

    def update_user(
        self,
        actor: Optional[Actor],
        *,
        user_id,
        email: Optional[str] = None,
        fmno: Optional[str] = None,
        name: Optional[str] = None,
        roles: Optional[Iterable[RoleInput]] = None,
    ) -> User:
        """Update a user; arguments left as ``None`` keep their current value."""
        require_capability(actor, Capability.MANAGE_USERS)
        user_id = require_id(user_id, "User ID")

        current = self._get_or_fail(user_id)
        new_email = require_email(email) if email is not None else current.email
        new_fmno = require_fmno(fmno) if fmno is not None else current.fmno
        new_name = optional_text(name) if name is not None else current.name
        new_roles = normalize_roles(roles, default=current.roles)

        if self._users.find_conflicting(email=new_email, fmno=new_fmno, exclude_id=user_id):
            raise ValidationError("User with this email or FMNO already exists")

        if not self._users.update_user(user_id, email=new_email, name=new_name, fmno=new_fmno, roles=new_roles):
            raise ValidationError("User not found")
        logger.info("user %s updated by %s", user_id, actor.user_id)
        return self._get_or_fail(user_id)

    def delete_user(self, actor: Optional[Actor], *, user_id) -> None:
        actor = require_capability(actor, Capability.MANAGE_USERS)
        user_id = require_id(user_id, "User ID")

        if user_id == actor.user_id:
            raise ConflictError("Cannot delete your own account")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("User not found")
        logger.info("user %s deleted by %s", user_id, actor.user_id)

    def _get_or_fail(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        return user

from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateRecordError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)


class UserService:
    """Use case: manage login accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, name: str, email: str, password: str, role: Role = Role.USER) -> int:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", 6)
        if "@" not in email:
            raise ValidationError("Email is not valid")

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        try:
            user_id = self._users.create_user(
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
            )
        except DuplicateRecordError:
            raise ValidationError("Email is already registered") from None

        logger.info("Account created: %s (%s)", email, role.value)
        return user_id

    def delete_account(self, user_id: int) -> bool:
        return self._users.delete_by_id(user_id)

from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    email: str


class AuthService:
    """Use cases: register an account, authenticate (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, username: str, email: str, password: str) -> int:
        username = require_non_empty(username, "Username")
        # logins containing "@" are looked up by email
        if "@" in username:
            raise ValidationError("Username must not contain '@'")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username) or self._users.get_by_email(email):
            raise ValidationError("User already exists")

        user_id = self._users.create_user(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
        )
        logger.info("registered user %s (%s)", user_id, username)
        return user_id

    def authenticate(self, login: str, password: str) -> SessionUser:
        login = (login or "").strip()
        if "@" in login:
            user = self._users.get_by_email(login.lower())
        else:
            user = self._users.get_by_username(login)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(user_id=user.user_id, username=user.username, email=user.email)

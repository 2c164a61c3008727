from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_non_empty, require_strong_password
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            logger.info("login rejected email=%s", email)
            raise AuthenticationError("メールアドレスまたはパスワードが正しくありません")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.info("login rejected email=%s", email)
            raise AuthenticationError("メールアドレスまたはパスワードが正しくありません")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, email=user.email, role=user.role)


class UserService:
    """Use case: self-service sign-up and account view."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, full_name: str, email: str, password: str, password_confirm: str) -> int:
        full_name = require_non_empty(full_name, "名前")
        email = require_email(email)
        require_strong_password(password, MIN_PASSWORD_LENGTH)
        if password != password_confirm:
            raise ValidationError("パスワードが一致しません")

        if self._users.get_by_email(email):
            raise ValidationError("このメールアドレスは既に登録されています")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.USER,
        )
        logger.info("user registered user_id=%s", user_id)
        return user_id

    def get_account(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("ユーザーが見つかりません")
        return user

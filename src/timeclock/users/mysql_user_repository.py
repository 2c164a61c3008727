from __future__ import annotations

from datetime import timezone
from typing import Any, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_one
from .model import User
from .repository import UserRepository

_SELECT = "SELECT user_id, full_name, email, password_hash, role, is_active, created_at FROM users"


def _to_user(row: dict[str, Any]) -> User:
    created_at = row.get("created_at")
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=created_at.replace(tzinfo=timezone.utc) if created_at else None,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = query_one(self._conn_factory, f"{_SELECT} WHERE user_id=%s", (user_id,))
        return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = query_one(self._conn_factory, f"{_SELECT} WHERE email=%s", (email.strip().lower(),))
        return _to_user(row) if row else None

    def create_user(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        result = execute(
            self._conn_factory,
            """
            INSERT INTO users(full_name, email, password_hash, role, is_active)
            VALUES(%s,%s,%s,%s,1)
            """,
            (full_name, email, password_hash, role.value),
        )
        return result.lastrowid

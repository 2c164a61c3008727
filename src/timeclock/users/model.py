from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account that owns punches.

    Plain data object, no database access.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role = Role.USER
    is_active: bool = True
    created_at: Optional[datetime] = None

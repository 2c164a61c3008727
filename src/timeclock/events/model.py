from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class Event:
    """Domain entity: a single punch.

    ``timestamp`` and ``created_at`` are timezone-aware. Rows are never
    updated except for the soft-delete flag.
    """

    event_id: int
    user_id: int
    event_type: EventType
    timestamp: datetime
    created_at: Optional[datetime] = None
    is_deleted: bool = False
    is_modified: bool = False


@dataclass(frozen=True)
class TodayPunch:
    """Read-model for the punch list on the home page."""

    event_id: int
    type_label: str
    clock: str
    is_deleted: bool
    is_modified: bool
    can_delete: bool

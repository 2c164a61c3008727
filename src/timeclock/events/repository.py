from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import Event


class EventRepository(Protocol):
    """Repository interface for punches.

    All datetimes crossing this boundary are timezone-aware.
    """

    def add(
        self,
        *,
        user_id: int,
        event_type: EventType,
        timestamp: datetime,
        created_at: datetime,
        is_modified: bool = False,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def get_latest_created(self, user_id: int) -> Optional[Event]:
        """Most recently created non-deleted punch (ties broken by id)."""

        raise NotImplementedError

    def get_latest_by_timestamp(self, user_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_at: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
        include_deleted: bool = False,
    ) -> Sequence[Event]:
        """Punches with ``start_at <= timestamp < end_before``, oldest first."""

        raise NotImplementedError

    def soft_delete(self, event_id: int) -> bool:
        raise NotImplementedError
